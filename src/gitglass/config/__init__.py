"""Configuration loading, schema, and defaults."""

from gitglass.config.loader import ConfigError, load_config, resolve_repo_path
from gitglass.config.schema import GitGlassConfig

__all__ = [
    "ConfigError",
    "GitGlassConfig",
    "load_config",
    "resolve_repo_path",
]
