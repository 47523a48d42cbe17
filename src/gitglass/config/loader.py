"""Load and merge configuration from .gitglass.toml and env vars."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from gitglass.config.schema import (
    GitConfig,
    GitGlassConfig,
    LogConfig,
    RepoConfig,
    ServerConfig,
)

CONFIG_FILENAME = ".gitglass.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(start: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = start / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _env_int(name: str) -> Optional[int]:
    val = os.environ.get(name)
    if not val:
        return None
    try:
        parsed = int(val)
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def _merge_env_overrides(cfg: GitGlassConfig) -> None:
    """Apply GIT_REPO_PATH / PORT / GITGLASS_* environment overrides."""
    if val := os.environ.get("GIT_REPO_PATH"):
        cfg.repo.path = val
    if (port := _env_int("PORT")) is not None:
        cfg.server.port = port
    if (timeout := _env_int("GITGLASS_GIT_TIMEOUT")) is not None:
        cfg.git.timeout = timeout
    if (limit := _env_int("GITGLASS_DEFAULT_LIMIT")) is not None:
        cfg.log.default_limit = limit


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    import dataclasses

    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def load_config(
    start: Optional[Path] = None,
    config_override: Optional[str] = None,
) -> GitGlassConfig:
    """Load, validate, and return a GitGlassConfig."""
    start = start or Path.cwd()
    config_path = find_config_file(start, config_override)

    if config_path is None:
        cfg = GitGlassConfig()
    else:
        raw = _parse_toml(config_path)
        cfg = GitGlassConfig(
            version=raw.get("version", "1.0"),
            repo=_build_section(raw, RepoConfig, "repo"),
            git=_build_section(raw, GitConfig, "git"),
            log=_build_section(raw, LogConfig, "log"),
            server=_build_section(raw, ServerConfig, "server"),
        )

    _merge_env_overrides(cfg)
    return cfg


def resolve_repo_path(cfg: GitGlassConfig, start: Optional[Path] = None) -> Path:
    """Return the configured working-tree root, relative paths resolved from *start*."""
    base = start or Path.cwd()
    if not cfg.repo.path:
        return base.resolve()
    path = Path(cfg.repo.path).expanduser()
    if not path.is_absolute():
        path = base / path
    return path.resolve()
