"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RepoConfig:
    path: Optional[str] = None  # None = GIT_REPO_PATH or the current directory


@dataclass
class GitConfig:
    executable: str = "git"
    timeout: int = 30  # seconds per git invocation
    max_output_mb: int = 10

    @property
    def max_output_bytes(self) -> int:
        return self.max_output_mb * 1024 * 1024


@dataclass
class LogConfig:
    default_limit: int = 20
    file_default_limit: int = 10


@dataclass
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3000


@dataclass
class GitGlassConfig:
    version: str = "1.0"
    repo: RepoConfig = field(default_factory=RepoConfig)
    git: GitConfig = field(default_factory=GitConfig)
    log: LogConfig = field(default_factory=LogConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
