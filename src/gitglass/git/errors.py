"""Exceptions raised by the repository layer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from gitglass.git.runner import CommandResult


class GitError(Exception):
    """Base class for every failure surfaced by the repository layer."""


class GitCommandError(GitError):
    """A git command could not be spawned or exited non-zero."""

    def __init__(self, message: str, result: Optional["CommandResult"] = None) -> None:
        super().__init__(message)
        self.result = result


class ValidationError(GitError):
    """Caller-supplied input was rejected before any process was spawned."""
