"""Repository facade: the operations the API and CLI call.

Each operation validates its input, runs git through the command runner
under the repository lock, and hands the raw output to the matching
parser. Failures are raised as ``GitError`` subclasses; nothing here
formats responses.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, List, Optional, Union

from gitglass.config.schema import GitGlassConfig
from gitglass.git.branch_parser import parse_branches
from gitglass.git.diff_parser import classify_diff, diff_args
from gitglass.git.errors import GitCommandError, ValidationError
from gitglass.git.locking import RepositoryLock
from gitglass.git.log_parser import log_args, normalize_limit, parse_log
from gitglass.git.models import (
    Branch,
    Commit,
    DeleteOutcome,
    DiffScope,
    DiffView,
    WorkingTreeStatus,
)
from gitglass.git.runner import CommandResult, run_git
from gitglass.git.status_parser import STATUS_ARGS, parse_status

logger = logging.getLogger(__name__)

_BRANCH_CHARS_RE = re.compile(r"^[A-Za-z0-9._/\-]+$")


def validate_branch_name(name: Optional[str]) -> str:
    """Return *name* stripped, or raise ValidationError."""
    if name is None:
        name = ""
    if not isinstance(name, str):
        raise ValidationError("Branch name must be a string")
    name = name.strip()
    if not name:
        raise ValidationError("Branch name is required")
    if not _BRANCH_CHARS_RE.match(name):
        raise ValidationError(f"Invalid branch name: {name!r}")
    if (
        name.startswith(("-", "/", "."))
        or name.endswith(("/", ".", ".lock"))
        or ".." in name
        or "//" in name
        or "/." in name
    ):
        raise ValidationError(f"Invalid branch name: {name!r}")
    return name


def validate_path(path: Optional[str]) -> str:
    """Return *path*, or raise ValidationError for empty / NUL-bearing paths."""
    if not isinstance(path, str) or not path.strip():
        raise ValidationError("File path is required")
    if "\x00" in path:
        raise ValidationError("File path contains a NUL byte")
    return path


class Repository:
    """A single git working tree."""

    def __init__(
        self,
        root: Path,
        config: Optional[GitGlassConfig] = None,
        lock: Optional[RepositoryLock] = None,
    ) -> None:
        self.root = Path(root)
        self.config = config or GitGlassConfig()
        self.lock = lock or RepositoryLock()

    # --- plumbing ---

    def _run(self, args: List[str]) -> CommandResult:
        return run_git(
            args,
            self.root,
            executable=self.config.git.executable,
            timeout=self.config.git.timeout,
            max_output_bytes=self.config.git.max_output_bytes,
        )

    def _check(self, args: List[str]) -> CommandResult:
        result = self._run(args)
        if not result.ok:
            raise GitCommandError(result.error_message or "git command failed", result)
        return result

    def _read(self, args: List[str]) -> str:
        with self.lock.read():
            return self._check(args).stdout

    # --- branches ---

    def current_branch(self) -> str:
        """Name of the checked-out branch; empty string when detached."""
        return self._read(["branch", "--show-current"]).strip()

    def list_branches(self) -> List[Branch]:
        return parse_branches(self._read(["branch", "-a", "--no-color"]))

    def create_branch(self, name: Optional[str]) -> str:
        name = validate_branch_name(name)
        with self.lock.write():
            self._check(["branch", name])
        logger.info("Created branch %s", name)
        return name

    def checkout_branch(self, name: Optional[str]) -> str:
        name = validate_branch_name(name)
        with self.lock.write():
            self._check(["checkout", name, "--"])
        logger.info("Checked out branch %s", name)
        return name

    def delete_branch(self, name: Optional[str]) -> DeleteOutcome:
        """Delete *name*, retrying with ``-D`` when the safe delete refuses."""
        name = validate_branch_name(name)
        with self.lock.write():
            safe = self._run(["branch", "-d", name])
            if safe.ok:
                logger.info("Deleted branch %s", name)
                return DeleteOutcome(name=name)

            logger.warning(
                "Safe delete of %s failed, retrying with force: %s",
                name, safe.error_message,
            )
            forced = self._run(["branch", "-D", name])
            if forced.ok:
                logger.info("Force deleted branch %s", name)
                return DeleteOutcome(name=name, forced=True)

        message = (
            f"Safe delete failed: {safe.error_message}\n"
            f"Force delete failed: {forced.error_message}"
        )
        raise GitCommandError(message, forced)

    # --- history ---

    def list_commits(self, limit: Any = None) -> List[Commit]:
        limit = normalize_limit(limit, self.config.log.default_limit)
        try:
            output = self._read(log_args(limit))
        except GitCommandError as exc:
            # A repository without commits is an empty history, not a failure.
            if _is_empty_history(exc):
                return []
            raise
        return parse_log(output, limit)

    def file_history(self, path: Optional[str], limit: Any = None) -> List[Commit]:
        path = validate_path(path)
        limit = normalize_limit(limit, self.config.log.file_default_limit)
        args = log_args(limit, date_format="short") + ["--", path]
        try:
            output = self._read(args)
        except GitCommandError as exc:
            if _is_empty_history(exc):
                return []
            raise
        return parse_log(output, limit)

    # --- working tree ---

    def status(self) -> WorkingTreeStatus:
        return parse_status(self._read(list(STATUS_ARGS)))

    def diff(
        self,
        scope: Union[DiffScope, str, None] = DiffScope.DEFAULT,
        path: Optional[str] = None,
    ) -> DiffView:
        if not isinstance(scope, DiffScope):
            scope = DiffScope.parse(scope)
        if path:
            path = validate_path(path)
        return classify_diff(self._read(diff_args(scope, path or None)))


def _is_empty_history(exc: GitCommandError) -> bool:
    stderr = exc.result.stderr if exc.result else ""
    return "does not have any commits yet" in stderr or "bad default revision" in stderr
