"""Git interface layer — runner, parsers, models, repository facade."""

from gitglass.git.branch_parser import parse_branches
from gitglass.git.diff_parser import classify_diff, classify_line
from gitglass.git.errors import GitCommandError, GitError, ValidationError
from gitglass.git.locking import RepositoryLock
from gitglass.git.log_parser import normalize_limit, parse_log
from gitglass.git.models import (
    Branch,
    Commit,
    DeleteOutcome,
    DiffLine,
    DiffScope,
    DiffView,
    FileChange,
    LineType,
    StatusCategory,
    WorkingTreeStatus,
)
from gitglass.git.repository import Repository
from gitglass.git.runner import CommandResult, run_git
from gitglass.git.status_parser import parse_status

__all__ = [
    "Branch",
    "CommandResult",
    "Commit",
    "DeleteOutcome",
    "DiffLine",
    "DiffScope",
    "DiffView",
    "FileChange",
    "GitCommandError",
    "GitError",
    "LineType",
    "Repository",
    "RepositoryLock",
    "StatusCategory",
    "ValidationError",
    "WorkingTreeStatus",
    "classify_diff",
    "classify_line",
    "normalize_limit",
    "parse_branches",
    "parse_log",
    "parse_status",
    "run_git",
]
