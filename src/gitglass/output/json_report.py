"""JSON shapes for parsed repository state."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from gitglass.git.models import Branch, Commit, DiffView, FileChange, WorkingTreeStatus


def branch_to_dict(branch: Branch) -> Dict[str, Any]:
    return {
        "name": branch.name,
        "current": branch.is_current,
        **({"remote": branch.remote} if branch.remote else {}),
        **({"detached": True} if branch.detached else {}),
    }


def commit_to_dict(commit: Commit) -> Dict[str, Any]:
    return {
        "hash": commit.short_hash,
        "fullHash": commit.full_hash,
        "author": commit.author,
        "date": commit.date,
        "message": commit.message,
    }


def file_commit_to_dict(commit: Commit) -> Dict[str, Any]:
    """Compact shape used for per-file history."""
    return {
        "hash": commit.short_hash,
        "author": commit.author_name,
        "date": commit.date,
        "message": commit.message,
    }


def branches_to_list(branches: List[Branch]) -> List[Dict[str, Any]]:
    return [branch_to_dict(b) for b in branches]


def commits_to_list(commits: List[Commit], *, compact: bool = False) -> List[Dict[str, Any]]:
    convert = file_commit_to_dict if compact else commit_to_dict
    return [convert(c) for c in commits]


def status_to_dict(status: WorkingTreeStatus) -> Dict[str, List[str]]:
    return status.as_dict()


def change_to_dict(change: FileChange) -> Dict[str, Any]:
    """Raw porcelain entry: both status columns plus the rename source."""
    return {
        "path": change.path,
        "index": change.index,
        "worktree": change.worktree,
        "category": change.category.value,
        **({"origPath": change.orig_path} if change.orig_path else {}),
    }


def status_entries(status: WorkingTreeStatus) -> List[Dict[str, Any]]:
    return [change_to_dict(c) for c in status.changes]


def diff_to_dict(view: DiffView) -> Dict[str, Any]:
    """Classified form of a diff, for callers that want the tags."""
    added, removed = view.stats
    return {
        "files": view.files,
        "added": added,
        "removed": removed,
        "lines": [
            {"type": line.line_type.value, "text": line.text.rstrip("\r\n")}
            for line in view.lines
        ],
    }


def render(payload: Dict[str, Any]) -> str:
    """Return formatted JSON string."""
    return json.dumps(payload, indent=2, ensure_ascii=False)
