"""Parse ``git status --porcelain`` output into a WorkingTreeStatus."""

from __future__ import annotations

from typing import List

from gitglass.git.models import FileChange, WorkingTreeStatus

STATUS_ARGS = ["status", "--porcelain=v1", "-z"]

_PATH_OFFSET = 3
_RENAME_CODES = ("R", "C")


def parse_status(text: str) -> WorkingTreeStatus:
    """Classify each porcelain entry.

    With ``-z`` entries are NUL-terminated, paths are never quoted, and a
    rename or copy is followed by one extra field holding the source path.
    Newline-separated output writes renames as ``old -> new`` instead.
    """
    if "\x00" in text:
        changes = _parse_nul(text.split("\x00"))
    else:
        changes = _parse_lines(text.splitlines())
    return WorkingTreeStatus(changes=changes)


def _parse_nul(fields: List[str]) -> List[FileChange]:
    changes: List[FileChange] = []
    idx = 0
    while idx < len(fields):
        entry = fields[idx]
        idx += 1
        if not entry.strip() or len(entry) <= _PATH_OFFSET:
            continue
        index, worktree = entry[0], entry[1]
        if index == "!":
            continue
        orig_path = None
        if index in _RENAME_CODES or worktree in _RENAME_CODES:
            if idx < len(fields):
                orig_path = fields[idx]
                idx += 1
        changes.append(FileChange(
            path=entry[_PATH_OFFSET:],
            index=index,
            worktree=worktree,
            orig_path=orig_path,
        ))
    return changes


def _parse_lines(lines: List[str]) -> List[FileChange]:
    changes: List[FileChange] = []
    for line in lines:
        line = line.rstrip("\r")
        if not line.strip() or len(line) <= _PATH_OFFSET:
            continue
        index, worktree = line[0], line[1]
        if index == "!":
            continue
        path = line[_PATH_OFFSET:]
        orig_path = None
        if (index in _RENAME_CODES or worktree in _RENAME_CODES) and " -> " in path:
            orig_path, path = path.split(" -> ", 1)
        changes.append(FileChange(
            path=path,
            index=index,
            worktree=worktree,
            orig_path=orig_path,
        ))
    return changes
