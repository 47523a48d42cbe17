"""Parse ``git branch -a`` output into Branch records."""

from __future__ import annotations

import re
from typing import List

from gitglass.git.models import Branch

_REMOTE_RE = re.compile(r"^remotes/([^/]+)/(.+)$")
_DETACHED_RE = re.compile(r"^\((?:HEAD detached (?:at|from) .+|no branch.*)\)$")


def parse_branches(text: str) -> List[Branch]:
    """Return one Branch per listed ref.

    ``* `` marks the checked-out branch, ``+ `` a branch checked out in a
    linked worktree. Symbolic pointers such as
    ``remotes/origin/HEAD -> origin/main`` are skipped. The detached-HEAD
    pseudo-entry is kept with its literal text and ``detached=True``.
    """
    branches: List[Branch] = []
    for raw_line in text.splitlines():
        if not raw_line.strip():
            continue

        marker = raw_line[:2]
        is_current = marker == "* "
        name = raw_line[2:].strip() if marker in ("* ", "+ ") else raw_line.strip()

        if " -> " in name:
            continue

        if _DETACHED_RE.match(name):
            branches.append(Branch(name=name, is_current=is_current, detached=True))
            continue

        remote = None
        m = _REMOTE_RE.match(name)
        if m:
            remote, name = m.group(1), m.group(2)

        branches.append(Branch(name=name, is_current=is_current, remote=remote))
    return branches
