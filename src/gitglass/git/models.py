"""Data models for parsed git output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class LineType(str, Enum):
    ADDED = "added"
    REMOVED = "removed"
    HEADER = "header"
    CONTEXT = "context"


class DiffScope(str, Enum):
    DEFAULT = "default"  # working tree vs index
    STAGED = "staged"  # index vs HEAD
    HEAD = "head"  # working tree vs HEAD

    @classmethod
    def parse(cls, value: Optional[str]) -> "DiffScope":
        """Map a free-form scope name to a DiffScope, falling back to DEFAULT."""
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.DEFAULT


class StatusCategory(str, Enum):
    STAGED = "staged"
    MODIFIED = "modified"
    UNTRACKED = "untracked"
    DELETED = "deleted"


@dataclass(frozen=True)
class Branch:
    """One entry of a branch listing."""

    name: str
    is_current: bool = False
    remote: Optional[str] = None  # set on remote-tracking entries
    detached: bool = False  # the "(HEAD detached at ...)" pseudo-entry


@dataclass(frozen=True)
class Commit:
    """A single commit record from ``git log``."""

    full_hash: str
    author_name: str
    author_email: str
    date: str
    message: str

    @property
    def short_hash(self) -> str:
        return self.full_hash[:8]

    @property
    def author(self) -> str:
        return f"{self.author_name} <{self.author_email}>"


@dataclass(frozen=True, slots=True)
class FileChange:
    """Porcelain status entry with index and worktree state kept apart."""

    path: str
    index: str  # X column
    worktree: str  # Y column
    orig_path: Optional[str] = None  # set on renames / copies

    @property
    def code(self) -> str:
        return self.index + self.worktree

    @property
    def category(self) -> StatusCategory:
        code = self.code
        if "A" in code or self.index == "M":
            return StatusCategory.STAGED
        if "M" in code:
            return StatusCategory.MODIFIED
        if "D" in code:
            return StatusCategory.DELETED
        if "?" in code:
            return StatusCategory.UNTRACKED
        # R, C, T, U ... none of the rules above apply
        if self.index not in (" ", "?"):
            return StatusCategory.STAGED
        return StatusCategory.MODIFIED


@dataclass
class WorkingTreeStatus:
    """Working tree state, bucketed into the four display categories."""

    changes: List[FileChange] = field(default_factory=list)

    def _paths(self, category: StatusCategory) -> List[str]:
        return [c.path for c in self.changes if c.category is category]

    @property
    def staged(self) -> List[str]:
        return self._paths(StatusCategory.STAGED)

    @property
    def modified(self) -> List[str]:
        return self._paths(StatusCategory.MODIFIED)

    @property
    def untracked(self) -> List[str]:
        return self._paths(StatusCategory.UNTRACKED)

    @property
    def deleted(self) -> List[str]:
        return self._paths(StatusCategory.DELETED)

    @property
    def is_clean(self) -> bool:
        return not self.changes

    def as_dict(self) -> Dict[str, List[str]]:
        return {
            "staged": self.staged,
            "modified": self.modified,
            "untracked": self.untracked,
            "deleted": self.deleted,
        }


@dataclass(frozen=True, slots=True)
class DiffLine:
    """A single classified line of diff output, text kept verbatim."""

    text: str
    line_type: LineType


@dataclass
class DiffView:
    """Classified diff output for one scope."""

    lines: List[DiffLine] = field(default_factory=list)
    files: List[str] = field(default_factory=list)  # from "diff --git" headers

    @property
    def text(self) -> str:
        return "".join(line.text for line in self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def stats(self) -> Tuple[int, int]:
        """Return (added, removed) line counts."""
        added = sum(1 for line in self.lines if line.line_type is LineType.ADDED)
        removed = sum(1 for line in self.lines if line.line_type is LineType.REMOVED)
        return added, removed


@dataclass(frozen=True)
class DeleteOutcome:
    """Result of a branch delete; *forced* is set when ``-D`` was needed."""

    name: str
    forced: bool = False
