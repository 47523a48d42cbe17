"""Parse ``git log`` output into Commit records.

Records are requested NUL-terminated (``-z``) with fields separated by the
ASCII unit separator, so neither can collide with commit message text.
Newline-terminated records are accepted too.
"""

from __future__ import annotations

from typing import Any, List, Optional

from gitglass.git.models import Commit

FIELD_SEP = "\x1f"
RECORD_SEP = "\x00"
LOG_FORMAT = "%H%x1f%an%x1f%ae%x1f%ad%x1f%s"

DEFAULT_LIMIT = 20
FILE_HISTORY_LIMIT = 10


def normalize_limit(value: Any, default: int = DEFAULT_LIMIT) -> int:
    """Coerce a caller-supplied limit; non-numeric or non-positive → *default*."""
    if isinstance(value, bool):
        return default
    try:
        limit = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return limit if limit > 0 else default


def log_args(limit: int, *, date_format: str = "iso-strict") -> List[str]:
    """Build the ``git log`` argument list for *limit* records."""
    return [
        "log",
        f"--max-count={limit}",
        "-z",
        f"--pretty=format:{LOG_FORMAT}",
        f"--date={date_format}",
    ]


def _split_records(text: str) -> List[str]:
    if RECORD_SEP in text:
        return text.split(RECORD_SEP)
    return text.splitlines()


def parse_log(text: str, limit: Optional[int] = None) -> List[Commit]:
    """Return commits in the order git emitted them (newest first)."""
    commits: List[Commit] = []
    for record in _split_records(text):
        record = record.strip("\r\n")
        if not record.strip():
            continue
        parts = record.split(FIELD_SEP, 4)
        if len(parts) < 4:
            continue
        full_hash, name, email, date = (p.strip() for p in parts[:4])
        message = parts[4] if len(parts) == 5 else ""
        commits.append(Commit(
            full_hash=full_hash,
            author_name=name,
            author_email=email,
            date=date,
            message=message,
        ))
        if limit is not None and len(commits) >= limit:
            break
    return commits
