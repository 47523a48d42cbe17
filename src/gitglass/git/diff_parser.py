"""Tag each line of unified diff text for display.

Classification is stateless and single-pass: a line's tag depends only on
its own prefix. Line text is never rewritten, so joining the tagged lines
back together reproduces the input exactly.
"""

from __future__ import annotations

import re
from typing import Iterator, List, Optional

from gitglass.git.models import DiffLine, DiffScope, DiffView, LineType

_DIFF_HEADER_RE = re.compile(r"^diff --git a/(.*) b/(.*)$")

_SCOPE_ARGS = {
    DiffScope.DEFAULT: ["diff"],
    DiffScope.STAGED: ["diff", "--staged"],
    DiffScope.HEAD: ["diff", "HEAD"],
}


def diff_args(scope: DiffScope, path: Optional[str] = None) -> List[str]:
    """Return the git argument list for *scope*, narrowed to *path*."""
    args = [*_SCOPE_ARGS[scope], "--no-color", "--no-ext-diff"]
    if path:
        args += ["--", path]
    return args


def classify_line(line: str) -> LineType:
    """Tag a single diff line (trailing newline allowed)."""
    if line.startswith("+") and not line.startswith("+++"):
        return LineType.ADDED
    if line.startswith("-") and not line.startswith("---"):
        return LineType.REMOVED
    if line.startswith("@@") or line.startswith("diff"):
        return LineType.HEADER
    return LineType.CONTEXT


def iter_lines(diff_text: str) -> Iterator[DiffLine]:
    """Yield a DiffLine per line of *diff_text*, line endings kept."""
    for raw_line in diff_text.splitlines(keepends=True):
        yield DiffLine(text=raw_line, line_type=classify_line(raw_line))


def classify_diff(diff_text: str) -> DiffView:
    """Classify *diff_text* into a DiffView."""
    view = DiffView()
    for line in iter_lines(diff_text):
        view.lines.append(line)
        if line.line_type is LineType.HEADER:
            m = _DIFF_HEADER_RE.match(line.text.rstrip("\r\n"))
            if m:
                view.files.append(m.group(2))
    return view
