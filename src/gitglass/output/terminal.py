"""Rich terminal renderer for branches, commits, status, and diffs."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from gitglass.git.models import Branch, Commit, DiffView, LineType, WorkingTreeStatus

_LINE_STYLE = {
    LineType.ADDED: "green",
    LineType.REMOVED: "red",
    LineType.HEADER: "bold cyan",
    LineType.CONTEXT: "",
}

_STATUS_STYLE = {
    "staged": "green",
    "modified": "yellow",
    "untracked": "bright_black",
    "deleted": "red",
}


def relative_time(value: str, now: Optional[datetime] = None) -> str:
    """Humanise an ISO-8601 timestamp: "3 hours ago", or the date past a week."""
    try:
        when = datetime.fromisoformat(value.strip())
    except ValueError:
        return value
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    now = now or datetime.now(timezone.utc)

    seconds = int((now - when).total_seconds())
    minutes, hours, days = seconds // 60, seconds // 3600, seconds // 86400
    if days > 7:
        return when.strftime("%Y-%m-%d %H:%M")
    if days > 0:
        return f"{days} day{'s' if days != 1 else ''} ago"
    if hours > 0:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    if minutes > 0:
        return f"{minutes} minute{'s' if minutes != 1 else ''} ago"
    return "just now"


def render_branches(branches: List[Branch], console: Optional[Console] = None) -> None:
    console = console or Console()
    if not branches:
        console.print("[dim]No branches.[/dim]")
        return
    table = Table(show_header=True, border_style="dim")
    table.add_column("", width=1)
    table.add_column("Branch", style="cyan")
    table.add_column("Remote", style="magenta")
    for b in branches:
        marker = Text("*", style="bold green") if b.is_current else Text("")
        name = Text(b.name, style="bold green" if b.is_current else "")
        if b.detached:
            name.stylize("italic yellow")
        table.add_row(marker, name, b.remote or "")
    console.print(table)


def render_commits(
    commits: List[Commit],
    console: Optional[Console] = None,
    *,
    now: Optional[datetime] = None,
) -> None:
    console = console or Console()
    if not commits:
        console.print("[dim]No commits.[/dim]")
        return
    table = Table(show_header=True, border_style="dim")
    table.add_column("Hash", style="yellow", no_wrap=True)
    table.add_column("Author", style="cyan")
    table.add_column("When", style="green")
    table.add_column("Message")
    for c in commits:
        table.add_row(c.short_hash, c.author, relative_time(c.date, now), c.message)
    console.print(table)


def render_status(
    status: WorkingTreeStatus,
    console: Optional[Console] = None,
    *,
    detail: bool = False,
) -> None:
    console = console or Console()
    if status.is_clean:
        console.print("[bold green]✓ Working tree clean.[/bold green]")
        return
    if detail:
        _render_status_entries(status, console)
        return
    for category, paths in status.as_dict().items():
        if not paths:
            continue
        style = _STATUS_STYLE[category]
        console.print(f"[bold {style}]{category.capitalize()}[/bold {style}] ({len(paths)})")
        for path in paths:
            console.print(Text(f"  {path}", style=style))


def render_diff(view: DiffView, console: Optional[Console] = None) -> None:
    console = console or Console()
    if view.is_empty:
        console.print("[dim]No differences.[/dim]")
        return
    for line in view.lines:
        console.print(
            Text(line.text.rstrip("\r\n"), style=_LINE_STYLE[line.line_type]),
            soft_wrap=True,
        )
    added, removed = view.stats
    console.print()
    console.print(
        f"[dim]{len(view.files)} file(s),[/dim] "
        f"[green]+{added}[/green] [red]-{removed}[/red]"
    )


def _render_status_entries(status: WorkingTreeStatus, console: Console) -> None:
    """One line per porcelain entry: ``XY path``, renames as ``old -> new``."""
    for change in status.changes:
        style = _STATUS_STYLE[change.category.value]
        label = f"{change.orig_path} -> {change.path}" if change.orig_path else change.path
        line = Text(change.code.replace(" ", "."), style="bold")
        line.append(f"  {label}", style=style)
        console.print(line)
