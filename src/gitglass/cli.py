"""gitglass CLI — Typer application exposing repository state and the JSON API."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitglass import __version__

app = typer.Typer(
    name="gitglass",
    help="Browse a git working tree as structured data.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console()

_state: Dict[str, Any] = {"config": None, "repo": None}


def _setup_logging(verbose: bool, debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=debug)],
        force=True,
    )


def _repository():
    """Build the Repository for this invocation, exit 2 on config errors."""
    from gitglass.config.loader import ConfigError, load_config, resolve_repo_path
    from gitglass.git.repository import Repository

    if _state["repo"] is not None:
        return _state["repo"]
    try:
        cfg = load_config(Path.cwd(), _state["config"])
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    root = resolve_repo_path(cfg)
    if not root.is_dir():
        console.print(f"[bold red]Error:[/bold red] repository path does not exist: {root}")
        raise typer.Exit(code=2)
    _state["repo"] = Repository(root, cfg)
    return _state["repo"]


def _check_format(format: str) -> str:
    if format not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {format}")
        raise typer.Exit(code=2)
    return format


def _emit(status: int, payload: Dict[str, Any]) -> None:
    """Print a JSON envelope; exit 1 when it reports failure."""
    from gitglass.output import json_report

    print(json_report.render(payload))
    if status >= 400 or payload.get("success") is False:
        raise typer.Exit(code=1)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {exc}")
    raise typer.Exit(code=1) from exc


_FORMAT_OPTION = typer.Option("terminal", "--format", "-f", help="Output format: terminal | json")


# ── branches ─────────────────────────────────────────────────────────────────


@app.command("current")
def current_branch(format: str = _FORMAT_OPTION) -> None:
    """Show the checked-out branch."""
    from gitglass.api import routes
    from gitglass.git.errors import GitError

    repo = _repository()
    if _check_format(format) == "json":
        _emit(*routes.current_branch(repo))
        return
    try:
        name = repo.current_branch()
    except GitError as exc:
        _fail(exc)
    out.print(name or "[yellow](detached HEAD)[/yellow]")


@app.command("branches")
def branches(format: str = _FORMAT_OPTION) -> None:
    """List local and remote-tracking branches."""
    from gitglass.api import routes
    from gitglass.git.errors import GitError
    from gitglass.output import terminal

    repo = _repository()
    if _check_format(format) == "json":
        _emit(*routes.list_branches(repo))
        return
    try:
        listing = repo.list_branches()
    except GitError as exc:
        _fail(exc)
    terminal.render_branches(listing, out)


def _branch_command(action: str, name: str, format: str) -> None:
    from gitglass.api import routes

    _check_format(format)
    repo = _repository()
    handler = {
        "create": routes.create_branch,
        "checkout": routes.checkout_branch,
        "delete": routes.delete_branch,
    }[action]
    status, payload = handler(repo, {"name": name})
    if format == "json":
        _emit(status, payload)
        return
    if payload["success"]:
        console.print(f"[green]✓[/green] {payload['message']}")
    else:
        console.print(f"[red]✗[/red] {payload['message']}")
        raise typer.Exit(code=1)


@app.command("create")
def create_branch(
    name: str = typer.Argument(..., help="Branch to create"),
    format: str = _FORMAT_OPTION,
) -> None:
    """Create a branch at HEAD."""
    _branch_command("create", name, format)


@app.command("checkout")
def checkout_branch(
    name: str = typer.Argument(..., help="Branch to check out"),
    format: str = _FORMAT_OPTION,
) -> None:
    """Check out a branch."""
    _branch_command("checkout", name, format)


@app.command("delete")
def delete_branch(
    name: str = typer.Argument(..., help="Branch to delete"),
    format: str = _FORMAT_OPTION,
) -> None:
    """Delete a branch, forcing when the safe delete refuses."""
    _branch_command("delete", name, format)


# ── history ──────────────────────────────────────────────────────────────────


@app.command("log")
def log(
    file: Optional[str] = typer.Argument(None, help="Limit history to this path"),
    limit: Optional[str] = typer.Option(None, "--limit", "-n", help="Maximum commits to show"),
    format: str = _FORMAT_OPTION,
) -> None:
    """Show recent commits, for the whole tree or a single file."""
    from gitglass.api import routes
    from gitglass.git.errors import GitError
    from gitglass.output import terminal

    repo = _repository()
    query = {"limit": limit} if limit is not None else {}
    if _check_format(format) == "json":
        if file:
            _emit(*routes.file_history(repo, file, query))
        else:
            _emit(*routes.list_commits(repo, query))
        return
    try:
        commits = repo.file_history(file, limit) if file else repo.list_commits(limit)
    except GitError as exc:
        _fail(exc)
    terminal.render_commits(commits, out)


# ── working tree ─────────────────────────────────────────────────────────────


@app.command("status")
def status(
    format: str = _FORMAT_OPTION,
    detail: bool = typer.Option(False, "--detail", "-d", help="Show raw index/worktree codes"),
) -> None:
    """Show staged, modified, untracked, and deleted files."""
    from gitglass.api import routes
    from gitglass.git.errors import GitError
    from gitglass.output import terminal

    repo = _repository()
    if _check_format(format) == "json":
        _emit(*routes.status(repo, {"detail": "1"} if detail else {}))
        return
    try:
        state = repo.status()
    except GitError as exc:
        _fail(exc)
    terminal.render_status(state, out, detail=detail)


@app.command("diff")
def diff(
    file: Optional[str] = typer.Argument(None, help="Limit the diff to this path"),
    type: str = typer.Option("default", "--type", "-t", help="Scope: default | staged | head"),
    classified: bool = typer.Option(
        False, "--classified", help="Include tagged lines in JSON output",
    ),
    format: str = _FORMAT_OPTION,
) -> None:
    """Show a classified diff."""
    from gitglass.api import routes
    from gitglass.git.errors import GitError
    from gitglass.git.models import DiffScope
    from gitglass.output import terminal

    if type not in {s.value for s in DiffScope}:
        console.print(f"[bold red]Invalid diff type:[/bold red] {type}")
        raise typer.Exit(code=2)

    repo = _repository()
    if _check_format(format) == "json":
        query = {"type": type, "file": file or ""}
        if classified:
            query["classified"] = "1"
        _emit(*routes.diff(repo, query))
        return
    try:
        view = repo.diff(type, file)
    except GitError as exc:
        _fail(exc)
    terminal.render_diff(view, out)


# ── serve ────────────────────────────────────────────────────────────────────


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Listen port"),
) -> None:
    """Serve the JSON API over HTTP."""
    from gitglass.api.server import create_server, server_address

    repo = _repository()
    cfg = repo.config
    try:
        server = create_server(repo, host or cfg.server.host, port or cfg.server.port)
    except OSError as exc:
        console.print(f"[bold red]Cannot start server:[/bold red] {exc}")
        raise typer.Exit(code=2) from exc

    bound_host, bound_port = server_address(server)
    console.print(f"[bold]gitglass API[/bold] on http://{bound_host}:{bound_port}")
    console.print(f"[dim]Repository: {repo.root}[/dim]")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        console.print("[dim]Shutting down.[/dim]")
    finally:
        server.server_close()


# ── init ─────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .gitglass.toml in the current directory."""
    from gitglass.config.defaults import DEFAULT_TOML
    from gitglass.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME
    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ──────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"gitglass {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .gitglass.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug output, including every git call"),
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """Browse a git working tree as structured data."""
    _state["config"] = config
    _state["repo"] = None
    _setup_logging(verbose, debug)
