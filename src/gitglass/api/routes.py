"""JSON envelope layer mapping API routes onto Repository operations.

Every handler returns ``(http_status, payload)``. ``GitError`` never
escapes: it becomes a ``success: false`` envelope carrying a readable
message, shaped per route the way the UI expects.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
from urllib.parse import unquote

from gitglass.git.errors import GitError
from gitglass.git.models import DiffScope
from gitglass.git.repository import Repository
from gitglass.output import json_report

logger = logging.getLogger(__name__)

Payload = Dict[str, Any]
Response = Tuple[int, Payload]


def _name_from(body: Optional[Mapping[str, Any]]) -> Any:
    return (body or {}).get("name")


def _flag(query: Optional[Mapping[str, str]], key: str) -> bool:
    return str((query or {}).get(key, "")).lower() in ("1", "true", "yes")


def current_branch(repo: Repository) -> Response:
    try:
        return 200, {"success": True, "branch": repo.current_branch()}
    except GitError as exc:
        logger.info("current branch failed: %s", exc)
        return 200, {"success": False, "message": "Failed to get current branch"}


def list_branches(repo: Repository) -> Response:
    try:
        branches = repo.list_branches()
    except GitError as exc:
        logger.info("branch listing failed: %s", exc)
        return 200, {"success": False, "branches": []}
    return 200, {"success": True, "branches": json_report.branches_to_list(branches)}


def create_branch(repo: Repository, body: Optional[Mapping[str, Any]]) -> Response:
    try:
        repo.create_branch(_name_from(body))
    except GitError as exc:
        return 200, {"success": False, "message": str(exc)}
    return 200, {"success": True, "message": "Branch created successfully"}


def checkout_branch(repo: Repository, body: Optional[Mapping[str, Any]]) -> Response:
    try:
        repo.checkout_branch(_name_from(body))
    except GitError as exc:
        return 200, {"success": False, "message": str(exc)}
    return 200, {"success": True, "message": "Branch checked out successfully"}


def delete_branch(repo: Repository, body: Optional[Mapping[str, Any]]) -> Response:
    try:
        outcome = repo.delete_branch(_name_from(body))
    except GitError as exc:
        return 200, {"success": False, "message": str(exc)}
    if outcome.forced:
        return 200, {"success": True, "forced": True, "message": "Branch force deleted successfully"}
    return 200, {"success": True, "forced": False, "message": "Branch deleted successfully"}


def list_commits(repo: Repository, query: Mapping[str, str]) -> Response:
    try:
        commits = repo.list_commits(query.get("limit"))
    except GitError as exc:
        logger.info("commit log failed: %s", exc)
        commits = []
    return 200, {"success": True, "commits": json_report.commits_to_list(commits)}


def file_history(repo: Repository, path: str, query: Mapping[str, str]) -> Response:
    try:
        commits = repo.file_history(path, query.get("limit"))
    except GitError as exc:
        logger.info("file history for %s failed: %s", path, exc)
        commits = []
    return 200, {
        "success": True,
        "commits": json_report.commits_to_list(commits, compact=True),
    }


def status(repo: Repository, query: Optional[Mapping[str, str]] = None) -> Response:
    try:
        state = repo.status()
    except GitError as exc:
        logger.info("status failed: %s", exc)
        return 200, {"success": False, "status": {}}
    payload: Payload = {"success": True, "status": json_report.status_to_dict(state)}
    if _flag(query, "detail"):
        payload["entries"] = json_report.status_entries(state)
    return 200, payload


def diff(repo: Repository, query: Mapping[str, str]) -> Response:
    scope = DiffScope.parse(query.get("type"))
    try:
        view = repo.diff(scope, query.get("file") or None)
    except GitError as exc:
        logger.info("diff (%s) failed: %s", scope.value, exc)
        return 200, {"success": False, "diff": ""}
    payload: Payload = {"success": True, "diff": view.text}
    if _flag(query, "classified"):
        payload["classified"] = json_report.diff_to_dict(view)
    return 200, payload


def health(repo: Repository) -> Response:
    return 200, {"status": "ok", "repoPath": str(repo.root)}


# --- routing ---

_GET: Dict[str, Callable[..., Response]] = {
    "/branch/current": lambda repo, query, body: current_branch(repo),
    "/branches": lambda repo, query, body: list_branches(repo),
    "/commits": lambda repo, query, body: list_commits(repo, query),
    "/status": lambda repo, query, body: status(repo, query),
    "/diff": lambda repo, query, body: diff(repo, query),
    "/health": lambda repo, query, body: health(repo),
}

_POST: Dict[str, Callable[..., Response]] = {
    "/branch/create": lambda repo, query, body: create_branch(repo, body),
    "/branch/checkout": lambda repo, query, body: checkout_branch(repo, body),
    "/branch/delete": lambda repo, query, body: delete_branch(repo, body),
}

_FILE_LOG_RE = re.compile(r"^/log/(.+)$")


def _normalise_path(path: str) -> str:
    path = path.split("?", 1)[0].rstrip("/") or "/"
    if path == "/api" or path.startswith("/api/"):
        path = path[len("/api"):] or "/"
    return path


def route_table() -> List[str]:
    """Return every routable ``METHOD path`` pair."""
    return (
        [f"GET {p}" for p in _GET]
        + ["GET /log/:file"]
        + [f"POST {p}" for p in _POST]
    )


def dispatch(
    repo: Repository,
    method: str,
    path: str,
    query: Optional[Mapping[str, str]] = None,
    body: Optional[Mapping[str, Any]] = None,
) -> Response:
    """Route one request. Paths may carry an ``/api`` prefix."""
    method = method.upper()
    path = _normalise_path(path)
    query = query or {}

    if body is not None and not isinstance(body, Mapping):
        return 400, {"success": False, "message": "Request body must be a JSON object"}

    if method == "GET":
        handler = _GET.get(path)
        if handler is not None:
            return handler(repo, query, body)
        m = _FILE_LOG_RE.match(path)
        if m:
            return file_history(repo, unquote(m.group(1)), query)
    elif method == "POST":
        handler = _POST.get(path)
        if handler is not None:
            return handler(repo, query, body)

    known = {p for p in _GET} | {p for p in _POST}
    if path in known or _FILE_LOG_RE.match(path):
        return 405, {"success": False, "message": f"Method {method} not allowed on {path}"}
    return 404, {"success": False, "message": f"Not found: {path}"}
