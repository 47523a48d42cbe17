"""Thin HTTP adapter serving ``dispatch`` as a JSON API."""

from __future__ import annotations

import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional, Tuple
from urllib.parse import parse_qs, urlsplit

from gitglass.api.routes import dispatch
from gitglass.git.repository import Repository

logger = logging.getLogger(__name__)

_MAX_BODY_BYTES = 64 * 1024


class _BadRequest(Exception):
    pass


def _flatten_query(raw: str) -> Dict[str, str]:
    """Keep the first value of each query parameter."""
    return {k: v[0] for k, v in parse_qs(raw, keep_blank_values=True).items()}


def make_handler(repo: Repository) -> type:
    """Build a request handler class bound to *repo*."""

    class GitGlassHandler(BaseHTTPRequestHandler):
        server_version = "gitglass"

        def do_GET(self) -> None:
            self._handle("GET")

        def do_POST(self) -> None:
            self._handle("POST")

        def _read_body(self) -> Optional[Any]:
            try:
                length = int(self.headers.get("Content-Length") or 0)
            except ValueError as exc:
                raise _BadRequest("Invalid Content-Length header") from exc
            if length <= 0:
                return None
            if length > _MAX_BODY_BYTES:
                raise _BadRequest("Request body too large")
            raw = self.rfile.read(length)
            try:
                return json.loads(raw.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise _BadRequest(f"Invalid JSON body: {exc}") from exc

        def _handle(self, method: str) -> None:
            parts = urlsplit(self.path)
            try:
                body = self._read_body() if method == "POST" else None
                status, payload = dispatch(
                    repo, method, parts.path, _flatten_query(parts.query), body,
                )
            except _BadRequest as exc:
                status, payload = 400, {"success": False, "message": str(exc)}
            except Exception:
                logger.exception("Unhandled error serving %s %s", method, self.path)
                status, payload = 500, {"success": False, "message": "Internal server error"}
            self._send(status, payload)

        def _send(self, status: int, payload: Dict[str, Any]) -> None:
            data = json.dumps(payload, ensure_ascii=False).encode("utf-8")
            self.send_response(status)
            self.send_header("Content-Type", "application/json; charset=utf-8")
            self.send_header("Content-Length", str(len(data)))
            self.end_headers()
            self.wfile.write(data)

        def log_message(self, format: str, *args: Any) -> None:
            logger.info("%s - %s", self.address_string(), format % args)

    return GitGlassHandler


def create_server(repo: Repository, host: str, port: int) -> ThreadingHTTPServer:
    """Bind a threading HTTP server; the caller runs ``serve_forever``."""
    server = ThreadingHTTPServer((host, port), make_handler(repo))
    server.daemon_threads = True
    return server


def server_address(server: ThreadingHTTPServer) -> Tuple[str, int]:
    host, port = server.server_address[:2]
    return str(host), int(port)
