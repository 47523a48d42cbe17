"""Git subprocess wrapper — runs one command, never raises on failure."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
DEFAULT_MAX_OUTPUT_BYTES = 10 * 1024 * 1024


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single git invocation."""

    args: List[str]
    ok: bool
    stdout: str = ""
    stderr: str = ""
    returncode: Optional[int] = None
    error_message: Optional[str] = None

    @property
    def output(self) -> str:
        """stdout, or stderr when git wrote nothing to stdout."""
        return self.stdout or self.stderr


def _git_env() -> dict:
    env = os.environ.copy()
    env["LANG"] = "C"
    env["LC_ALL"] = "C"
    env["GIT_TERMINAL_PROMPT"] = "0"
    return env


def _kill_group(proc: subprocess.Popen) -> None:
    if os.name == "posix":
        try:
            os.killpg(proc.pid, signal.SIGKILL)
            return
        except ProcessLookupError:
            return
    proc.kill()


def run_git(
    args: Sequence[str],
    cwd: Path,
    *,
    executable: str = "git",
    timeout: float = DEFAULT_TIMEOUT,
    max_output_bytes: int = DEFAULT_MAX_OUTPUT_BYTES,
) -> CommandResult:
    """Run ``git *args`` inside *cwd* and capture its output.

    Arguments are passed as a list, never through a shell. A process that
    cannot be spawned, exits non-zero, runs past *timeout* or writes more
    than *max_output_bytes* yields ``ok=False`` with ``error_message`` set.
    """
    argv = [executable, *args]
    cmd = " ".join(argv)
    logger.debug("Running %s (cwd=%s)", cmd, cwd)

    if not Path(cwd).is_dir():
        return CommandResult(
            args=list(args), ok=False,
            error_message=f"working directory does not exist: {cwd}",
        )

    try:
        proc = subprocess.Popen(
            argv,
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            env=_git_env(),
            start_new_session=(os.name == "posix"),
        )
    except FileNotFoundError:
        return CommandResult(
            args=list(args), ok=False,
            error_message="git is not installed or not on PATH",
        )
    except OSError as exc:
        return CommandResult(
            args=list(args), ok=False,
            error_message=f"failed to start git: {exc}",
        )

    try:
        raw_out, raw_err = proc.communicate(timeout=timeout)
    except subprocess.TimeoutExpired:
        _kill_group(proc)
        proc.communicate()
        logger.warning("git command timed out after %ss: %s", timeout, cmd)
        return CommandResult(
            args=list(args), ok=False,
            error_message=f"git command timed out after {timeout}s: {cmd}",
        )

    stdout = raw_out.decode("utf-8", errors="replace")
    stderr = raw_err.decode("utf-8", errors="replace")
    logger.debug("%s exited %d", cmd, proc.returncode)

    if len(raw_out) > max_output_bytes:
        return CommandResult(
            args=list(args), ok=False, stderr=stderr, returncode=proc.returncode,
            error_message=f"git output exceeded {max_output_bytes} bytes: {cmd}",
        )

    if proc.returncode != 0:
        detail = stderr.strip() or stdout.strip()
        message = f"Command failed: {cmd}"
        if detail:
            message = f"{message}\n{detail}"
        return CommandResult(
            args=list(args), ok=False, stdout=stdout, stderr=stderr,
            returncode=proc.returncode, error_message=message,
        )

    return CommandResult(
        args=list(args), ok=True, stdout=stdout, stderr=stderr,
        returncode=proc.returncode,
    )
