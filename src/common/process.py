"""Synchronous process execution used to run bundling commands."""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import IO, Any, Optional, Sequence, Union

from common.logging_utils import Timer, extra_context, is_debug_enabled
from bundling.errors import ExecutionError

logger = logging.getLogger(__name__)

Stream = Union[int, IO[Any], None]


def exec_command(
    cmd: str,
    args: Sequence[str],
    cwd: Optional[str] = None,
    stdin: Stream = subprocess.DEVNULL,
    stdout: Stream = None,
    stderr: Stream = None,
    timeout: Optional[float] = None,
    verbatim: bool = False,
) -> subprocess.CompletedProcess:
    """Run ``cmd`` with ``args`` and fail fast on a non-zero exit.

    Output goes to the caller's stderr unless other streams are given; pass
    ``subprocess.PIPE`` to capture it, captured text is then attached to the
    raised error.

    Args:
        cmd: Executable, e.g. ``bash``.
        args: Arguments, e.g. ``["-c", "<command>"]``.
        cwd: Working directory of the child.
        stdin: stdin of the child, ignored by default.
        stdout: stdout of the child, defaults to this process' stderr.
        stderr: stderr of the child, inherited by default.
        timeout: Seconds before the child is killed; no limit by default.
        verbatim: Hand the command line over unquoted (cmd.exe /c needs this).

    Returns:
        The completed process.

    Raises:
        ExecutionError: the child exited with a non-zero status.
    """
    if stdout is None:
        stdout = sys.stderr

    with Timer() as t:
        proc = subprocess.run(  # noqa: S603
            " ".join([cmd, *args]) if verbatim else [cmd, *args],
            cwd=cwd,
            stdin=stdin,
            stdout=stdout,
            stderr=stderr,
            timeout=timeout,
            check=False,
        )

    if is_debug_enabled(logger):
        logger.debug(
            "Process finished",
            extra=extra_context(
                event="process_exit",
                component="process",
                action=cmd,
                status_code=proc.returncode,
                duration_ms=t.duration_ms(),
            ),
        )

    if proc.returncode != 0:
        raise ExecutionError(
            command=cmd,
            args=args,
            returncode=proc.returncode,
            cwd=cwd,
            stdout=_as_text(proc.stdout),
            stderr=_as_text(proc.stderr),
        )
    return proc


def _as_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return str(value)
