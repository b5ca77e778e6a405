"""Execution of wkhtmltopdf as a child process."""

from __future__ import annotations

import asyncio
import logging
import subprocess
from typing import IO, Any, Optional, Sequence

from .exceptions import ExecutableNotFoundError, RenderError
from .types import CompletedRender

_LOGGER = logging.getLogger("htmltopdfx.runner")

__all__ = ["run_command", "run_command_async"]


def _read_input(stdin: Optional[IO[Any]]) -> Optional[bytes]:
    if stdin is None:
        return None
    data = stdin.read()
    if isinstance(data, str):
        return data.encode("utf-8")
    return bytes(data)


def _command_line(command: Sequence[str], args: Sequence[str]) -> list[str]:
    if not command or not command[0]:
        raise ExecutableNotFoundError()
    return [*command, *args]


def _finish(full: list[str], returncode: int, stdout: bytes, stderr: bytes) -> CompletedRender:
    stderr_text = (stderr or b"").decode("utf-8", errors="replace")
    if returncode != 0:
        message = stderr_text.strip() or str(subprocess.CalledProcessError(returncode, full))
        _LOGGER.error("wkhtmltopdf failed with code %s: %s", returncode, message)
        raise RenderError(message, returncode=returncode, stderr=stderr_text)
    _LOGGER.debug("wkhtmltopdf finished, %d bytes on stdout", len(stdout or b""))
    return CompletedRender(command=full, returncode=returncode, stdout=stdout or b"", stderr=stderr_text)


def run_command(
    command: Sequence[str],
    args: Sequence[str],
    *,
    stdin: Optional[IO[Any]] = None,
) -> CompletedRender:
    """Run ``command + args`` and block until it exits.

    Parameters
    ----------
    command:
        Executable tokens, e.g. ``["/usr/bin/xvfb-run", "/usr/bin/wkhtmltopdf"]``.
    args:
        Arguments composed by :meth:`PDFGenerator.args`.
    stdin:
        Optional stream whose content is fed to standard input.

    Raises :class:`RenderError` when the process cannot be started or exits
    with a non-zero code. The message is the trimmed standard error output,
    or the launch/exit description when nothing was written there.
    """

    full = _command_line(command, args)
    data = _read_input(stdin)
    _LOGGER.debug("Executing command: %s", " ".join(full))
    try:
        completed = subprocess.run(
            full,
            input=data,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
        )
    except OSError as exc:
        _LOGGER.error("Failed to execute wkhtmltopdf: %s", exc)
        raise RenderError(str(exc)) from exc
    return _finish(full, completed.returncode, completed.stdout, completed.stderr)


async def run_command_async(
    command: Sequence[str],
    args: Sequence[str],
    *,
    stdin: Optional[IO[Any]] = None,
) -> CompletedRender:
    """Awaitable counterpart of :func:`run_command`.

    Cancelling the awaiting task kills the child process, so a deadline can
    be imposed with :func:`asyncio.wait_for`.
    """

    full = _command_line(command, args)
    data = _read_input(stdin)
    _LOGGER.debug("Executing command: %s", " ".join(full))
    try:
        process = await asyncio.create_subprocess_exec(
            *full,
            stdin=asyncio.subprocess.PIPE if data is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        _LOGGER.error("Failed to execute wkhtmltopdf: %s", exc)
        raise RenderError(str(exc)) from exc

    try:
        stdout, stderr = await process.communicate(data)
    except asyncio.CancelledError:
        _LOGGER.debug("Render cancelled; killing wkhtmltopdf (pid %s)", process.pid)
        if process.returncode is None:
            process.kill()
            await process.wait()
        raise
    return _finish(full, process.returncode, stdout, stderr)
