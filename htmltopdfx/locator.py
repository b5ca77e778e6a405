"""Discovery of the ``wkhtmltopdf`` executable and its optional wrapper.

Resolved paths are cached process-wide. Once the main binary has been found
(or set explicitly through :func:`set_path`) later lookups return the cached
value without touching the filesystem again.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import sys
import threading
from pathlib import Path
from typing import Callable

from .exceptions import ExecutableNotFoundError

_LOGGER = logging.getLogger("htmltopdfx.locator")

WKHTMLTOPDF = "wkhtmltopdf"
WRAPPER = "xvfb-run"
WKHTMLTOPDF_PATH_ENV = "WKHTMLTOPDF_PATH"
WRAPPER_PATH_ENV = "WKHTMLTOPDF_WRAPPER_PATH"

__all__ = [
    "WKHTMLTOPDF",
    "WRAPPER",
    "WKHTMLTOPDF_PATH_ENV",
    "WRAPPER_PATH_ENV",
    "PathCache",
    "find_command_path",
    "get_path",
    "set_path",
    "get_wrapper",
    "set_wrapper",
    "reset_paths",
    "resolve_command",
    "explicit_command",
]


class PathCache:
    """A lock-guarded string slot. ``None`` means "not resolved yet"."""

    def __init__(self) -> None:
        self._value: str | None = None
        self._lock = threading.Lock()

    def get(self) -> str | None:
        with self._lock:
            return self._value

    def set(self, value: str | None) -> None:
        with self._lock:
            self._value = value

    def clear(self) -> None:
        self.set(None)

    def get_or_resolve(self, resolver: Callable[[], str]) -> str:
        """Return the cached value, running *resolver* once if there is none.

        The lock is held while *resolver* runs so concurrent first lookups do
        not search twice. Exceptions from *resolver* leave the slot empty.
        """

        with self._lock:
            if self._value is None:
                self._value = resolver()
            return self._value


_binary_path = PathCache()
_wrapper_command = PathCache()
_resolve_lock = threading.Lock()


def set_path(path: str) -> None:
    """Use *path* as the wkhtmltopdf executable, bypassing discovery."""

    _binary_path.set(path or None)


def get_path() -> str:
    """Return the cached wkhtmltopdf path, or ``""`` when none is known."""

    return _binary_path.get() or ""


def set_wrapper(command: str) -> None:
    """Use *command* (e.g. ``"xvfb-run -a"``) to wrap wkhtmltopdf.

    An empty string disables the wrapper without further discovery.
    """

    _wrapper_command.set(command)


def get_wrapper() -> str:
    """Return the cached wrapper command, or ``""`` when none is used."""

    return _wrapper_command.get() or ""


def reset_paths() -> None:
    """Forget every cached path so the next lookup searches again."""

    _binary_path.clear()
    _wrapper_command.clear()


def _program_dir() -> Path:
    return Path(sys.argv[0] or ".").expanduser().resolve().parent


def find_command_path(command: str, env_var: str) -> str:
    """Locate *command* and return its absolute path.

    The lookup order is:

    1. the directory containing the running program,
    2. the directories on ``PATH``,
    3. the directory named by the *env_var* environment variable.
    """

    candidate = shutil.which(str(_program_dir() / command))
    if candidate:
        _LOGGER.debug("Found %s next to the running program: %s", command, candidate)
        return os.path.abspath(candidate)

    candidate = shutil.which(command)
    if candidate:
        _LOGGER.debug("Found %s on PATH: %s", command, candidate)
        return os.path.abspath(candidate)

    directory = os.environ.get(env_var, "")
    if directory:
        candidate = shutil.which(str(Path(directory).expanduser() / command))
        if candidate:
            _LOGGER.debug("Found %s through %s: %s", command, env_var, candidate)
            return os.path.abspath(candidate)

    raise ExecutableNotFoundError(f"{command} not found")


def _discover_wrapper() -> str:
    try:
        return find_command_path(WRAPPER, WRAPPER_PATH_ENV)
    except ExecutableNotFoundError:
        _LOGGER.debug("No %s wrapper available; running wkhtmltopdf directly", WRAPPER)
        return ""


def _compose(main_path: str, wrapper: str) -> list[str]:
    return [*shlex.split(wrapper), main_path] if wrapper else [main_path]


def resolve_command() -> list[str]:
    """Return the command tokens used to launch wkhtmltopdf.

    A known main path short-circuits discovery; the wrapper then comes only
    from :func:`set_wrapper` or an earlier discovery. Otherwise wkhtmltopdf is
    searched for (raising :class:`ExecutableNotFoundError` when missing) and
    the optional wrapper is searched for alongside it.
    """

    # Main path and wrapper are filled together.
    with _resolve_lock:
        main_path = get_path()
        if main_path:
            return _compose(main_path, get_wrapper())

        main_path = _binary_path.get_or_resolve(lambda: find_command_path(WKHTMLTOPDF, WKHTMLTOPDF_PATH_ENV))
        wrapper = _wrapper_command.get_or_resolve(_discover_wrapper)
    command = _compose(main_path, wrapper)
    _LOGGER.info("Using wkhtmltopdf command: %s", " ".join(command))
    return command


def explicit_command() -> list[str]:
    """Return the command from explicit overrides only, without discovery."""

    main_path = get_path()
    if not main_path:
        raise ExecutableNotFoundError(f"{WKHTMLTOPDF} not found; call set_path() first")
    return _compose(main_path, get_wrapper())
