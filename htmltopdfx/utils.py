"""Utility helpers for :mod:`htmltopdfx`."""

from __future__ import annotations

import io
import logging
import os
from pathlib import Path
from typing import Union

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from .exceptions import HTMLToPDFXError
from .types import PDFInfo

_LOGGER = logging.getLogger("htmltopdfx")

PathLike = Union[str, "os.PathLike[str]"]


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: PathLike) -> Path:
    """Resolve *path* into an absolute :class:`~pathlib.Path`."""

    resolved = Path(path).expanduser().resolve()
    _LOGGER.debug("Resolved path '%s' to '%s'", path, resolved)
    return resolved


def ensure_parent_dir(path: Path) -> None:
    """Create parent directory for *path* if it does not exist."""

    path.parent.mkdir(parents=True, exist_ok=True)


def get_pdf_info(source: PathLike | bytes) -> PDFInfo:
    """Return basic information about a rendered PDF given as a path or bytes."""

    if isinstance(source, (bytes, bytearray)):
        data = bytes(source)
        stream = io.BytesIO(data)
        file_size = len(data)
    else:
        path = resolve_path(source)
        stream = io.BytesIO(path.read_bytes())
        file_size = path.stat().st_size

    try:
        reader = PdfReader(stream)
        num_pages = len(reader.pages)
        metadata = reader.metadata
        has_outlines = bool(reader.outline)
    except (PdfReadError, ValueError) as exc:
        raise HTMLToPDFXError(f"Failed to read rendered PDF: {exc}") from exc

    return PDFInfo(
        num_pages=num_pages,
        file_size=file_size,
        title=metadata.title if metadata else None,
        producer=metadata.producer if metadata else None,
        has_outlines=has_outlines,
    )


def format_file_size(size_bytes: float) -> str:
    """
    Format file size in human-readable format.

    Args:
        size_bytes: File size in bytes

    Returns:
        Formatted string (e.g., "1.5 MB", "500.0 B")
    """
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size_bytes < 1024.0:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.1f} PB"
