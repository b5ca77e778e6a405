"""
Type definitions and dataclasses for htmltopdfx.

This module defines data structures used throughout the library.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional


@dataclass
class CompletedRender:
    """
    Outcome of one successful wkhtmltopdf run.

    Attributes:
        command: Full command line that was executed
        returncode: Exit code of the process
        stdout: Raw bytes written to standard output
        stderr: Decoded standard error text
    """
    command: List[str]
    returncode: int
    stdout: bytes = b""
    stderr: str = ""


@dataclass
class PDFInfo:
    """
    Basic information about a rendered PDF.

    Attributes:
        num_pages: Number of pages in the PDF
        file_size: Size in bytes
        title: PDF title metadata
        producer: PDF producer application
        has_outlines: Whether the PDF contains outlines/bookmarks
    """
    num_pages: int
    file_size: int
    title: Optional[str] = None
    producer: Optional[str] = None
    has_outlines: bool = False
