"""
Custom exceptions for htmltopdfx.

This module defines all custom exceptions used throughout the library.
"""

from __future__ import annotations


class HTMLToPDFXError(Exception):
    """Base exception for all htmltopdfx errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown htmltopdfx error occurred."


class ExecutableNotFoundError(HTMLToPDFXError):
    """Raised when the wkhtmltopdf executable cannot be located."""

    @property
    def default_message(self) -> str:
        return "wkhtmltopdf not found"


class RenderError(HTMLToPDFXError):
    """Raised when wkhtmltopdf cannot be started or exits with an error."""

    def __init__(
        self,
        message: str = "",
        *,
        returncode: int | None = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    @property
    def default_message(self) -> str:
        return "wkhtmltopdf failed to render the document."


class MultipleStreamPagesError(HTMLToPDFXError):
    """Raised when a second stream-backed page is added to a document."""

    @property
    def default_message(self) -> str:
        return "Only one page may be read from a stream per document."


class ConfigurationError(HTMLToPDFXError):
    """Raised when a persisted job record cannot be loaded."""

    @property
    def default_message(self) -> str:
        return "Invalid htmltopdfx configuration."
