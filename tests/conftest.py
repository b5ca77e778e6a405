from __future__ import annotations

import io
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Callable
import sys

import pytest
from pypdf import PdfWriter

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from htmltopdfx import locator  # noqa: E402

FAKE_BINARY = "/opt/wkhtmltopdf/bin/wkhtmltopdf"


@pytest.fixture(autouse=True)
def clean_path_cache(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv(locator.WKHTMLTOPDF_PATH_ENV, raising=False)
    monkeypatch.delenv(locator.WRAPPER_PATH_ENV, raising=False)
    locator.reset_paths()
    yield
    locator.reset_paths()


@pytest.fixture()
def fake_binary() -> str:
    locator.set_path(FAKE_BINARY)
    locator.set_wrapper("")
    return FAKE_BINARY


@pytest.fixture()
def pdf_bytes() -> bytes:
    writer = PdfWriter()
    for _ in range(3):
        writer.add_blank_page(width=200, height=200)
    writer.add_metadata({"/Title": "Rendered"})
    stream = io.BytesIO()
    writer.write(stream)
    return stream.getvalue()


@pytest.fixture()
def fake_run(monkeypatch: pytest.MonkeyPatch) -> Callable[..., list[dict[str, Any]]]:
    """Replace ``subprocess.run`` in the runner; returns the list of recorded calls."""

    def _install(returncode: int = 0, stdout: bytes = b"", stderr: bytes = b"") -> list[dict[str, Any]]:
        calls: list[dict[str, Any]] = []

        def _run(command: list[str], **kwargs: Any) -> SimpleNamespace:
            calls.append({"command": command, **kwargs})
            return SimpleNamespace(returncode=returncode, stdout=stdout, stderr=stderr)

        monkeypatch.setattr("htmltopdfx.runner.subprocess.run", _run)
        return calls

    return _install
