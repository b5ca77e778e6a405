"""JSON persistence of :class:`~htmltopdfx.generator.PDFGenerator` jobs.

Only non-default option values are stored. A page read from a stream is
stored as base64 encoded HTML and restored as a :class:`PageReader` over an
in-memory buffer.
"""

from __future__ import annotations

import base64
import binascii
import io
import json
import logging
from typing import Any, Mapping

from .exceptions import ConfigurationError
from .generator import PDFGenerator
from .options import GlobalOptions, InputPageOptions, OutlineOptions, PageOptions, TocOptions
from .pages import Cover, Page, PageReader, PageSource, TableOfContents

_LOGGER = logging.getLogger("htmltopdfx.persistence")

__all__ = ["to_dict", "from_dict", "to_json", "from_json"]


def _page_to_dict(page: PageSource) -> dict[str, Any]:
    if isinstance(page, PageReader):
        data = page.input.read()
        if isinstance(data, str):
            data = data.encode("utf-8")
        # Reading consumed the stream; keep the page usable afterwards.
        page.input = io.BytesIO(data)
        return {
            "base64_page_data": base64.b64encode(data).decode("ascii"),
            "options": page.options.to_dict(),
        }
    if isinstance(page, Page):
        return {"input_file": page.input, "options": page.options.to_dict()}
    raise ConfigurationError(f"Cannot persist page of type {type(page).__name__}")


def _record(data: Any, what: str) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Expected an object for {what}, got {type(data).__name__}")
    return data


def _page_from_dict(data: Any) -> PageSource:
    data = _record(data, "page")
    options = InputPageOptions.from_dict(data.get("options"))
    if "base64_page_data" in data:
        try:
            content = base64.b64decode(data["base64_page_data"], validate=True)
        except (binascii.Error, TypeError) as exc:
            raise ConfigurationError(f"Invalid base64 page data: {exc}") from exc
        return PageReader(input=io.BytesIO(content), options=options)
    if "input_file" in data:
        return Page(input=str(data["input_file"]), options=options)
    raise ConfigurationError("Page record needs 'input_file' or 'base64_page_data'")


def to_dict(generator: PDFGenerator) -> dict[str, Any]:
    """Return a JSON-compatible record describing *generator*."""

    return {
        "global_options": generator.global_options.to_dict(),
        "outline_options": generator.outline_options.to_dict(),
        "cover": {
            "input": generator.cover.input,
            "options": generator.cover.options.to_dict(),
        },
        "toc": {
            "include": generator.toc.include,
            "page_options": generator.toc.page_options.to_dict(),
            "toc_options": generator.toc.toc_options.to_dict(),
        },
        "output_file": generator.output_file,
        "pages": [_page_to_dict(page) for page in generator.pages],
    }


def from_dict(data: Mapping[str, Any], *, resolve: bool = True) -> PDFGenerator:
    """Rebuild a generator from a record produced by :func:`to_dict`."""

    if not isinstance(data, Mapping):
        raise ConfigurationError("Job record must be a JSON object")

    generator = PDFGenerator(resolve=resolve)
    generator.global_options = GlobalOptions.from_dict(data.get("global_options"))
    generator.outline_options = OutlineOptions.from_dict(data.get("outline_options"))

    cover = _record(data.get("cover"), "cover")
    generator.cover = Cover(
        input=str(cover.get("input", "") or ""),
        options=PageOptions.from_dict(cover.get("options")),
    )
    toc = _record(data.get("toc"), "toc")
    generator.toc = TableOfContents(
        include=bool(toc.get("include", False)),
        page_options=PageOptions.from_dict(toc.get("page_options")),
        toc_options=TocOptions.from_dict(toc.get("toc_options")),
    )
    generator.output_file = str(data.get("output_file", "") or "")

    pages = data.get("pages") or []
    if not isinstance(pages, list):
        raise ConfigurationError(f"Expected a list of pages, got {type(pages).__name__}")
    generator.set_pages(_page_from_dict(page) for page in pages)
    _LOGGER.debug("Loaded job with %d page(s)", len(generator.pages))
    return generator


def to_json(generator: PDFGenerator, *, indent: int | None = 2) -> str:
    return json.dumps(to_dict(generator), indent=indent)


def from_json(data: str | bytes, *, resolve: bool = True) -> PDFGenerator:
    try:
        record = json.loads(data)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid job JSON: {exc}") from exc
    return from_dict(record, resolve=resolve)
