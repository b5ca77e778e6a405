"""Input pages, cover page and table of contents."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import IO, Any, Optional, Protocol, runtime_checkable

from .options import InputPageOptions, PageOptions, TocOptions

__all__ = [
    "STDIN_INPUT",
    "PageSource",
    "Page",
    "PageReader",
    "Cover",
    "TableOfContents",
    "new_page",
    "new_page_reader",
]

STDIN_INPUT = "-"


@runtime_checkable
class PageSource(Protocol):
    """Anything that can be rendered as one ``page`` object by wkhtmltopdf."""

    def input_file(self) -> str:
        ...

    def args(self) -> list[str]:
        ...

    def reader(self) -> Optional[IO[Any]]:
        ...


@dataclass
class Page:
    """An input page read from a local file or a URL."""

    input: str
    options: InputPageOptions = field(default_factory=InputPageOptions)

    def input_file(self) -> str:
        return self.input

    def args(self) -> list[str]:
        return self.options.args()

    def reader(self) -> Optional[IO[Any]]:
        return None


@dataclass
class PageReader:
    """An input page read from an in-memory stream through standard input.

    wkhtmltopdf has a single standard input, so a document can hold at most
    one of these.
    """

    input: IO[Any]
    options: InputPageOptions = field(default_factory=InputPageOptions)

    def input_file(self) -> str:
        return STDIN_INPUT

    def args(self) -> list[str]:
        return self.options.args()

    def reader(self) -> Optional[IO[Any]]:
        return self.input


@dataclass
class Cover:
    """Cover page, rendered before everything else when ``input`` is set."""

    input: str = ""
    options: PageOptions = field(default_factory=PageOptions)


@dataclass
class TableOfContents:
    """Generated table of contents, rendered only when ``include`` is set."""

    include: bool = False
    page_options: PageOptions = field(default_factory=PageOptions)
    toc_options: TocOptions = field(default_factory=TocOptions)

    def args(self) -> list[str]:
        return [*self.page_options.args(), *self.toc_options.args()]


def new_page(input: str) -> Page:
    """Create an input page from a local path or URL."""

    return Page(input=input)


def new_page_reader(input: IO[Any]) -> PageReader:
    """Create an input page read from *input*."""

    return PageReader(input=input)
