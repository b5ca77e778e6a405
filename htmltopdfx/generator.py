"""The :class:`PDFGenerator` document model."""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Any, Iterable, Optional

from .exceptions import MultipleStreamPagesError, RenderError
from .locator import explicit_command, resolve_command
from .options import GlobalOptions, OutlineOptions
from .pages import Cover, PageSource, TableOfContents
from .runner import run_command, run_command_async
from .types import CompletedRender
from .utils import ensure_parent_dir

_LOGGER = logging.getLogger("htmltopdfx.generator")

__all__ = ["PDFGenerator", "new_pdf_generator", "new_pdf_preparer"]

STDOUT_OUTPUT = "-"


def _count_stream_pages(pages: Iterable[PageSource]) -> int:
    return sum(1 for page in pages if page.reader() is not None)


class PDFGenerator:
    """Describes one wkhtmltopdf run and executes it.

    The constructor locates wkhtmltopdf and raises
    :class:`~htmltopdfx.exceptions.ExecutableNotFoundError` when it is
    missing. Use :meth:`preparer` to build a document without a binary, for
    example to compose arguments or persist the configuration as JSON.

    When ``output_file`` is empty the PDF is written to standard output and
    captured in :attr:`buffer`. Otherwise wkhtmltopdf writes the file itself
    and the buffer stays empty.
    """

    def __init__(self, *, resolve: bool = True) -> None:
        self.global_options = GlobalOptions()
        self.outline_options = OutlineOptions()
        self.cover = Cover()
        self.toc = TableOfContents()
        self.output_file = ""
        # Receives a copy of wkhtmltopdf's standard error after every run.
        self.stderr: Optional[IO[str]] = None

        self._pages: list[PageSource] = []
        self._buffer = io.BytesIO()
        self._command: list[str] = resolve_command() if resolve else []

    @classmethod
    def preparer(cls) -> "PDFGenerator":
        """Return a generator that does not look for wkhtmltopdf.

        :meth:`create` on such an object only works after
        :func:`~htmltopdfx.locator.set_path` has been called.
        """

        return cls(resolve=False)

    @property
    def command(self) -> list[str]:
        return list(self._command)

    @property
    def command_string(self) -> str:
        return " ".join(self._command)

    @property
    def pages(self) -> tuple[PageSource, ...]:
        return tuple(self._pages)

    def args(self) -> list[str]:
        """Return the full wkhtmltopdf argument list.

        Order: global options, outline options, cover, table of contents,
        pages in list order, output target.
        """

        args = [*self.global_options.args(), *self.outline_options.args()]
        if self.cover.input:
            args.extend(["cover", self.cover.input, *self.cover.options.args()])
        if self.toc.include:
            args.extend(["toc", *self.toc.args()])
        for page in self._pages:
            args.extend(["page", page.input_file(), *page.args()])
        args.append(self.output_file or STDOUT_OUTPUT)
        return args

    def arg_string(self) -> str:
        return " ".join(self.args())

    def add_page(self, page: PageSource) -> None:
        """Append an input page.

        A page is one HTML input and may span several pages of the output.
        Only one page read from a stream is allowed per document.
        """

        if page.reader() is not None and _count_stream_pages(self._pages):
            raise MultipleStreamPagesError()
        self._pages.append(page)

    def set_pages(self, pages: Iterable[PageSource]) -> None:
        """Replace all input pages."""

        pages = list(pages)
        if _count_stream_pages(pages) > 1:
            raise MultipleStreamPagesError()
        self._pages = pages

    def _stdin(self) -> Optional[IO[Any]]:
        for page in self._pages:
            reader = page.reader()
            if reader is not None:
                return reader
        return None

    def _prepare_run(self) -> tuple[list[str], list[str], Optional[IO[Any]]]:
        command = self._command or explicit_command()
        self._buffer.seek(0)
        self._buffer.truncate()
        return command, self.args(), self._stdin()

    def _forward_stderr(self, text: str) -> None:
        if self.stderr is not None and text:
            self.stderr.write(text)

    def _store(self, result: CompletedRender) -> CompletedRender:
        self._forward_stderr(result.stderr)
        self._buffer.write(result.stdout)
        self._buffer.seek(0)
        if self.output_file:
            _LOGGER.info("Rendered PDF to %s", self.output_file)
        else:
            _LOGGER.info("Rendered PDF into memory (%d bytes)", len(result.stdout))
        return result

    def create(self) -> CompletedRender:
        """Run wkhtmltopdf and block until it exits.

        Raises :class:`~htmltopdfx.exceptions.RenderError` on failure, in
        which case the buffer content is undefined.
        """

        command, args, stdin = self._prepare_run()
        try:
            result = run_command(command, args, stdin=stdin)
        except RenderError as exc:
            self._forward_stderr(exc.stderr)
            raise
        return self._store(result)

    async def create_async(self) -> CompletedRender:
        """Awaitable :meth:`create`; cancelling it kills wkhtmltopdf."""

        command, args, stdin = self._prepare_run()
        try:
            result = await run_command_async(command, args, stdin=stdin)
        except RenderError as exc:
            self._forward_stderr(exc.stderr)
            raise
        return self._store(result)

    @property
    def buffer(self) -> io.BytesIO:
        """Output buffer, used when ``output_file`` is empty."""

        return self._buffer

    def output_bytes(self) -> bytes:
        return self._buffer.getvalue()

    def write_file(self, filename: str | Path) -> Path:
        """Write the buffered PDF to *filename*."""

        path = Path(filename)
        ensure_parent_dir(path)
        path.write_bytes(self.output_bytes())
        return path

    def to_json(self) -> str:
        from .persistence import to_json

        return to_json(self)

    @classmethod
    def from_json(cls, data: str | bytes, *, resolve: bool = True) -> "PDFGenerator":
        from .persistence import from_json

        return from_json(data, resolve=resolve)


def new_pdf_generator() -> PDFGenerator:
    """Return a new generator, locating wkhtmltopdf on the way."""

    return PDFGenerator()


def new_pdf_preparer() -> PDFGenerator:
    """Return a new generator without locating wkhtmltopdf."""

    return PDFGenerator.preparer()
