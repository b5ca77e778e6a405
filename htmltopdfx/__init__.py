"""
htmltopdfx - Python wrapper around the wkhtmltopdf command line tool.

Quick Start:
    >>> from htmltopdfx import PDFGenerator, new_page
    >>> pdfg = PDFGenerator()
    >>> pdfg.global_options.page_size = "A4"
    >>> pdfg.add_page(new_page("report.html"))
    >>> pdfg.create()
    >>> pdfg.write_file("report.pdf")

Main Classes:
    - PDFGenerator: Document model that composes arguments and runs wkhtmltopdf
    - Page / PageReader: Input pages from a path/URL or from a stream

Executable discovery:
    wkhtmltopdf is looked up next to the running program, then on PATH, then
    in the directory named by WKHTMLTOPDF_PATH. An optional xvfb-run wrapper is
    looked up the same way using WKHTMLTOPDF_WRAPPER_PATH. Use set_path() and
    set_wrapper() to bypass discovery.

For CLI usage, use the 'htmltopdfx' command after installation.
"""

from htmltopdfx.exceptions import (
    ConfigurationError,
    ExecutableNotFoundError,
    HTMLToPDFXError,
    MultipleStreamPagesError,
    RenderError,
)
from htmltopdfx.generator import PDFGenerator, new_pdf_generator, new_pdf_preparer
from htmltopdfx.locator import (
    find_command_path,
    get_path,
    get_wrapper,
    reset_paths,
    set_path,
    set_wrapper,
)
from htmltopdfx.options import (
    GlobalOptions,
    HeaderFooterOptions,
    InputPageOptions,
    OutlineOptions,
    PageOptions,
    TocOptions,
    new_page_options,
)
from htmltopdfx.pages import (
    Cover,
    Page,
    PageReader,
    PageSource,
    TableOfContents,
    new_page,
    new_page_reader,
)
from htmltopdfx.types import CompletedRender, PDFInfo
from htmltopdfx.utils import get_pdf_info

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Document model
    "PDFGenerator",
    "new_pdf_generator",
    "new_pdf_preparer",
    # Pages
    "PageSource",
    "Page",
    "PageReader",
    "Cover",
    "TableOfContents",
    "new_page",
    "new_page_reader",
    # Options
    "GlobalOptions",
    "OutlineOptions",
    "PageOptions",
    "HeaderFooterOptions",
    "TocOptions",
    "InputPageOptions",
    "new_page_options",
    # Executable discovery
    "find_command_path",
    "get_path",
    "set_path",
    "get_wrapper",
    "set_wrapper",
    "reset_paths",
    # Data types
    "CompletedRender",
    "PDFInfo",
    "get_pdf_info",
    # Exceptions
    "HTMLToPDFXError",
    "ExecutableNotFoundError",
    "RenderError",
    "MultipleStreamPagesError",
    "ConfigurationError",
    "__version__",
]
