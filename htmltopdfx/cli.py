"""
Command-line interface for htmltopdfx.
"""

import logging
import os
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from htmltopdfx import __version__
from htmltopdfx.exceptions import HTMLToPDFXError
from htmltopdfx.generator import PDFGenerator
from htmltopdfx.locator import resolve_command, set_path, set_wrapper
from htmltopdfx.pages import STDIN_INPUT, new_page, new_page_reader
from htmltopdfx.persistence import from_json
from htmltopdfx.utils import format_file_size, get_logger, get_pdf_info

console = Console()


def _document_options(func):
    """Attach the options shared by ``render`` and ``args``."""

    decorators = [
        click.argument('inputs', nargs=-1),
        click.option('--config', 'config', type=click.Path(exists=True, dir_okay=False),
                     help='Load a saved JSON job before applying other options'),
        click.option('--save-config', type=click.Path(dir_okay=False),
                     help='Save the resulting job as JSON'),
        click.option('--cover', help='Cover page path or URL'),
        click.option('--toc', is_flag=True, default=False, help='Include a table of contents'),
        click.option('--title', help='Document title'),
        click.option('--page-size', help='Page size, e.g. A4 or Letter'),
        click.option('--orientation', type=click.Choice(['Portrait', 'Landscape']),
                     help='Page orientation'),
        click.option('--dpi', type=int, help='Output resolution'),
        click.option('--grayscale', is_flag=True, default=False, help='Render in grayscale'),
        click.option('--margin-top', type=int, help='Top margin in millimetres'),
        click.option('--margin-bottom', type=int, help='Bottom margin in millimetres'),
        click.option('--margin-left', type=int, help='Left margin in millimetres'),
        click.option('--margin-right', type=int, help='Right margin in millimetres'),
        click.option('--header-center', help='Centred header text for every page'),
        click.option('--footer-center', help='Centred footer text for every page'),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _build_generator(inputs, options, *, resolve):
    config = options.get('config')
    if config:
        pdfg = from_json(Path(config).read_text(encoding='utf-8'), resolve=resolve)
    else:
        pdfg = PDFGenerator(resolve=resolve)

    globals_ = pdfg.global_options
    for name in ('title', 'page_size', 'orientation', 'dpi',
                 'margin_top', 'margin_bottom', 'margin_left', 'margin_right'):
        value = options.get(name)
        if value is not None:
            setattr(globals_, name, value)
    if options.get('grayscale'):
        globals_.grayscale = True

    if options.get('cover'):
        pdfg.cover.input = options['cover']
    if options.get('toc'):
        pdfg.toc.include = True

    for item in inputs:
        if item == STDIN_INPUT:
            page = new_page_reader(click.get_binary_stream('stdin'))
        else:
            page = new_page(item)
        if options.get('header_center'):
            page.options.header_footer.header_center = options['header_center']
        if options.get('footer_center'):
            page.options.header_footer.footer_center = options['footer_center']
        pdfg.add_page(page)

    if not pdfg.pages:
        raise click.UsageError('At least one input page is required (or a --config with pages).')

    save_config = options.get('save_config')
    if save_config:
        Path(save_config).write_text(pdfg.to_json(), encoding='utf-8')
        console.print(f"[dim]Saved job to {os.path.abspath(save_config)}[/dim]")
    return pdfg


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, default=False, help='Show debug logging')
def cli(verbose):
    """
    htmltopdfx - Render HTML pages to PDF with wkhtmltopdf.
    """
    logger = get_logger('htmltopdfx')
    # Errors reach the user through the console; log records only with --verbose.
    logger.setLevel(logging.DEBUG if verbose else logging.CRITICAL)


@cli.command(name='render')
@_document_options
@click.option('--output', '-o', default='output.pdf', show_default=True,
              type=click.Path(dir_okay=False), help='Destination PDF file')
@click.option('--direct', is_flag=True, default=False,
              help='Let wkhtmltopdf write the output file instead of capturing stdout')
@click.option('--wkhtmltopdf', 'binary', help='Path to the wkhtmltopdf executable')
@click.option('--wrapper', help='Wrapper command, e.g. "xvfb-run -a"')
def render(inputs, output, direct, binary, wrapper, **options):
    """
    Render INPUTS (paths, URLs or '-' for stdin) into a PDF.

    Examples:

        htmltopdfx render report.html -o report.pdf

        htmltopdfx render --toc --cover cover.html ch1.html ch2.html

        cat page.html | htmltopdfx render - -o page.pdf
    """
    try:
        if binary:
            set_path(binary)
        if wrapper is not None:
            set_wrapper(wrapper)

        pdfg = _build_generator(inputs, options, resolve=True)
        if direct:
            pdfg.output_file = output

        console.print(f"\n[bold cyan]Rendering {len(pdfg.pages)} page(s)...[/bold cyan]")
        pdfg.create()
        if not direct:
            pdfg.write_file(output)

        table = Table(title="Rendered PDF", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value", style="green")
        table.add_row("File", os.path.abspath(output))
        table.add_row("Command", pdfg.command_string)
        try:
            info = get_pdf_info(output)
            table.add_row("Pages", str(info.num_pages))
            table.add_row("Size", format_file_size(info.file_size))
            if info.title:
                table.add_row("Title", info.title)
        except (HTMLToPDFXError, OSError) as exc:
            table.add_row("Warning", f"Could not inspect output: {exc}")

        console.print(table)
        console.print("[bold green]✓ Done[/bold green]\n")

    except (HTMLToPDFXError, OSError) as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name='args')
@_document_options
@click.option('--output', '-o', default='', help='Output file passed to wkhtmltopdf ("-" when empty)')
def show_args(inputs, output, **options):
    """
    Print the wkhtmltopdf arguments for INPUTS without running anything.

    Example:

        htmltopdfx args --page-size A4 report.html
    """
    try:
        pdfg = _build_generator(inputs, options, resolve=False)
        pdfg.output_file = output
        click.echo(pdfg.arg_string())
    except HTMLToPDFXError as e:
        console.print(f"\n[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


@cli.command(name='locate')
def locate():
    """
    Show the command used to launch wkhtmltopdf.
    """
    try:
        click.echo(" ".join(resolve_command()))
    except HTMLToPDFXError as e:
        console.print(f"[bold red]✗ Error:[/bold red] {e}")
        sys.exit(1)


if __name__ == '__main__':  # pragma: no cover
    cli()
