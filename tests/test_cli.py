from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from htmltopdfx import locator
from htmltopdfx.cli import cli

from conftest import FAKE_BINARY


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


def test_args_command_prints_arguments(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["args", "--page-size", "A4", "--grayscale", "report.html"])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "--grayscale --page-size A4 page report.html -"


def test_args_command_with_cover_toc_and_output(runner: CliRunner) -> None:
    result = runner.invoke(
        cli,
        ["args", "--cover", "cover.html", "--toc", "--footer-center", "[page]", "-o", "out.pdf", "a.html"],
    )

    assert result.exit_code == 0, result.output
    assert result.output.strip() == "cover cover.html toc page a.html --footer-center [page] out.pdf"


def test_args_command_requires_input(runner: CliRunner) -> None:
    result = runner.invoke(cli, ["args"])
    assert result.exit_code == 2


def test_args_command_saves_and_loads_config(runner: CliRunner, tmp_path: Path) -> None:
    job = tmp_path / "job.json"
    saved = runner.invoke(cli, ["args", "--title", "Book", "--save-config", str(job), "a.html"])
    assert saved.exit_code == 0, saved.output
    assert json.loads(job.read_text())["global_options"] == {"title": "Book"}

    loaded = runner.invoke(cli, ["args", "--config", str(job), "--dpi", "96"])
    assert loaded.exit_code == 0, loaded.output
    assert loaded.output.strip().splitlines()[-1] == "--dpi 96 --title Book page a.html -"


def test_render_writes_captured_pdf(runner: CliRunner, tmp_path: Path, fake_run, pdf_bytes: bytes) -> None:
    calls = fake_run(stdout=pdf_bytes)
    output = tmp_path / "out.pdf"

    result = runner.invoke(
        cli,
        ["render", "--wkhtmltopdf", FAKE_BINARY, "--wrapper", "", "-o", str(output), "report.html"],
    )

    assert result.exit_code == 0, result.output
    assert output.read_bytes() == pdf_bytes
    assert calls[0]["command"] == [FAKE_BINARY, "page", "report.html", "-"]
    assert "Pages" in result.output


def test_render_direct_passes_output_file(runner: CliRunner, tmp_path: Path, fake_run, pdf_bytes: bytes) -> None:
    output = tmp_path / "direct.pdf"
    output.write_bytes(pdf_bytes)
    calls = fake_run()

    result = runner.invoke(
        cli,
        ["render", "--wkhtmltopdf", FAKE_BINARY, "--wrapper", "", "--direct", "-o", str(output), "a.html"],
    )

    assert result.exit_code == 0, result.output
    assert calls[0]["command"][-1] == str(output)


def test_render_reads_stdin(runner: CliRunner, tmp_path: Path, fake_run, pdf_bytes: bytes) -> None:
    calls = fake_run(stdout=pdf_bytes)

    result = runner.invoke(
        cli,
        ["render", "--wkhtmltopdf", FAKE_BINARY, "--wrapper", "", "-o", str(tmp_path / "s.pdf"), "-"],
        input="<h1>piped</h1>",
    )

    assert result.exit_code == 0, result.output
    assert calls[0]["input"] == b"<h1>piped</h1>"


def test_render_reports_failure(runner: CliRunner, tmp_path: Path, fake_run) -> None:
    fake_run(returncode=1, stderr=b"Error: no display\n")

    result = runner.invoke(
        cli,
        ["render", "--wkhtmltopdf", FAKE_BINARY, "--wrapper", "", "-o", str(tmp_path / "x.pdf"), "a.html"],
    )

    assert result.exit_code == 1
    assert "Error: no display" in result.output


def test_locate_prints_command(runner: CliRunner) -> None:
    locator.set_path(FAKE_BINARY)
    locator.set_wrapper("xvfb-run -a")

    result = runner.invoke(cli, ["locate"])

    assert result.exit_code == 0
    assert result.output.strip() == f"xvfb-run -a {FAKE_BINARY}"


def test_locate_reports_missing_binary(runner: CliRunner, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(locator.shutil, "which", lambda _cmd: None)

    result = runner.invoke(cli, ["locate"])

    assert result.exit_code == 1
    assert "wkhtmltopdf not found" in result.output


def test_failed_render_is_not_logged_without_verbose(runner: CliRunner, tmp_path: Path, fake_run) -> None:
    fake_run(returncode=1, stderr=b"Error: no display\n")
    logger = logging.getLogger("htmltopdfx")

    quiet = runner.invoke(
        cli,
        ["render", "--wkhtmltopdf", FAKE_BINARY, "--wrapper", "", "-o", str(tmp_path / "x.pdf"), "a.html"],
    )
    assert quiet.exit_code == 1
    assert quiet.output.count("Error: no display") == 1
    assert not logger.isEnabledFor(logging.ERROR)

    locator.set_path(FAKE_BINARY)
    runner.invoke(cli, ["--verbose", "locate"])
    assert logger.isEnabledFor(logging.DEBUG)
