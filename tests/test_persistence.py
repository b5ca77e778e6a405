from __future__ import annotations

import io
import json

import pytest

from htmltopdfx.exceptions import ConfigurationError
from htmltopdfx.generator import PDFGenerator
from htmltopdfx.pages import Page, PageReader, new_page, new_page_reader
from htmltopdfx.persistence import from_dict, from_json, to_dict, to_json


def _configured_generator() -> PDFGenerator:
    pdfg = PDFGenerator.preparer()
    pdfg.global_options.page_size = "Letter"
    pdfg.global_options.margin_left = 0
    pdfg.outline_options.no_outline = True
    pdfg.cover.input = "cover.html"
    pdfg.cover.options.zoom = 0.8
    pdfg.toc.include = True
    pdfg.toc.toc_options.toc_header_text = "Contents"
    pdfg.output_file = "book.pdf"

    chapter = new_page("chapter1.html")
    chapter.options.page.cookie = {"session": "42"}
    chapter.options.header_footer.footer_center = "[page]/[topage]"
    pdfg.add_page(chapter)

    inline = new_page_reader(io.BytesIO(b"<h1>Appendix</h1>"))
    inline.options.page.run_script = ["console.log(1)"]
    pdfg.add_page(inline)
    return pdfg


def test_json_round_trip_preserves_arguments() -> None:
    original = _configured_generator()
    restored = from_json(original.to_json(), resolve=False)

    assert restored.args() == original.args()
    assert restored.output_file == "book.pdf"


def test_stream_page_stored_as_base64_and_restored() -> None:
    original = _configured_generator()
    record = json.loads(to_json(original))

    assert record["pages"][0] == {
        "input_file": "chapter1.html",
        "options": {
            "page": {"cookie": {"session": "42"}},
            "header_footer": {"footer_center": "[page]/[topage]"},
        },
    }
    assert "base64_page_data" in record["pages"][1]

    restored = PDFGenerator.from_json(json.dumps(record), resolve=False)
    pages = restored.pages
    assert isinstance(pages[0], Page)
    assert isinstance(pages[1], PageReader)
    assert pages[1].reader().read() == b"<h1>Appendix</h1>"


def test_serialising_keeps_stream_page_readable() -> None:
    pdfg = _configured_generator()
    to_dict(pdfg)

    assert pdfg.pages[1].reader().read() == b"<h1>Appendix</h1>"


def test_text_stream_page_is_encoded() -> None:
    pdfg = PDFGenerator.preparer()
    pdfg.add_page(new_page_reader(io.StringIO("<p>é</p>")))

    restored = from_dict(to_dict(pdfg), resolve=False)
    assert restored.pages[0].reader().read() == "<p>é</p>".encode("utf-8")


def test_default_generator_record_is_minimal() -> None:
    record = to_dict(PDFGenerator.preparer())

    assert record["global_options"] == {}
    assert record["pages"] == []
    assert record["toc"] == {"include": False, "page_options": {}, "toc_options": {}}


def test_invalid_json_raises_configuration_error() -> None:
    with pytest.raises(ConfigurationError):
        from_json("{not json", resolve=False)


def test_non_object_record_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        from_json("[1, 2]", resolve=False)


def test_page_without_source_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        from_dict({"pages": [{"options": {}}]}, resolve=False)


def test_bad_base64_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        from_dict({"pages": [{"base64_page_data": "***"}]}, resolve=False)


def test_unknown_option_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        from_dict({"global_options": {"page_sise": "A4"}}, resolve=False)


@pytest.mark.parametrize(
    "record",
    [
        {"cover": "cover.html"},
        {"toc": True},
        {"global_options": ["title"]},
        {"cover": {"input": "cover.html", "options": "zoom"}},
        {"pages": "a.html"},
        {"pages": ["a.html"]},
        {"pages": [{"input_file": "a.html", "options": ["page"]}]},
    ],
)
def test_malformed_sub_records_are_rejected(record) -> None:
    with pytest.raises(ConfigurationError):
        from_dict(record, resolve=False)
