from pathlib import Path

from docs_capture.core.markers import parse_markdown_file, parse_text
from docs_capture.core.patcher import patch_document, patch_text

DOC = "# Quotes\n\n<!-- SCREENSHOT: /quotes | Quote list -->\n\nSome text.\n"
ARTIFACT = Path("docs/assets/images/quotes/quote-list.png")


def test_inserts_relative_reference():
    [d] = parse_text(DOC, "docs/quotes/list.md")
    out = patch_text(DOC, d, ARTIFACT)
    lines = out.split("\n")
    assert lines[3] == "![Quote list](../assets/images/quotes/quote-list.png)"


def test_second_run_is_a_no_op():
    [d] = parse_text(DOC, "docs/quotes/list.md")
    once = patch_text(DOC, d, ARTIFACT)
    assert patch_text(once, d, ARTIFACT) == once


def test_existing_reference_after_blank_lines():
    text = "<!-- SCREENSHOT: Quote list -->\n\n\n![old](x.png)\n"
    [d] = parse_text(text, "docs/quotes/list.md")
    assert patch_text(text, d, ARTIFACT) == text


def test_reference_outside_window_is_not_seen():
    text = "<!-- SCREENSHOT: Quote list -->\n\n\n\n![old](x.png)\n"
    [d] = parse_text(text, "docs/quotes/list.md")
    assert patch_text(text, d, ARTIFACT) != text


def test_patch_document_follows_shifted_markers(tmp_path):
    doc = tmp_path / "quotes" / "guide.md"
    doc.parent.mkdir()
    doc.write_text("<!-- SCREENSHOT: /quotes | First -->\ntext\n<!-- SCREENSHOT: /quotes/new | Second -->\n", encoding="utf-8")
    first, second = parse_markdown_file(doc)
    images = tmp_path / "images" / "quotes"

    assert patch_document(first, images / "first.png") is True
    assert patch_document(second, images / "second.png") is True
    assert patch_document(second, images / "second.png") is False

    lines = doc.read_text(encoding="utf-8").split("\n")
    assert lines[1] == "![First](../images/quotes/first.png)"
    assert lines[3] == "<!-- SCREENSHOT: /quotes/new | Second -->"
    assert lines[4] == "![Second](../images/quotes/second.png)"


def test_crlf_document_stays_crlf(tmp_path):
    doc = tmp_path / "quotes" / "guide.md"
    doc.parent.mkdir()
    doc.write_bytes(b"# Quotes\r\n<!-- SCREENSHOT: /quotes | Quote list -->\r\nText.\r\n")
    [d] = parse_markdown_file(doc)

    assert patch_document(d, tmp_path / "images" / "quotes" / "quote-list.png") is True
    assert patch_document(d, tmp_path / "images" / "quotes" / "quote-list.png") is False

    data = doc.read_bytes()
    assert data == (
        b"# Quotes\r\n<!-- SCREENSHOT: /quotes | Quote list -->\r\n"
        b"![Quote list](../images/quotes/quote-list.png)\r\nText.\r\n"
    )


def test_crlf_text_patch():
    text = "<!-- SCREENSHOT: Quote list -->\r\nText.\r\n"
    [d] = parse_text(text, "docs/quotes/list.md")
    out = patch_text(text, d, ARTIFACT)
    assert out.split("\n")[1] == "![Quote list](../assets/images/quotes/quote-list.png)\r"
