from docs_capture.core.markers import collect_directives, parse_line, parse_text, split_selectors
from docs_capture.core.types import GIF, SCREENSHOT


def test_path_description_and_highlights():
    line = '<!-- SCREENSHOT: /quotes/new | New quote form | highlight:input[type="submit"],.btn-primary -->'
    [d] = parse_line(line, "docs/quotes/new.md", 12)
    assert d.kind == SCREENSHOT
    assert d.path == "/quotes/new"
    assert d.description == "New quote form"
    assert d.highlights == ('input[type="submit"]', ".btn-primary")
    assert d.max_arrows is None
    assert d.line_number == 12
    assert d.raw == line


def test_description_only():
    [d] = parse_line("<!-- SCREENSHOT: The customer list -->", "docs/c.md", 1)
    assert d.path is None
    assert d.description == "The customer list"
    assert d.highlights == ()


def test_description_with_modifiers_and_unknown_key():
    [d] = parse_line("<!-- SCREENSHOT: Invoices | highlight:.btn | color:red | maxarrows:2 -->", "a.md", 3)
    assert d.path is None
    assert d.description == "Invoices"
    assert d.highlights == (".btn",)
    assert d.max_arrows == 2


def test_bad_maxarrows_is_dropped():
    [d] = parse_line("<!-- SCREENSHOT: /x | X | maxarrows:zero -->", "a.md", 1)
    assert d.max_arrows is None
    [d] = parse_line("<!-- SCREENSHOT: /x | X | maxarrows:0 -->", "a.md", 1)
    assert d.max_arrows is None


def test_lone_path_is_a_description():
    [d] = parse_line("<!-- SCREENSHOT: /quotes -->", "a.md", 1)
    assert d.path is None
    assert d.description == "/quotes"


def test_gif_steps():
    [d] = parse_line("<!-- gif: Open quotes | /quotes/new | Save the quote -->", "a.md", 4)
    assert d.kind == GIF
    assert d.steps == ("Open quotes", "/quotes/new", "Save the quote")
    assert d.description == "Open quotes"


def test_parse_text_line_numbers():
    text = "# Title\n\n<!-- SCREENSHOT: one -->\ntext\n<!-- GIF: a | b -->\n"
    directives = parse_text(text, "docs/x/page.md")
    assert [(d.kind, d.line_number) for d in directives] == [(SCREENSHOT, 3), (GIF, 5)]


def test_plain_lines_yield_nothing():
    assert parse_line("SCREENSHOT: not in a comment", "a.md", 1) == []
    assert parse_line("<!-- just a comment -->", "a.md", 1) == []


def test_split_selectors_respects_brackets():
    assert split_selectors('a[data-x="1,2"], .b ,, div:not(.c, .d)') == [
        'a[data-x="1,2"]', ".b", "div:not(.c, .d)"]


def test_path_followed_directly_by_modifiers():
    [d] = parse_line("<!-- SCREENSHOT: /quotes | highlight:.btn | maxarrows:1 -->", "a.md", 1)
    assert d.path == "/quotes"
    assert d.description == "/quotes"
    assert d.highlights == (".btn",)
    assert d.max_arrows == 1


def test_undecodable_document_does_not_stop_the_scan(tmp_path):
    good = tmp_path / "good.md"
    good.write_text("<!-- SCREENSHOT: Quote list -->\n", encoding="utf-8")
    bad = tmp_path / "bad.md"
    bad.write_bytes(b"\xff\xfe junk\n<!-- SCREENSHOT: /invoices | Invoices -->\n")

    directives = collect_directives([good, bad])
    assert [d.description for d in directives] == ["Quote list", "Invoices"]
    assert directives[1].line_number == 2
