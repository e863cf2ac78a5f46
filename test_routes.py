from pathlib import Path

from docs_capture.core.markers import parse_line
from docs_capture.core.routes import (
    DEFAULT_ROUTE,
    artifact_path,
    directive_output,
    feature_group,
    infer_path,
    resolve_route,
    slugify,
)
from docs_capture.core.types import GIF, SCREENSHOT


def test_infer_path_keywords():
    assert infer_path("Editing a Quote") == "/quotes"
    assert infer_path("Schedule view") == "/appointments"
    assert infer_path("Booking from the calendar") == "/appointments"
    assert infer_path("Work order detail") == "/work_orders"
    assert infer_path("Order history") == "/orders"
    assert infer_path("Invoice totals") == "/invoices"


def test_infer_path_first_match_wins():
    assert infer_path("quote to invoice") == "/quotes"


def test_infer_path_default():
    assert infer_path("something else") == DEFAULT_ROUTE == "/dashboard"


def test_explicit_path_wins():
    [d] = parse_line("<!-- SCREENSHOT: /settings/users | Invoice page -->", "a.md", 1)
    assert resolve_route(d) == "/settings/users"


def test_slugify():
    assert slugify("  New Quote -- Form! ") == "new-quote-form"
    assert len(slugify("x" * 80)) == 50


def test_artifact_path_is_deterministic():
    a = artifact_path(Path("img"), "New quote form", "quotes", SCREENSHOT)
    b = artifact_path(Path("img"), "New quote form", "quotes", SCREENSHOT)
    assert a == b == Path("img/quotes/new-quote-form.png")
    assert artifact_path(Path("img"), "New quote form", "quotes", GIF).suffix == ".gif"


def test_same_description_same_group_collide():
    [a] = parse_line("<!-- SCREENSHOT: /quotes | Quote list -->", "docs/quotes/a.md", 1)
    [b] = parse_line("<!-- SCREENSHOT: /quotes?page=2 | Quote list -->", "docs/quotes/b.md", 9)
    assert directive_output(Path("img"), a) == directive_output(Path("img"), b)


def test_feature_group():
    assert feature_group("docs/quotes/new.md") == "quotes"
    assert feature_group("README.md") == "general"
