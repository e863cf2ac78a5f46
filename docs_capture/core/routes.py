import re
from pathlib import Path
from typing import List, Tuple

from .config import DEFAULT_GROUP, SLUG_MAX_LEN
from .types import GIF, Directive

# Ordered: first keyword contained in the description wins.
ROUTE_KEYWORDS: List[Tuple[str, str]] = [
    ("quote", "/quotes"),
    ("appointment", "/appointments"),
    ("schedule", "/appointments"),
    ("calendar", "/appointments"),
    ("customer", "/customers"),
    ("inventory", "/inventory"),
    ("work order", "/work_orders"),
    ("order", "/orders"),
    ("invoice", "/invoices"),
    ("dashboard", "/dashboard"),
    ("settings", "/settings"),
]
DEFAULT_ROUTE = "/dashboard"


def infer_path(description: str) -> str:
    lower = description.lower()
    for keyword, route in ROUTE_KEYWORDS:
        if keyword in lower:
            return route
    return DEFAULT_ROUTE


def resolve_route(directive: Directive) -> str:
    return directive.path or infer_path(directive.description)


def slugify(text: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
    return slug[:SLUG_MAX_LEN]


def feature_group(source_file: str) -> str:
    parent = Path(source_file).parent.name
    return parent or DEFAULT_GROUP


def artifact_path(images_dir: Path, description: str, group: str, kind: str) -> Path:
    """Deterministic output location for a capture."""
    ext = "gif" if kind == GIF else "png"
    return Path(images_dir) / group / f"{slugify(description)}.{ext}"


def directive_output(images_dir: Path, directive: Directive) -> Path:
    return artifact_path(images_dir, directive.description, feature_group(directive.source_file), directive.kind)
