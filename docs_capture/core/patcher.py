import os
import re
from pathlib import Path
from typing import List, Optional

from .config import PATCH_LOOKAHEAD
from .types import Directive

IMAGE_REF_RE = re.compile(r"!\[[^\]]*\]\([^)]+\)")


def relative_ref(artifact: Path, document: Path) -> str:
    rel = os.path.relpath(Path(artifact), Path(document).parent)
    return rel.replace(os.sep, "/")


def _is_marker(line: str, raw: str) -> bool:
    return line.rstrip("\r") == raw.rstrip("\r")


def locate_marker(lines: List[str], directive: Directive) -> Optional[int]:
    """Index of the directive's line, following it if earlier inserts shifted it."""
    idx = directive.line_number - 1
    if not directive.raw:
        return idx if 0 <= idx < len(lines) else None
    if 0 <= idx < len(lines) and _is_marker(lines[idx], directive.raw):
        return idx
    for i in range(max(idx, 0), len(lines)):
        if _is_marker(lines[i], directive.raw):
            return i
    for i, line in enumerate(lines):
        if _is_marker(line, directive.raw):
            return i
    return None


def has_image_ref(lines: List[str], marker_idx: int, window: int = PATCH_LOOKAHEAD) -> bool:
    """True when an image reference follows the marker within window lines (blank lines skipped)."""
    for line in lines[marker_idx + 1: marker_idx + 1 + window]:
        if not line.strip():
            continue
        return bool(IMAGE_REF_RE.search(line))
    return False


def patch_text(text: str, directive: Directive, artifact: Path) -> str:
    lines = text.split("\n")
    idx = locate_marker(lines, directive)
    if idx is None:
        raise RuntimeError(f"Marker not found in {directive.source_file} (was line {directive.line_number})")
    if has_image_ref(lines, idx):
        return text
    ref = relative_ref(artifact, Path(directive.source_file))
    eol = "\r" if lines[idx].endswith("\r") else ""
    lines.insert(idx + 1, f"![{directive.description}]({ref}){eol}")
    return "\n".join(lines)


def patch_document(directive: Directive, artifact: Path) -> bool:
    """Insert an image reference under the marker; returns True if the file changed."""
    doc = Path(directive.source_file)
    # newline="" keeps CRLF documents CRLF
    with open(doc, encoding="utf-8", newline="") as f:
        text = f.read()
    patched = patch_text(text, directive, artifact)
    if patched == text:
        print(f"[Patcher] Image reference already present at {directive.location}")
        return False
    with open(doc, "w", encoding="utf-8", newline="") as f:
        f.write(patched)
    print(f"[Patcher] Inserted image reference at {directive.location}")
    return True
