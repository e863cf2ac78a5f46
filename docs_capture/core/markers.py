import re
from pathlib import Path
from typing import List, Optional, Tuple

from .types import GIF, SCREENSHOT, Directive

SCREENSHOT_RE = re.compile(r"<!--\s*SCREENSHOT:\s*(.+?)\s*-->", re.IGNORECASE)
GIF_RE = re.compile(r"<!--\s*GIF:\s*(.+?)\s*-->", re.IGNORECASE)


def split_selectors(value: str) -> List[str]:
    """Split a comma-separated selector list, ignoring commas inside [] () or quotes."""
    selectors: List[str] = []
    buf = []
    depth = 0
    quote = ""
    for ch in value:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in ("'", '"'):
            quote = ch
        elif ch in "[(":
            depth += 1
        elif ch in "])":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            sel = "".join(buf).strip()
            if sel:
                selectors.append(sel)
            buf = []
            continue
        buf.append(ch)
    sel = "".join(buf).strip()
    if sel:
        selectors.append(sel)
    return selectors


def _parse_max_arrows(value: str) -> Optional[int]:
    try:
        n = int(value.strip())
    except ValueError:
        return None
    return n if n > 0 else None


MODIFIER_KEYS = ("highlight", "maxarrows")


def is_modifier(part: str) -> bool:
    key, sep, _ = part.partition(":")
    return bool(sep) and key.strip().lower() in MODIFIER_KEYS


def _parse_modifiers(parts: List[str]) -> Tuple[Tuple[str, ...], Optional[int]]:
    highlights: List[str] = []
    max_arrows = None
    for part in parts:
        key, sep, value = part.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key == "highlight":
            highlights.extend(split_selectors(value))
        elif key == "maxarrows":
            max_arrows = _parse_max_arrows(value)
        # anything else is ignored
    return tuple(highlights), max_arrows


def parse_screenshot(body: str, source_file: str, line_number: int, raw: str = "") -> Directive:
    parts = [p.strip() for p in body.split("|")]
    path = None
    if parts[0].startswith("/") and len(parts) > 1 and is_modifier(parts[1]):
        # path-only marker followed by modifiers
        path = parts[0]
        description = parts[0]
        rest = parts[1:]
    elif parts[0].startswith("/") and len(parts) > 1:
        path = parts[0]
        description = parts[1] or parts[0]
        rest = parts[2:]
    else:
        description = parts[0]
        rest = parts[1:]
    highlights, max_arrows = _parse_modifiers(rest)
    return Directive(
        kind=SCREENSHOT,
        description=description,
        path=path,
        highlights=highlights,
        max_arrows=max_arrows,
        source_file=source_file,
        line_number=line_number,
        raw=raw,
    )


def parse_gif(body: str, source_file: str, line_number: int, raw: str = "") -> Directive:
    steps = tuple(s.strip() for s in body.split("|") if s.strip())
    return Directive(
        kind=GIF,
        description=steps[0] if steps else body.strip(),
        steps=steps,
        source_file=source_file,
        line_number=line_number,
        raw=raw,
    )


def parse_line(line: str, source_file: str, line_number: int) -> List[Directive]:
    """Return every directive found on one line (usually zero or one)."""
    found: List[Directive] = []
    m = SCREENSHOT_RE.search(line)
    if m:
        found.append(parse_screenshot(m.group(1), source_file, line_number, raw=line))
    m = GIF_RE.search(line)
    if m:
        found.append(parse_gif(m.group(1), source_file, line_number, raw=line))
    return found


def parse_text(text: str, source_file: str) -> List[Directive]:
    directives: List[Directive] = []
    for idx, line in enumerate(text.split("\n")):
        directives.extend(parse_line(line, source_file, idx + 1))
    return directives


def parse_markdown_file(path: Path) -> List[Directive]:
    # undecodable bytes become U+FFFD rather than aborting the scan
    text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_text(text, str(path))


def find_documents(docs_dir: Path) -> List[Path]:
    return sorted(p for p in Path(docs_dir).rglob("*.md") if p.is_file())


def collect_directives(files: List[Path]) -> List[Directive]:
    directives: List[Directive] = []
    for f in files:
        directives.extend(parse_markdown_file(f))
    return directives
