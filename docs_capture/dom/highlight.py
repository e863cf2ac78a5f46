from typing import Any, Dict, List, Sequence

from ..core.config import ELIGIBLE_AREA_RATIO

HIGHLIGHT_CLASS = "docs-capture-highlight"

# Runs in the page. Marks every match, returns geometry + hints for scoring.
HIGHLIGHT_JS = """
([selector, cls]) => {
    if (!document.getElementById('docs-capture-style')) {
        const style = document.createElement('style');
        style.id = 'docs-capture-style';
        style.textContent = `.${cls} { outline: 3px solid #ff5722 !important; outline-offset: 2px !important; box-shadow: 0 0 0 6px rgba(255, 87, 34, 0.25) !important; }`;
        document.head.appendChild(style);
    }
    let nodes;
    try {
        nodes = Array.from(document.querySelectorAll(selector));
    } catch (e) {
        return { matched: 0, elements: [], error: String(e && e.message || e) };
    }
    const elements = nodes.map((el) => {
        el.classList.add(cls);
        const r = el.getBoundingClientRect();
        const text = (el.innerText || el.value || el.getAttribute('aria-label') || '').trim();
        return {
            x: r.left, y: r.top, width: r.width, height: r.height,
            tag: el.tagName.toLowerCase(),
            type: (el.getAttribute('type') || '').toLowerCase(),
            class_name: typeof el.className === 'string' ? el.className : '',
            text: text.slice(0, 80),
        };
    });
    return { matched: nodes.length, elements: elements, error: null };
}
"""


def in_viewport(box: Dict[str, float], viewport_width: float, viewport_height: float) -> bool:
    return (
        box["x"] < viewport_width
        and box["x"] + box["width"] > 0
        and box["y"] < viewport_height
        and box["y"] + box["height"] > 0
    )


def is_arrow_eligible(box: Dict[str, float], viewport_width: float, viewport_height: float) -> bool:
    """On screen and small enough that an arrow says something (under 10% of the viewport)."""
    area = box["width"] * box["height"]
    if area <= 0 or not in_viewport(box, viewport_width, viewport_height):
        return False
    return area < ELIGIBLE_AREA_RATIO * viewport_width * viewport_height


def highlight_selector(page, selector: str, viewport_width: float, viewport_height: float) -> Dict[str, Any]:
    """Highlight one selector; never raises for selector problems."""
    payload = page.evaluate(HIGHLIGHT_JS, [selector, HIGHLIGHT_CLASS]) or {}
    candidates: List[Dict[str, Any]] = []
    for el in payload.get("elements") or []:
        box = {k: float(el.get(k) or 0.0) for k in ("x", "y", "width", "height")}
        if not is_arrow_eligible(box, viewport_width, viewport_height):
            continue
        candidates.append(
            {
                "bounding_box": box,
                "selector": selector,
                "tag": el.get("tag") or "",
                "type": el.get("type") or "",
                "class_name": el.get("class_name") or "",
                "text": el.get("text") or "",
                "priority": 0,
            }
        )
    return {
        "selector": selector,
        "matched": int(payload.get("matched") or 0),
        "candidates": candidates,
        "error": payload.get("error"),
    }


def apply_highlights(page, selectors: Sequence[str], viewport_width: float, viewport_height: float) -> List[Dict[str, Any]]:
    """Highlight every selector and return one result per selector, in order."""
    results = []
    for selector in selectors:
        res = highlight_selector(page, selector, viewport_width, viewport_height)
        if res["error"]:
            print(f"[Highlight] WARNING invalid selector {selector!r}: {res['error']}")
        elif res["matched"] == 0:
            print(f"[Highlight] WARNING no elements match {selector!r}")
        else:
            print(
                f"[Highlight] {selector!r}: {res['matched']} highlighted, {len(res['candidates'])} arrow-eligible")
        results.append(res)
    return results


def matched_selector_count(results: List[Dict[str, Any]]) -> int:
    return sum(1 for r in results if r["matched"] > 0)


def eligible_candidates(results: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [c for r in results for c in r["candidates"]]
