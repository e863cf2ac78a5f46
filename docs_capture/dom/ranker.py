from typing import Dict, List, Optional, Tuple

from ..core.config import DEFAULT_MAX_ARROWS, PROXIMITY_MARGIN


def padded_box(box: Dict[str, float], margin: float = PROXIMITY_MARGIN) -> Tuple[float, float, float, float]:
    """(left, top, right, bottom) grown by margin on every side."""
    return (
        box["x"] - margin,
        box["y"] - margin,
        box["x"] + box["width"] + margin,
        box["y"] + box["height"] + margin,
    )


def boxes_overlap(a: Tuple[float, float, float, float], b: Tuple[float, float, float, float]) -> bool:
    return a[0] < b[2] and b[0] < a[2] and a[1] < b[3] and b[1] < a[3]


def sort_key(c: Dict):
    box = c["bounding_box"]
    return (-c.get("priority", 0), box["y"], box["x"])


def select_arrow_targets(
    candidates: List[Dict],
    max_arrows: Optional[int] = None,
    margin: float = PROXIMITY_MARGIN,
) -> Tuple[List[Dict], List[Dict]]:
    """Greedy pick of arrow targets.

    Highest priority first (ties top-to-bottom, then left-to-right), at most
    ``max_arrows`` (default 3), skipping anything whose padded box touches an
    already accepted one. Returns (selected, skipped); skipped entries carry a
    "skip_reason" of "cap" or "proximity".

    If candidates exist but nothing was accepted, the top candidate is forced
    in even when the cap was what excluded it.
    """
    limit = DEFAULT_MAX_ARROWS if max_arrows is None else max_arrows
    ordered = sorted(candidates, key=sort_key)

    selected: List[Dict] = []
    skipped: List[Dict] = []
    accepted_boxes = []

    for c in ordered:
        if len(selected) >= limit:
            skipped.append(dict(c, skip_reason="cap"))
            continue
        pbox = padded_box(c["bounding_box"], margin)
        if any(boxes_overlap(pbox, other) for other in accepted_boxes):
            skipped.append(dict(c, skip_reason="proximity"))
            continue
        selected.append(c)
        accepted_boxes.append(pbox)

    if not selected and ordered:
        top = ordered[0]
        selected.append(top)
        # the top candidate is always the first one skipped
        skipped = skipped[1:]
        print("[Ranker] No arrow survived selection; forcing the top candidate")

    for s in skipped:
        print(
            f"[Ranker] Skipped {s.get('selector')!r} (priority={s.get('priority', 0)}, reason={s['skip_reason']})")
    return selected, skipped

