import math
from pathlib import Path
from typing import Any, Dict, List, Tuple

from PIL import Image, ImageDraw

from ..core.config import (
    ARROW_COLOR,
    ARROW_GAP,
    ARROW_HEAD_LENGTH,
    ARROW_HEAD_WIDTH_RATIO,
    ARROW_LENGTH,
    ARROW_LINE_WIDTH,
)

Point = Tuple[float, float]


def travel_direction(center: Point, image_size: Tuple[int, int]) -> Tuple[int, int]:
    """Diagonal the arrow travels along, coming in from the open side.

    Bottom-right elements get an arrow from the top-left, and so on; an
    element in the top-left quadrant (the default) gets one from the bottom-right.
    """
    w, h = image_size
    sx = 1 if center[0] > w / 2 else -1
    sy = 1 if center[1] > h / 2 else -1
    return sx, sy


def _clamp(p: Point, image_size: Tuple[int, int]) -> Point:
    w, h = image_size
    return (min(max(p[0], 0.0), w - 1.0), min(max(p[1], 0.0), h - 1.0))


def arrow_geometry(box: Dict[str, float], image_size: Tuple[int, int], scale: float = 1.0) -> Dict[str, Any]:
    """Start, shaft end, tip and head polygon for an arrow pointing at box."""
    x = box["x"] * scale
    y = box["y"] * scale
    bw = box["width"] * scale
    bh = box["height"] * scale
    center = (x + bw / 2, y + bh / 2)
    sx, sy = travel_direction(center, image_size)

    # Walk back from the center along the diagonal until just past the padded edge.
    reach = min(bw, bh) / 2 + ARROW_GAP
    tip = (center[0] - sx * reach, center[1] - sy * reach)
    offset = ARROW_LENGTH / math.sqrt(2)
    start = _clamp((tip[0] - sx * offset, tip[1] - sy * offset), image_size)

    dx, dy = tip[0] - start[0], tip[1] - start[1]
    length = math.hypot(dx, dy) or 1.0
    ux, uy = dx / length, dy / length

    base = (tip[0] - ux * ARROW_HEAD_LENGTH, tip[1] - uy * ARROW_HEAD_LENGTH)
    half = ARROW_HEAD_LENGTH * ARROW_HEAD_WIDTH_RATIO / 2
    px, py = -uy, ux
    head = [
        tip,
        (base[0] + px * half, base[1] + py * half),
        (base[0] - px * half, base[1] - py * half),
    ]
    # stop the shaft inside the head so the joint stays hidden
    shaft_end = (tip[0] - ux * ARROW_HEAD_LENGTH * 0.8, tip[1] - uy * ARROW_HEAD_LENGTH * 0.8)

    return {
        "direction": (sx, sy),
        "start": start,
        "shaft_end": shaft_end,
        "tip": tip,
        "head": head,
    }


def _round_cap(draw: ImageDraw.ImageDraw, p: Point, width: int, color) -> None:
    r = width / 2
    draw.ellipse([p[0] - r, p[1] - r, p[0] + r, p[1] + r], fill=color)


def draw_arrow(draw: ImageDraw.ImageDraw, geom: Dict[str, Any], color=ARROW_COLOR, width: int = ARROW_LINE_WIDTH) -> None:
    draw.line([geom["start"], geom["shaft_end"]], fill=color, width=width)
    _round_cap(draw, geom["start"], width, color)
    _round_cap(draw, geom["shaft_end"], width, color)
    draw.polygon(geom["head"], fill=color)


def draw_arrows_on_image(
    screenshot_path: Path,
    targets: List[Dict[str, Any]],
    viewport_width: int,
) -> Path:
    """Draw one arrow per selected target and overwrite the screenshot."""
    img = Image.open(screenshot_path).convert("RGB")
    # Boxes are CSS pixels; scale if the capture was taken at another DPR.
    scale = img.size[0] / float(viewport_width) if viewport_width else 1.0
    draw = ImageDraw.Draw(img)

    for t in targets:
        geom = arrow_geometry(t["bounding_box"], img.size, scale)
        draw_arrow(draw, geom)

    img.save(screenshot_path)
    return Path(screenshot_path)
