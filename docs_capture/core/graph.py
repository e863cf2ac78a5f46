from pathlib import Path

from langgraph.graph import END, START, StateGraph

from ..dom.highlight import apply_highlights, eligible_candidates
from ..dom.ranker import select_arrow_targets
from ..dom.scoring import score_candidates
from ..utils.imaging import draw_arrows_on_image
from .patcher import patch_document
from .routes import directive_output, resolve_route
from .sequence import capture_sequence
from .types import GIF, CaptureState


def navigate(state: CaptureState) -> CaptureState:
    directive = state["directive"]
    settings = state["settings"]
    route = resolve_route(directive)
    output_path = directive_output(settings.images_dir, directive)

    print(f"[Capture] Capturing: {directive.description}")
    print(f"[Capture]   Path: {route}{'' if directive.path else ' (inferred)'}")
    print(f"[Capture]   Output: {output_path}")

    state["session"].goto(route)
    state["route"] = route
    state["output_path"] = str(output_path)
    return state


def highlight(state: CaptureState) -> CaptureState:
    directive = state["directive"]
    if not directive.highlights:
        return state
    settings = state["settings"]
    results = apply_highlights(
        state["session"].page, directive.highlights, settings.viewport_width, settings.viewport_height)
    state["highlight_results"] = results
    state["candidates"] = score_candidates(eligible_candidates(results))
    return state


def rank_arrows(state: CaptureState) -> CaptureState:
    candidates = state.get("candidates") or []
    if not candidates:
        return state
    selected, skipped = select_arrow_targets(candidates, state["directive"].max_arrows)
    print(f"[Ranker] {len(selected)} arrow(s) selected from {len(candidates)} candidate(s)")
    state["selected"] = selected
    state["skipped"] = skipped
    return state


def capture(state: CaptureState) -> CaptureState:
    state["session"].screenshot(Path(state["output_path"]))
    print(f"[Capture]   Saved: {state['output_path']}")
    return state


def annotate(state: CaptureState) -> CaptureState:
    selected = state.get("selected") or []
    if selected:
        draw_arrows_on_image(Path(state["output_path"]), selected, state["settings"].viewport_width)
    return state


def patch(state: CaptureState) -> CaptureState:
    state["patched"] = patch_document(state["directive"], Path(state["output_path"]))
    return state


def capture_gif(state: CaptureState) -> CaptureState:
    directive = state["directive"]
    output_path = directive_output(state["settings"].images_dir, directive)
    capture_sequence(state["session"], directive, output_path, state.get("encoder"))
    state["output_path"] = str(output_path)
    return state


def by_kind(state: CaptureState) -> str:
    return "capture_gif" if state["directive"].kind == GIF else "navigate"


def build_graph():
    graph = StateGraph(CaptureState)
    graph.add_node("navigate", navigate)
    graph.add_node("highlight", highlight)
    graph.add_node("rank_arrows", rank_arrows)
    graph.add_node("capture", capture)
    graph.add_node("annotate", annotate)
    graph.add_node("patch", patch)
    graph.add_node("capture_gif", capture_gif)

    graph.add_conditional_edges(
        START,
        by_kind,
        {"navigate": "navigate", "capture_gif": "capture_gif"},
    )
    graph.add_edge("navigate", "highlight")
    graph.add_edge("highlight", "rank_arrows")
    graph.add_edge("rank_arrows", "capture")
    graph.add_edge("capture", "annotate")
    graph.add_edge("annotate", "patch")
    graph.add_edge("patch", END)
    graph.add_edge("capture_gif", END)

    return graph.compile()
