import argparse
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from .config import Settings, load_settings
from .graph import build_graph
from .markers import collect_directives, find_documents
from .report import make_outcome, print_summary, strict_exit_code
from .sequence import Encoder
from .session import open_session
from .types import CaptureState, Directive
from ..dom.highlight import matched_selector_count


def initial_state(directive: Directive, session, settings: Settings, encoder: Optional[Encoder]) -> CaptureState:
    return {
        "session": session,
        "settings": settings,
        "encoder": encoder,
        "directive": directive,
        "route": None,
        "output_path": None,
        "highlight_results": [],
        "candidates": [],
        "selected": [],
        "skipped": [],
        "patched": False,
    }


def run_directives(
    directives: List[Directive],
    session,
    settings: Settings,
    encoder: Optional[Encoder] = None,
) -> List[Dict[str, Any]]:
    """Process directives one at a time on the shared session.

    A failure inside one directive becomes a failed outcome; the loop always
    moves on to the next directive.
    """
    app = build_graph()
    outcomes: List[Dict[str, Any]] = []
    for directive in directives:
        try:
            final = app.invoke(
                initial_state(directive, session, settings, encoder),
                config={"run_name": "docs_capture"},
            )
        except Exception as e:
            print(f"[Capture] Failed to capture: {directive.description} ({directive.location})")
            print(f"[Capture]   {type(e).__name__}: {e}")
            outcomes.append(make_outcome(directive, success=False, error=f"{type(e).__name__}: {e}"))
            continue

        outcomes.append(
            make_outcome(
                directive,
                success=True,
                output=final.get("output_path") or "",
                matched_highlights=matched_selector_count(final.get("highlight_results") or []),
                arrows=len(final.get("selected") or []),
                skipped_arrows=len(final.get("skipped") or []),
            )
        )
    return outcomes


def run(settings: Settings, files: List[Path], strict: bool = False) -> int:
    """Scan files, capture everything, print the report; returns the exit status.

    Browser launch and login failures are not caught here.
    """
    print(f"[Capture] Scanning {len(files)} file(s) for screenshot markers...")
    directives = collect_directives(files)
    print(f"[Capture] Found {len(directives)} marker(s)")
    if not directives:
        print("[Capture] No markers to process")
        return 0

    print(f"[Capture] Target app: {settings.base_url}")
    session = open_session(settings)
    try:
        outcomes = run_directives(directives, session, settings)
    finally:
        session.close()

    print_summary(outcomes, ci=settings.ci)
    return strict_exit_code(outcomes, strict)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Capture documentation screenshots and GIFs from markdown markers.",
    )
    parser.add_argument("--file", help="Only process this markdown file.")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero when declared highlights match nothing (default in CI).",
    )
    parser.add_argument("--docs-dir", help="Content root to scan (default: docs).")
    parser.add_argument("--output-dir", help="Image root (default: docs/assets/images).")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = parse_args(argv)
    settings = load_settings(os.environ, docs_dir=args.docs_dir, images_dir=args.output_dir)
    files = [Path(args.file)] if args.file else find_documents(settings.docs_dir)
    strict = args.strict or settings.ci

    try:
        return run(settings, files, strict=strict)
    except Exception as e:
        print(f"[Capture] Fatal: {type(e).__name__}: {e}")
        return 1
