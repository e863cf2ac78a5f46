import json
from typing import Any, Dict, List, Optional

from .types import Directive


def make_outcome(
    directive: Directive,
    success: bool,
    output: str = "",
    error: Optional[str] = None,
    matched_highlights: int = 0,
    arrows: int = 0,
    skipped_arrows: int = 0,
) -> Dict[str, Any]:
    return {
        "description": directive.description,
        "kind": directive.kind,
        "source": directive.source_file,
        "line": directive.line_number,
        "output": output,
        "success": success,
        "error": error,
        "expected_highlights": len(directive.highlights),
        "matched_highlights": matched_highlights,
        "arrows": arrows,
        "skipped_arrows": skipped_arrows,
    }


def unmet_highlights(outcomes: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Successful captures that asked for highlights but matched none of them."""
    return [
        o for o in outcomes
        if o["success"] and o["expected_highlights"] > 0 and o["matched_highlights"] == 0
    ]


def print_summary(outcomes: List[Dict[str, Any]], ci: bool = False) -> None:
    ok = [o for o in outcomes if o["success"]]
    failed = [o for o in outcomes if not o["success"]]

    print("\n--- Summary ---")
    print(f"Total: {len(outcomes)}")
    print(f"Success: {len(ok)}")
    print(f"Failed: {len(failed)}")

    for o in failed:
        print(f"  FAILED {o['source']}:{o['line']} '{o['description']}': {o['error']}")

    for o in outcomes:
        if o["expected_highlights"]:
            print(
                f"  highlights {o['matched_highlights']}/{o['expected_highlights']} "
                f"arrows={o['arrows']} skipped={o['skipped_arrows']} | {o['description']}")

    if ci:
        print("\n--- Results JSON ---")
        print(json.dumps(outcomes))


def strict_exit_code(outcomes: List[Dict[str, Any]], strict: bool) -> int:
    """Non-zero when strict mode is on and any declared highlight matched nothing."""
    missing = unmet_highlights(outcomes)
    for o in missing:
        print(
            f"[Report] WARNING {o['source']}:{o['line']} '{o['description']}': "
            f"0/{o['expected_highlights']} highlight selectors matched")
    if strict and missing:
        print(f"[Report] Strict mode: {len(missing)} capture(s) with unmatched highlights")
        return 1
    return 0
