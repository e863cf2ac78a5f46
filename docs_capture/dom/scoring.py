import re
from typing import Dict, List

# --- Weights ---

PRIMARY_ACTION_BONUS = 100
SUBMIT_INPUT_BONUS = 90
ACTION_VERB_BONUS = 50
INTERACTIVE_TAG_BONUS = 20
FORM_FIELD_BONUS = 10

PRIMARY_RE = re.compile(r"primary", re.IGNORECASE)
ACTION_VERB_RE = re.compile(
    r"\b(create|save|submit|add|new|confirm|update|delete|remove)\b", re.IGNORECASE)

INTERACTIVE_TAGS = {"a", "button"}
FORM_FIELD_TAGS = {"input", "select", "textarea"}


def is_submit_input(elem: Dict) -> bool:
    return elem.get("tag") == "input" and elem.get("type") == "submit"


def score_candidate(elem: Dict) -> int:
    """
    Additive priority for pointing an arrow at an element:
    primary action > submit input > action-verb text > link/button > form field.
    """
    tag = (elem.get("tag") or "").lower()
    score = 0

    if PRIMARY_RE.search(elem.get("selector") or "") or PRIMARY_RE.search(elem.get("class_name") or ""):
        score += PRIMARY_ACTION_BONUS

    if is_submit_input(elem):
        score += SUBMIT_INPUT_BONUS
    elif tag in FORM_FIELD_TAGS:
        score += FORM_FIELD_BONUS

    if tag in INTERACTIVE_TAGS:
        score += INTERACTIVE_TAG_BONUS

    if ACTION_VERB_RE.search(elem.get("text") or ""):
        score += ACTION_VERB_BONUS

    return score


def score_candidates(candidates: List[Dict]) -> List[Dict]:
    """Set "priority" on each candidate (in place) and return them."""
    for c in candidates:
        c["priority"] = score_candidate(c)
    return candidates
