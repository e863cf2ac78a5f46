from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, TypedDict

SCREENSHOT = "screenshot"
GIF = "gif"


@dataclass(frozen=True)
class Directive:
    kind: str  # SCREENSHOT | GIF
    description: str
    source_file: str
    line_number: int  # 1-based
    path: Optional[str] = None
    steps: Tuple[str, ...] = ()
    highlights: Tuple[str, ...] = ()
    max_arrows: Optional[int] = None
    raw: str = ""

    @property
    def location(self) -> str:
        return f"{self.source_file}:{self.line_number}"


class CaptureState(TypedDict):
    # Live handles (single owner: the orchestrator; never shared across directives)
    session: Any
    settings: Any
    encoder: Any
    directive: Directive
    route: Optional[str]
    output_path: Optional[str]
    highlight_results: List[Dict[str, Any]]
    candidates: List[Dict[str, Any]]
    selected: List[Dict[str, Any]]
    skipped: List[Dict[str, Any]]
    patched: bool
