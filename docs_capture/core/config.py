import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional

# Target application
STAGING_URL = "https://staging.shopdirector.app"
LOCAL_PROBE_PORTS = [3000, 5000, 8080]
DEFAULT_EMAIL = "c1admin1@example.com"
DEFAULT_PASSWORD = "sd1234"

# Login form contract
LOGIN_PATH = "/users/sign_in"
EMAIL_SELECTOR = 'input[name="user[email]"]'
PASSWORD_SELECTOR = 'input[name="user[password]"]'
SUBMIT_SELECTOR = 'input[type="submit"]'
LOGIN_TIMEOUT_MS = 15000

# Navigation
NAVIGATION_TIMEOUT_MS = 30000
SETTLE_MS = 500
FRAME_SETTLE_MS = 300
VIEWPORT = {"width": 1400, "height": 900}

# Content + output paths
DOCS_DIR = Path("docs")
IMAGES_DIR = Path("docs/assets/images")
DEFAULT_GROUP = "general"
SLUG_MAX_LEN = 50

# Arrow selection
DEFAULT_MAX_ARROWS = 3
ELIGIBLE_AREA_RATIO = 0.10
PROXIMITY_MARGIN = 30

# Arrow geometry (pixels)
ARROW_COLOR = (255, 87, 34)
ARROW_LENGTH = 110
ARROW_LINE_WIDTH = 7
ARROW_HEAD_LENGTH = 24
ARROW_HEAD_WIDTH_RATIO = 0.9
ARROW_GAP = 6

# Sequence encoding
GIF_FRAMERATE = "0.5"
GIF_MAX_WIDTH = 1200

# Content patching
PATCH_LOOKAHEAD = 3


def discover_local_app(ports: Iterable[int] = LOCAL_PROBE_PORTS, host: str = "127.0.0.1") -> Optional[str]:
    """Return the URL of the first local port accepting connections, if any."""
    for port in ports:
        try:
            with socket.create_connection((host, port), timeout=0.25):
                return f"http://localhost:{port}"
        except OSError:
            continue
    return None


@dataclass(frozen=True)
class Settings:
    base_url: str
    email: str
    password: str
    ci: bool = False
    headless: bool = True
    docs_dir: Path = DOCS_DIR
    images_dir: Path = IMAGES_DIR
    viewport_width: int = VIEWPORT["width"]
    viewport_height: int = VIEWPORT["height"]

def _truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() not in ("", "0", "false", "no")


def load_settings(
    env: Mapping[str, str],
    discover: Callable[[], Optional[str]] = discover_local_app,
    docs_dir: Optional[Path] = None,
    images_dir: Optional[Path] = None,
) -> Settings:
    """Build the run configuration once from an environment mapping.

    Base URL precedence: APP_URL, then whatever ``discover`` finds running
    locally, then the staging default. ``discover`` is only called when
    APP_URL is unset.
    """
    base_url = env.get("APP_URL") or discover() or STAGING_URL
    return Settings(
        base_url=base_url.rstrip("/"),
        email=env.get("DEMO_EMAIL") or DEFAULT_EMAIL,
        password=env.get("DEMO_PASSWORD") or DEFAULT_PASSWORD,
        ci=_truthy(env.get("CI")),
        headless=not _truthy(env.get("HEADED")),
        docs_dir=Path(docs_dir) if docs_dir else DOCS_DIR,
        images_dir=Path(images_dir) if images_dir else IMAGES_DIR,
    )
