from pathlib import Path

from playwright.sync_api import TimeoutError, sync_playwright

from .config import (
    EMAIL_SELECTOR,
    LOGIN_PATH,
    LOGIN_TIMEOUT_MS,
    NAVIGATION_TIMEOUT_MS,
    PASSWORD_SELECTOR,
    SETTLE_MS,
    SUBMIT_SELECTOR,
    Settings,
)


class BrowserSession:
    """One authenticated page for the whole run.

    The orchestrator owns the only instance and hands it to each directive in
    turn; nothing navigates it concurrently.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.playwright = None
        self.browser = None
        self.context = None
        self.page = None

    def start(self) -> "BrowserSession":
        print("[Session] Launching Chromium...")
        self.playwright = sync_playwright().start()
        try:
            self.browser = self.playwright.chromium.launch(headless=self.settings.headless)
            self.context = self.browser.new_context(
                viewport={"width": self.settings.viewport_width, "height": self.settings.viewport_height},
                device_scale_factor=1,
            )
            self.page = self.context.new_page()
        except Exception:
            self.close()
            raise
        return self

    def close(self) -> None:
        if self.context:
            self.context.close()
        if self.browser:
            self.browser.close()
        if self.playwright:
            self.playwright.stop()
        self.context = self.browser = self.playwright = self.page = None

    def url_for(self, route: str) -> str:
        return f"{self.settings.base_url}{route}"

    def login(self) -> None:
        """Submit the login form; leaving the login route counts as success."""
        page = self.page
        print(f"[Session] Logging in as {self.settings.email}...")
        page.goto(self.url_for(LOGIN_PATH), timeout=NAVIGATION_TIMEOUT_MS)
        page.fill(EMAIL_SELECTOR, self.settings.email)
        page.fill(PASSWORD_SELECTOR, self.settings.password)
        page.click(SUBMIT_SELECTOR)
        try:
            page.wait_for_url(lambda url: LOGIN_PATH not in url, timeout=LOGIN_TIMEOUT_MS)
        except TimeoutError as e:
            raise RuntimeError(f"Login failed: still on {page.url} after {LOGIN_TIMEOUT_MS}ms") from e
        print("[Session] Logged in successfully")

    def goto(self, route: str, settle_ms: int = SETTLE_MS) -> None:
        self.page.goto(self.url_for(route), timeout=NAVIGATION_TIMEOUT_MS)
        self.page.wait_for_load_state("networkidle", timeout=NAVIGATION_TIMEOUT_MS)
        # animations
        self.page.wait_for_timeout(settle_ms)

    def screenshot(self, path: Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.page.screenshot(path=str(path), full_page=False)
        return path


def open_session(settings: Settings, login: bool = True) -> BrowserSession:
    session = BrowserSession(settings).start()
    if login:
        try:
            session.login()
        except Exception:
            session.close()
            raise
    return session

