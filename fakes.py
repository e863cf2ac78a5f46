"""Stand-ins for the Playwright page/session used by the tests."""

from pathlib import Path

from PIL import Image

EMPTY = {"matched": 0, "elements": [], "error": None}


def element(x, y, width, height, tag="button", type_="", class_name="", text=""):
    return {
        "x": x, "y": y, "width": width, "height": height,
        "tag": tag, "type": type_, "class_name": class_name, "text": text,
    }


class FakePage:
    def __init__(self, payloads=None):
        self.payloads = payloads or {}
        self.evaluated = []
        self.url = "http://app.test/dashboard"

    def evaluate(self, script, arg):
        selector = arg[0]
        self.evaluated.append(selector)
        return self.payloads.get(selector, EMPTY)


class FakeSession:
    def __init__(self, payloads=None, size=(1400, 900), fail_routes=()):
        self.page = FakePage(payloads)
        self.size = size
        self.fail_routes = set(fail_routes)
        self.visited = []

    def goto(self, route, settle_ms=500):
        if route in self.fail_routes:
            raise TimeoutError(f"Timeout navigating to {route}")
        self.visited.append(route)

    def screenshot(self, path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", self.size, (255, 255, 255)).save(path)
        return path

    def close(self):
        self.closed = True
