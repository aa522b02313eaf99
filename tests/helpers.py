from datetime import time

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from config import BookingConfig


def make_config(tmp_path, **overrides):
    values = dict(
        email="player@example.com",
        password="secret",
        headless=True,
        preferred_times=(time(19, 0), time(20, 0)),
        screenshot_dir=str(tmp_path / "shots"),
    )
    values.update(overrides)
    return BookingConfig(**values)


class FakeLocator:
    def __init__(self, page, selector):
        self.page = page
        self.selector = selector

    @property
    def first(self):
        return self

    async def wait_for(self, state="visible", timeout=None):
        if self.selector in self.page.wait_errors:
            raise self.page.wait_errors[self.selector]
        if self.selector not in self.page.visible:
            raise PlaywrightTimeoutError(f"Timeout waiting for {self.selector}")

    async def count(self):
        return self.page.counts.get(self.selector, 0)

    async def evaluate(self, script):
        return self.page.disabled.get(self.selector, False)

    async def text_content(self, timeout=None):
        if self.selector not in self.page.texts:
            raise PlaywrightTimeoutError(f"Timeout reading {self.selector}")
        return self.page.texts[self.selector]

    async def hover(self):
        self.page.actions.append(("hover", self.selector))

    async def click(self):
        self.page.actions.append(("click", self.selector))
        if self.selector in self.page.click_redirects:
            self.page.url = self.page.click_redirects[self.selector]

    async def press_sequentially(self, text, delay=None):
        self.page.typed.setdefault(self.selector, []).append(text)

    async def highlight(self):
        pass


class FakePage:
    """Just enough of playwright's Page for the booking flow."""

    def __init__(self):
        self.url = "about:blank"
        self.visible = set()
        self.present = set()
        self.counts = {}
        self.disabled = {}
        self.texts = {}
        self.click_redirects = {}
        self.load_timeouts = set()
        self.wait_errors = {}
        self.goto_error = None
        self.actions = []
        self.typed = {}
        self.visited = []
        self.screenshots = []

    def locator(self, selector):
        return FakeLocator(self, selector)

    async def goto(self, url, timeout=None):
        self.visited.append(url)
        if self.goto_error is not None:
            raise self.goto_error
        self.url = url

    async def wait_for_load_state(self, state="load", timeout=None):
        if state in self.load_timeouts:
            raise PlaywrightTimeoutError(f"Timeout waiting for {state}")

    async def wait_for_selector(self, selector, timeout=None, state=None):
        if selector not in self.present:
            raise PlaywrightTimeoutError(f"Timeout waiting for {selector}")

    async def wait_for_timeout(self, timeout):
        pass

    async def screenshot(self, path=None, full_page=False):
        self.screenshots.append(path)

    def clicked(self):
        return [selector for action, selector in self.actions if action == "click"]
