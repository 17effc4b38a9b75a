"""Bridge for running axe-core inside a Playwright-driven browser.

The API is intentionally small: a ``PlaywrightScanner`` is a context manager
owning one browser; calling it with a ``PageTarget`` loads the page, injects
axe-core and returns the raw, JSON-compatible axe results dict.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from playwright.sync_api import Browser, Playwright, sync_playwright

from .config import AXE_CDN, DEFAULT_TAGS
from .schema import PageTarget

logger = logging.getLogger(__name__)

AXE_RUN_JS = """
async ({ context, options }) => {
    return await axe.run(context, options);
}
"""


def axe_context(target: PageTarget) -> Any:
    """axe.run context: the whole document unless include/exclude narrow it."""
    if not target.include and not target.exclude:
        return {"include": [["html"]]}
    context: Dict[str, List[List[str]]] = {}
    if target.include:
        context["include"] = [[sel] for sel in target.include]
    if target.exclude:
        context["exclude"] = [[sel] for sel in target.exclude]
    return context


def axe_options(tags: Optional[List[str]]) -> Dict[str, Any]:
    if not tags:
        return {}
    return {"runOnly": {"type": "tag", "values": list(tags)}}


class PlaywrightScanner:
    def __init__(
        self,
        browser: str = "chromium",
        headless: bool = True,
        axe_source: str = AXE_CDN,
        tags: Optional[List[str]] = None,
        timeout_ms: int = 30000,
    ):
        self.browser_name = browser
        self.headless = headless
        self.axe_source = axe_source
        self.tags = list(DEFAULT_TAGS if tags is None else tags)
        self.timeout_ms = timeout_ms
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None

    def __enter__(self) -> "PlaywrightScanner":
        self._playwright = sync_playwright().start()
        launcher = getattr(self._playwright, self.browser_name)
        self._browser = launcher.launch(headless=self.headless)
        logger.debug("Launched %s (headless=%s)", self.browser_name, self.headless)
        return self

    def __exit__(self, *exc_info) -> None:
        if self._browser is not None:
            self._browser.close()
            self._browser = None
        if self._playwright is not None:
            self._playwright.stop()
            self._playwright = None

    def _inject_axe(self, page) -> None:
        if self.axe_source.startswith(("http://", "https://")):
            page.add_script_tag(url=self.axe_source)
        else:
            page.add_script_tag(path=self.axe_source)

    def __call__(self, target: PageTarget) -> Dict[str, Any]:
        if self._browser is None:
            raise RuntimeError("Scanner used outside of its context manager")
        page = self._browser.new_page()
        try:
            page.set_default_timeout(self.timeout_ms)
            page.goto(target.url, wait_until="networkidle")
            self._inject_axe(page)
            tags = target.tags if target.tags is not None else self.tags
            results = page.evaluate(
                AXE_RUN_JS, {"context": axe_context(target), "options": axe_options(tags)}
            )
        finally:
            page.close()
        return results


def open_scanner(**kwargs) -> PlaywrightScanner:
    return PlaywrightScanner(**kwargs)
