"""Chromium page sessions driven through Playwright's async API."""
from collections.abc import Sequence
from typing import Any

import structlog
from playwright.async_api import Browser, Locator, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from listing_scraper.application.interfaces.page_driver import (
    AnchorSnapshot,
    NavigationError,
    PageDriver,
    PageDriverFactory,
    ProbeTimeoutError,
)
from listing_scraper.config import settings

logger = structlog.get_logger(__name__)

# innerText keeps line breaks, which the title fallback relies on
COLLECT_ANCHORS_SCRIPT = """
() => Array.from(document.querySelectorAll('a')).map(link => ({
    text: link.innerText || '',
    heading: link.querySelector('h3, h4')?.innerText || null,
    href: link.href || '',
}))
"""


class PlaywrightPageDriver(PageDriver):
    """One browser with a single page; owns the Playwright instance it runs on."""

    def __init__(self, playwright: Playwright, browser: Browser, page: Page) -> None:
        self._playwright = playwright
        self._browser = browser
        self._page = page

    async def navigate(self, url: str, timeout_ms: int) -> None:
        try:
            await self._page.goto(url, timeout=timeout_ms, wait_until="domcontentloaded")
        except PlaywrightError as exc:
            logger.error("navigation_failed", url=url, error=str(exc))
            raise NavigationError(f"Failed to load {url}: {exc}") from exc

    async def wait_for(self, selector: str, timeout_ms: int) -> None:
        try:
            await self._page.wait_for_selector(selector, timeout=timeout_ms)
        except PlaywrightError as exc:
            # Any probe failure is tolerated; extraction runs on whatever rendered
            raise ProbeTimeoutError(selector, timeout_ms) from exc

    async def collect_anchors(self) -> list[AnchorSnapshot]:
        raw: list[dict[str, Any]] = await self._page.evaluate(COLLECT_ANCHORS_SCRIPT)
        return [
            AnchorSnapshot(
                text=item.get("text") or "",
                href=item.get("href") or "",
                heading=item.get("heading") or None,
            )
            for item in raw
        ]

    async def find_control(self, label: str) -> Locator | None:
        button = self._page.get_by_role("button", name=label).first
        if await button.is_visible():
            return button
        return None

    async def activate(self, control: Locator) -> None:
        await control.click()

    async def close(self) -> None:
        try:
            await self._browser.close()
        finally:
            await self._playwright.stop()


class PlaywrightSessionFactory(PageDriverFactory):
    """Launches a fresh headless Chromium for every session."""

    def __init__(
        self,
        headless: bool = settings.headless,
        browser_args: Sequence[str] = tuple(settings.browser_args),
    ) -> None:
        self._headless = headless
        self._browser_args = list(browser_args)

    async def open(self) -> PlaywrightPageDriver:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(
                headless=self._headless, args=self._browser_args
            )
        except Exception:
            await playwright.stop()
            raise

        try:
            page = await browser.new_page()
        except Exception:
            await browser.close()
            await playwright.stop()
            raise

        logger.debug("browser_session_opened", headless=self._headless)
        return PlaywrightPageDriver(playwright, browser, page)
