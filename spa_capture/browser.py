"""Browser-control capability and its Playwright implementation."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional, Protocol

from playwright.async_api import (
    Error as PlaywrightError,
    Page,
    TimeoutError as PlaywrightTimeoutError,
    async_playwright,
)

from .config import CaptureConfig
from .models import NavigationError

logger = logging.getLogger("spa_capture")


class BrowserSession(Protocol):
    """The subset of browser control the pipeline depends on."""

    async def goto(self, url: str, timeout: float) -> None:
        ...

    async def wait_for_selector(self, selector: str, timeout: float) -> bool:
        ...

    async def evaluate(self, script: str, arg: Optional[Any] = None) -> Any:
        ...

    async def content(self) -> str:
        ...

    async def close(self) -> None:
        ...


class PlaywrightSession:
    """BrowserSession backed by a Playwright page."""

    def __init__(self, page: Page) -> None:
        self.page = page

    async def goto(self, url: str, timeout: float) -> None:
        """Load ``url`` and return once the network has been idle for 500 ms."""
        try:
            await self.page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"Timed out loading {url}: {exc.message}") from exc
        except PlaywrightError as exc:
            raise NavigationError(exc.message) from exc

    async def wait_for_selector(self, selector: str, timeout: float) -> bool:
        try:
            await self.page.wait_for_selector(
                selector, state="attached", timeout=timeout * 1000
            )
        except PlaywrightTimeoutError:
            return False
        except PlaywrightError as exc:
            logger.debug("Selector wait aborted: %s", exc.message)
            return False
        return True

    async def evaluate(self, script: str, arg: Optional[Any] = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def content(self) -> str:
        return await self.page.content()

    async def close(self) -> None:
        await self.page.close()


@asynccontextmanager
async def open_browser_session(config: CaptureConfig) -> AsyncIterator[PlaywrightSession]:
    """Launch headless Chromium and yield a session on a fresh page."""
    width, height = config.viewport
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=True, args=["--no-sandbox"])
        try:
            page = await browser.new_page(viewport={"width": width, "height": height})
            session = PlaywrightSession(page)
            try:
                yield session
            finally:
                await session.close()
        finally:
            await browser.close()
            logger.debug("Browser closed")
