"""Loading the source URL and waiting for primary content."""

from __future__ import annotations

import logging

from .browser import BrowserSession
from .models import NavigationError

logger = logging.getLogger("spa_capture")


async def navigate(session: BrowserSession, url: str, timeout: float) -> None:
    """Load ``url`` and wait for network quiescence.

    Failure is fatal to the capture: the ``NavigationError`` is logged and
    re-raised, nothing is retried.
    """
    try:
        await session.goto(url, timeout)
    except NavigationError as exc:
        logger.error("FAIL  Navigation failed: %s", exc)
        raise
    logger.info("PASS  Page loaded (network idle)")


async def wait_for_content(session: BrowserSession, selectors: str, timeout: float) -> bool:
    """Wait for any of ``selectors``; a timeout only produces a warning."""
    found = await session.wait_for_selector(selectors, timeout)
    if found:
        logger.info("PASS  Content element found")
    else:
        logger.warning(
            "WARN  None of %s appeared within %.0fs; "
            "content may be empty or use unexpected markup",
            selectors,
            timeout,
        )
    return found
