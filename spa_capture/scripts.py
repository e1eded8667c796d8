"""Removing hydration scripts that a static snapshot never executes."""

from __future__ import annotations

import logging

from .browser import BrowserSession

logger = logging.getLogger("spa_capture")

STRIP_SCRIPTS_JS = """
(assetPattern) => {
  const scripts = Array.from(document.querySelectorAll('script')).filter((s) =>
    (s.getAttribute('type') || '').trim().toLowerCase() === 'module' ||
    (s.getAttribute('src') || '').includes(assetPattern));
  scripts.forEach((s) => s.remove());
  return scripts.length;
}
"""


async def strip_scripts(session: BrowserSession, asset_pattern: str) -> int:
    """Remove module scripts and bundled asset scripts, returning the count."""
    removed = int(await session.evaluate(STRIP_SCRIPTS_JS, asset_pattern))
    if removed:
        logger.info("PASS  Removed %d script(s)", removed)
    else:
        logger.info("..    No module/asset scripts found")
    return removed
