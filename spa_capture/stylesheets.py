"""Replacing external stylesheet links with inline style blocks."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Dict, List
from urllib.parse import urlparse
from urllib.request import url2pathname

from .browser import BrowserSession
from .models import StylesheetInlineResult

logger = logging.getLogger("spa_capture")

# Chromium's fetch() rejects file: URLs, so those sheets are read from disk.
LIST_LOCAL_STYLESHEETS_JS = """
() => Array.from(document.querySelectorAll('link[rel~="stylesheet" i]'))
  .filter((link) => link.getAttribute('href') && link.href.startsWith('file:'))
  .map((link) => link.href)
"""

# Fetches run concurrently; each link is swapped in place when its own fetch
# settles, so document order (and cascade precedence) is unchanged.
INLINE_STYLESHEETS_JS = """
async ({ preloaded }) => {
  const links = Array.from(document.querySelectorAll('link[rel~="stylesheet" i]'));
  return Promise.all(links.map(async (link) => {
    const href = link.getAttribute('href') || '';
    if (!href.trim()) {
      return { href: 'unknown', ok: false, error: 'missing href' };
    }
    try {
      let css;
      if (Object.prototype.hasOwnProperty.call(preloaded, link.href)) {
        css = preloaded[link.href];
      } else {
        const res = await fetch(link.href);
        if (!res.ok) throw new Error(`HTTP ${res.status}`);
        css = await res.text();
      }
      const style = document.createElement('style');
      style.setAttribute('data-inlined-from', href);
      style.textContent = css;
      link.replaceWith(style);
      return { href, ok: true, error: null };
    } catch (err) {
      return { href, ok: false, error: String((err && err.message) || err) };
    }
  }));
}
"""


def _read_local_stylesheets(urls: List[str]) -> Dict[str, str]:
    sheets: Dict[str, str] = {}
    for url in urls:
        path = Path(url2pathname(urlparse(url).path))
        try:
            sheets[url] = path.read_text(encoding="utf-8")
        except OSError as exc:
            logger.debug("Cannot read local stylesheet %s: %s", path, exc)
    return sheets


async def inline_stylesheets(session: BrowserSession) -> StylesheetInlineResult:
    """Embed every fetchable stylesheet; failed links are left in place."""
    local_urls = await session.evaluate(LIST_LOCAL_STYLESHEETS_JS)
    preloaded = await asyncio.to_thread(_read_local_stylesheets, local_urls)
    outcomes = await session.evaluate(INLINE_STYLESHEETS_JS, {"preloaded": preloaded})
    failed_hrefs = []
    for outcome in outcomes:
        if outcome["ok"]:
            logger.debug("Inlined %s", outcome["href"])
        else:
            failed_hrefs.append(outcome["href"])
            logger.warning("WARN  Could not inline %s: %s", outcome["href"], outcome["error"])

    result = StylesheetInlineResult(
        total=len(outcomes),
        inlined=len(outcomes) - len(failed_hrefs),
        failed=len(failed_hrefs),
        failed_hrefs=failed_hrefs,
    )
    if result.total == 0:
        logger.info("..    No external stylesheets found (CSS may already be inline)")
    elif result.failed:
        logger.warning(
            "WARN  Inlined %d/%d stylesheets (%d failed)",
            result.inlined,
            result.total,
            result.failed,
        )
    else:
        logger.info("PASS  Inlined %d stylesheet(s)", result.inlined)
    return result
