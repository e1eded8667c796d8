"""Reading and grading the SEO metadata of the rendered document."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from .browser import BrowserSession
from .models import SEOReport
from .utils import shorten

logger = logging.getLogger("spa_capture")

SEO_FIELDS = (
    ("title", "<title>"),
    ("description", "meta description"),
    ("canonical", "canonical URL"),
    ("og_title", "og:title"),
    ("og_description", "og:description"),
    ("og_image", "og:image"),
    ("og_url", "og:url"),
    ("twitter_card", "twitter:card"),
    ("json_ld", "JSON-LD structured data"),
    ("h1", "<h1> heading"),
)

READ_SEO_FIELDS_JS = """
() => {
  const meta = (sel) => {
    const el = document.querySelector(sel);
    return el ? (el.getAttribute('content') || '') : null;
  };
  const canonical = document.querySelector('link[rel="canonical"]');
  const h1 = document.querySelector('h1');
  return {
    title: document.title,
    description: meta('meta[name="description"]'),
    canonical: canonical ? canonical.getAttribute('href') : null,
    og_title: meta('meta[property="og:title"]'),
    og_description: meta('meta[property="og:description"]'),
    og_image: meta('meta[property="og:image"]'),
    og_url: meta('meta[property="og:url"]'),
    twitter_card: meta('meta[name="twitter:card"]'),
    json_ld: document.querySelector('script[type="application/ld+json"]') ? 'present' : null,
    h1: h1 ? h1.textContent : null,
  };
}
"""


def _clean(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def build_seo_report(raw: Dict[str, Any], max_h1_chars: int = 80) -> SEOReport:
    """Classify raw field values as present or missing."""
    fields: Dict[str, Optional[str]] = {}
    for name, _label in SEO_FIELDS:
        value = _clean(raw.get(name))
        if name == "h1" and value:
            value = value[:max_h1_chars]
        fields[name] = value
    return SEOReport(fields=fields)


async def validate_seo(session: BrowserSession, max_h1_chars: int = 80) -> SEOReport:
    """Read the SEO fields without touching the DOM and log each one."""
    raw = await session.evaluate(READ_SEO_FIELDS_JS)
    report = build_seo_report(raw, max_h1_chars)
    for name, label in SEO_FIELDS:
        value = report.fields[name]
        if value:
            logger.info("PASS  %s: %s", label, shorten(value))
        else:
            logger.warning("WARN  %s: MISSING", label)
    return report
