"""Serializing, persisting and verifying the captured document."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag

from .browser import BrowserSession
from .config import CAPTURE_MARKER, CAPTURE_TIMESTAMP
from .models import CapturedArtifact, VerificationReport
from .storage import Storage
from .utils import format_kb

logger = logging.getLogger("spa_capture")

# Browsers always synthesize <head>, but documents built through DOM APIs may
# not have one.
STAMP_CAPTURE_MARKER_JS = """
({ marker, markerKey, timestampKey, timestamp }) => {
  let head = document.head;
  if (!head) {
    head = document.createElement('head');
    document.documentElement.insertBefore(head, document.documentElement.firstChild);
  }
  const status = document.createElement('meta');
  status.setAttribute('name', markerKey);
  status.setAttribute('content', marker);
  const stamp = document.createElement('meta');
  stamp.setAttribute('name', timestampKey);
  stamp.setAttribute('content', timestamp);
  head.append(status, stamp);
}
"""

CHECK_LABELS = {
    "has_content": "Has <h1> content",
    "has_marker": "Capture marker present",
    "no_external_css": "No external stylesheet links (CSS inlined)",
    "no_module_scripts": "No module script tags (JS stripped)",
    "has_title": "Has <title> tag",
    "has_description": "Has meta description",
    "size_ok": "File size above minimum",
}


def utc_timestamp(now: Optional[dt.datetime] = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision and a ``Z`` suffix."""
    now = now or dt.datetime.now(dt.timezone.utc)
    return now.astimezone(dt.timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


async def capture_document(session: BrowserSession) -> CapturedArtifact:
    """Stamp the capture marker into the head and serialize the document."""
    timestamp = utc_timestamp()
    await session.evaluate(
        STAMP_CAPTURE_MARKER_JS,
        {
            "marker": "captured",
            "markerKey": CAPTURE_MARKER,
            "timestampKey": CAPTURE_TIMESTAMP,
            "timestamp": timestamp,
        },
    )
    html = await session.content()
    artifact = CapturedArtifact(html=html, timestamp=timestamp)
    logger.info("PASS  Captured %s of HTML", format_kb(artifact.size_bytes))
    return artifact


async def write_artifact(storage: Storage, artifact: CapturedArtifact, output_path: Path) -> None:
    """Create the destination directory and overwrite ``output_path``."""
    await storage.make_dirs(output_path.parent)
    await storage.write_text(output_path, artifact.html)
    logger.info("..    Written to: %s", output_path)


def _is_stylesheet_link(tag: Tag) -> bool:
    if tag.name != "link":
        return False
    rel = tag.get("rel") or []
    if isinstance(rel, str):
        rel = rel.split()
    return "stylesheet" in (token.lower() for token in rel)


def _is_module_script(tag: Tag) -> bool:
    return tag.name == "script" and (tag.get("type") or "").strip().lower() == "module"


def evaluate_checks(content: str, min_bytes: int) -> Dict[str, bool]:
    """Run the structural predicates against stored HTML."""
    soup = BeautifulSoup(content, "html.parser")
    title = soup.find("title")
    return {
        "has_content": soup.find("h1") is not None,
        "has_marker": CAPTURE_MARKER in content,
        "no_external_css": not soup.find_all(_is_stylesheet_link),
        "no_module_scripts": not soup.find_all(_is_module_script),
        "has_title": bool(title and title.get_text(strip=True)),
        "has_description": soup.find("meta", attrs={"name": "description"}) is not None,
        "size_ok": len(content.encode("utf-8")) > min_bytes,
    }


async def verify_artifact(storage: Storage, output_path: Path, min_bytes: int) -> VerificationReport:
    """Re-read the written file and check what was actually persisted."""
    content = await storage.read_text(output_path)
    report = VerificationReport(
        checks=evaluate_checks(content, min_bytes),
        size_bytes=len(content.encode("utf-8")),
    )
    for name, passed in report.checks.items():
        label = CHECK_LABELS[name]
        if name == "size_ok":
            label = f"File size: {format_kb(report.size_bytes)}"
        if passed:
            logger.info("PASS  %s", label)
        else:
            logger.error("FAIL  %s", label)
    return report
