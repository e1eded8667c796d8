"""High-level orchestration of a single capture."""

from __future__ import annotations

import logging
from typing import Optional

from .browser import BrowserSession, open_browser_session
from .capture import capture_document, verify_artifact, write_artifact
from .config import CaptureConfig
from .models import CaptureRequest, CaptureResult
from .navigation import navigate, wait_for_content
from .scripts import strip_scripts
from .seo import validate_seo
from .storage import LocalStorage, Storage
from .stylesheets import inline_stylesheets
from .utils import format_kb

logger = logging.getLogger("spa_capture")

TOTAL_STEPS = 6


def _step(number: int, message: str) -> None:
    logger.info("[%d/%d] %s", number, TOTAL_STEPS, message)


async def run_capture(
    request: CaptureRequest,
    config: CaptureConfig,
    session: BrowserSession,
    storage: Storage,
) -> CaptureResult:
    """Run every stage in order against an open browser session."""
    _step(1, f"Navigating to {request.source_url}")
    await navigate(session, request.source_url, config.navigation_timeout)

    _step(2, "Waiting for content to render")
    content_found = await wait_for_content(
        session, config.content_selectors, config.content_timeout
    )

    _step(3, "Inlining external CSS")
    stylesheets = await inline_stylesheets(session)

    _step(4, "Removing module scripts (not needed for SEO)")
    scripts_removed = await strip_scripts(session, config.asset_script_pattern)

    _step(5, "Validating SEO meta tags")
    seo = await validate_seo(session, config.max_h1_chars)

    _step(6, "Capturing, writing and verifying output")
    artifact = await capture_document(session)
    await write_artifact(storage, artifact, request.output_path)
    verification = await verify_artifact(
        storage, request.output_path, config.min_artifact_bytes
    )

    return CaptureResult(
        request=request,
        content_found=content_found,
        stylesheets=stylesheets,
        scripts_removed=scripts_removed,
        seo=seo,
        artifact=artifact,
        verification=verification,
    )


async def capture_url(
    request: CaptureRequest,
    config: CaptureConfig,
    storage: Optional[Storage] = None,
) -> CaptureResult:
    """Launch a browser, capture ``request.source_url`` and close the browser."""
    storage = storage or LocalStorage()
    async with open_browser_session(config) as session:
        return await run_capture(request, config, session, storage)


def format_summary(result: CaptureResult) -> str:
    """Human-readable summary of a finished capture."""
    lines = [
        "Summary",
        f"  CSS stylesheets inlined: {result.stylesheets.inlined}/{result.stylesheets.total}",
        f"  JS scripts removed:      {result.scripts_removed}",
        f"  SEO tags found:          {result.seo.passed}/{result.seo.total}",
        f"  Artifact size:           {format_kb(result.verification.size_bytes)}",
        "  Verification:            "
        + ("ALL PASSED" if result.verification.all_passed else "SOME CHECKS FAILED"),
        f"  Output:                  {result.request.output_path}",
    ]
    if result.seo.warned:
        lines.append(
            f"  {result.seo.warned} SEO tag(s) missing: {', '.join(result.seo.missing)}"
        )
    if not result.verification.all_passed:
        lines.append(
            f"  Failed checks: {', '.join(result.verification.failed)}. "
            "Review the output before deploying."
        )
    return "\n".join(lines)
