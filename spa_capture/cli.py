"""Command-line entry point for the SPA capture tool."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
import webbrowser
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_OUTPUT_PATH, CaptureConfig
from .models import CaptureError, CaptureRequest
from .pipeline import capture_url, format_summary
from .utils import normalize_source_url

logger = logging.getLogger("spa_capture.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Render a single-page application with Playwright and write it as a "
            "self-contained static HTML snapshot for SEO."
        ),
    )
    parser.add_argument("url", help="URL (or local path) of the page to capture")
    parser.add_argument(
        "--output",
        default=DEFAULT_OUTPUT_PATH,
        type=Path,
        help=f"Output file path (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the result in the default browser after capture",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="Navigation timeout in seconds",
    )
    parser.add_argument(
        "--content-timeout",
        type=float,
        default=10.0,
        help="Seconds to wait for primary content before continuing with a warning",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
        force=True,
    )

    try:
        source_url = normalize_source_url(args.url)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2

    request = CaptureRequest(
        source_url=source_url,
        output_path=Path(args.output).resolve(),
        open_after_capture=args.open,
    )
    config = CaptureConfig(
        navigation_timeout=args.timeout,
        content_timeout=args.content_timeout,
    )
    logger.info("Source: %s", request.source_url)
    logger.info("Output: %s", request.output_path)

    overall_start = time.perf_counter()
    try:
        result = asyncio.run(capture_url(request, config))
    except CaptureError as exc:
        logger.error("FATAL: %s", exc)
        return 1
    except Exception:  # pylint: disable=broad-except
        logger.exception("FATAL: unexpected error capturing %s", request.source_url)
        return 1
    logger.debug("Capture finished in %.2fs", time.perf_counter() - overall_start)

    for line in format_summary(result).splitlines():
        logger.info("%s", line)

    if request.open_after_capture:
        webbrowser.open(request.output_path.as_uri())
        logger.info("Opened in browser.")

    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
