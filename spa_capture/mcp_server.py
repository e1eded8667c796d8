"""MCP server exposing the SPA capture pipeline as a tool."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from mcp.server.fastmcp import FastMCP

from .config import DEFAULT_OUTPUT_PATH, CaptureConfig
from .models import CaptureRequest
from .pipeline import capture_url, format_summary
from .utils import normalize_source_url

logger = logging.getLogger("spa_capture.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="spa-capture")


@mcp.tool()
async def capture(
    url: str,
    output: Optional[str] = None,
) -> str:
    """Render a page with Playwright, write a static SEO snapshot and return its report."""

    request = CaptureRequest(
        source_url=normalize_source_url(url),
        output_path=Path(output or DEFAULT_OUTPUT_PATH).expanduser().resolve(),
    )
    result = await capture_url(request, CaptureConfig())
    return format_summary(result)


def main() -> None:
    """Entry point for running the MCP server."""
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
