"""Configuration objects and constants for the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Tuple

DEFAULT_OUTPUT_PATH = Path("public") / "seo-test" / "index.html"
DEFAULT_CONTENT_SELECTORS = 'h1, [data-testid="home"], main, [role="main"]'
CAPTURE_MARKER = "capture-status"
CAPTURE_TIMESTAMP = "capture-timestamp"


@dataclass
class CaptureConfig:
    """Top-level settings that control rendering and verification."""

    navigation_timeout: float = 30.0
    content_timeout: float = 10.0
    content_selectors: str = DEFAULT_CONTENT_SELECTORS
    viewport: Tuple[int, int] = (1280, 800)
    asset_script_pattern: str = "/assets/"
    min_artifact_bytes: int = 1000
    max_h1_chars: int = 80
