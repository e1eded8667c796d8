"""Utility helpers for URL normalization and log formatting."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

ALLOWED_SCHEMES = ("http", "https", "file")
LOCAL_HOSTS = ("localhost", "127.0.0.1", "0.0.0.0", "::1")


def normalize_source_url(raw: str) -> str:
    """Turn user input into a URL the browser can load."""
    value = raw.strip()
    if not value:
        raise ValueError("Source URL is empty")
    parsed = urlparse(value)
    if parsed.scheme in ALLOWED_SCHEMES and (parsed.netloc or parsed.scheme == "file"):
        return value
    local = Path(value).expanduser()
    if local.exists():
        return local.resolve().as_uri()
    if "://" in value:
        raise ValueError(f"Unsupported URL scheme: {parsed.scheme}")
    host = urlparse(f"//{value}").hostname or ""
    if host in LOCAL_HOSTS:
        return f"http://{value}"
    return f"https://{value}"


def shorten(value: str, limit: int = 60) -> str:
    """Clip a value for single-line log output."""
    if len(value) <= limit:
        return value
    return value[:limit] + "..."


def format_kb(size_bytes: int) -> str:
    return f"{size_bytes / 1024:.0f} KB"
