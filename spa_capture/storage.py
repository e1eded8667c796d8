"""Storage capability used to persist and re-read captured artifacts."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Protocol


class Storage(Protocol):
    async def make_dirs(self, path: Path) -> None:
        ...

    async def write_text(self, path: Path, text: str) -> None:
        ...

    async def read_text(self, path: Path) -> str:
        ...


def _read_untranslated(path: Path) -> str:
    with path.open(encoding="utf-8", newline="") as handle:
        return handle.read()


class LocalStorage:
    """Local filesystem storage; blocking I/O runs in a worker thread.

    Newlines are never translated, so the text read back encodes to exactly
    the bytes on disk.
    """

    async def make_dirs(self, path: Path) -> None:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)

    async def write_text(self, path: Path, text: str) -> None:
        await asyncio.to_thread(path.write_text, text, encoding="utf-8", newline="")

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(_read_untranslated, path)
