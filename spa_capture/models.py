"""Data models used throughout the capture pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional


class CaptureError(RuntimeError):
    """Base error for failures that abort a capture."""


class NavigationError(CaptureError):
    """Raised when the browser cannot load the source URL."""


@dataclass(frozen=True)
class CaptureRequest:
    """A single URL to render and the file to write it to."""

    source_url: str
    output_path: Path
    open_after_capture: bool = False


@dataclass
class StylesheetInlineResult:
    """Outcome of replacing stylesheet links with inline styles."""

    total: int
    inlined: int
    failed: int
    failed_hrefs: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SEOReport:
    """SEO fields read from the rendered document."""

    fields: Dict[str, Optional[str]]

    @property
    def present(self) -> List[str]:
        return [name for name, value in self.fields.items() if value]

    @property
    def missing(self) -> List[str]:
        return [name for name, value in self.fields.items() if not value]

    @property
    def passed(self) -> int:
        return len(self.present)

    @property
    def warned(self) -> int:
        return len(self.missing)

    @property
    def total(self) -> int:
        return len(self.fields)


@dataclass(frozen=True)
class CapturedArtifact:
    """Serialized HTML stamped with the capture marker."""

    html: str
    timestamp: str

    @property
    def size_bytes(self) -> int:
        return len(self.html.encode("utf-8"))


@dataclass(frozen=True)
class VerificationReport:
    """Structural checks evaluated against the artifact as stored."""

    checks: Dict[str, bool]
    size_bytes: int

    @property
    def all_passed(self) -> bool:
        return all(self.checks.values())

    @property
    def failed(self) -> List[str]:
        return [name for name, passed in self.checks.items() if not passed]


@dataclass
class CaptureResult:
    """Everything produced by one capture."""

    request: CaptureRequest
    content_found: bool
    stylesheets: StylesheetInlineResult
    scripts_removed: int
    seo: SEOReport
    artifact: CapturedArtifact
    verification: VerificationReport

    @property
    def exit_code(self) -> int:
        return 0 if self.verification.all_passed else 1
