"""Error taxonomy for the export pipeline.

Parse, capture and merge errors abort their phase.  ``TrimError`` is the only
best-effort failure: :func:`~sitepdf.assembly.merger.merge_pdfs` logs it and
keeps the assembled file.
"""

from __future__ import annotations

from pathlib import Path


class SitePdfError(Exception):
    """Base class for every error raised by sitepdf."""


class ParseError(SitePdfError):
    """The report header is unreadable or a row is malformed."""

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class CaptureError(SitePdfError):
    """A single URL could not be captured (navigation, script or render failure)."""

    def __init__(self, url: str, index: int, reason: str) -> None:
        self.url = url
        self.index = index
        self.reason = reason
        super().__init__(f"[{index + 1}] {url}: {reason}")


class MergeError(SitePdfError):
    """A per-URL artifact could not be read during assembly."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {reason}")


class TrimError(SitePdfError):
    """The trailing-page heuristic could not be applied to the merged file."""
