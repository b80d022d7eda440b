"""Data models for the capture stage."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sitepdf.config import Settings, settings


@dataclass(frozen=True)
class WorkItem:
    """A URL paired with its fixed position in the deduplicated list."""

    url: str
    index: int

    @property
    def sequence(self) -> int:
        """1-based position, used for filenames and log prefixes."""
        return self.index + 1

    @property
    def filename(self) -> str:
        return f"page-{self.sequence:04d}.pdf"


@dataclass(frozen=True)
class CaptureResult:
    """The PDF written for one :class:`WorkItem`."""

    index: int
    path: Path


@dataclass(frozen=True)
class CaptureOptions:
    """Browser and pacing parameters for a single page capture.

    Times are in seconds, sizes in CSS pixels.
    """

    viewport_width: int = 1920
    viewport_height: int = 1080
    navigation_timeout: float = 60.0
    settle_delay: float = 1.0
    scroll_step: int = 100
    scroll_interval: float = 0.1
    post_scroll_delay: float = 2.0
    max_page_height: int = 14400

    def __post_init__(self) -> None:
        if self.scroll_step < 1:
            raise ValueError(f"scroll_step must be at least 1, got {self.scroll_step}")

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> CaptureOptions:
        s = s or settings
        return cls(
            viewport_width=s.viewport_width,
            viewport_height=s.viewport_height,
            navigation_timeout=s.navigation_timeout,
            settle_delay=s.settle_delay,
            scroll_step=s.scroll_step,
            scroll_interval=s.scroll_interval,
            post_scroll_delay=s.post_scroll_delay,
            max_page_height=s.max_page_height,
        )
