"""Centralised settings for sitepdf.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    output_root: Path = field(
        default_factory=lambda: Path(
            os.environ.get("SITEPDF_OUTPUT_DIR", Path.cwd() / "output")
        )
    )

    # ------------------------------------------------------------------
    # Report selection
    # ------------------------------------------------------------------
    status_code: str = field(
        default_factory=lambda: os.environ.get("SITEPDF_STATUS_CODE", "200")
    )
    dedupe_policy: str = field(
        default_factory=lambda: os.environ.get("SITEPDF_DEDUPE_POLICY", "origin")
    )

    # ------------------------------------------------------------------
    # Browser / capture
    # ------------------------------------------------------------------
    concurrency: int = field(
        default_factory=lambda: int(os.environ.get("SITEPDF_CONCURRENCY", "8"))
    )
    headless: bool = field(
        default_factory=lambda: _env_bool("SITEPDF_HEADLESS", "true")
    )
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("SITEPDF_VIEWPORT_WIDTH", "1920"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("SITEPDF_VIEWPORT_HEIGHT", "1080"))
    )
    navigation_timeout: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_NAV_TIMEOUT", "60.0"))
    )
    settle_delay: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_SETTLE_DELAY", "1.0"))
    )
    scroll_step: int = field(
        default_factory=lambda: int(os.environ.get("SITEPDF_SCROLL_STEP", "100"))
    )
    scroll_interval: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_SCROLL_INTERVAL", "0.1"))
    )
    post_scroll_delay: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_POST_SCROLL_DELAY", "2.0"))
    )
    max_page_height: int = field(
        default_factory=lambda: int(os.environ.get("SITEPDF_MAX_PAGE_HEIGHT", "14400"))
    )

    # ------------------------------------------------------------------
    # Merge / trailing-page trim
    # ------------------------------------------------------------------
    trim_low_ratio: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_TRIM_LOW", "0.10"))
    )
    trim_high_ratio: float = field(
        default_factory=lambda: float(os.environ.get("SITEPDF_TRIM_HIGH", "0.95"))
    )

    def output_dir_for(self, report_path: str | Path) -> Path:
        """Return the output directory for *report_path* (named after its stem)."""
        return self.output_root / Path(report_path).stem

    def ensure_output_dir(self, report_path: str | Path) -> Path:
        """Create ``<output_dir>/pages`` if needed and return the output directory."""
        out_dir = self.output_dir_for(report_path)
        (out_dir / "pages").mkdir(parents=True, exist_ok=True)
        return out_dir


# Module-level singleton, import this everywhere:
#   from sitepdf.config import settings
settings = Settings()
