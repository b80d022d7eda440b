"""PDF assembly: concatenate per-URL captures and trim a spurious last page.

Chromium sometimes re-paginates a tall single-sheet capture, leaving either a
tiny remnant page or a near-duplicate slice at the end of the merged file.
:func:`trim_trailing_page` drops that page using a height-ratio heuristic.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from sitepdf.config import Settings, settings
from sitepdf.errors import MergeError, TrimError


@dataclass(frozen=True)
class TrimThresholds:
    """Height ratios (last / second-to-last page) that mark the last page as spurious.

    The last page is removed when the ratio is below ``low`` or at least
    ``high``; anything in between is kept.
    """

    low: float = 0.10
    high: float = 0.95

    def __post_init__(self) -> None:
        if not 0 <= self.low <= self.high:
            raise ValueError(
                f"trim thresholds must satisfy 0 <= low <= high, got {self.low}, {self.high}"
            )

    @classmethod
    def from_settings(cls, s: Settings | None = None) -> TrimThresholds:
        s = s or settings
        return cls(low=s.trim_low_ratio, high=s.trim_high_ratio)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write(writer: PdfWriter, path: Path) -> None:
    """Serialise *writer* in memory first so a failure never leaves a half-written file."""
    buffer = io.BytesIO()
    writer.write(buffer)
    path.write_bytes(buffer.getvalue())


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def should_trim(last_height: float, second_last_height: float, thresholds: TrimThresholds) -> bool:
    """Return ``True`` if the last page should be dropped."""
    if second_last_height <= 0:
        return False
    ratio = last_height / second_last_height
    return ratio < thresholds.low or ratio >= thresholds.high


def trim_trailing_page(path: str | Path, thresholds: TrimThresholds | None = None) -> bool:
    """Re-load the PDF at *path* and drop its last page if it looks spurious.

    Only the final pair of pages is examined, once; the check is not repeated
    after a removal.

    Returns:
        ``True`` if a page was removed and the file rewritten.

    Raises:
        TrimError: If the file cannot be re-loaded or rewritten.
    """
    thresholds = thresholds or TrimThresholds.from_settings()
    pdf_path = Path(path)

    try:
        reader = PdfReader(str(pdf_path))
        count = len(reader.pages)
        if count < 2:
            return False
        last = float(reader.pages[count - 1].mediabox.height)
        second_last = float(reader.pages[count - 2].mediabox.height)

        if not should_trim(last, second_last, thresholds):
            return False

        writer = PdfWriter()
        for i in range(count - 1):
            writer.add_page(reader.pages[i])
        _write(writer, pdf_path)
    except (OSError, PyPdfError) as exc:
        raise TrimError(f"cannot trim {pdf_path}: {exc}") from exc

    ratio = last / second_last
    print(f"[TRIM] Removed trailing page (height ratio {ratio:.2f}).")
    return True


def merge_pdfs(
    paths: Iterable[str | Path],
    output_path: str | Path,
    thresholds: TrimThresholds | None = None,
    trim: bool = True,
) -> Path:
    """Concatenate the pages of every PDF in *paths* (in order) into *output_path*.

    An empty *paths* produces a valid, zero-page PDF.  When *trim* is set the
    trailing-page heuristic runs once on the written file; a trim failure is
    logged and the assembled file is kept as is.

    Raises:
        MergeError: If any input cannot be read, or the output cannot be
            written.  No merged file is written in that case.
    """
    out_path = Path(output_path)
    sources = [Path(p) for p in paths]
    print(f"[MERGE] Merging {len(sources)} PDF(s) …")

    writer = PdfWriter()
    for source in sources:
        try:
            reader = PdfReader(str(source))
            for page in reader.pages:
                writer.add_page(page)
        except (OSError, PyPdfError) as exc:
            raise MergeError(source, str(exc)) from exc

    try:
        _write(writer, out_path)
    except (OSError, PyPdfError) as exc:
        raise MergeError(out_path, str(exc)) from exc

    if trim:
        try:
            trim_trailing_page(out_path, thresholds)
        except TrimError as exc:
            print(f"[TRIM] Skipped, keeping merged PDF as assembled: {exc}")

    print(f"[MERGE] Merged PDF saved to: {out_path}")
    return out_path
