"""Tests for PDF assembly and the trailing-page trim heuristic.

Input PDFs are generated on the fly with ``pypdf`` blank pages of known
heights, so page order and trimming can be checked by reading heights back.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest
from pypdf import PdfReader, PdfWriter

from sitepdf.assembly.merger import (
    TrimThresholds,
    merge_pdfs,
    should_trim,
    trim_trailing_page,
)
from sitepdf.config import Settings
from sitepdf.errors import MergeError, TrimError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _make_pdf(path: Path, *heights: float, width: float = 600) -> Path:
    writer = PdfWriter()
    for height in heights:
        writer.add_blank_page(width=width, height=height)
    with open(path, "wb") as fh:
        writer.write(fh)
    return path


def _heights(path: Path) -> list[float]:
    return [float(p.mediabox.height) for p in PdfReader(str(path)).pages]


# ---------------------------------------------------------------------------
# should_trim / TrimThresholds
# ---------------------------------------------------------------------------

class TestShouldTrim:
    def test_negligible_remnant_is_trimmed(self) -> None:
        assert should_trim(50, 1000, TrimThresholds()) is True

    def test_near_identical_slice_is_trimmed(self) -> None:
        assert should_trim(960, 1000, TrimThresholds()) is True

    def test_middle_band_is_kept(self) -> None:
        assert should_trim(500, 1000, TrimThresholds()) is False

    def test_boundaries(self) -> None:
        thresholds = TrimThresholds(low=0.10, high=0.95)
        assert should_trim(100, 1000, thresholds) is False
        assert should_trim(950, 1000, thresholds) is True

    def test_taller_last_page_is_trimmed(self) -> None:
        assert should_trim(1500, 1000, TrimThresholds()) is True

    def test_zero_height_predecessor_never_trims(self) -> None:
        assert should_trim(100, 0, TrimThresholds()) is False

    def test_thresholds_are_configurable(self) -> None:
        assert should_trim(500, 1000, TrimThresholds(low=0.6, high=0.99)) is True


class TestTrimThresholds:
    def test_rejects_inverted_thresholds(self) -> None:
        with pytest.raises(ValueError):
            TrimThresholds(low=0.9, high=0.5)

    def test_rejects_negative_low(self) -> None:
        with pytest.raises(ValueError):
            TrimThresholds(low=-0.1, high=0.5)

    def test_from_settings(self) -> None:
        thresholds = TrimThresholds.from_settings(Settings(trim_low_ratio=0.2, trim_high_ratio=0.8))
        assert thresholds == TrimThresholds(low=0.2, high=0.8)


# ---------------------------------------------------------------------------
# merge_pdfs
# ---------------------------------------------------------------------------

class TestMergePdfs:
    def test_concatenates_pages_in_input_order(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 100)
        b = _make_pdf(tmp_path / "b.pdf", 200, 300)
        c = _make_pdf(tmp_path / "c.pdf", 400)

        out = merge_pdfs([a, b, c], tmp_path / "merged.pdf", trim=False)

        assert out == tmp_path / "merged.pdf"
        assert _heights(out) == [100, 200, 300, 400]

    def test_merge_is_associative_in_effect(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 700)
        b = _make_pdf(tmp_path / "b.pdf", 500, 300)
        c = _make_pdf(tmp_path / "c.pdf", 250)

        all_at_once = merge_pdfs([a, b, c], tmp_path / "abc.pdf", trim=False)
        ab = merge_pdfs([a, b], tmp_path / "ab.pdf", trim=False)
        in_two_steps = merge_pdfs([ab, c], tmp_path / "ab_c.pdf", trim=False)

        assert _heights(all_at_once) == _heights(in_two_steps) == [700, 500, 300, 250]

    def test_empty_input_writes_valid_empty_document(self, tmp_path) -> None:
        out = merge_pdfs([], tmp_path / "empty.pdf")

        assert out.exists()
        assert len(PdfReader(str(out)).pages) == 0

    def test_missing_input_raises_and_writes_nothing(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 100)

        with pytest.raises(MergeError) as exc_info:
            merge_pdfs([a, tmp_path / "missing.pdf"], tmp_path / "merged.pdf")

        assert exc_info.value.path == tmp_path / "missing.pdf"
        assert not (tmp_path / "merged.pdf").exists()

    def test_corrupt_input_raises(self, tmp_path) -> None:
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"this is not a pdf")

        with pytest.raises(MergeError):
            merge_pdfs([bad], tmp_path / "merged.pdf")

        assert not (tmp_path / "merged.pdf").exists()

    def test_trims_remnant_page(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000)
        b = _make_pdf(tmp_path / "b.pdf", 50)

        out = merge_pdfs([a, b], tmp_path / "merged.pdf")

        assert _heights(out) == [1000]

    def test_trims_near_identical_last_page(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000, 960)

        out = merge_pdfs([a], tmp_path / "merged.pdf")

        assert _heights(out) == [1000]

    def test_keeps_genuine_short_last_page(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000)
        b = _make_pdf(tmp_path / "b.pdf", 500)

        out = merge_pdfs([a, b], tmp_path / "merged.pdf")

        assert _heights(out) == [1000, 500]

    def test_no_trim_flag_keeps_everything(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000, 50)

        out = merge_pdfs([a], tmp_path / "merged.pdf", trim=False)

        assert _heights(out) == [1000, 50]

    def test_trim_uses_given_thresholds(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000, 500)

        out = merge_pdfs([a], tmp_path / "merged.pdf", thresholds=TrimThresholds(low=0.6, high=0.99))

        assert _heights(out) == [1000]

    def test_trim_failure_keeps_assembled_file(self, tmp_path) -> None:
        a = _make_pdf(tmp_path / "a.pdf", 1000, 50)

        with patch(
            "sitepdf.assembly.merger.trim_trailing_page",
            side_effect=TrimError("cannot re-load"),
        ):
            out = merge_pdfs([a], tmp_path / "merged.pdf")

        assert _heights(out) == [1000, 50]


# ---------------------------------------------------------------------------
# trim_trailing_page
# ---------------------------------------------------------------------------

class TestTrimTrailingPage:
    def test_single_shot_removes_at_most_one_page(self, tmp_path) -> None:
        pdf = _make_pdf(tmp_path / "a.pdf", 1000, 1000, 1000)

        assert trim_trailing_page(pdf, TrimThresholds()) is True
        assert _heights(pdf) == [1000, 1000]

    def test_single_page_is_left_alone(self, tmp_path) -> None:
        pdf = _make_pdf(tmp_path / "a.pdf", 10)

        assert trim_trailing_page(pdf, TrimThresholds()) is False
        assert _heights(pdf) == [10]

    def test_kept_page_leaves_file_untouched(self, tmp_path) -> None:
        pdf = _make_pdf(tmp_path / "a.pdf", 1000, 500)
        before = pdf.read_bytes()

        assert trim_trailing_page(pdf, TrimThresholds()) is False
        assert pdf.read_bytes() == before

    def test_unreadable_file_raises_trim_error(self, tmp_path) -> None:
        bad = tmp_path / "bad.pdf"
        bad.write_bytes(b"garbage")

        with pytest.raises(TrimError):
            trim_trailing_page(bad, TrimThresholds())

    def test_missing_file_raises_trim_error(self, tmp_path) -> None:
        with pytest.raises(TrimError):
            trim_trailing_page(tmp_path / "missing.pdf", TrimThresholds())
