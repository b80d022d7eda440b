"""Assembly package — merge captured PDFs into one document."""

from sitepdf.assembly.merger import TrimThresholds, merge_pdfs, should_trim, trim_trailing_page

__all__ = ["merge_pdfs", "trim_trailing_page", "should_trim", "TrimThresholds"]
