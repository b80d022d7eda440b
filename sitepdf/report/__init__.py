"""Report package — link report parsing & URL selection."""

from sitepdf.report.models import DedupePolicy, LinkRecord
from sitepdf.report.parser import (
    dedupe,
    dedupe_by_origin,
    dedupe_by_title,
    filter_by_status,
    parse_records,
    parse_report,
    read_report,
)

__all__ = [
    "LinkRecord",
    "DedupePolicy",
    "parse_records",
    "filter_by_status",
    "dedupe",
    "dedupe_by_origin",
    "dedupe_by_title",
    "parse_report",
    "read_report",
]
