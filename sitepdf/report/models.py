"""Data models for the link report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# Report column name -> LinkRecord attribute
COLUMN_FIELDS = {
    "OriginPage": "origin_page",
    "LinkToPage": "link_to_page",
    "LinkToPageStatusCode": "status_code",
    "LinkToPageStatusText": "status_text",
    "LinkToPageTitle": "link_title",
    "OriginPageDate": "origin_date",
    "OriginPageTitle": "origin_title",
}


@dataclass(frozen=True)
class LinkRecord:
    """One row of the report: a link found on an origin page."""

    origin_page: str
    link_to_page: str
    status_code: str
    status_text: str
    link_title: str
    origin_title: str
    origin_date: Optional[str] = None


class DedupePolicy(str, Enum):
    """How records are reduced to the list of URLs to capture.

    ``ORIGIN`` visits every distinct origin page, sorted.  ``TITLE`` visits
    the first link seen for each distinct link title, in report order; links
    sharing a title with an earlier one are dropped even if the URL differs.
    """

    ORIGIN = "origin"
    TITLE = "title"
