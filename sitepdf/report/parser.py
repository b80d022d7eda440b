"""Report parsing: turns tab-separated report text into target URLs.

The report is header-driven (first row names the columns) and quote
characters carry no meaning, so titles containing ``"`` or markup pass
through untouched.  A malformed row aborts the whole parse; callers never
see a partial record list.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

from sitepdf.errors import ParseError
from sitepdf.report.models import COLUMN_FIELDS, DedupePolicy, LinkRecord

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _rows(content: str) -> Iterable[tuple[int, List[str]]]:
    """Yield ``(line_number, fields)`` for every non-blank line of *content*.

    Any line break (``\\n``, ``\\r\\n`` or a bare ``\\r``) ends a row, and fields
    are split on tabs only, with no length limit.
    """
    for number, line in enumerate(_LINE_BREAK.split(content.lstrip("\ufeff")), start=1):
        if not line.strip():
            continue
        yield number, line.split("\t")


def _column_positions(header: List[str]) -> dict[str, int]:
    """Map each LinkRecord attribute to its column position in *header*."""
    names = [h.strip() for h in header]
    missing = [col for col in COLUMN_FIELDS if col not in names]
    if missing:
        raise ParseError(f"header is missing column(s): {', '.join(missing)}", line=1)
    return {attr: names.index(col) for col, attr in COLUMN_FIELDS.items()}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def read_report(path: str | Path) -> str:
    """Return the text of the report at *path*.

    Raises:
        FileNotFoundError: If *path* does not exist.
    """
    report_path = Path(path)
    if not report_path.exists():
        raise FileNotFoundError(f"Report not found: {report_path}")
    return report_path.read_text(encoding="utf-8-sig", errors="replace")


def parse_records(content: str) -> list[LinkRecord]:
    """Parse report *content* into :class:`LinkRecord` objects.

    Empty content and a header with no data rows both yield ``[]``.

    Raises:
        ParseError: If a required column is missing from the header, or a
            data row does not have exactly as many fields as the header.
    """
    rows = _rows(content)
    first = next(rows, None)
    if first is None:
        return []

    _, header = first
    positions = _column_positions(header)
    width = len(header)

    records: list[LinkRecord] = []
    for line, fields in rows:
        if len(fields) != width:
            raise ParseError(
                f"expected {width} fields, found {len(fields)}", line=line
            )
        values = {attr: fields[pos] for attr, pos in positions.items()}
        values["origin_date"] = values["origin_date"] or None
        records.append(LinkRecord(**values))

    return records


def filter_by_status(records: Iterable[LinkRecord], status_code: str = "200") -> list[LinkRecord]:
    """Return the records whose link resolved with *status_code*."""
    return [r for r in records if r.status_code == status_code]


def dedupe_by_origin(records: Iterable[LinkRecord]) -> list[str]:
    """Return the distinct, non-empty origin pages sorted ascending."""
    return sorted({r.origin_page for r in records if r.origin_page})


def dedupe_by_title(records: Iterable[LinkRecord]) -> list[str]:
    """Return one link URL per distinct link title, in first-occurrence order.

    Records with an empty title or an empty URL are ignored.  A later record
    repeating an earlier title is dropped even when its URL differs, so this
    policy can miss pages.
    """
    seen: set[str] = set()
    urls: list[str] = []
    for r in records:
        if not r.link_title or not r.link_to_page:
            continue
        if r.link_title in seen:
            continue
        seen.add(r.link_title)
        urls.append(r.link_to_page)
    return urls


def dedupe(records: Iterable[LinkRecord], policy: DedupePolicy | str = DedupePolicy.ORIGIN) -> list[str]:
    """Reduce *records* to an ordered URL list using *policy*."""
    policy = DedupePolicy(policy)
    if policy is DedupePolicy.TITLE:
        return dedupe_by_title(records)
    return dedupe_by_origin(records)


def parse_report(
    content: str,
    status_code: str = "200",
    policy: DedupePolicy | str = DedupePolicy.ORIGIN,
) -> list[str]:
    """Parse *content*, keep records with *status_code*, and dedupe by *policy*."""
    records = parse_records(content)
    matching = filter_by_status(records, status_code)
    urls = dedupe(matching, policy)
    print(
        f"[PARSE] {len(records)} record(s), {len(matching)} with status "
        f"{status_code}, {len(urls)} unique URL(s) by {DedupePolicy(policy).value}."
    )
    return urls
