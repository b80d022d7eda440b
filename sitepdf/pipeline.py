"""High-level runner for a report export.

``export_report`` wires the three stages together: report parsing, captures
over one shared browser, and the final merge.  ``run_export`` is the sync
entry point used by the CLI.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path

from playwright.async_api import async_playwright

from sitepdf.assembly.merger import TrimThresholds, merge_pdfs
from sitepdf.capture.models import CaptureOptions
from sitepdf.capture.page import capture_page
from sitepdf.capture.scheduler import run_captures
from sitepdf.config import settings
from sitepdf.report.models import DedupePolicy
from sitepdf.report.parser import parse_report, read_report


@dataclass
class ExportResult:
    """Outcome of one export run."""

    urls: list[str] = field(default_factory=list)
    page_paths: list[Path] = field(default_factory=list)
    merged_path: Path | None = None


async def export_report(
    report_path: str | Path,
    output_dir: str | Path | None = None,
    *,
    policy: DedupePolicy | str | None = None,
    status_code: str | None = None,
    concurrency: int | None = None,
    headless: bool | None = None,
    trim: bool = True,
) -> ExportResult:
    """Turn the report at *report_path* into one merged PDF.

    Per-URL PDFs go to ``<output_dir>/pages`` and the merged file to
    ``<output_dir>/<report stem>.pdf``.  Unset arguments fall back to
    ``settings``.  When no URL matches, nothing is launched or written and
    the result carries an empty URL list.

    Raises:
        FileNotFoundError: If the report does not exist.
        ParseError: If the report is malformed.
        CaptureError: If any page fails to capture.
        MergeError: If a captured PDF cannot be read back.
    """
    report = Path(report_path)
    policy = DedupePolicy(policy or settings.dedupe_policy)
    status_code = status_code or settings.status_code
    concurrency = concurrency or settings.concurrency
    headless = settings.headless if headless is None else headless

    print(f"[PARSE] Reading report: {report}")
    urls = parse_report(read_report(report), status_code=status_code, policy=policy)
    if not urls:
        print("[PARSE] No URLs found in the report.")
        return ExportResult()

    out_dir = Path(output_dir) if output_dir else settings.ensure_output_dir(report)
    pages_dir = out_dir / "pages"
    pages_dir.mkdir(parents=True, exist_ok=True)

    options = CaptureOptions.from_settings()
    async with async_playwright() as pw:
        browser = await pw.chromium.launch(headless=headless)
        try:
            capture = partial(capture_page, browser, output_dir=pages_dir, options=options)
            page_paths = await run_captures(urls, concurrency, capture)
        finally:
            await browser.close()

    merged_path = merge_pdfs(
        page_paths,
        out_dir / f"{report.stem}.pdf",
        thresholds=TrimThresholds.from_settings(),
        trim=trim,
    )
    return ExportResult(urls=urls, page_paths=page_paths, merged_path=merged_path)


def run_export(report_path: str | Path, output_dir: str | Path | None = None, **kwargs) -> ExportResult:
    """Synchronous wrapper around :func:`export_report`."""
    return asyncio.run(export_report(report_path, output_dir, **kwargs))
