"""sitepdf CLI: export the pages of a link report as one PDF.

Usage:
    python cli/main.py <report.tsv>
    python cli/main.py <report.tsv> --dedupe title --concurrency 4

The report is the tab-separated export of a link checker (Xenu Link Sleuth
"Export to TAB separated file").  Pages land in
``output/<report stem>/pages`` and the merged PDF in
``output/<report stem>/<report stem>.pdf``.
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from sitepdf.xxx import ...`
# works when the CLI is invoked as `python cli/main.py` from any directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from typing import Optional

import typer

from sitepdf.config import settings
from sitepdf.errors import SitePdfError
from sitepdf.pipeline import run_export
from sitepdf.report.models import DedupePolicy

app = typer.Typer(
    name="sitepdf",
    help="Capture every page listed in a link report and merge them into one PDF.",
    no_args_is_help=True,
)


@app.command()
def export(
    report: Path = typer.Argument(..., help="Tab-separated link report to export."),
    dedupe: Optional[DedupePolicy] = typer.Option(
        None, "--dedupe", help="URL selection: origin (sorted origin pages) | title (first link per title)."
    ),
    status_code: Optional[str] = typer.Option(
        None, "--status-code", help="Only use links that resolved with this HTTP status."
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", min=1, help="Number of pages captured in parallel."
    ),
    output_dir: Optional[Path] = typer.Option(
        None, "--output-dir", help="Directory for pages/ and the merged PDF."
    ),
    headless: Optional[bool] = typer.Option(
        None, "--headless/--headful", help="Run the browser with or without a window."
    ),
    no_trim: bool = typer.Option(
        False, "--no-trim", help="Keep a suspected spurious last page."
    ),
) -> None:
    """Export the pages of REPORT as a single merged PDF."""
    if not report.exists():
        typer.echo(f"❌ File not found: {report}")
        raise typer.Exit(code=1)

    out_dir = output_dir or settings.output_dir_for(report)
    typer.echo(f"📂 Output directory: {out_dir}")

    try:
        result = run_export(
            report,
            out_dir,
            policy=dedupe,
            status_code=status_code,
            concurrency=concurrency,
            headless=headless,
            trim=not no_trim,
        )
    except SitePdfError as e:
        typer.echo(f"❌ Error: {e}")
        raise typer.Exit(code=1)

    if not result.urls:
        typer.echo("No URLs found in the report.")
        return

    typer.echo("")
    typer.echo("✅ Done!")
    typer.echo(f"Individual PDFs: {out_dir / 'pages'}")
    typer.echo(f"Final PDF: {result.merged_path}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
