"""Single-URL capture: render one page to a one-page, full-length PDF.

Each capture gets its own browser context from the shared browser handle, so
no cookies, storage or scroll state leak between URLs.  The context is closed
on every exit path before the scheduler hands the slot to the next URL.
"""

from __future__ import annotations

from pathlib import Path

from playwright.async_api import Browser, Page
from playwright.async_api import Error as PlaywrightError

from sitepdf.capture.models import CaptureOptions, CaptureResult, WorkItem
from sitepdf.errors import CaptureError

# ---------------------------------------------------------------------------
# In-page scripts
# ---------------------------------------------------------------------------
_SCROLL_HEIGHT_JS = "() => document.body ? document.body.scrollHeight : 0"
_SCROLL_BY_JS = "(dy) => window.scrollBy(0, dy)"
_SCROLL_TOP_JS = "() => window.scrollTo(0, 0)"

# Max over body and root-element box metrics; any one of them can under-report
# depending on how the page styles html/body.
_MEASURE_JS = """
() => {
  const body = document.body;
  const html = document.documentElement;
  return {
    height: Math.max(
      body.scrollHeight, body.offsetHeight,
      html.clientHeight, html.scrollHeight, html.offsetHeight
    ),
    width: Math.max(
      body.scrollWidth, body.offsetWidth,
      html.clientWidth, html.scrollWidth, html.offsetWidth
    ),
  };
}
"""

_PRINT_CSS = """
* {
  -webkit-print-color-adjust: exact !important;
  print-color-adjust: exact !important;
}
body, html {
  page-break-inside: avoid !important;
  page-break-after: avoid !important;
  page-break-before: avoid !important;
}
"""

_ZERO_MARGIN = {"top": "0px", "right": "0px", "bottom": "0px", "left": "0px"}


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

async def _auto_scroll(page: Page, options: CaptureOptions) -> None:
    """Scroll down in fixed steps to trigger lazy loading, then back to the top.

    The document height is re-read after every step because lazy content
    grows the page.  Scrolling stops at ``max_page_height`` since anything
    below it is cut from the PDF anyway.
    """
    scrolled = 0
    height = await page.evaluate(_SCROLL_HEIGHT_JS)
    while scrolled < min(height, options.max_page_height):
        await page.evaluate(_SCROLL_BY_JS, options.scroll_step)
        scrolled += options.scroll_step
        await page.wait_for_timeout(options.scroll_interval * 1000)
        height = await page.evaluate(_SCROLL_HEIGHT_JS)
    await page.evaluate(_SCROLL_TOP_JS)


async def _render(page: Page, path: Path, item: WorkItem, options: CaptureOptions) -> None:
    """Measure the settled page and print it to *path* as a single sheet."""
    await page.emulate_media(media="screen")
    await page.add_style_tag(content=_PRINT_CSS)

    size = await page.evaluate(_MEASURE_JS)
    height = int(size["height"])
    width = max(int(size["width"]), options.viewport_width)
    print(f"[CAPTURE {item.sequence}] Page size: {width}x{height}px")

    if height > options.max_page_height:
        print(
            f"[CAPTURE {item.sequence}] Height capped at {options.max_page_height}px "
            "(content below is truncated)."
        )
        height = options.max_page_height

    await page.pdf(
        path=str(path),
        width=f"{width}px",
        height=f"{height}px",
        print_background=True,
        prefer_css_page_size=False,
        scale=1,
        margin=_ZERO_MARGIN,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

async def capture_page(
    browser: Browser,
    item: WorkItem,
    output_dir: str | Path,
    options: CaptureOptions | None = None,
) -> CaptureResult:
    """Capture *item* as ``<output_dir>/page-NNNN.pdf``.

    Protocol: fresh context → fixed viewport → navigate until network-idle →
    settle delay → paced scroll to the bottom and back → network-idle again →
    measure → render a single page sized to the content.

    Args:
        browser: Shared, already-launched browser.
        item: The URL and its position in the capture list.
        output_dir: Directory that receives the per-URL PDF.
        options: Viewport, timeouts and pacing; defaults from ``settings``.

    Returns:
        A :class:`CaptureResult` tagged with ``item.index``.

    Raises:
        CaptureError: On navigation timeout, script failure or render error.
    """
    options = options or CaptureOptions.from_settings()
    path = Path(output_dir) / item.filename

    context = await browser.new_context(
        viewport={"width": options.viewport_width, "height": options.viewport_height}
    )
    try:
        page = await context.new_page()

        print(f"[CAPTURE {item.sequence}] Navigating to: {item.url}")
        await page.goto(
            item.url,
            wait_until="networkidle",
            timeout=options.navigation_timeout * 1000,
        )
        await page.wait_for_timeout(options.settle_delay * 1000)

        print(f"[CAPTURE {item.sequence}] Scrolling to load all content …")
        await _auto_scroll(page, options)
        await page.wait_for_timeout(options.post_scroll_delay * 1000)
        await page.wait_for_load_state(
            "networkidle", timeout=options.navigation_timeout * 1000
        )

        print(f"[CAPTURE {item.sequence}] Saving PDF: {item.filename}")
        await _render(page, path, item, options)
    except PlaywrightError as exc:
        print(f"[CAPTURE {item.sequence}] ✗ Failed {item.url!r}: {exc}")
        raise CaptureError(item.url, item.index, str(exc)) from exc
    finally:
        await context.close()

    return CaptureResult(index=item.index, path=path)
