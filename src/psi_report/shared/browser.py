"""Playwright PDF renderer — prints a self-contained HTML document with headless Chromium."""

from __future__ import annotations

import logging
from types import TracebackType

from playwright.async_api import Browser, Playwright, async_playwright

from psi_report.schemas.config import PdfOptions

logger = logging.getLogger(__name__)


class PdfRenderer:
    """Manages one Chromium instance for the duration of a render.

    The browser and the Playwright driver are shut down on every exit
    path, including when rendering raises.

    Usage::

        async with PdfRenderer() as renderer:
            pdf_bytes = await renderer.render(html)
    """

    def __init__(self, options: PdfOptions | None = None) -> None:
        self.options = options or PdfOptions()
        self._pw: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self) -> "PdfRenderer":
        self._pw = await async_playwright().start()
        try:
            self._browser = await self._pw.chromium.launch(headless=True)
        except BaseException:
            await self._pw.stop()
            self._pw = None
            raise
        logger.info("Browser launched")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        try:
            if self._browser:
                await self._browser.close()
        finally:
            self._browser = None
            if self._pw:
                await self._pw.stop()
                self._pw = None
        logger.info("Browser closed")

    async def render(self, html: str) -> bytes:
        """Load ``html`` and return the printed PDF bytes."""
        assert self._browser is not None, "PdfRenderer not entered"
        opts = self.options
        page = await self._browser.new_page()
        try:
            await page.set_content(html, wait_until="networkidle", timeout=opts.timeout_ms)
            return await page.pdf(
                format=opts.format,
                print_background=opts.print_background,
                margin={
                    "top": opts.margin,
                    "right": opts.margin,
                    "bottom": opts.margin,
                    "left": opts.margin,
                },
            )
        finally:
            await page.close()


async def render_pdf(html: str, options: PdfOptions | None = None) -> bytes:
    """Launch a browser, print ``html`` to PDF and shut the browser down."""
    async with PdfRenderer(options) as renderer:
        return await renderer.render(html)
