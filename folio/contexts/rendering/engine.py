"""
Headless-browser PDF capture.

The composed document is written to a temporary HTML file next to the output
(so relative and network resources resolve like a normal page load), opened in
Chromium through Playwright, and printed once the network is idle and every
declared web font has finished loading.

Margins are zero at capture time; the document's own CSS handles page margins.
"""

import time
from pathlib import Path
from typing import Callable, List, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from folio.contexts.rendering.discovery import BrowserDiscovery
from folio.contexts.rendering.logger import _log_debug, _log_info
from folio.contexts.rendering.settings import RenderSettings
from folio.contexts.templating.compositor import ComposedDocument
from folio.exceptions import RenderFailure
from folio.utils.temp_files import reserve_temp_path

ZERO_MARGINS = {"top": "0mm", "right": "0mm", "bottom": "0mm", "left": "0mm"}

# Resolves once every @font-face in the document has loaded or failed
FONTS_SETTLED = "() => document.fonts.status === 'loaded'"


class RenderEngine:
    """
    Renders ComposedDocuments to PDF bytes with a fresh browser per call.

    The page and browser are closed on every exit path, and the temporary HTML
    file is always removed.
    """

    def __init__(
        self,
        settings: Optional[RenderSettings] = None,
        discovery: Optional[BrowserDiscovery] = None,
        playwright_factory: Callable = sync_playwright,
    ):
        self.settings = settings or RenderSettings()
        self.discovery = discovery or BrowserDiscovery.from_settings(self.settings.browser)
        self._playwright_factory = playwright_factory

    def launch_args(self) -> List[str]:
        args = list(self.settings.browser.extra_args)
        if self.settings.browser.disable_sandbox and "--no-sandbox" not in args:
            args.insert(0, "--no-sandbox")
        return args

    def render(self, document: ComposedDocument, work_dir: Path, stem: str) -> bytes:
        """
        Render a composed document to PDF bytes.

        Args:
            document: Composed HTML and footer markup
            work_dir: Directory for the temporary HTML file (must be writable)
            stem: Prefix for the temporary file name (temp_<stem>.<random>.html)

        Returns:
            PDF content

        Raises:
            RenderFailure: On browser launch, navigation, font wait or capture errors
        """
        work_dir = Path(work_dir)
        work_dir.mkdir(parents=True, exist_ok=True)
        html_path = reserve_temp_path(work_dir, prefix=f"temp_{stem}.", suffix=".html")

        try:
            # JSON input may carry lone surrogates, which UTF-8 cannot encode
            html_path.write_text(document.html, encoding="utf-8", errors="replace")
            return self._capture(html_path.resolve(), document.footer)
        finally:
            if html_path.exists():
                html_path.unlink()
                _log_debug(f"Removed temp HTML: {html_path.name}")

    def _capture(self, html_path: Path, footer: str) -> bytes:
        capture = self.settings.capture
        timeout = capture.timeout_ms
        executable = self.discovery.resolve()

        try:
            with self._playwright_factory() as p:
                start = time.time()
                browser = p.chromium.launch(
                    executable_path=executable,
                    args=self.launch_args(),
                    chromium_sandbox=not self.settings.browser.disable_sandbox,
                    timeout=timeout,
                )
                _log_debug(f"Browser launched in {time.time() - start:.2f}s")
                try:
                    page = browser.new_page()
                    try:
                        page.goto(html_path.as_uri(), wait_until="networkidle", timeout=timeout)
                        page.wait_for_function(FONTS_SETTLED, timeout=timeout)
                        pdf_bytes = page.pdf(
                            format=capture.page_format,
                            print_background=capture.print_background,
                            display_header_footer=True,
                            header_template=capture.header_template,
                            footer_template=footer,
                            margin=ZERO_MARGINS,
                        )
                    finally:
                        page.close()
                finally:
                    browser.close()
        except PlaywrightTimeoutError as e:
            raise RenderFailure(
                f"Timed out after {timeout}ms waiting for page load or fonts", e
            ) from e
        except PlaywrightError as e:
            raise RenderFailure(f"Browser error: {e.message}", e) from e

        _log_info(f"Captured PDF ({len(pdf_bytes)} bytes)")
        return pdf_bytes
