"""Integration tests for the render engine against a scripted Playwright stand-in."""

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from folio.contexts.rendering.discovery import BrowserDiscovery
from folio.contexts.rendering.engine import FONTS_SETTLED, ZERO_MARGINS, RenderEngine
from folio.contexts.rendering.settings import RenderSettings
from folio.contexts.templating.compositor import ComposedDocument
from folio.exceptions import RenderFailure

from .fakes import FakePlaywright

DOCUMENT = ComposedDocument(
    html="<html><body>hello</body></html>",
    footer="<div>Page <span class=\"pageNumber\"></span></div>",
    lang_code="en",
    title_line="ASSIGNMENT 1",
)


def _engine(fake, **settings_overrides):
    settings = RenderSettings()
    for key, value in settings_overrides.items():
        setattr(settings.capture, key, value)
    discovery = BrowserDiscovery(explicit_path="/usr/bin/chromium")
    return RenderEngine(settings, discovery=discovery, playwright_factory=fake)


@pytest.mark.integration
def test_render_captures_pdf(tmp_path):
    fake = FakePlaywright()

    pdf = _engine(fake, timeout_ms=1234).render(DOCUMENT, tmp_path, "1423_1")

    assert pdf == b"%PDF-fake"
    assert fake.html_seen == DOCUMENT.html
    assert fake.launch_kwargs["executable_path"] == "/usr/bin/chromium"
    assert "--no-sandbox" in fake.launch_kwargs["args"]

    names = [name for name, _, _ in fake.calls]
    assert names == ["goto", "wait_for_function", "pdf"]
    _, _, goto_kwargs = fake.calls[0]
    assert goto_kwargs == {"wait_until": "networkidle", "timeout": 1234}
    _, wait_args, _ = fake.calls[1]
    assert wait_args == (FONTS_SETTLED,)
    _, _, pdf_kwargs = fake.calls[2]
    assert pdf_kwargs["format"] == "A4"
    assert pdf_kwargs["margin"] == ZERO_MARGINS
    assert pdf_kwargs["footer_template"] == DOCUMENT.footer
    assert pdf_kwargs["display_header_footer"] is True

    assert fake.page.closed and fake.browser.closed
    assert list(tmp_path.glob("temp_1423_1.*.html")) == []


@pytest.mark.integration
def test_font_timeout_becomes_render_failure(tmp_path):
    fake = FakePlaywright(
        fail_on="wait_for_function", error=PlaywrightTimeoutError("Timeout 10ms exceeded")
    )

    with pytest.raises(RenderFailure, match="Timed out"):
        _engine(fake, timeout_ms=10).render(DOCUMENT, tmp_path, "1423_1")

    assert fake.page.closed and fake.browser.closed
    assert list(tmp_path.glob("temp_1423_1.*.html")) == []


@pytest.mark.integration
def test_browser_error_becomes_render_failure(tmp_path):
    fake = FakePlaywright(fail_on="pdf", error=PlaywrightError("Target closed"))

    with pytest.raises(RenderFailure, match="Browser error: Target closed") as exc_info:
        _engine(fake).render(DOCUMENT, tmp_path, "1423_1")

    assert isinstance(exc_info.value.original_error, PlaywrightError)
    assert fake.browser.closed
    assert list(tmp_path.iterdir()) == []


@pytest.mark.integration
def test_sandbox_setting():
    settings = RenderSettings()
    settings.browser.disable_sandbox = False
    settings.browser.extra_args = ["--disable-gpu"]
    engine = RenderEngine(settings, discovery=BrowserDiscovery())

    assert engine.launch_args() == ["--disable-gpu"]


@pytest.mark.integration
def test_unencodable_text_is_replaced(tmp_path):
    fake = FakePlaywright()
    document = ComposedDocument(
        html="<p>Hello \ud800</p>", footer="", lang_code="en", title_line="ASSIGNMENT 1"
    )

    assert _engine(fake).render(document, tmp_path, "1423_1") == b"%PDF-fake"
    assert fake.html_seen == "<p>Hello ?</p>"
    assert list(tmp_path.iterdir()) == []


@pytest.mark.integration
def test_temp_html_names_are_unique(tmp_path):
    seen = []

    class RecordingPlaywright(FakePlaywright):
        def launch(self, **kwargs):
            seen.extend(p.name for p in tmp_path.glob("temp_1423_1.*.html"))
            return super().launch(**kwargs)

    engine = RenderEngine(
        RenderSettings(),
        discovery=BrowserDiscovery(),
        playwright_factory=lambda: RecordingPlaywright(),
    )
    engine.render(DOCUMENT, tmp_path, "1423_1")
    engine.render(DOCUMENT, tmp_path, "1423_1")

    assert len(seen) == 2
    assert seen[0] != seen[1]
