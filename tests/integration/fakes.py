"""Test doubles shared by integration tests."""

import threading
import time
from pathlib import Path
from urllib.parse import unquote, urlparse

from folio.exceptions import RenderFailure


class FakeEngine:
    """Render engine stand-in that returns fixed PDF bytes and records documents."""

    def __init__(self, pdf_bytes, delay=0.0, fail_with=None):
        self.pdf_bytes = pdf_bytes
        self.delay = delay
        self.fail_with = fail_with
        self.documents = []
        self.concurrent = 0
        self.max_concurrent = 0
        self._lock = threading.Lock()

    def render(self, document, work_dir, stem):
        with self._lock:
            self.documents.append(document)
            self.concurrent += 1
            self.max_concurrent = max(self.max_concurrent, self.concurrent)
        try:
            if self.delay:
                time.sleep(self.delay)
            if isinstance(self.fail_with, BaseException):
                raise self.fail_with
            if self.fail_with is not None:
                raise RenderFailure(self.fail_with)
            return self.pdf_bytes
        finally:
            with self._lock:
                self.concurrent -= 1


class UnavailableCompressor:
    def compress(self, input_path, output_path):
        return False


class ShrinkingCompressor:
    """Writes a fixed compressed payload and reports success."""

    def __init__(self, payload):
        self.payload = payload

    def compress(self, input_path, output_path):
        output_path.write_bytes(self.payload)
        return True


class FakePage:
    def __init__(self, recorder, fail_on=None, error=None, load_delay=0.0):
        self.recorder = recorder
        self.fail_on = fail_on
        self.error = error
        self.load_delay = load_delay
        self.closed = False

    def _step(self, name, *args, **kwargs):
        self.recorder.calls.append((name, args, kwargs))
        if name == self.fail_on:
            raise self.error

    def goto(self, url, **kwargs):
        if self.load_delay:
            time.sleep(self.load_delay)
        self.recorder.html_seen = Path(unquote(urlparse(url).path)).read_text(encoding="utf-8")
        self._step("goto", url, **kwargs)

    def wait_for_function(self, expression, **kwargs):
        self._step("wait_for_function", expression, **kwargs)

    def pdf(self, **kwargs):
        self._step("pdf", **kwargs)
        return self.recorder.pdf_bytes

    def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.closed = False

    def new_page(self):
        return self.page

    def close(self):
        self.closed = True


class FakePlaywright:
    """Stands in for sync_playwright(): usable as the factory and as the context manager."""

    def __init__(self, fail_on=None, error=None, load_delay=0.0, pdf_bytes=b"%PDF-fake"):
        self.calls = []
        self.launch_kwargs = None
        self.html_seen = None
        self.pdf_bytes = pdf_bytes
        self.page = FakePage(self, fail_on, error, load_delay)
        self.browser = FakeBrowser(self.page)
        self.chromium = self

    def launch(self, **kwargs):
        self.launch_kwargs = kwargs
        return self.browser

    def __call__(self):
        return self

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False
