"""Shared fixtures for FOLIO tests."""

import io

import pytest
from PyPDF2 import PdfWriter

from folio.utils import event_logging


@pytest.fixture(autouse=True)
def isolated_event_log(tmp_path, monkeypatch):
    """Keep pipeline events out of the real log directory."""
    events_file = tmp_path / "logs" / "pipeline_events.log"
    monkeypatch.setattr(event_logging, "PIPELINE_EVENTS_FILE", events_file)
    return events_file


@pytest.fixture
def blank_pdf_bytes():
    """A valid two-page PDF."""
    writer = PdfWriter()
    writer.add_blank_page(width=595, height=842)
    writer.add_blank_page(width=595, height=842)
    buf = io.BytesIO()
    writer.write(buf)
    return buf.getvalue()
