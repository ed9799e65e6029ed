"""Fixtures for integration tests."""

import pytest

from folio.contexts.rendering.admission import RenderAdmission
from folio.contexts.rendering.pipeline import GenerationPipeline
from folio.contexts.rendering.settings import RenderSettings
from folio.contexts.templating.themes import ThemeStore

from .fakes import FakeEngine, UnavailableCompressor


@pytest.fixture
def theme_store(tmp_path):
    return ThemeStore(tmp_path / "themes.json")


@pytest.fixture
def fake_engine(blank_pdf_bytes):
    return FakeEngine(blank_pdf_bytes)


@pytest.fixture
def output_root(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def pipeline(theme_store, fake_engine, output_root):
    return GenerationPipeline(
        theme_store=theme_store,
        engine=fake_engine,
        compressor=UnavailableCompressor(),
        admission=RenderAdmission(max_concurrent=2, acquire_timeout_s=5),
        settings=RenderSettings(),
        output_root=output_root,
        logo_path=None,
        strict_identity=False,
    )
