"""Integration tests for batch and folder generation."""

import pytest

from folio.contexts.intake.request import StudentConfig
from folio.contexts.rendering.admission import RenderAdmission
from folio.contexts.rendering.batch import generate_batch, generate_documents, generate_folder
from folio.contexts.rendering.pipeline import GenerationPipeline
from folio.contexts.rendering.settings import RenderSettings

from .fakes import FakeEngine, UnavailableCompressor


@pytest.fixture
def docs_root(tmp_path):
    root = tmp_path / "md_storage"
    (root / "semester1").mkdir(parents=True)
    (root / "1423_1.md").write_text("# One", encoding="utf-8")
    (root / "semester1" / "1423_2.md").write_text("# دو", encoding="utf-8")
    (root / "semester1" / "1424_1.md").write_text("# Other", encoding="utf-8")
    (root / "semester1" / "readme.txt").write_text("skip", encoding="utf-8")
    return root


@pytest.fixture
def config():
    return StudentConfig(name="Sara", roll="R-7", semester="Spring")


@pytest.mark.integration
def test_generate_batch(docs_root, config, pipeline, output_root):
    report = generate_batch(docs_root, ["1423"], config, pipeline=pipeline)

    assert report.succeeded == 2
    assert report.failed == 0
    assert {item.file_name for item in report.items} == {"1423_1.md", "1423_2.md"}
    assert (output_root / "Sara" / "1423_1.pdf").exists()
    assert (output_root / "Sara" / "1423_2.pdf").exists()


@pytest.mark.integration
def test_generate_folder(docs_root, config, pipeline):
    report = generate_folder(docs_root, "semester1", config, pipeline=pipeline)
    assert [item.file_name for item in report.items] == ["1423_2.md", "1424_1.md"]
    assert report.succeeded == 2


@pytest.mark.integration
def test_unreadable_document_is_a_failed_item(docs_root, config, pipeline):
    report = generate_documents(
        docs_root, ["1423_1.md", "missing_1.md", "../escape.md"], config, pipeline=pipeline
    )

    assert [item.result.success for item in report.items] == [True, False, False]
    assert report.failed == 2


@pytest.mark.integration
def test_workers_bounded_by_admission(docs_root, config, tmp_path, blank_pdf_bytes, theme_store):
    for i in range(3, 9):
        (docs_root / f"1423_{i}.md").write_text("x", encoding="utf-8")
    engine = FakeEngine(blank_pdf_bytes, delay=0.05)
    pipeline = GenerationPipeline(
        theme_store=theme_store,
        engine=engine,
        compressor=UnavailableCompressor(),
        admission=RenderAdmission(max_concurrent=2, acquire_timeout_s=10),
        settings=RenderSettings(),
        output_root=tmp_path / "out",
        logo_path=None,
    )

    report = generate_batch(docs_root, ["1423"], config, pipeline=pipeline, workers=4)

    assert report.succeeded == 8
    assert engine.max_concurrent <= 2


@pytest.mark.integration
def test_invalid_workers(docs_root, config, pipeline):
    with pytest.raises(ValueError):
        generate_documents(docs_root, [], config, pipeline=pipeline, workers=0)
