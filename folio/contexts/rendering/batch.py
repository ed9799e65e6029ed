"""
Unattended multi-document generation.

Runs matched documents through the generation pipeline. The default is
strictly sequential (one document rendered, compressed and cleaned up before
the next starts); workers > 1 uses a bounded thread pool. Either way results
come back in match order, one per match.
"""

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Union

from folio.contexts.intake.batch import BatchMatch, DocumentRoot, find_matches
from folio.contexts.intake.request import RenderRequest, StudentConfig
from folio.contexts.rendering.logger import _log_error, _log_info, _log_success
from folio.contexts.rendering.pipeline import (
    GenerationPipeline,
    GenerationResult,
    get_default_pipeline,
)
from folio.exceptions import PathTraversalError


@dataclass
class BatchItem:
    relative_path: str
    file_name: str
    result: GenerationResult


@dataclass
class BatchReport:
    items: List[BatchItem] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.result.success)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded


def _generate_one(
    docs: DocumentRoot,
    relative_path: str,
    file_name: str,
    config: StudentConfig,
    pipeline: GenerationPipeline,
) -> BatchItem:
    try:
        content = docs.read_text(relative_path)
    except (OSError, UnicodeDecodeError, PathTraversalError) as e:
        _log_error(f"Could not read {relative_path}: {e}")
        return BatchItem(relative_path, file_name, GenerationResult(success=False, error=str(e)))

    request = RenderRequest(content=content, config=config, filename=file_name)
    return BatchItem(relative_path, file_name, pipeline.generate(request, source="batch"))


def generate_documents(
    root: Union[str, Path],
    relative_paths: Sequence[str],
    config: StudentConfig,
    pipeline: Optional[GenerationPipeline] = None,
    workers: int = 1,
) -> BatchReport:
    """
    Generate PDFs for documents given relative to the documents root.

    Args:
        root: Documents root
        relative_paths: Documents to generate, in order
        config: Student details applied to every document
        pipeline: Generation pipeline (default: process-wide pipeline)
        workers: Documents generated concurrently (1 = sequential)

    Returns:
        BatchReport with one item per document, in input order
    """
    if workers < 1:
        raise ValueError("workers must be at least 1")

    pipeline = pipeline or get_default_pipeline()
    docs = DocumentRoot(root)
    jobs = [(rel, Path(rel).name) for rel in relative_paths]
    total = len(jobs)

    if workers == 1:
        items = []
        for i, (rel, name) in enumerate(jobs, 1):
            _log_info(f"Processing {i}/{total}: {rel}")
            items.append(_generate_one(docs, rel, name, config, pipeline))
    else:
        _log_info(f"Processing {total} documents with {workers} workers")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [
                executor.submit(_generate_one, docs, rel, name, config, pipeline)
                for rel, name in jobs
            ]
            items = [future.result() for future in futures]

    report = BatchReport(items=items)
    _log_success(f"Batch complete: {report.succeeded}/{total} succeeded")
    return report


def generate_batch(
    root: Union[str, Path],
    codes: Sequence[str],
    config: StudentConfig,
    pipeline: Optional[GenerationPipeline] = None,
    workers: int = 1,
    extension: Optional[str] = "md",
) -> BatchReport:
    """Find every document for the given course codes and generate each one."""
    matches: List[BatchMatch] = find_matches(root, codes, extension=extension)
    return generate_documents(
        root, [m.relative_path for m in matches], config, pipeline=pipeline, workers=workers
    )


def generate_folder(
    root: Union[str, Path],
    relative_dir: str,
    config: StudentConfig,
    pipeline: Optional[GenerationPipeline] = None,
    workers: int = 1,
) -> BatchReport:
    """Generate every markdown file directly inside one folder of the documents root."""
    docs = DocumentRoot(root)
    paths = [p.relative_to(docs.root).as_posix() for p in docs.list_markdown(relative_dir)]
    return generate_documents(root, paths, config, pipeline=pipeline, workers=workers)
