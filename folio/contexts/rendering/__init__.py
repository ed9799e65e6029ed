"""
Rendering Context

Responsibilities:
- Captures composed HTML to PDF with a headless Chromium (Playwright)
- Discovers the browser executable
- Compresses PDFs with Ghostscript, keeping the original when that is not possible
- Limits concurrent renders
- Runs single and batch generation end to end

Owns: Browser lifecycle, PDF artifacts, temp-file cleanup
Never: Modifies theme data or document content
"""

from folio.contexts.rendering.batch import BatchReport, generate_batch, generate_folder
from folio.contexts.rendering.pipeline import (
    GenerationPipeline,
    GenerationResult,
    generate_pdf,
)

__all__ = [
    "BatchReport",
    "generate_batch",
    "generate_folder",
    "GenerationPipeline",
    "GenerationResult",
    "generate_pdf",
]
