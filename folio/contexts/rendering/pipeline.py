"""
End-to-end PDF generation.

Orchestrates one request through every stage:

    classify -> resolve theme -> render markdown -> compose HTML
             -> capture PDF (browser) -> compress (or keep uncompressed)

Artifacts for a request live in <output root>/<student name>/:
    temp_<stem>.<random>.html          removed by the Render Engine on every path
    uncompressed_<stem>.<random>.pdf   removed on every path (or renamed to the final PDF)
    compressed_<stem>.<random>.pdf     removed on every path (or renamed to the final PDF)
    <stem>.pdf                         the final artifact, replaced atomically

The random infix keeps concurrent requests for the same document apart.
"""

import os
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from folio.contexts.intake.classifier import Direction, classify
from folio.contexts.intake.identity import output_stem, parse_identity
from folio.contexts.intake.request import RenderRequest
from folio.contexts.rendering.admission import RenderAdmission
from folio.contexts.rendering.compression import Compressor
from folio.contexts.rendering.engine import RenderEngine
from folio.contexts.rendering.logger import (
    _log_debug,
    _log_exception,
    log_generation_result,
    log_generation_start,
)
from folio.contexts.rendering.settings import RenderSettings, load_render_settings
from folio.contexts.templating.compositor import compose, resolve_logo_src
from folio.contexts.templating.profiles import profile_for
from folio.contexts.templating.themes import ThemeStore
from folio.exceptions import FolioError
from folio.utils.event_logging import (
    GENERATION_COMPLETED,
    GENERATION_FAILED,
    GENERATION_STARTED,
    log_pipeline_event,
)
from folio.utils.markdown import render_markdown
from folio.utils.pdf_processing import page_count
from folio.utils.temp_files import reserve_temp_path

load_dotenv()
OUTPUT_PATH = os.getenv("FOLIO_OUTPUT_PATH")
ANDROID_STORAGE_PATH = Path(os.getenv("FOLIO_ANDROID_STORAGE", "/sdcard"))
LOGO_PATH = Path(os.getenv("FOLIO_LOGO_PATH", "logo.png"))


@dataclass
class GenerationResult:
    """
    Result of one generation request.

    Attributes:
        success: Whether a final PDF was written
        path: Final PDF path (None if failed)
        error: Failure message (None on success)
        direction: Direction the document was rendered in
        compressed: Whether Ghostscript produced the final PDF
        page_count: Pages in the final PDF (None if unreadable)
        elapsed_s: Wall-clock time for the whole request
    """

    success: bool
    path: Optional[Path] = None
    error: Optional[str] = None
    direction: Optional[Direction] = None
    compressed: bool = False
    page_count: Optional[int] = None
    elapsed_s: float = 0.0

    def to_dict(self) -> dict:
        """Wire format for the inbound API."""
        if self.success:
            return {"success": True, "path": str(self.path)}
        return {"success": False, "error": self.error}


def default_output_root() -> Path:
    """FOLIO_OUTPUT_PATH if set, else shared Android storage when present, else ./Generated_Assignments."""
    if OUTPUT_PATH:
        return Path(OUTPUT_PATH)
    if ANDROID_STORAGE_PATH.exists():
        return ANDROID_STORAGE_PATH
    return Path("Generated_Assignments")


def safe_dirname(name: Optional[str]) -> str:
    """Folder name for a student: every character outside [A-Za-z0-9] becomes '_'."""
    return re.sub(r"[^A-Za-z0-9]", "_", name or "Student")


class GenerationPipeline:
    """
    Holds the collaborators for PDF generation and runs requests through them.

    Every collaborator is injectable; omitted ones are built from settings.

    Example:
        pipeline = GenerationPipeline(output_root=Path("out"))
        result = pipeline.generate(RenderRequest(content="# Title", filename="1423_1.md"))
    """

    def __init__(
        self,
        theme_store: Optional[ThemeStore] = None,
        engine: Optional[RenderEngine] = None,
        compressor: Optional[Compressor] = None,
        admission: Optional[RenderAdmission] = None,
        settings: Optional[RenderSettings] = None,
        output_root: Optional[Path] = None,
        logo_path: Optional[Path] = LOGO_PATH,
        strict_identity: Optional[bool] = None,
    ):
        self.settings = settings or load_render_settings()
        self.theme_store = theme_store or ThemeStore()
        self.engine = engine or RenderEngine(self.settings)
        self.compressor = compressor or Compressor(self.settings.compression)
        self.admission = admission or RenderAdmission.from_settings(self.settings.admission)
        self.output_root = Path(output_root) if output_root is not None else default_output_root()
        self.logo_path = logo_path
        self.strict_identity = strict_identity

    def generate(self, request: RenderRequest, source: str = "pipeline") -> GenerationResult:
        """
        Generate the PDF for one request.

        Never raises: render errors, strict filename rejection, filesystem
        errors and unexpected exceptions all come back as success=False.
        """
        start_time = time.time()
        filename = request.filename
        scratch: List[Path] = []
        direction: Optional[Direction] = None

        log_pipeline_event(event_type=GENERATION_STARTED, document=filename, source=source)

        try:
            identity = parse_identity(filename, strict=self.strict_identity)
            direction = classify(request.content)
            profile = profile_for(direction)

            document = compose(
                profile=profile,
                theme_css=self.theme_store.resolve(direction),
                body_html=render_markdown(request.content),
                identity=identity,
                config=request.config,
                logo_src=resolve_logo_src(self.logo_path),
            )

            save_dir = self.output_root / safe_dirname(request.config.name)
            save_dir.mkdir(parents=True, exist_ok=True)
            stem = output_stem(filename, identity)
            log_generation_start(filename, direction.value, document.title_line, save_dir)

            with self.admission.slot():
                pdf_bytes = self.engine.render(document, save_dir, stem)

            final_pdf = save_dir / f"{stem}.pdf"
            temp_pdf = reserve_temp_path(save_dir, prefix=f"uncompressed_{stem}.", suffix=".pdf")
            scratch.append(temp_pdf)
            temp_pdf.write_bytes(pdf_bytes)

            compressed_pdf = reserve_temp_path(save_dir, prefix=f"compressed_{stem}.", suffix=".pdf")
            scratch.append(compressed_pdf)
            compressed = self.compressor.compress(temp_pdf, compressed_pdf)
            if compressed:
                os.replace(compressed_pdf, final_pdf)
            else:
                os.replace(temp_pdf, final_pdf)
                _log_debug("Kept uncompressed PDF")

            result = GenerationResult(
                success=True,
                path=final_pdf,
                direction=direction,
                compressed=compressed,
                page_count=page_count(final_pdf),
                elapsed_s=time.time() - start_time,
            )
        except (FolioError, OSError) as e:
            result = GenerationResult(
                success=False,
                error=str(e),
                direction=direction,
                elapsed_s=time.time() - start_time,
            )
        except Exception as e:
            _log_exception(f"Unexpected error generating {filename or '(unnamed)'}")
            result = GenerationResult(
                success=False,
                error=f"{type(e).__name__}: {e}",
                direction=direction,
                elapsed_s=time.time() - start_time,
            )
        finally:
            for path in scratch:
                if path.exists():
                    path.unlink()

        log_generation_result(filename, result)
        if result.success:
            log_pipeline_event(
                event_type=GENERATION_COMPLETED,
                document=filename,
                source=source,
                path=str(result.path),
                direction=direction.value,
                compressed=result.compressed,
                page_count=result.page_count,
                elapsed_s=round(result.elapsed_s, 2),
            )
        else:
            log_pipeline_event(
                event_type=GENERATION_FAILED,
                document=filename,
                source=source,
                error=result.error,
                elapsed_s=round(result.elapsed_s, 2),
            )

        return result


_DEFAULT_PIPELINE: Optional[GenerationPipeline] = None


def get_default_pipeline() -> GenerationPipeline:
    """Process-wide pipeline built from environment and packaged settings."""
    global _DEFAULT_PIPELINE
    if _DEFAULT_PIPELINE is None:
        _DEFAULT_PIPELINE = GenerationPipeline()
    return _DEFAULT_PIPELINE


def generate_pdf(
    request: RenderRequest,
    pipeline: Optional[GenerationPipeline] = None,
    source: str = "pipeline",
) -> GenerationResult:
    """Generate one PDF with the given (or default) pipeline."""
    return (pipeline or get_default_pipeline()).generate(request, source=source)
