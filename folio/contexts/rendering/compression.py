"""
PDF compression with Ghostscript.

Subsets fonts to the glyphs actually used (the Nastaliq typeface is large),
compresses font data and deduplicates images. Absence of Ghostscript is a
normal condition: compress() returns False and the caller keeps the
uncompressed PDF.
"""

import shutil
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

from folio.contexts.rendering.logger import _log_debug, _log_info, _log_warning
from folio.contexts.rendering.settings import CompressionSettings


def _flag(enabled: bool) -> str:
    return "true" if enabled else "false"


class Compressor:
    """
    Ghostscript-backed PDF compressor.

    The `which` and `run` callables are injectable so the availability check and the
    invocation can be tested without Ghostscript installed.
    """

    def __init__(
        self,
        settings: Optional[CompressionSettings] = None,
        which: Callable[[str], Optional[str]] = shutil.which,
        run: Callable = subprocess.run,
    ):
        self.settings = settings or CompressionSettings()
        self._which = which
        self._run = run

    def is_available(self) -> bool:
        """Is compression enabled and the Ghostscript binary on PATH?"""
        return self.settings.enabled and self._which(self.settings.binary) is not None

    def command(self, input_path: Path, output_path: Path) -> List[str]:
        s = self.settings
        return [
            s.binary,
            "-sDEVICE=pdfwrite",
            f"-dCompatibilityLevel={s.compatibility_level}",
            f"-dPDFSETTINGS={s.pdf_settings}",
            f"-dSubsetFonts={_flag(s.subset_fonts)}",
            f"-dCompressFonts={_flag(s.compress_fonts)}",
            f"-dDetectDuplicateImages={_flag(s.detect_duplicate_images)}",
            "-dNOPAUSE",
            "-dQUIET",
            "-dBATCH",
            f"-sOutputFile={output_path}",
            str(input_path),
        ]

    def compress(self, input_path: Path, output_path: Path) -> bool:
        """
        Compress input_path into output_path.

        Returns:
            True if a compressed file was written, False if skipped or failed
            (any partial output is removed)
        """
        if not self.is_available():
            _log_info("Ghostscript not found, skipping compression")
            return False

        input_path, output_path = Path(input_path), Path(output_path)
        cmd = self.command(input_path, output_path)
        _log_debug(f"Compressing: {' '.join(cmd)}")

        try:
            result = self._run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=self.settings.timeout_s,
            )
        except (OSError, subprocess.SubprocessError) as e:
            _log_warning(f"Compression error: {e}")
            self._discard(output_path)
            return False

        if result.returncode != 0:
            _log_warning(f"Compression failed (exit {result.returncode}): {result.stderr.strip()}")
            self._discard(output_path)
            return False

        if not output_path.exists() or output_path.stat().st_size == 0:
            _log_warning("Compression produced no output")
            self._discard(output_path)
            return False

        _log_info(
            f"Compressed {input_path.stat().st_size} -> {output_path.stat().st_size} bytes"
        )
        return True

    @staticmethod
    def _discard(path: Path) -> None:
        if path.exists():
            path.unlink()
