"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import session_log_dir
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path = None, chromium_path: str = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session (default: new render_<timestamp> dir)
        chromium_path: Resolved browser executable, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir or session_log_dir("render"),
        extra_provenance={"Chromium": chromium_path or "playwright bundled"},
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_exception(message: str) -> None:
    """Log error with traceback (call from an except block)."""
    logger.exception(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_generation_start(filename: str, direction: str, title_line: str, output_dir: Path) -> None:
    """Log start of a generation with context."""
    _log_info(f"Generating: {filename or '(unnamed)'}")
    _log_debug(f"  Direction: {direction}")
    _log_debug(f"  Title: {title_line}")
    _log_debug(f"  Output: {output_dir}")


def log_generation_result(filename: str, result, verbose: bool = False) -> None:
    """
    Log generation result.

    Args:
        filename: Source document filename
        result: GenerationResult from generate_pdf()
        verbose: Also log page count and compression details at info level
    """
    name = filename or "(unnamed)"
    if result.success:
        _log_success(f"{name}: PDF written ({result.elapsed_s:.2f}s)")
        detail = _log_info if verbose else _log_debug
        detail(f"  PDF: {result.path}")
        detail(f"  Compressed: {result.compressed}")
        if result.page_count is not None:
            detail(f"  Pages: {result.page_count}")
    else:
        _log_error(f"{name}: generation failed ({result.elapsed_s:.2f}s)")
        _log_error(f"  {result.error}")
