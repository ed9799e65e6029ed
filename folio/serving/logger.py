"""
Serving logger.

Provides logging interface for the HTTP surface with automatic [serve] prefix.
"""

from pathlib import Path

from loguru import logger

from folio.utils.logger import session_log_dir
from folio.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[serve]"

# The API process runs for days on a phone; keep its log bounded
SERVE_LOG_ROTATION = "10 MB"


def setup_serving_logger(api_port: int, font_port: int, log_dir: Path = None) -> Path:
    """Setup logger for a server session (rotating log file)."""
    return _setup_logger(
        context_name="serve",
        log_dir=log_dir or session_log_dir("serve"),
        extra_provenance={"API port": api_port, "Font port": font_port},
        rotation=SERVE_LOG_ROTATION,
    )


def _log_info(message: str) -> None:
    """Log info message with [serve] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [serve] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [serve] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")
