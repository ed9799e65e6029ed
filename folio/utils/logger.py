"""
Session logging for FOLIO (Tier 1, detailed logs).

Every CLI run or server process gets its own session directory under LOGS_PATH
(e.g. outs/logs/render_20251114_123456/render.log) holding a DEBUG-level log that
opens with a provenance header. The console only shows FOLIO_LOG_LEVEL and up.

Context-specific prefixed wrappers live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from folio import __version__
from folio.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
CONSOLE_LEVEL = os.getenv("FOLIO_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {thread.name} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(context_name: str, logs_path: Optional[Path] = None) -> Path:
    """Fresh session directory name, e.g. outs/logs/render_20251114_123456."""
    return (logs_path or LOGS_PATH) / f"{context_name}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    console_level: str = CONSOLE_LEVEL,
    rotation: Optional[str] = None,
) -> Path:
    """
    Route loguru output to a session log file and the console.

    Args:
        context_name: Context identifier, also the log file name ("render", "serve")
        log_dir: Session directory (created if missing)
        extra_provenance: Extra key-value pairs for the provenance header
        console_level: Minimum level echoed to the console
        rotation: loguru rotation rule for long-running processes (e.g. "10 MB")

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=session_log_dir("render"),
            extra_provenance={"Chromium": "/usr/bin/chromium"},
        )
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    # Threads matter here: batch workers and the font server log concurrently
    logger.add(
        log_file,
        format=FILE_FORMAT,
        level="DEBUG",
        encoding="utf-8",
        enqueue=True,
        rotation=rotation,
    )
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)
    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """Write the provenance header: FOLIO version, command line, cwd, Python, extras."""
    logger.info("=" * 80)
    logger.info(f"FOLIO {__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
