"""
Generation event log for FOLIO (Tier 2 logging).

Appends one JSON object per line to the pipeline event log so that generation
history can be filtered by event type, document or entry point without parsing
loguru output. Detailed per-session logs (Tier 1) come from folio.utils.logger.

Usage:
    from folio.utils.event_logging import log_pipeline_event

    log_pipeline_event(
        event_type="generation_completed",
        document="1423_1.md",
        source="api",
        path="Generated_Assignments/Ali/1423_1.pdf",
    )
"""

import json
import os
from pathlib import Path
from typing import Iterator, Optional

from dotenv import load_dotenv

from folio.utils.timestamp import now_exact

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))
PIPELINE_EVENTS_FILE = Path(
    os.getenv("PIPELINE_EVENTS_FILE", str(LOGS_PATH / "pipeline_events.log"))
)

# Event types written by the generation pipeline
GENERATION_STARTED = "generation_started"
GENERATION_COMPLETED = "generation_completed"
GENERATION_FAILED = "generation_failed"


def log_pipeline_event(event_type: str, document: str, source: str, **extra_fields) -> None:
    """
    Append an event to the pipeline event log.

    Args:
        event_type: One of the GENERATION_* event types
        document: Source document filename ("" for unnamed requests)
        source: Entry point that triggered the generation ("api", "cli", "batch", ...)
        **extra_fields: Event-specific fields (path, error, elapsed_s, ...)
    """
    PIPELINE_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "document": document,
        "source": source,
        **extra_fields,
    }

    # ensure_ascii=False keeps Urdu filenames and errors readable in the log
    with open(PIPELINE_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, ensure_ascii=False) + "\n")


def _read_events() -> Iterator[dict]:
    if not PIPELINE_EVENTS_FILE.exists():
        return
    with open(PIPELINE_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                yield json.loads(line)
            except json.JSONDecodeError:
                continue


def get_recent_events(
    n: int = 10,
    document: Optional[str] = None,
    event_type: Optional[str] = None,
    source: Optional[str] = None,
) -> list[dict]:
    """
    Last n events matching every given filter, oldest first.

    Args:
        n: Maximum number of events
        document: Only events for this filename
        event_type: Only events of this type
        source: Only events from this entry point
    """
    filters = {"document": document, "event_type": event_type, "source": source}
    active = {key: value for key, value in filters.items() if value}

    matching = [
        event
        for event in _read_events()
        if all(event.get(key) == value for key, value in active.items())
    ]
    return matching[-n:]
