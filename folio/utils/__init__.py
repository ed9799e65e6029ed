"""
Shared utilities for FOLIO.

Common functionality used across contexts:
- Logging setup and pipeline event log
- Markdown rendering
- Timestamps
- PDF inspection
"""

from folio.utils.markdown import render_markdown
from folio.utils.timestamp import format_timestamp, now, now_exact

__all__ = ["render_markdown", "format_timestamp", "now", "now_exact"]
