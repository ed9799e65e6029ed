"""
Script direction classification.

A document needs the right-to-left profile as soon as it contains a single
Arabic-script code point; everything else (including empty input) is left-to-right.
"""

import re
from enum import Enum
from typing import Optional

# Arabic (U+0600-U+06FF) and Arabic Supplement (U+0750-U+077F)
ARABIC_SCRIPT_PATTERN = re.compile(r"[\u0600-\u06FF\u0750-\u077F]")


class Direction(str, Enum):
    LTR = "ltr"
    RTL = "rtl"


def requires_rtl(text: Optional[str]) -> bool:
    """Return True if text contains any Arabic or Arabic Supplement code point."""
    if not text:
        return False
    return ARABIC_SCRIPT_PATTERN.search(text) is not None


def classify(text: Optional[str]) -> Direction:
    """Classify raw document text into a script direction."""
    return Direction.RTL if requires_rtl(text) else Direction.LTR
