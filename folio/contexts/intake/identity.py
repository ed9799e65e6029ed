"""
Assignment identity from the filename convention.

Assignment files are named <course code>_<assignment number>[anything], e.g.
"1423_2.md" is assignment 2 of course 1423. Filenames that do not follow the
convention fall back to a placeholder course code and assignment 1 unless
strict mode is enabled.
"""

import os
import re
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional

from dotenv import load_dotenv

from folio.contexts.intake.logger import _log_warning
from folio.exceptions import InvalidFilenameError

load_dotenv()
STRICT_FILENAMES = os.getenv("FOLIO_STRICT_FILENAMES", "false").lower() == "true"

IDENTITY_PATTERN = re.compile(r"^(\d+)_(\d+)")

DEFAULT_COURSE_CODE = "----"
DEFAULT_ASSIGNMENT_NUMBER = "1"


@dataclass(frozen=True)
class AssignmentIdentity:
    course_code: str = DEFAULT_COURSE_CODE
    assignment_number: str = DEFAULT_ASSIGNMENT_NUMBER


def parse_identity(filename: Optional[str], strict: Optional[bool] = None) -> AssignmentIdentity:
    """
    Parse course code and assignment number from a filename.

    Both numeric groups are kept verbatim (leading zeros included).

    Args:
        filename: Source filename as supplied by the caller
        strict: Raise instead of defaulting (default: FOLIO_STRICT_FILENAMES env)

    Returns:
        AssignmentIdentity, defaulted to ("----", "1") when the filename does not match

    Raises:
        InvalidFilenameError: If strict and the filename does not match
    """
    if strict is None:
        strict = STRICT_FILENAMES

    match = IDENTITY_PATTERN.match(filename) if filename else None
    if match:
        return AssignmentIdentity(course_code=match.group(1), assignment_number=match.group(2))

    if strict:
        raise InvalidFilenameError(filename or "")

    _log_warning(f"Filename '{filename}' has no course/assignment prefix, using defaults")
    return AssignmentIdentity()


def output_stem(filename: Optional[str], identity: AssignmentIdentity) -> str:
    """
    Base name (without extension) for generated artifacts.

    Strips any directory part and a trailing ".md"; without a filename the stem
    is derived from the assignment number.

    Examples:
        output_stem("1423_1.md", identity)   # "1423_1"
        output_stem("", identity)            # "Assignment_1"
    """
    if not filename:
        return f"Assignment_{identity.assignment_number}"

    name = PurePath(filename.replace("\\", "/")).name
    stem = name[: -len(".md")] if name.endswith(".md") else name
    return stem or f"Assignment_{identity.assignment_number}"
