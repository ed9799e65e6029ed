"""
Render request data structures.

StudentConfig accepts both snake_case keys and the camelCase keys sent by the
browser front end (nameUrdu / nameLocalized, etc.).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Wire-format aliases for the localized cover fields
_LOCALIZED_ALIASES = {
    "name_localized": ("name_localized", "nameLocalized", "nameUrdu"),
    "roll_localized": ("roll_localized", "rollLocalized", "rollUrdu"),
    "semester_localized": ("semester_localized", "semesterLocalized", "semesterUrdu"),
}


def _first_present(data: Dict[str, Any], keys) -> Optional[str]:
    for key in keys:
        value = data.get(key)
        if value is not None and value != "":
            return str(value)
    return None


@dataclass
class StudentConfig:
    """
    Cover-page details for the submitting student.

    Attributes:
        name: Student name
        roll: Registration (roll) number
        semester: Semester label
        name_localized: Name in the document's script, used for RTL documents
        roll_localized: Registration number in the document's script
        semester_localized: Semester in the document's script
    """

    name: Optional[str] = None
    roll: Optional[str] = None
    semester: Optional[str] = None
    name_localized: Optional[str] = None
    roll_localized: Optional[str] = None
    semester_localized: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "StudentConfig":
        """Build a config from a JSON-style dict, tolerating missing keys and None."""
        data = data or {}
        return cls(
            name=_first_present(data, ("name",)),
            roll=_first_present(data, ("roll",)),
            semester=_first_present(data, ("semester",)),
            **{
                field_name: _first_present(data, aliases)
                for field_name, aliases in _LOCALIZED_ALIASES.items()
            },
        )


@dataclass
class RenderRequest:
    """One document to render; constructed per call and never persisted."""

    content: str = ""
    config: StudentConfig = field(default_factory=StudentConfig)
    filename: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RenderRequest":
        return cls(
            content=data.get("content") or "",
            config=StudentConfig.from_dict(data.get("config")),
            filename=data.get("filename") or "",
        )
