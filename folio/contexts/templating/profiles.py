"""
Direction profiles.

Everything that differs between left-to-right (English) and right-to-left
(Urdu) documents lives on one DirectionProfile, resolved once per request:
cover labels, assignment title wording, footer markup and the default theme.

Footers use Chromium's print placeholders: elements with class "pageNumber"
and "totalPages" are filled in per physical page at capture time.
"""

from dataclasses import dataclass, field
from typing import Dict

from folio.contexts.intake.classifier import Direction
from folio.contexts.templating.defaults import (
    DEFAULT_ENGLISH_CSS,
    DEFAULT_URDU_CSS,
    URDU_FONT_FAMILY,
)


@dataclass(frozen=True)
class FieldLabels:
    name: str
    roll: str
    course: str
    semester: str


@dataclass(frozen=True)
class DirectionProfile:
    """
    Direction-specific bundle of labels, title wording, footer and default CSS.

    Attributes:
        direction: Direction this profile renders
        lang_code: Value for the html lang attribute
        theme_language: Key of the theme map in the ThemeSet ("english" / "urdu")
        labels: Cover-page field labels
        title_prefix: Word preceding the assignment number on the cover
        ordinals: Assignment number -> ordinal word (numbers not listed pass through)
        footer_template: Footer markup handed to the PDF capture
        default_css: Built-in theme used when no stored theme applies
    """

    direction: Direction
    lang_code: str
    theme_language: str
    labels: FieldLabels
    title_prefix: str
    footer_template: str
    default_css: str
    ordinals: Dict[str, str] = field(default_factory=dict)

    @property
    def is_rtl(self) -> bool:
        return self.direction is Direction.RTL

    def ordinal(self, number: str) -> str:
        """Map an assignment number through the ordinal table, passing unknown numbers through."""
        return self.ordinals.get(number, number)

    def title_line(self, number: str) -> str:
        """Cover title, e.g. 'ASSIGNMENT 2' or 'اسائنمنٹ دوم'."""
        return f"{self.title_prefix} {self.ordinal(number)}"


LTR_FOOTER = """
    <div style="width:100%; text-align:center; font-size:10px; color:#555; padding-top:20px; font-family:sans-serif;">
        Page <span class="pageNumber"></span> of <span class="totalPages"></span>
    </div>"""

RTL_FOOTER = f"""
    <div style="width:100%; text-align:center; font-size:14px; color:#000; padding-top:20px; font-family:'{URDU_FONT_FAMILY}', serif; direction:rtl;">
        صفحہ نمبر <span class="pageNumber"></span>
    </div>"""

URDU_ORDINALS = {
    "1": "اول",
    "2": "دوم",
    "3": "سوم",
    "4": "چہارم",
    "5": "پنجم",
}

LTR_PROFILE = DirectionProfile(
    direction=Direction.LTR,
    lang_code="en",
    theme_language="english",
    labels=FieldLabels(
        name="Submitted By",
        roll="Registration Number",
        course="Course Code",
        semester="Semester",
    ),
    title_prefix="ASSIGNMENT",
    footer_template=LTR_FOOTER,
    default_css=DEFAULT_ENGLISH_CSS,
)

RTL_PROFILE = DirectionProfile(
    direction=Direction.RTL,
    lang_code="ur",
    theme_language="urdu",
    labels=FieldLabels(
        name="نام طالب علم",
        roll="رجسٹریشن نمبر",
        course="کورس کوڈ",
        semester="سمسٹر",
    ),
    title_prefix="اسائنمنٹ",
    footer_template=RTL_FOOTER,
    default_css=DEFAULT_URDU_CSS,
    ordinals=URDU_ORDINALS,
)

PROFILES = {
    Direction.LTR: LTR_PROFILE,
    Direction.RTL: RTL_PROFILE,
}


def profile_for(direction: Direction) -> DirectionProfile:
    return PROFILES[direction]
