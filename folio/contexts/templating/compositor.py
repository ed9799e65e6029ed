"""
HTML composition for FOLIO documents.

Builds one self-contained HTML document from the base layout CSS, the resolved
theme CSS, the rendered markdown body and the cover-page fields.

Cover labels and values are autoescaped by Jinja2; the body (already rendered
markup) and the stylesheets are inserted as-is. All substitution happens in a
single template pass, so text in one field can never be mistaken for another
field's placeholder.
"""

import base64
import mimetypes
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template
from markupsafe import Markup

from folio.contexts.intake.identity import AssignmentIdentity
from folio.contexts.intake.request import StudentConfig
from folio.contexts.templating.logger import _log_debug, log_composed
from folio.contexts.templating.profiles import DirectionProfile

load_dotenv()
INSTITUTION_NAME = os.getenv("FOLIO_INSTITUTION_NAME", "Allama Iqbal Open University,")
INSTITUTION_CITY = os.getenv("FOLIO_INSTITUTION_CITY", "Islamabad")
FALLBACK_LOGO_URL = os.getenv(
    "FOLIO_FALLBACK_LOGO_URL",
    "https://upload.wikimedia.org/wikipedia/en/e/e4/Allama_Iqbal_Open_University_logo.png",
)

TEMPLATES_PATH = Path(__file__).parent / "templates"
DOCUMENT_TEMPLATE = "document.html.jinja"
BASE_CSS_FILE = "base.css"


@dataclass(frozen=True)
class ComposedDocument:
    """
    Fully assembled document handed to the Render Engine.

    Attributes:
        html: Self-contained HTML (CSS inlined, logo inlined or remote)
        footer: Footer markup with pageNumber/totalPages placeholders
        lang_code: Document language code
        title_line: Cover title, kept for logging
    """

    html: str
    footer: str
    lang_code: str
    title_line: str


class DocumentTemplates:
    """Loads and caches the document template and base stylesheet."""

    def __init__(self, templates_path: Path = TEMPLATES_PATH):
        self.templates_path = templates_path
        self.env = Environment(
            loader=FileSystemLoader(str(templates_path)),
            autoescape=True,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )
        self._base_css: Optional[str] = None

    def document(self) -> Template:
        return self.env.get_template(DOCUMENT_TEMPLATE)

    @property
    def base_css(self) -> str:
        if self._base_css is None:
            self._base_css = (self.templates_path / BASE_CSS_FILE).read_text(encoding="utf-8")
        return self._base_css


_TEMPLATES: Optional[DocumentTemplates] = None


def _get_templates() -> DocumentTemplates:
    global _TEMPLATES
    if _TEMPLATES is None:
        _TEMPLATES = DocumentTemplates()
    return _TEMPLATES


def _stylesheet(css: str) -> Markup:
    """Mark CSS safe for a <style> element, neutralizing any closing tag inside it."""
    return Markup((css or "").replace("</", "<\\/"))


def resolve_logo_src(logo_path: Optional[Path], fallback_url: str = FALLBACK_LOGO_URL) -> str:
    """
    Resolve the cover logo to an image source before composition.

    Args:
        logo_path: Local logo image; embedded as a base64 data URI when it exists
        fallback_url: Remote logo used when there is no local file

    Returns:
        Data URI or the fallback URL
    """
    if logo_path is not None and Path(logo_path).is_file():
        mime_type = mimetypes.guess_type(str(logo_path))[0] or "image/png"
        encoded = base64.b64encode(Path(logo_path).read_bytes()).decode("ascii")
        _log_debug(f"Embedding logo from {logo_path}")
        return f"data:{mime_type};base64,{encoded}"
    return fallback_url


def cover_fields(
    profile: DirectionProfile, identity: AssignmentIdentity, config: StudentConfig
) -> List[Tuple[str, str]]:
    """
    Label/value rows for the cover table.

    RTL documents prefer the localized config values when present. The course
    code always comes from the filename identity.
    """
    if profile.is_rtl:
        name = config.name_localized or config.name
        roll = config.roll_localized or config.roll
        semester = config.semester_localized or config.semester
    else:
        name, roll, semester = config.name, config.roll, config.semester

    labels = profile.labels
    return [
        (labels.name, name or ""),
        (labels.roll, roll or ""),
        (labels.course, identity.course_code or ""),
        (labels.semester, semester or ""),
    ]


def compose(
    profile: DirectionProfile,
    theme_css: str,
    body_html: str,
    identity: AssignmentIdentity,
    config: StudentConfig,
    logo_src: str,
    institution_name: str = INSTITUTION_NAME,
    institution_city: str = INSTITUTION_CITY,
) -> ComposedDocument:
    """
    Compose the complete HTML document for one assignment.

    Args:
        profile: Direction profile for the document
        theme_css: Resolved theme stylesheet
        body_html: Rendered markdown body (inserted without escaping)
        identity: Course code and assignment number
        config: Student cover-page details
        logo_src: Data URI or URL for the cover logo

    Returns:
        ComposedDocument with HTML and footer markup
    """
    templates = _get_templates()
    title_line = profile.title_line(identity.assignment_number)

    html = templates.document().render(
        lang_code=profile.lang_code,
        base_css=_stylesheet(templates.base_css),
        theme_css=_stylesheet(theme_css),
        logo_src=logo_src,
        institution_name=institution_name,
        institution_city=institution_city,
        title_line=title_line,
        fields=cover_fields(profile, identity, config),
        body_html=Markup(body_html or ""),
    )
    log_composed(title_line, profile.lang_code, len(html), logo_src.startswith("data:"))

    return ComposedDocument(
        html=html,
        footer=profile.footer_template,
        lang_code=profile.lang_code,
        title_line=title_line,
    )
