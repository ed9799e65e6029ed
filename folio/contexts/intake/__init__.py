"""
Intake Context

Responsibilities:
- Represents inbound render requests and student cover-page details
- Classifies script direction from raw document text
- Parses assignment identity from the filename convention
- Discovers batch documents under the documents root

Owns: Request data model, direction classification, filename conventions, document discovery
Never: Produces markup or touches the browser
"""

from folio.contexts.intake.batch import BatchMatch, DocumentRoot, find_matches
from folio.contexts.intake.classifier import Direction, classify, requires_rtl
from folio.contexts.intake.identity import AssignmentIdentity, output_stem, parse_identity
from folio.contexts.intake.request import RenderRequest, StudentConfig

__all__ = [
    "BatchMatch",
    "DocumentRoot",
    "find_matches",
    "Direction",
    "classify",
    "requires_rtl",
    "AssignmentIdentity",
    "output_stem",
    "parse_identity",
    "RenderRequest",
    "StudentConfig",
]
