"""
Templating Context

Responsibilities:
- Bundles per-direction labels, ordinals, footer markup and default CSS (DirectionProfile)
- Persists and resolves named CSS themes per language
- Composes the self-contained HTML document (cover page + rendered body)
- Resolves the cover logo before composition

Owns: Theme storage, direction profiles, HTML composition
Never: Launches browsers or runs external processes
"""

from folio.contexts.templating.compositor import ComposedDocument, compose, resolve_logo_src
from folio.contexts.templating.profiles import DirectionProfile, profile_for
from folio.contexts.templating.themes import ThemeSet, ThemeStore

__all__ = [
    "ComposedDocument",
    "compose",
    "resolve_logo_src",
    "DirectionProfile",
    "profile_for",
    "ThemeSet",
    "ThemeStore",
]
