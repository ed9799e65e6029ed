"""
Theme persistence and resolution.

Themes are named CSS variants stored per language in a single JSON file:

    {
      "english": {"Default": "...", "Compact": "..."},
      "urdu": {"Default": "..."},
      "activeEnglish": "Compact",
      "activeUrdu": "Default"
    }

The store is one injected object; all reads and writes go through its lock, so
concurrent callers within a process serialize. Separate processes sharing the
same file still race (last writer wins).
"""

import json
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from dotenv import load_dotenv

from folio.contexts.intake.classifier import Direction
from folio.contexts.templating.defaults import (
    DEFAULT_ENGLISH_CSS,
    DEFAULT_THEME_NAME,
    DEFAULT_URDU_CSS,
)
from folio.contexts.templating.logger import (
    _log_debug,
    _log_info,
    _log_warning,
    log_theme_resolved,
)
from folio.exceptions import ProtectedResourceError, ThemeNotFoundError

load_dotenv()
THEME_FILE = Path(os.getenv("FOLIO_THEME_FILE", "themes.json"))

ENGLISH = "english"
URDU = "urdu"

_LANGUAGE_ALIASES = {
    "english": ENGLISH,
    "en": ENGLISH,
    "urdu": URDU,
    "ur": URDU,
}

_DIRECTION_LANGUAGE = {
    Direction.LTR: ENGLISH,
    Direction.RTL: URDU,
}


def normalize_language(lang: Union[str, Direction]) -> str:
    """
    Map a language key, alias or Direction to "english" / "urdu".

    Raises:
        ValueError: If the language is not recognised
    """
    if isinstance(lang, Direction):
        return _DIRECTION_LANGUAGE[lang]
    key = str(lang).strip().lower()
    if key not in _LANGUAGE_ALIASES:
        raise ValueError(f"Unknown theme language '{lang}'. Expected 'english' or 'urdu'")
    return _LANGUAGE_ALIASES[key]


@dataclass
class ThemeSet:
    """
    Named stylesheets per language plus the active name for each.

    A "Default" entry always exists for each language.
    """

    english: Dict[str, str] = field(default_factory=dict)
    urdu: Dict[str, str] = field(default_factory=dict)
    active_english: str = DEFAULT_THEME_NAME
    active_urdu: str = DEFAULT_THEME_NAME

    def themes(self, lang: str) -> Dict[str, str]:
        return self.english if normalize_language(lang) == ENGLISH else self.urdu

    def active(self, lang: str) -> str:
        return self.active_english if normalize_language(lang) == ENGLISH else self.active_urdu

    def set_active(self, lang: str, name: str) -> None:
        if normalize_language(lang) == ENGLISH:
            self.active_english = name
        else:
            self.active_urdu = name

    def to_dict(self) -> dict:
        """Serialize using the persisted (camelCase) key names."""
        return {
            "english": dict(self.english),
            "urdu": dict(self.urdu),
            "activeEnglish": self.active_english,
            "activeUrdu": self.active_urdu,
        }


class ThemeStore:
    """
    Single-writer store for the persisted ThemeSet.

    Every mutation loads the current file, applies the change and rewrites the
    whole file atomically (temp file + replace).

    Example:
        store = ThemeStore(Path("themes.json"))
        store.save("english", "Compact", "body { font-size: 10pt; }")
        store.activate("english", "Compact")
        css = store.resolve(Direction.LTR)
    """

    def __init__(
        self,
        path: Optional[Path] = None,
        english_default: str = DEFAULT_ENGLISH_CSS,
        urdu_default: str = DEFAULT_URDU_CSS,
    ):
        self.path = Path(path) if path is not None else THEME_FILE
        self._defaults = {ENGLISH: english_default, URDU: urdu_default}
        self._lock = threading.RLock()

    def _default_set(self) -> ThemeSet:
        return ThemeSet(
            english={DEFAULT_THEME_NAME: self._defaults[ENGLISH]},
            urdu={DEFAULT_THEME_NAME: self._defaults[URDU]},
        )

    def _read_persisted(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            _log_warning(f"Theme file {self.path} unreadable, reverting to defaults: {e}")
            return {}
        if not isinstance(data, dict):
            _log_warning(f"Theme file {self.path} is not a JSON object, reverting to defaults")
            return {}
        return data

    def load(self) -> ThemeSet:
        """
        Load the persisted ThemeSet, filling anything missing with built-in defaults.

        Never raises for bad data: a malformed file is treated as absent.
        """
        with self._lock:
            data = self._read_persisted()
            themes = self._default_set()

            for lang, key, active_key in (
                (ENGLISH, "english", "activeEnglish"),
                (URDU, "urdu", "activeUrdu"),
            ):
                stored = data.get(key)
                if isinstance(stored, dict) and stored:
                    theme_map = {
                        str(name): css for name, css in stored.items() if isinstance(css, str)
                    }
                    theme_map.setdefault(DEFAULT_THEME_NAME, self._defaults[lang])
                    setattr(themes, key, theme_map)

                active = data.get(active_key)
                theme_map = themes.themes(lang)
                if isinstance(active, str) and active in theme_map:
                    themes.set_active(lang, active)
                elif active:
                    _log_warning(f"Active {lang} theme '{active}' not found, using Default")

            return themes

    def _write(self, themes: ThemeSet) -> None:
        """Rewrite the whole theme file (never appends or patches)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(themes.to_dict(), f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
        _log_debug(f"Theme file written: {self.path}")

    def ensure_initialized(self) -> ThemeSet:
        """Load (defaulting as needed) and write back, so the file always exists after startup."""
        with self._lock:
            themes = self.load()
            self._write(themes)
            return themes

    def resolve(self, direction: Union[str, Direction]) -> str:
        """
        Return the active stylesheet for a direction or language.

        Falls back to the built-in default CSS when the active name has no stored CSS.
        """
        lang = normalize_language(direction)
        themes = self.load()
        name = themes.active(lang)
        css = themes.themes(lang).get(name)
        log_theme_resolved(lang, name, used_default_css=css is None)
        if css is None:
            return self._defaults[lang]
        return css

    def save(self, lang: str, name: str, css: str) -> ThemeSet:
        """Create or replace a named theme."""
        lang = normalize_language(lang)
        if not name:
            raise ValueError("Theme name must not be empty")
        with self._lock:
            themes = self.load()
            themes.themes(lang)[name] = css
            self._write(themes)
        _log_info(f"Saved {lang} theme '{name}'")
        return themes

    def delete(self, lang: str, name: str) -> ThemeSet:
        """
        Remove a named theme. Deleting the active theme re-activates Default.

        Raises:
            ProtectedResourceError: If name is "Default" (nothing is changed)
        """
        lang = normalize_language(lang)
        if name == DEFAULT_THEME_NAME:
            raise ProtectedResourceError("Cannot delete Default")
        with self._lock:
            themes = self.load()
            if themes.themes(lang).pop(name, None) is None:
                _log_debug(f"No {lang} theme named '{name}' to delete")
            if themes.active(lang) == name:
                themes.set_active(lang, DEFAULT_THEME_NAME)
            self._write(themes)
        _log_info(f"Deleted {lang} theme '{name}'")
        return themes

    def activate(self, lang: str, name: str) -> ThemeSet:
        """
        Make a stored theme the active one for its language.

        Raises:
            ThemeNotFoundError: If no theme with that name exists for the language
        """
        lang = normalize_language(lang)
        with self._lock:
            themes = self.load()
            if name not in themes.themes(lang):
                raise ThemeNotFoundError(f"No {lang} theme named '{name}'")
            themes.set_active(lang, name)
            self._write(themes)
        _log_info(f"Activated {lang} theme '{name}'")
        return themes
