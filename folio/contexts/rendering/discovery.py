"""
Browser executable discovery.

Search order:
    1. Explicit path (CHROMIUM_PATH env, then settings.browser.executable_path)
    2. First candidate name found on PATH
    3. First fallback path that exists (e.g. the Termux Chromium location)
    4. None - Playwright launches its bundled browser and reports any error itself

The `which` and `exists` callables are injectable so discovery can be tested
without touching the host.
"""

import os
import shutil
from typing import Callable, Optional, Sequence

from dotenv import load_dotenv

from folio.contexts.rendering.logger import _log_debug
from folio.contexts.rendering.settings import BrowserSettings

load_dotenv()


class BrowserDiscovery:
    def __init__(
        self,
        explicit_path: Optional[str] = None,
        candidates: Sequence[str] = (),
        fallback_paths: Sequence[str] = (),
        which: Callable[[str], Optional[str]] = shutil.which,
        exists: Callable[[str], bool] = os.path.exists,
    ):
        self.explicit_path = explicit_path
        self.candidates = list(candidates)
        self.fallback_paths = list(fallback_paths)
        self._which = which
        self._exists = exists

    @classmethod
    def from_settings(cls, settings: BrowserSettings, **kwargs) -> "BrowserDiscovery":
        """Build discovery from settings; CHROMIUM_PATH env overrides the configured path."""
        explicit = os.getenv("CHROMIUM_PATH") or settings.executable_path
        return cls(
            explicit_path=explicit,
            candidates=settings.candidates,
            fallback_paths=settings.fallback_paths,
            **kwargs,
        )

    def resolve(self) -> Optional[str]:
        """Return the browser executable path, or None to use Playwright's bundled browser."""
        if self.explicit_path:
            _log_debug(f"Using configured browser: {self.explicit_path}")
            return self.explicit_path

        for name in self.candidates:
            found = self._which(name)
            if found:
                _log_debug(f"Found browser on PATH: {found}")
                return found

        for path in self.fallback_paths:
            if self._exists(path):
                _log_debug(f"Using fallback browser path: {path}")
                return path

        _log_debug("No system browser found, using Playwright bundled Chromium")
        return None
