"""Unit tests for browser executable discovery."""

import pytest

from folio.contexts.rendering.discovery import BrowserDiscovery
from folio.contexts.rendering.settings import BrowserSettings


def _which(found):
    return lambda name: found.get(name)


@pytest.mark.unit
def test_explicit_path_wins():
    discovery = BrowserDiscovery(
        explicit_path="/opt/chrome",
        candidates=["chromium"],
        which=_which({"chromium": "/usr/bin/chromium"}),
    )
    assert discovery.resolve() == "/opt/chrome"


@pytest.mark.unit
def test_first_candidate_on_path():
    discovery = BrowserDiscovery(
        candidates=["chromium", "google-chrome"],
        which=_which({"google-chrome": "/usr/bin/google-chrome"}),
        exists=lambda path: True,
    )
    assert discovery.resolve() == "/usr/bin/google-chrome"


@pytest.mark.unit
def test_fallback_path_when_nothing_on_path():
    discovery = BrowserDiscovery(
        candidates=["chromium"],
        fallback_paths=["/missing", "/data/data/com.termux/files/usr/bin/chromium"],
        which=_which({}),
        exists=lambda path: path.startswith("/data"),
    )
    assert discovery.resolve() == "/data/data/com.termux/files/usr/bin/chromium"


@pytest.mark.unit
def test_none_when_not_found():
    discovery = BrowserDiscovery(
        candidates=["chromium"], fallback_paths=["/missing"], which=_which({}), exists=lambda p: False
    )
    assert discovery.resolve() is None


@pytest.mark.unit
def test_from_settings_env_override(monkeypatch):
    monkeypatch.setenv("CHROMIUM_PATH", "/env/chromium")
    settings = BrowserSettings(executable_path="/configured/chromium")
    assert BrowserDiscovery.from_settings(settings).resolve() == "/env/chromium"

    monkeypatch.delenv("CHROMIUM_PATH")
    assert BrowserDiscovery.from_settings(settings).resolve() == "/configured/chromium"
