"""Unit tests for render settings loading."""

import pytest
from omegaconf.errors import ConfigKeyError, ValidationError

from folio.contexts.rendering.settings import RenderSettings, load_render_settings


@pytest.mark.unit
def test_packaged_settings():
    settings = load_render_settings()

    assert isinstance(settings, RenderSettings)
    assert settings.capture.page_format == "A4"
    assert settings.capture.timeout_ms == 60000
    assert settings.admission.max_concurrent == 2
    assert settings.compression.pdf_settings == "/ebook"
    assert settings.compression.compatibility_level == "1.4"
    assert "chromium" in settings.browser.candidates


@pytest.mark.unit
def test_overrides_applied_last():
    settings = load_render_settings(
        overrides={"capture": {"timeout_ms": 5000}, "compression": {"enabled": False}}
    )
    assert settings.capture.timeout_ms == 5000
    assert settings.compression.enabled is False
    assert settings.capture.page_format == "A4"


@pytest.mark.unit
def test_missing_file_uses_schema_defaults(tmp_path):
    settings = load_render_settings(config_path=tmp_path / "absent.yaml")
    assert settings == RenderSettings()


@pytest.mark.unit
def test_custom_file(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("browser:\n  disable_sandbox: false\nadmission:\n  max_concurrent: 4\n")

    settings = load_render_settings(config_path=path)
    assert settings.browser.disable_sandbox is False
    assert settings.admission.max_concurrent == 4


@pytest.mark.unit
def test_invalid_values_rejected(tmp_path):
    bad_type = tmp_path / "bad_type.yaml"
    bad_type.write_text("capture:\n  timeout_ms: soon\n")
    with pytest.raises(ValidationError):
        load_render_settings(config_path=bad_type)

    unknown = tmp_path / "unknown.yaml"
    unknown.write_text("capture:\n  colour: red\n")
    with pytest.raises(ConfigKeyError):
        load_render_settings(config_path=unknown)
