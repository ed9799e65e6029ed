"""Integration tests for the font endpoint."""

import pytest
from fastapi.testclient import TestClient

from folio.serving.fonts import FONT_CACHE_CONTROL, create_font_app


@pytest.mark.integration
def test_serves_font(tmp_path):
    font = tmp_path / "font.ttf"
    font.write_bytes(b"\x00\x01\x00\x00fake-ttf")
    client = TestClient(create_font_app(font))

    response = client.get("/font")

    assert response.status_code == 200
    assert response.content == b"\x00\x01\x00\x00fake-ttf"
    assert response.headers["content-type"] == "font/ttf"
    assert response.headers["cache-control"] == FONT_CACHE_CONTROL
    assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.integration
def test_missing_font_is_404(tmp_path):
    client = TestClient(create_font_app(tmp_path / "absent.ttf"))

    response = client.get("/font")

    assert response.status_code == 404
    assert response.text == "Font not found"


@pytest.mark.integration
def test_other_paths_not_found(tmp_path):
    client = TestClient(create_font_app(tmp_path / "absent.ttf"))

    for response in (client.get("/fonts/other.ttf"), client.get("/"), client.post("/font")):
        assert response.status_code == 404
        assert response.text == "Not found"
        assert response.headers["access-control-allow-origin"] == "*"
