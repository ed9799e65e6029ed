"""
Font delivery endpoint.

The Urdu theme declares its @font-face with a URL on this server, so the
headless browser fetches the typeface like any web font. A missing font file
returns 404; the browser then falls back to the rest of the font stack and
rendering continues.

Usage:
    uvicorn folio.serving.fonts:app --port 8097
"""

import os
import threading
from pathlib import Path
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import FileResponse, PlainTextResponse

from folio.serving.logger import _log_info, _log_warning

load_dotenv()
FONT_DIR = Path(os.getenv("FOLIO_FONT_DIR", "fonts"))
FONT_FILE = os.getenv("FOLIO_FONT_FILE", "Jameel_Noori_Nastaleeq_Kasheeda.ttf")
FONT_PORT = int(os.getenv("FOLIO_FONT_PORT", "8097"))

FONT_CACHE_CONTROL = "public, max-age=31536000"


def create_font_app(font_path: Optional[Path] = None) -> FastAPI:
    """
    Build the font endpoint app.

    Args:
        font_path: Typeface to serve (default: FOLIO_FONT_DIR / FOLIO_FONT_FILE)
    """
    font_path = Path(font_path) if font_path is not None else FONT_DIR / FONT_FILE

    font_app = FastAPI(title="FOLIO font server", docs_url=None, redoc_url=None)

    @font_app.get("/font")
    def get_font():
        """Serve the embedded typeface."""
        if not font_path.is_file():
            return PlainTextResponse(
                "Font not found", status_code=404, headers={"Access-Control-Allow-Origin": "*"}
            )
        return FileResponse(
            font_path,
            media_type="font/ttf",
            headers={
                "Cache-Control": FONT_CACHE_CONTROL,
                "Access-Control-Allow-Origin": "*",
            },
        )

    @font_app.api_route("/{path:path}", methods=["GET", "HEAD", "POST", "PUT", "DELETE", "OPTIONS"])
    def not_found(path: str):
        """Anything but /font; browsers still get the CORS header."""
        return PlainTextResponse(
            "Not found", status_code=404, headers={"Access-Control-Allow-Origin": "*"}
        )

    return font_app


app = create_font_app()


class FontServer:
    """
    Runs the font endpoint in a background daemon thread.

    Start failures (e.g. the port is already taken by another instance) are
    logged, not raised: an existing server on that port serves the same font.
    """

    def __init__(self, host: str = "127.0.0.1", port: int = FONT_PORT, font_path: Optional[Path] = None):
        self.host = host
        self.port = port
        self.app = create_font_app(font_path)
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    def _serve(self) -> None:
        try:
            self._server.run()
        except (OSError, SystemExit) as e:
            _log_warning(f"Font server status: {e}")

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_level="warning")
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(target=self._serve, name="folio-font-server", daemon=True)
        self._thread.start()
        _log_info(f"Font server running on {self.port}")

    def stop(self) -> None:
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._thread = None
