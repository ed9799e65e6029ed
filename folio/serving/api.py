"""
Inbound JSON API.

Endpoints:
    POST /api/generate-pdf     {content, config, filename} -> {success, path} | {success, error}
    GET  /api/themes           -> persisted theme set
    POST /api/themes/save      {lang, name, css}
    POST /api/themes/delete    {lang, name}
    POST /api/themes/activate  {lang, name}
    POST /api/magic-find       {codes} -> {matches: [{fullPath, relativePath, fileName}]}

Usage:
    uvicorn folio.serving.api:app --port 3000
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from folio.contexts.intake.batch import find_matches
from folio.contexts.intake.request import RenderRequest, StudentConfig
from folio.contexts.rendering.pipeline import GenerationPipeline, get_default_pipeline
from folio.contexts.templating.themes import ThemeStore
from folio.exceptions import ProtectedResourceError, ThemeNotFoundError
from folio.serving.logger import _log_error, _log_info

load_dotenv()
DOCS_PATH = Path(os.getenv("FOLIO_DOCS_PATH", "md_storage"))


class GenerateRequest(BaseModel):
    content: str = ""
    config: Dict[str, Any] = Field(default_factory=dict)
    filename: str = ""


class ThemeSaveRequest(BaseModel):
    lang: str
    name: str
    css: str = ""


class ThemeRefRequest(BaseModel):
    lang: str
    name: str


class MagicFindRequest(BaseModel):
    codes: List[str] = Field(default_factory=list)


def _failure(error: str, status_code: int = 200) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code=status_code)


def create_api_app(
    pipeline: Optional[GenerationPipeline] = None,
    theme_store: Optional[ThemeStore] = None,
    docs_root: Optional[Path] = None,
) -> FastAPI:
    """
    Build the API app.

    Args:
        pipeline: Generation pipeline (default: process-wide pipeline, built on first use)
        theme_store: Theme store (default: the pipeline's store)
        docs_root: Documents root for batch discovery (default: FOLIO_DOCS_PATH)
    """
    api = FastAPI(title="FOLIO", version="0.1.0")
    docs_root = Path(docs_root) if docs_root is not None else DOCS_PATH

    def get_pipeline() -> GenerationPipeline:
        return pipeline or get_default_pipeline()

    def get_themes() -> ThemeStore:
        return theme_store or get_pipeline().theme_store

    @api.post("/api/generate-pdf")
    def generate_pdf(body: GenerateRequest):
        """Render one document to PDF."""
        request = RenderRequest(
            content=body.content,
            config=StudentConfig.from_dict(body.config),
            filename=body.filename,
        )
        result = get_pipeline().generate(request, source="api")
        return JSONResponse(result.to_dict(), status_code=200 if result.success else 500)

    @api.get("/api/themes")
    def list_themes():
        return get_themes().load().to_dict()

    @api.post("/api/themes/save")
    def save_theme(body: ThemeSaveRequest):
        try:
            get_themes().save(body.lang, body.name, body.css)
        except ValueError as e:
            return _failure(str(e), status_code=400)
        return {"success": True}

    @api.post("/api/themes/delete")
    def delete_theme(body: ThemeRefRequest):
        try:
            get_themes().delete(body.lang, body.name)
        except ProtectedResourceError as e:
            return _failure(str(e))
        except ValueError as e:
            return _failure(str(e), status_code=400)
        return {"success": True}

    @api.post("/api/themes/activate")
    def activate_theme(body: ThemeRefRequest):
        try:
            get_themes().activate(body.lang, body.name)
        except ThemeNotFoundError as e:
            return _failure(str(e))
        except ValueError as e:
            return _failure(str(e), status_code=400)
        return {"success": True}

    @api.post("/api/magic-find")
    def magic_find(body: MagicFindRequest):
        """Find assignment files for course codes anywhere under the documents root."""
        try:
            matches = find_matches(docs_root, body.codes, extension="md")
        except OSError as e:
            _log_error(f"Magic find failed: {e}")
            return JSONResponse({"error": str(e)}, status_code=500)
        _log_info(f"Magic find: {len(matches)} matches for {body.codes}")
        return {"matches": [m.to_dict() for m in matches]}

    return api


app = create_api_app()
