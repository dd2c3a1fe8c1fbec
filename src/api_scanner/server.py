"""Edit server — serves a JSON documentation file for viewing and hand edits."""

import logging
from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import ValidationError

from api_scanner.parser.base import Documentation, Endpoint

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _read(json_path: Path) -> Documentation:
    try:
        return Documentation.model_validate_json(json_path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as e:
        logger.error("Failed to read %s: %s", json_path, e)
        raise HTTPException(status_code=500, detail="Failed to read JSON file") from e


def _write(json_path: Path, doc: Documentation) -> None:
    try:
        json_path.write_text(doc.to_json(), encoding="utf-8")
    except OSError as e:
        logger.error("Failed to write %s: %s", json_path, e)
        raise HTTPException(status_code=500, detail="Failed to save JSON file") from e


def create_app(json_path: Path) -> FastAPI:
    """Build the editor app bound to one documentation file."""
    app = FastAPI(title="API Documentation Editor")

    @app.get("/", response_class=HTMLResponse)
    def editor_page() -> str:
        return (TEMPLATES_DIR / "editor.html").read_text(encoding="utf-8")

    @app.get("/api/data")
    def get_data() -> dict:
        return _read(json_path).model_dump(by_alias=True, exclude_none=True)

    @app.put("/api/endpoint/{index}")
    def update_endpoint(index: int, endpoint: Endpoint) -> dict:
        doc = _read(json_path)
        if not 0 <= index < len(doc.endpoints):
            raise HTTPException(status_code=400, detail="Invalid endpoint index")

        endpoints = list(doc.endpoints)
        endpoints[index] = endpoint
        _write(json_path, doc.model_copy(update={"endpoints": endpoints}))
        logger.info("Updated endpoint %d (%s %s)", index, endpoint.method, endpoint.url)
        return {"success": True}

    @app.put("/api/save-all")
    def save_all(doc: Documentation) -> dict:
        doc = doc.model_copy(update={"total_endpoints": len(doc.endpoints)})
        _write(json_path, doc)
        return {"success": True}

    return app


def serve(json_path: Path, host: str = "127.0.0.1", port: int = 4000) -> None:
    import uvicorn

    uvicorn.run(create_app(json_path), host=host, port=port, log_level="warning")
