"""FastAPI server for Lattice.

Accepts word-processing XML uploads and returns the parsed outline
tree, the initial expand/collapse state and document statistics.
Endpoints live on an ``APIRouter`` so another app can mount them.

The standalone ``app`` can be run directly::

    uvicorn lattice.server:app --reload --port 8430
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any

from fastapi import APIRouter, FastAPI, File, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from lattice import __version__
from lattice.extraction import MAX_LEVEL, ExtractorConfig
from lattice.hierarchy import DocumentTree
from lattice.loaders import LoaderError, LoaderRegistry, MarkupParseError, ReadError
from lattice.pipeline import DocumentPipeline

logger = logging.getLogger(__name__)

router = APIRouter()

app = FastAPI(
    title="Lattice API",
    description="Structure parser for Office Open XML documents",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# In-memory state
_state: dict[str, Any] = {
    "settings": ExtractorConfig().to_dict(),
}


# ============================================================================
# Pydantic Models for API
# ============================================================================


class SettingsUpdateRequest(BaseModel):
    """Request model for updating extraction settings."""

    heading_style_prefix: str | None = None
    bullet_glyph: str | None = Field(default=None, min_length=1)
    heading_depth: int | None = Field(default=None, ge=1, le=MAX_LEVEL)
    list_overrides_heading: bool | None = None


# ============================================================================
# Document Endpoints
# ============================================================================


@router.post("/api/documents/parse")
async def parse_document(file: UploadFile = File(...)) -> dict[str, Any]:
    """Parse an uploaded .xml or .docx document.

    Args:
        file: The document file to upload
    """
    filename = file.filename or "document"
    if LoaderRegistry.get_loader(Path(filename)) is None:
        supported = ", ".join(LoaderRegistry.supported_extensions())
        raise HTTPException(
            status_code=400,
            detail=f"Invalid file type: {filename}. Supported formats: {supported}",
        )

    start = time.perf_counter()
    try:
        content = await file.read()
    except OSError as e:
        logger.exception("Failed to read upload %s", filename)
        raise HTTPException(
            status_code=400, detail=ReadError(f"Error reading file: {e}").to_dict()
        ) from e

    pipeline = DocumentPipeline(ExtractorConfig.from_dict(_state["settings"]))
    try:
        result = pipeline.parse_bytes(content, filename, started_at=start)
    except MarkupParseError as e:
        raise HTTPException(status_code=422, detail=e.to_dict()) from e
    except LoaderError as e:
        raise HTTPException(status_code=400, detail=e.to_dict()) from e

    tree = DocumentTree(result.nodes)
    return {
        "filename": filename,
        **result.to_dict(),
        "expanded": tree.initial_expanded_state(),
        "summary": result.statistics.summary(),
    }


# ============================================================================
# Settings Endpoints
# ============================================================================


@router.get("/api/settings")
async def get_settings() -> dict[str, Any]:
    """Get current extraction settings."""
    return dict(_state["settings"])


@router.put("/api/settings")
async def update_settings(request: SettingsUpdateRequest) -> dict[str, Any]:
    """Update extraction settings. Omitted fields keep their value."""
    updates = request.model_dump(exclude_none=True)
    _state["settings"].update(updates)
    return dict(_state["settings"])


# ============================================================================
# Utility Endpoints
# ============================================================================


@router.get("/api/loaders")
async def get_available_loaders() -> dict[str, Any]:
    """Get supported upload formats."""
    return {
        "extensions": LoaderRegistry.supported_extensions(),
        "loaders": LoaderRegistry.loader_names(),
    }


@router.get("/api/health")
async def health_check() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": __version__,
    }


app.include_router(router)


def run_server(host: str = "127.0.0.1", port: int = 8430) -> None:
    """Run the Lattice server via uvicorn."""
    import uvicorn

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    run_server()
