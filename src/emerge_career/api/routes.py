"""Service health and metadata routes."""

import structlog
from fastapi import APIRouter, Request

from emerge_career.storage.database import DatabaseStorage

logger = structlog.get_logger()
router = APIRouter(prefix="/api")


@router.get("/health")
async def health(request: Request) -> dict:
    """Report liveness and which backends the app is wired to."""
    storage = request.app.state.storage
    pipeline = request.app.state.pipeline
    return {
        "success": True,
        "status": "ok",
        "storage": "database" if isinstance(storage, DatabaseStorage) else "memory",
        "llm_configured": pipeline.generator.configured,
    }
