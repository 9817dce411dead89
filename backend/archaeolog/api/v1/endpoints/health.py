from __future__ import annotations

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from archaeolog.config import settings
from archaeolog.core.repositories.artifact_repository import DocumentStoreError
from archaeolog.dependencies import get_artifact_repository

router = APIRouter()


@router.get("/")
async def health_check():
    """Health check endpoint."""
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "healthy",
            "service": "archaeolog-api",
            "version": "0.1.0"
        }
    )


@router.get("/ready")
async def readiness_check():
    """Readiness check endpoint."""
    storage_status = "connected"
    try:
        await get_artifact_repository().read_document()
    except DocumentStoreError as e:
        storage_status = f"error: {str(e)}"

    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={
            "status": "ready",
            "storage": storage_status,
            "data_root": str(settings.data_root),
            "api_prefix": settings.api_prefix
        }
    )
