from __future__ import annotations

import secrets
from pathlib import Path

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from archaeolog.api.v1.schemas.data import SyncRequest, SyncResponse, UploadResponse
from archaeolog.config import settings
from archaeolog.core.models.artifact import now_millis
from archaeolog.core.schemas.document import DataDocument
from archaeolog.core.services.artifact_service import ArtifactService  # noqa: TCH001
from archaeolog.dependencies import get_artifact_service
from archaeolog.utils.concurrency import run_blocking
from archaeolog.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

UPLOAD_CHUNK_SIZE = 1024 * 1024


@router.get("/data", response_model=DataDocument)
async def read_data(service: ArtifactService = Depends(get_artifact_service)) -> DataDocument:
    """Return the whole document: every user and artifact record."""
    return await service.read_data()


@router.post("/sync", response_model=SyncResponse)
async def sync_data(
    payload: SyncRequest,
    service: ArtifactService = Depends(get_artifact_service),
) -> SyncResponse:
    """Overwrite users and/or artifacts wholesale. Last writer wins."""
    document = await service.sync(users=payload.users, artifacts=payload.artifacts)
    logger.info(
        "Document synced",
        extra={"users": len(document.users), "artifacts": len(document.artifacts)},
    )
    return SyncResponse(users=len(document.users), artifacts=len(document.artifacts))


def _upload_name(original: str | None) -> str:
    # Original names are often non-ASCII; keep only the extension
    suffix = Path(original or "").suffix.lower()
    if not suffix[1:].isalnum():
        suffix = ""
    return f"{now_millis()}-{secrets.randbelow(10**9)}{suffix}"


@router.post("/upload", response_model=UploadResponse)
async def upload_file(file: UploadFile | None = File(default=None)) -> UploadResponse:
    """Store an uploaded photo or drawing and return its public URL."""
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    filename = _upload_name(file.filename)
    target = settings.uploads_dir / filename
    await run_blocking(settings.uploads_dir.mkdir, parents=True, exist_ok=True)

    written = 0
    try:
        with target.open("wb") as fh:
            while chunk := await file.read(UPLOAD_CHUNK_SIZE):
                written += len(chunk)
                if written > settings.max_upload_bytes:
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail="File too large",
                    )
                await run_blocking(fh.write, chunk)
    except BaseException:
        target.unlink(missing_ok=True)
        raise
    finally:
        await file.close()

    logger.info("Stored upload %s (%d bytes)", filename, written)
    return UploadResponse(url=f"/uploads/{filename}", filename=filename)
