from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from archaeolog.api.v1.schemas.artifact import (
    ArtifactCreate,
    ArtifactImportRequest,
    ArtifactImportResult,
    ArtifactUpdate,
)
from archaeolog.core.models.artifact import Artifact
from archaeolog.core.services.artifact_service import ArtifactService  # noqa: TCH001
from archaeolog.core.services.site_service import filter_artifacts
from archaeolog.dependencies import get_artifact_service
from archaeolog.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post("/", response_model=Artifact, status_code=status.HTTP_201_CREATED)
async def create_artifact(
    payload: ArtifactCreate,
    service: ArtifactService = Depends(get_artifact_service),
):
    try:
        return await service.create_artifact(payload)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err


@router.get("/", response_model=list[Artifact])
async def list_artifacts(
    search: str | None = None,
    site: str | None = None,
    service: ArtifactService = Depends(get_artifact_service),
):
    """List artifacts, optionally narrowed by a text search and a site name."""
    artifacts = await service.list_artifacts()
    return filter_artifacts(artifacts, search=search, site=site)


@router.get("/export", response_model=list[Artifact])
async def export_artifacts(service: ArtifactService = Depends(get_artifact_service)):
    """Return every record in the archive format accepted by import (mode=replace)."""
    return await service.export_artifacts()


@router.post("/import", response_model=ArtifactImportResult)
async def import_artifacts(
    payload: ArtifactImportRequest,
    service: ArtifactService = Depends(get_artifact_service),
):
    try:
        imported = await service.import_artifacts(payload.artifacts, payload.mode)
    except ValueError as err:
        # pydantic.ValidationError is a ValueError
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    return ArtifactImportResult(imported=imported)


@router.get("/{artifact_id}", response_model=Artifact)
async def get_artifact(
    artifact_id: str,
    service: ArtifactService = Depends(get_artifact_service),
):
    artifact = await service.get_artifact(artifact_id)
    if not artifact:
        raise HTTPException(status_code=404, detail="Artifact not found")
    return artifact


@router.put("/{artifact_id}", response_model=Artifact)
async def update_artifact(
    artifact_id: str,
    payload: ArtifactUpdate,
    service: ArtifactService = Depends(get_artifact_service),
):
    try:
        artifact = await service.update_artifact(artifact_id, payload)
    except ValueError as err:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err)) from err
    if not artifact:
        raise HTTPException(status_code=404, detail="Artifact not found")
    return artifact


@router.delete("/{artifact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_artifact(
    artifact_id: str,
    service: ArtifactService = Depends(get_artifact_service),
):
    deleted = await service.delete_artifact(artifact_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Artifact not found")
    return None
