from __future__ import annotations

from fastapi import APIRouter, Depends

from archaeolog.core.schemas.site import SiteGroup
from archaeolog.core.services.artifact_service import ArtifactService  # noqa: TCH001
from archaeolog.core.services.site_service import group_by_site
from archaeolog.dependencies import get_artifact_service

router = APIRouter()


@router.get("/", response_model=list[SiteGroup])
async def list_sites(service: ArtifactService = Depends(get_artifact_service)) -> list[SiteGroup]:
    """Return one group per excavation site, most recently updated first."""
    return group_by_site(await service.list_artifacts())
