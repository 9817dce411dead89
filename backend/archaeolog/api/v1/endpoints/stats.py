from __future__ import annotations

from fastapi import APIRouter, Depends

from archaeolog.config import settings
from archaeolog.core.schemas.stats import StatsDimension, StatsEntry, StatsSummary
from archaeolog.core.services.artifact_service import ArtifactService  # noqa: TCH001
from archaeolog.core.services.stats_service import rollup, summarize
from archaeolog.dependencies import get_artifact_service

router = APIRouter()


@router.get("/summary", response_model=StatsSummary)
async def get_summary(service: ArtifactService = Depends(get_artifact_service)) -> StatsSummary:
    return summarize(await service.list_artifacts())


@router.get("/{dimension}", response_model=list[StatsEntry])
async def get_distribution(
    dimension: StatsDimension,
    service: ArtifactService = Depends(get_artifact_service),
) -> list[StatsEntry]:
    """Chart data: record counts per material, category or unit."""
    artifacts = await service.list_artifacts()
    return rollup(artifacts, dimension, top_n=settings.stats_top_n)
