from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status

from archaeolog.api.v1.schemas.vocabulary import OptionAdd, OrderUpdate
from archaeolog.core.schemas.vocabulary import VocabularyView
from archaeolog.core.services.artifact_service import ArtifactService  # noqa: TCH001
from archaeolog.core.services.vocabulary_service import (
    FIELD_ATTRIBUTES,
    VocabularyManager,
    historical_values,
)
from archaeolog.dependencies import get_artifact_service, get_vocabulary_manager
from archaeolog.utils.concurrency import run_blocking

router = APIRouter()


async def _view(
    key: str,
    query: str,
    manager: VocabularyManager,
    service: ArtifactService,
) -> VocabularyView:
    # Frequencies always come from the live record set, never from storage
    artifacts = await service.list_artifacts()
    values = historical_values(artifacts, key)
    return await run_blocking(manager.describe, key, query, values)


@router.get("/fields", response_model=list[str])
async def list_fields() -> list[str]:
    """Vocabulary keys whose frequencies are drawn from artifact records."""
    return list(FIELD_ATTRIBUTES)


@router.get("/{key}", response_model=VocabularyView)
async def get_options(
    key: str,
    q: str = Query(default="", description="Current free-text input"),
    manager: VocabularyManager = Depends(get_vocabulary_manager),
    service: ArtifactService = Depends(get_artifact_service),
) -> VocabularyView:
    return await _view(key, q, manager, service)


@router.post("/{key}/options", response_model=VocabularyView, status_code=status.HTTP_201_CREATED)
async def add_option(
    key: str,
    payload: OptionAdd,
    manager: VocabularyManager = Depends(get_vocabulary_manager),
    service: ArtifactService = Depends(get_artifact_service),
) -> VocabularyView:
    """Remember a value for the field and move it to the top of the list."""
    await run_blocking(manager.add_option, key, payload.value)
    return await _view(key, "", manager, service)


@router.delete("/{key}/options", response_model=VocabularyView)
async def remove_option(
    key: str,
    value: str = Query(..., description="Option to forget"),
    manager: VocabularyManager = Depends(get_vocabulary_manager),
    service: ArtifactService = Depends(get_artifact_service),
) -> VocabularyView:
    """Forget a value. It still shows up while records use it."""
    await run_blocking(manager.remove_option, key, value)
    return await _view(key, "", manager, service)


@router.put("/{key}/order", response_model=VocabularyView)
async def reorder_options(
    key: str,
    payload: OrderUpdate,
    manager: VocabularyManager = Depends(get_vocabulary_manager),
    service: ArtifactService = Depends(get_artifact_service),
) -> VocabularyView:
    """Store a dragged order. Clients only allow dragging while no filter is typed."""
    await run_blocking(manager.reorder, key, payload.sequence)
    return await _view(key, "", manager, service)
