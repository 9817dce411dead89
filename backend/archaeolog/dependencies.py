from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends

from archaeolog.config import settings
from archaeolog.core.repositories.implementations.json_file.artifact_repository import (
    JsonDocumentArtifactRepository,
)
from archaeolog.core.repositories.implementations.json_file.key_value_store import (
    JsonFileKeyValueStore,
)
from archaeolog.core.services.artifact_service import ArtifactService
from archaeolog.core.services.vocabulary_service import VocabularyManager
from archaeolog.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from archaeolog.core.repositories.artifact_repository import ArtifactRepository
    from archaeolog.core.repositories.key_value_store import KeyValueStore


@lru_cache(maxsize=1)
def get_key_value_store() -> KeyValueStore:
    """Return the process-wide key-value store holding vocabulary state."""
    logger.debug("Opening vocabulary store at %s", settings.vocabulary_file)
    return JsonFileKeyValueStore(settings.vocabulary_file)


@lru_cache(maxsize=1)
def get_vocabulary_manager() -> VocabularyManager:
    """Return the shared VocabularyManager.

    A single instance is required so per-key locks and cached state are shared
    by every request.
    """
    return VocabularyManager(get_key_value_store())


def get_artifact_repository() -> ArtifactRepository:
    """Get a request-scoped artifact repository over the data document."""
    return JsonDocumentArtifactRepository(settings.data_file)


def get_artifact_service(repo: ArtifactRepository = Depends(get_artifact_repository)) -> ArtifactService:
    """Get a request-scoped artifact service instance."""
    return ArtifactService(repo)
