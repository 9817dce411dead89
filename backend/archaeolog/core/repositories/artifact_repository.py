from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archaeolog.core.models.artifact import Artifact
    from archaeolog.core.schemas.document import DataDocument


class DocumentStoreError(RuntimeError):
    """The backing document could not be read or written."""


class ArtifactRepository(ABC):
    """Abstract repository interface for artifact records.

    Contract used by services and dependency injection. Implementations
    perform I/O and therefore expose async methods. There is no concurrency
    control beyond serializing calls: the last writer wins.
    """

    @abstractmethod
    async def read_document(self) -> DataDocument:  # pragma: no cover - interface only
        """Return the whole stored document (users and artifacts)."""

    @abstractmethod
    async def write_document(self, document: DataDocument) -> None:  # pragma: no cover
        """Replace the whole stored document."""

    @abstractmethod
    async def list(self) -> Sequence[Artifact]:  # pragma: no cover
        """Return all artifacts in stored order (newest first for created records)."""

    @abstractmethod
    async def get(self, artifact_id: str) -> Artifact | None:  # pragma: no cover
        """Fetch an artifact by id or return None if not found."""

    @abstractmethod
    async def save(self, artifact: Artifact) -> Artifact:  # pragma: no cover
        """Replace the artifact with the same id in place, or prepend it if new."""

    @abstractmethod
    async def delete(self, artifact_id: str) -> bool:  # pragma: no cover
        """Delete an artifact by id. Return True if a record was removed."""

    @abstractmethod
    async def replace_all(self, artifacts: Sequence[Artifact]) -> None:  # pragma: no cover
        """Replace the artifact list wholesale, keeping users untouched."""
