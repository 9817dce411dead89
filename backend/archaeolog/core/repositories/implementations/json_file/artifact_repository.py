from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from archaeolog.core.repositories.artifact_repository import ArtifactRepository, DocumentStoreError
from archaeolog.core.schemas.document import DataDocument
from archaeolog.db.base import EMPTY_DOCUMENT, read_json, write_json_atomic
from archaeolog.utils.logging import get_logger

logger = get_logger(__name__)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path

    from archaeolog.core.models.artifact import Artifact

# Shared by every repository instance so request-scoped repositories over the
# same file still serialize their read-modify-write cycles.
_document_lock = threading.Lock()


class JsonDocumentArtifactRepository(ArtifactRepository):
    """JSON file implementation of the ArtifactRepository.

    The file holds a single document ``{"users": [...], "artifacts": [...]}``
    with camelCase record fields. Each call reads the whole file and mutating
    calls write it back whole.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    async def read_document(self) -> DataDocument:
        return await self._run(self._read)

    async def write_document(self, document: DataDocument) -> None:
        def _write() -> None:
            with _document_lock:
                self._write(document)

        await self._run(_write)

    async def list(self) -> Sequence[Artifact]:
        document = await self.read_document()
        return document.artifacts

    async def get(self, artifact_id: str) -> Artifact | None:
        document = await self.read_document()
        for artifact in document.artifacts:
            if artifact.id == artifact_id:
                return artifact
        return None

    async def save(self, artifact: Artifact) -> Artifact:
        def _apply(document: DataDocument) -> None:
            for index, existing in enumerate(document.artifacts):
                if existing.id == artifact.id:
                    document.artifacts[index] = artifact
                    return
            document.artifacts.insert(0, artifact)

        await self._mutate(_apply)
        return artifact

    async def delete(self, artifact_id: str) -> bool:
        removed = False

        def _apply(document: DataDocument) -> None:
            nonlocal removed
            kept = [a for a in document.artifacts if a.id != artifact_id]
            removed = len(kept) != len(document.artifacts)
            document.artifacts = kept

        await self._mutate(_apply)
        return removed

    async def replace_all(self, artifacts: Sequence[Artifact]) -> None:
        def _apply(document: DataDocument) -> None:
            document.artifacts = list(artifacts)

        await self._mutate(_apply)

    async def _mutate(self, apply: Callable[[DataDocument], None]) -> None:
        def _cycle() -> None:
            with _document_lock:
                document = self._read()
                apply(document)
                self._write(document)

        await self._run(_cycle)

    def _read(self) -> DataDocument:
        if not self._path.exists():
            return DataDocument.model_validate(EMPTY_DOCUMENT)
        try:
            raw: Any = read_json(self._path)
        except (OSError, ValueError) as err:
            logger.error("Failed to read data document %s: %s", self._path, err)
            raise DocumentStoreError("Cannot read data document") from err
        if not isinstance(raw, dict):
            raise DocumentStoreError("Data document is not a JSON object")
        try:
            return DataDocument.model_validate(
                {
                    "users": raw.get("users") or [],
                    "artifacts": raw.get("artifacts") or [],
                }
            )
        except ValidationError as err:
            logger.error("Data document %s failed validation: %s", self._path, err)
            raise DocumentStoreError("Data document contains invalid records") from err

    def _write(self, document: DataDocument) -> None:
        try:
            write_json_atomic(self._path, self._document_to_json(document))
        except OSError as err:
            logger.error("Failed to write data document %s: %s", self._path, err)
            raise DocumentStoreError("Cannot write data document") from err

    @staticmethod
    def _document_to_json(document: DataDocument) -> dict[str, Any]:
        # Records go back out under the client's camelCase names
        return {
            "users": [u.model_dump(mode="json", by_alias=True, exclude_none=True) for u in document.users],
            "artifacts": [
                a.model_dump(mode="json", by_alias=True, exclude_none=True) for a in document.artifacts
            ],
        }

    @staticmethod
    async def _run(func: Callable[[], Any]) -> Any:
        import asyncio
        return await asyncio.to_thread(func)
