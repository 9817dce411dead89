from __future__ import annotations

import secrets
from enum import Enum
from typing import TYPE_CHECKING, Any

from archaeolog.core.models.artifact import Artifact, now_millis
from archaeolog.core.schemas.document import DataDocument
from archaeolog.utils.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archaeolog.core.models.user import User
    from archaeolog.core.repositories.artifact_repository import ArtifactRepository

logger = get_logger(__name__)

DEFAULT_SITE_NAME = "未命名遗址"
DEFAULT_ARTIFACT_NAME = "未命名器物"


def new_artifact_id(now: int) -> str:
    """Epoch-millisecond id with a random suffix so batch imports never collide."""
    return f"{now}-{secrets.token_hex(4)}"


class ImportMode(str, Enum):
    """How imported records combine with the stored ones."""

    PREPEND = "prepend"  # spreadsheet import: new rows go in front
    REPLACE = "replace"  # archive import: overwrite everything


class ArtifactService:
    """Service for managing artifact records and the synced document."""

    def __init__(self, repo: ArtifactRepository) -> None:
        self._repo = repo

    async def create_artifact(self, create_dto) -> Artifact:
        """Create a record; site name and artifact name are required."""
        data = self._clean_payload(create_dto)
        now = now_millis()
        artifact = Artifact.model_validate({**data, "id": new_artifact_id(now), "created_at": now})
        return await self._repo.save(artifact)

    async def get_artifact(self, artifact_id: str) -> Artifact | None:
        return await self._repo.get(artifact_id)

    async def list_artifacts(self) -> Sequence[Artifact]:
        return await self._repo.list()

    async def update_artifact(self, artifact_id: str, update_dto) -> Artifact | None:
        """Replace a record's contents, keeping its id and creation time."""
        existing = await self._repo.get(artifact_id)
        if not existing:
            return None
        data = self._clean_payload(update_dto)
        artifact = Artifact.model_validate({**data, "id": existing.id, "created_at": existing.created_at})
        return await self._repo.save(artifact)

    async def delete_artifact(self, artifact_id: str) -> bool:
        return await self._repo.delete(artifact_id)

    async def import_artifacts(self, rows: Sequence[dict[str, Any]], mode: ImportMode) -> int:
        """Import raw records (camelCase or snake_case keys) and return how many were stored.

        Prepend mode assigns fresh ids and timestamps and fills the default site
        and artifact names. Replace mode stores the records as given.
        """
        if mode is ImportMode.REPLACE:
            artifacts = [Artifact.model_validate(row) for row in rows]
            await self._repo.replace_all(artifacts)
        else:
            now = now_millis()
            artifacts = [self._imported_row(row, now) for row in rows]
            if artifacts:
                existing = await self._repo.list()
                await self._repo.replace_all([*artifacts, *existing])
        logger.info("Imported %d artifacts", len(artifacts), extra={"mode": mode.value})
        return len(artifacts)

    async def export_artifacts(self) -> Sequence[Artifact]:
        return await self._repo.list()

    async def read_data(self) -> DataDocument:
        return await self._repo.read_document()

    async def sync(
        self,
        *,
        users: Sequence[User] | None,
        artifacts: Sequence[Artifact] | None,
    ) -> DataDocument:
        """Replace each provided list wholesale; lists left out keep their stored value."""
        current = await self._repo.read_document()
        document = DataDocument(
            users=list(users) if users is not None else current.users,
            artifacts=list(artifacts) if artifacts is not None else current.artifacts,
        )
        await self._repo.write_document(document)
        return document

    @staticmethod
    def _clean_payload(dto) -> dict[str, Any]:
        data = dto.model_dump(exclude_unset=False)
        for key, value in list(data.items()):
            if isinstance(value, str):
                data[key] = value.strip()
        if not data.get("site_name") or not data.get("name"):
            raise ValueError("Site name and artifact name are required")
        return data

    @staticmethod
    def _imported_row(row: dict[str, Any], now: int) -> Artifact:
        data = {k: v for k, v in row.items() if k not in {"id", "createdAt", "created_at"}}
        site = data.pop("siteName", None) or data.pop("site_name", None)
        data["site_name"] = (str(site).strip() if site else "") or DEFAULT_SITE_NAME
        name = data.get("name")
        data["name"] = (str(name).strip() if name else "") or DEFAULT_ARTIFACT_NAME
        data.setdefault("images", [])
        return Artifact.model_validate(
            {**data, "id": new_artifact_id(now), "created_at": now}
        )
