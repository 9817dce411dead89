from __future__ import annotations

from pydantic import Field

from archaeolog.core.models.artifact import Artifact  # noqa: TCH001
from archaeolog.core.models.base import AppBaseModel
from archaeolog.core.models.user import User  # noqa: TCH001


class SyncRequest(AppBaseModel):
    """Full-document sync; a list left out keeps its stored value."""

    users: list[User] | None = None
    artifacts: list[Artifact] | None = None


class SyncResponse(AppBaseModel):
    success: bool = True
    users: int = Field(description="Number of users stored after the sync")
    artifacts: int = Field(description="Number of artifacts stored after the sync")


class UploadResponse(AppBaseModel):
    url: str
    filename: str
