from __future__ import annotations

from pydantic import Field

from archaeolog.core.models.artifact import Artifact  # noqa: TCH001
from archaeolog.core.models.base import AppBaseModel
from archaeolog.core.models.user import User  # noqa: TCH001


class DataDocument(AppBaseModel):
    """The single JSON document holding every user and artifact record."""

    users: list[User] = Field(default_factory=list)
    artifacts: list[Artifact] = Field(default_factory=list)
