from __future__ import annotations

from pydantic import ConfigDict, Field, model_validator

from archaeolog.core.models.artifact import (  # noqa: TCH001
    ArtifactCondition,
    ArtifactImage,
    CategoryType,
)
from archaeolog.core.models.base import StoredRecordModel
from archaeolog.core.services.artifact_service import ImportMode  # noqa: TCH001


class ArtifactCreate(StoredRecordModel):
    """Form payload for a new or edited artifact (id and creation time are server-side)."""

    model_config = ConfigDict(extra="ignore")

    site_name: str = Field(max_length=255, description="Excavation site name")
    unit: str | None = None
    layer: str | None = None
    serial_number: str | None = None
    coordinate_n: str | None = None
    coordinate_e: str | None = None
    coordinate_z: str | None = None

    category_type: CategoryType = CategoryType.POTTERY
    name: str = Field(max_length=255, description="Artifact name")
    category: str | None = None
    material: str = ""
    pottery_texture: str | None = None
    pottery_color: str | None = None
    decoration: str | None = None

    quantity: int = Field(default=1, ge=1)
    condition: str = ArtifactCondition.INTACT.value
    dimensions: str = ""
    excavation_date: str = ""

    images: list[ArtifactImage] = Field(default_factory=list)
    image_url: str | None = None

    description: str = ""
    remarks: str | None = None
    ai_analysis: str | None = None
    finder: str | None = None
    recorder: str | None = None

    @model_validator(mode="after")
    def validate_required_names(self) -> ArtifactCreate:
        site_name = self.site_name.strip()
        name = self.name.strip()
        if not site_name or not name:
            raise ValueError("Site name and artifact name are required")
        self.site_name = site_name
        self.name = name
        return self


class ArtifactUpdate(ArtifactCreate):
    """Full replacement of an artifact's editable fields."""


class ArtifactImportRequest(StoredRecordModel):
    mode: ImportMode = ImportMode.PREPEND
    artifacts: list[dict] = Field(default_factory=list)


class ArtifactImportResult(StoredRecordModel):
    imported: int
