from __future__ import annotations

import time
from enum import Enum

from pydantic import Field, field_validator

from .base import StoredRecordModel


def now_millis() -> int:
    """Current time as epoch milliseconds, the unit used for ids and timestamps."""
    return int(time.time() * 1000)


class ArtifactCondition(str, Enum):
    """Preservation state of an artifact. Free text is accepted as well."""

    INTACT = "完整"
    NEARLY_INTACT = "基本完整"
    DAMAGED = "残缺"
    FRAGMENTED = "碎片"
    RESTORED = "已修复"


class CategoryType(str, Enum):
    """Broad classification: pottery or small finds."""

    POTTERY = "陶器"
    SMALL_FIND = "小件"


class ImageType(str, Enum):
    PHOTO = "photo"
    DRAWING = "drawing"


class ArtifactImage(StoredRecordModel):
    """Photo or line drawing attached to an artifact."""

    id: str
    type: ImageType = ImageType.PHOTO
    view: str | None = Field(default=None, description="Photo view (正, 背, 顶...) or drawing kind")
    url: str = Field(description="Upload URL or base64 data URL")
    file_name: str = ""


class Artifact(StoredRecordModel):
    """Artifact record domain model."""

    id: str = Field(description="Unique artifact identifier")

    # Provenance
    site_name: str = Field(description="Excavation site name")
    unit: str | None = Field(default=None, description="Excavation unit / trench, e.g. T101")
    layer: str | None = Field(default=None, description="Stratigraphic layer")
    serial_number: str | None = Field(default=None, description="Field number, e.g. H1:23")

    coordinate_n: str | None = None
    coordinate_e: str | None = None
    coordinate_z: str | None = None

    # Classification
    category_type: CategoryType = CategoryType.POTTERY
    name: str = Field(description="Artifact name")
    category: str | None = Field(default=None, description="Sub-category")
    material: str = ""

    pottery_texture: str | None = None
    pottery_color: str | None = None
    decoration: str | None = None

    quantity: int = Field(default=1, ge=1)
    condition: str = ArtifactCondition.INTACT.value
    dimensions: str = ""
    excavation_date: str = ""

    images: list[ArtifactImage] = Field(default_factory=list)
    image_url: str | None = Field(default=None, description="Thumbnail, usually the front photo")

    description: str = ""
    remarks: str | None = None

    ai_analysis: str | None = None
    finder: str | None = None
    recorder: str | None = None
    created_at: int = Field(default_factory=now_millis, description="Epoch milliseconds")

    @field_validator("quantity", mode="before")
    @classmethod
    def coerce_quantity(cls, v):
        """Spreadsheet cells arrive as text or blanks; anything unusable counts as one."""
        try:
            value = int(v)
        except (TypeError, ValueError):
            return 1
        return value if value >= 1 else 1

    @field_validator("condition", mode="before")
    @classmethod
    def normalize_condition(cls, v):
        if isinstance(v, ArtifactCondition):
            return v.value
        if v is None or (isinstance(v, str) and not v.strip()):
            return ArtifactCondition.INTACT.value
        return v
