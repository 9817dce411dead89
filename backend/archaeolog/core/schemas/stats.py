from __future__ import annotations

from enum import Enum

from archaeolog.core.models.base import AppBaseModel


class StatsDimension(str, Enum):
    MATERIAL = "material"
    CATEGORY = "category"
    UNIT = "unit"


class StatsEntry(AppBaseModel):
    label: str
    value: int


class StatsSummary(AppBaseModel):
    artifact_count: int
    site_count: int
    total_quantity: int
