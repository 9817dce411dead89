from __future__ import annotations

from pydantic import Field, field_validator

from archaeolog.core.models.base import AppBaseModel


class OptionAdd(AppBaseModel):
    value: str = Field(max_length=255)

    @field_validator("value")
    @classmethod
    def strip_value(cls, v: str) -> str:
        return v.strip()


class OrderUpdate(AppBaseModel):
    sequence: list[str] = Field(default_factory=list, description="Complete new manual order")
