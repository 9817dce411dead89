from __future__ import annotations

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict
from pydantic.alias_generators import to_camel


class AppBaseModel(PydanticBaseModel):
    """Base model for all domain models."""

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
    )


class StoredRecordModel(AppBaseModel):
    """Base model for records persisted in the shared JSON document.

    Field names are exposed with the camelCase aliases the web client writes,
    and unknown keys are kept so a sync never drops data it does not model.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        extra="allow",
        populate_by_name=True,
    )
