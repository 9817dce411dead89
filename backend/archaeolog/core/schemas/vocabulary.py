from __future__ import annotations

from pydantic import Field

from archaeolog.core.models.base import AppBaseModel


class VocabularyView(AppBaseModel):
    """Candidate list for one field, plus the affordances an input control needs.

    - options: display list (manual order, then frequency, then added values)
    - can_add: the typed query is not yet part of the vocabulary
    - can_reorder: no text filter is active, so dragging reflects the true order
    """

    key: str
    query: str = ""
    options: list[str] = Field(default_factory=list)
    can_add: bool = False
    can_reorder: bool = True
