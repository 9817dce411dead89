from __future__ import annotations

from .base import StoredRecordModel


class User(StoredRecordModel):
    """Account entry carried inside the synced document.

    Authentication is handled by the client; the backend only stores it.
    """

    username: str
    password: str | None = None
    avatar_url: str = ""
    display_name: str = ""
    created_at: int | None = None
