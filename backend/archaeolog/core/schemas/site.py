from __future__ import annotations

from archaeolog.core.models.base import AppBaseModel

UNCLASSIFIED_SITE = "未分类遗址"


class SiteGroup(AppBaseModel):
    """Artifacts of one excavation site, as shown on the dashboard.

    - count: number of artifact records at the site
    - last_update: newest created_at among them (epoch ms)
    - image: thumbnail representing the site, if any record carries one
    """

    name: str
    count: int = 0
    last_update: int = 0
    image: str | None = None
