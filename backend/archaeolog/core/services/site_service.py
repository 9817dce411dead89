from __future__ import annotations

from typing import TYPE_CHECKING

from archaeolog.core.schemas.site import UNCLASSIFIED_SITE, SiteGroup

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from archaeolog.core.models.artifact import Artifact


def site_label(artifact: Artifact) -> str:
    return artifact.site_name.strip() if artifact.site_name and artifact.site_name.strip() else UNCLASSIFIED_SITE


def group_by_site(artifacts: Iterable[Artifact]) -> list[SiteGroup]:
    """Group artifacts by site, most recently updated site first.

    A site's image is the first thumbnail seen, replaced by the thumbnail of
    any record newer than everything seen before it.
    """
    groups: dict[str, SiteGroup] = {}
    for artifact in artifacts:
        name = site_label(artifact)
        group = groups.get(name)
        if group is None:
            group = groups[name] = SiteGroup(name=name)
        group.count += 1
        is_newest = artifact.created_at > group.last_update
        if is_newest:
            group.last_update = artifact.created_at
        if artifact.image_url and (group.image is None or is_newest):
            group.image = artifact.image_url
    return sorted(groups.values(), key=lambda g: g.last_update, reverse=True)


def filter_artifacts(
    artifacts: Sequence[Artifact],
    *,
    search: str | None = None,
    site: str | None = None,
) -> list[Artifact]:
    """Filtered view: text search over name, site and serial number, then site filter."""
    result = list(artifacts)
    if search:
        needle = search.lower()
        result = [
            a for a in result
            if needle in a.name.lower()
            or (a.site_name and needle in a.site_name.lower())
            or (a.serial_number and needle in a.serial_number.lower())
        ]
    if site:
        result = [a for a in result if site_label(a) == site]
    return result
