from __future__ import annotations

from typing import TYPE_CHECKING

from archaeolog.core.schemas.stats import StatsDimension, StatsEntry, StatsSummary
from archaeolog.core.services.site_service import site_label

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archaeolog.core.models.artifact import Artifact

OTHER_LABEL = "其他"

# Label used when a record leaves the dimension blank
FALLBACK_LABELS: dict[StatsDimension, str] = {
    StatsDimension.MATERIAL: "未知",
    StatsDimension.CATEGORY: "未分类",
    StatsDimension.UNIT: "未知单位",
}


def _label(artifact: Artifact, dimension: StatsDimension) -> str:
    value = getattr(artifact, dimension.value, None)
    return value if value else FALLBACK_LABELS[dimension]


def rollup(artifacts: Sequence[Artifact], dimension: StatsDimension, top_n: int = 8) -> list[StatsEntry]:
    """Count records per label, largest first; labels past ``top_n`` fold into one bucket."""
    counts: dict[str, int] = {}
    for artifact in artifacts:
        label = _label(artifact, dimension)
        counts[label] = counts.get(label, 0) + 1

    entries = [
        StatsEntry(label=label, value=value)
        for label, value in sorted(counts.items(), key=lambda item: item[1], reverse=True)
    ]
    if len(entries) > top_n:
        others = sum(e.value for e in entries[top_n:])
        entries = entries[:top_n]
        entries.append(StatsEntry(label=OTHER_LABEL, value=others))
    return entries


def summarize(artifacts: Sequence[Artifact]) -> StatsSummary:
    return StatsSummary(
        artifact_count=len(artifacts),
        site_count=len({site_label(a) for a in artifacts}),
        total_quantity=sum(a.quantity for a in artifacts),
    )
