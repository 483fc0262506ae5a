from __future__ import annotations

from collections.abc import Iterable

from ._types import OrgSummary
from .config import DEFAULT_SCORING, ScoringConfig
from .entity import ModelEntity

FALLBACK_ORGANIZATION = "Other"


def share_score(model_count: int, avg_score: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    return (
        model_count * config.ecosystem_count_weight
        + avg_score * config.ecosystem_score_scale * config.ecosystem_score_weight
    )


def compute_ecosystem(
    entities: Iterable[ModelEntity],
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[OrgSummary]:
    """Summarize models per organization, most visible organization first.

    The share score only orders organizations against each other; it is not
    on the same scale as the per-model rankings.
    """
    counts: dict[str, int] = {}
    totals: dict[str, float] = {}
    for m in entities:
        org = m.organization or FALLBACK_ORGANIZATION
        counts[org] = counts.get(org, 0) + 1
        totals[org] = totals.get(org, 0.0) + m.aggregate_score

    total_models = sum(counts.values())
    summaries = []
    for org, count in counts.items():
        avg = totals[org] / count
        summaries.append(
            OrgSummary(
                organization=org,
                model_count=count,
                avg_score=avg,
                share_score=share_score(count, avg, config),
                market_share=count / total_models,
            )
        )
    summaries.sort(key=lambda s: (-s.share_score, s.organization))
    return summaries


__all__ = ["FALLBACK_ORGANIZATION", "compute_ecosystem", "share_score"]
