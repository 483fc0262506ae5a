"""View catalogue and the ordering policy shared by every export path.

Records are ordered by view score, highest first. When two scores fall within
the tie band (``ScoringConfig.tie_threshold`` scaled to the view) the more
recently updated model wins; any remaining tie is settled by name.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ._types import Modality
from .config import DEFAULT_SCORING, ScoringConfig
from .entity import ModelEntity


def _always(entity: ModelEntity) -> bool:
    return True


@dataclass(frozen=True)
class View:
    key: str
    title: str
    description: str
    rank_key: str
    label: str
    include: Callable[[ModelEntity], bool] = _always
    scale: float = 100.0

    def score(self, entity: ModelEntity) -> float:
        return entity.ranks.get(self.rank_key)


VIEWS: dict[str, View] = {
    v.key: v
    for v in (
        View("overall", "Overall", "Bias-adjusted performance synthesis", "overall", "Index Score",
             include=lambda m: m.has(Modality.TEXT)),
        # raw quality-per-price ratio, not a 0..100 score
        View("value", "Best Value", "Performance per USD unit", "value", "Value Ratio",
             include=lambda m: m.ranks.value > 0.0, scale=1.0),
        View("coding", "Coding", "Software development capabilities", "coding", "Code Score",
             include=lambda m: m.metrics.coding_score > 0.0),
        View("image", "Image Gen", "Visual generation quality", "image", "Creative Score",
             include=lambda m: m.has(Modality.IMAGE)),
        View("video", "Video Gen", "Temporal visual synthesis", "video", "Motion Score",
             include=lambda m: m.ranks.video > 0.0),
        View("speed", "Speed", "Token generation throughput", "speed", "Tokens/Sec"),
        View("confidence", "Confidence", "Data verification level", "confidence", "Reliability"),
        View("enterprise", "Enterprise", "SLA & organizational maturity", "enterprise", "Readiness",
             include=lambda m: m.metrics.is_enterprise_ready),
        View("opensource", "Open Source", "Publicly available weights", "overall", "Index Score",
             include=lambda m: m.metrics.is_open_source),
    )
}

RANK_VIEWS = ("overall", "value", "coding", "image", "video", "speed", "confidence", "enterprise")


def get_view(key: str) -> View:
    try:
        return VIEWS[key]
    except KeyError:
        raise KeyError(f"Unknown view: {key!r}. Must be one of {sorted(VIEWS)}") from None


def compare(
    a: ModelEntity,
    b: ModelEntity,
    view: View,
    config: ScoringConfig = DEFAULT_SCORING,
) -> int:
    """Three-way comparison: negative when ``a`` ranks before ``b``."""
    score_a, score_b = view.score(a), view.score(b)
    tier_a, tier_b = a.metrics.recency_tier, b.metrics.recency_tier
    if abs(score_a - score_b) <= config.tie_band(view.scale) and tier_a != tier_b:
        return -1 if tier_a > tier_b else 1
    if score_a != score_b:
        return -1 if score_a > score_b else 1
    return (a.name > b.name) - (a.name < b.name)


def sort_for_view(
    entities: Iterable[ModelEntity],
    view: View | str,
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[ModelEntity]:
    if isinstance(view, str):
        view = get_view(view)
    key = functools.cmp_to_key(lambda a, b: compare(a, b, view, config))
    return sorted(entities, key=key)


def rank_view(
    entities: Iterable[ModelEntity],
    view: View | str,
    *,
    limit: int | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[ModelEntity]:
    """Eligible entities for ``view`` in display order, optionally truncated."""
    if isinstance(view, str):
        view = get_view(view)
    ordered = sort_for_view((m for m in entities if view.include(m)), view, config)
    return ordered if limit is None else ordered[:limit]


__all__ = ["View", "VIEWS", "RANK_VIEWS", "get_view", "compare", "sort_for_view", "rank_view"]
