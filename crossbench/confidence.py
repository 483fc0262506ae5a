"""Confidence estimation.

Confidence answers "how far can this aggregate be trusted": it grows with
the number of signals, freshness, versatility and score quality, and shrinks
when the signals disagree. The result always lies in
[``confidence_floor``, ``confidence_ceiling``].
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ._types import ConfidenceResult
from .config import DEFAULT_SCORING, ScoringConfig

if TYPE_CHECKING:
    from .entity import ModelEntity


def signal_dispersion(scores: list[float], mean: float) -> float:
    """Population standard deviation of ``scores`` around ``mean``."""
    if len(scores) < 2:
        return 0.0
    return math.sqrt(sum((s - mean) ** 2 for s in scores) / len(scores))


def score_quality_bonus(aggregate: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    for threshold, bonus in config.score_ladder:
        if aggregate > threshold:
            return bonus
    if aggregate < config.low_score_threshold:
        return -config.low_score_penalty
    return 0.0


def is_versatile(entity: ModelEntity, config: ScoringConfig = DEFAULT_SCORING) -> bool:
    m = entity.metrics
    strong_both = m.coding_score > config.versatile_threshold and m.creative_score > config.versatile_threshold
    return strong_both or len(entity.modalities) > 1


def estimate_confidence(entity: ModelEntity, config: ScoringConfig = DEFAULT_SCORING) -> ConfidenceResult:
    if not entity.signals:
        return ConfidenceResult(config.confidence_floor, ("No Verified Signals",))

    reasons: list[str] = []
    conf = config.confidence_base
    conf += len(entity.signals) * config.confidence_signal_bonus

    tier = entity.metrics.recency_tier
    if tier == 3:
        conf += config.confidence_recency_bonus
        reasons.append("Recent Verification")
    elif tier == 2:
        conf += config.confidence_recency_bonus * 0.5

    if is_versatile(entity, config):
        conf += config.confidence_versatile_bonus
        reasons.append("Multi-Category Verified")

    conf += score_quality_bonus(entity.aggregate_score, config)

    deviation = signal_dispersion([s.score for s in entity.signals], entity.aggregate_score)
    conf -= deviation * config.confidence_variance_penalty

    if entity.metrics.is_enterprise_ready:
        conf += config.confidence_enterprise_bonus

    if len(entity.signals) >= config.consensus_signals:
        reasons.append("High Consensus")

    value = max(config.confidence_floor, min(config.confidence_ceiling, conf))
    return ConfidenceResult(value, tuple(reasons))


__all__ = ["estimate_confidence", "signal_dispersion", "score_quality_bonus", "is_versatile"]
