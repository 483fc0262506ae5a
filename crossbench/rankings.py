from __future__ import annotations

import math
from typing import TYPE_CHECKING

from ._types import Metrics, Modality, RankScores
from .config import DEFAULT_SCORING, ScoringConfig

if TYPE_CHECKING:
    from .entity import ModelEntity


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def price_factor(price: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    return 1.0 / (1.0 + price / config.price_scale)


def value_score(aggregate: float, price: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    """Quality per unit of price; unbounded, free models scale by a fixed multiplier."""
    if price <= 0.0:
        return aggregate * config.free_value_multiplier
    return (aggregate * aggregate) / (math.log10(price + 1.0) + config.value_log_offset)


def media_score(aggregate: float, metrics: Metrics, conf: float, config: ScoringConfig = DEFAULT_SCORING) -> float:
    speed_norm = _clamp01(metrics.tokens_per_second / config.media_speed_ceiling)
    return (
        aggregate * config.media_core
        + metrics.creative_score * config.media_creative
        + speed_norm * config.media_speed
        + conf * config.media_confidence
    ) * 100.0


def compute_rankings(entity: ModelEntity, config: ScoringConfig = DEFAULT_SCORING) -> RankScores:
    """Compute the eight raw view scores; values are not clamped here."""
    s = entity.aggregate_score
    m = entity.metrics
    conf = entity.confidence / 100.0
    pf = price_factor(m.price_per_million, config)

    overall = (
        s * config.overall_core
        + m.coding_score * config.overall_coding
        + m.creative_score * config.overall_creative
        + conf * config.overall_confidence
        + pf * config.overall_price
    ) * 100.0

    ctx_norm = _clamp01(m.context_window / config.context_ceiling)
    coding = (
        m.coding_score * config.coding_skill
        + m.reasoning_score * config.coding_reasoning
        + ctx_norm * config.coding_context
        + conf * config.coding_confidence
    ) * 100.0

    media = media_score(s, m, conf, config)
    image = media if Modality.IMAGE in entity.modalities else 0.0
    # non-video models stay visible at a reduced score
    video = media if Modality.VIDEO in entity.modalities else media * config.video_missing_factor

    speed_base = _clamp01(m.tokens_per_second / config.speed_ceiling)
    speed = (
        speed_base * config.speed_throughput
        + conf * config.speed_confidence
        + pf * config.speed_price
    ) * 100.0

    enterprise = (
        conf * config.enterprise_confidence
        + m.uptime_sla * config.enterprise_uptime
        + m.org_maturity * config.enterprise_maturity
    ) * 100.0

    return RankScores(
        overall=overall,
        value=value_score(s, m.price_per_million, config),
        coding=coding,
        image=image,
        video=video,
        speed=speed,
        confidence=entity.confidence,
        enterprise=enterprise,
    )


__all__ = ["compute_rankings", "price_factor", "value_score", "media_score"]
