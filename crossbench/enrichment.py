"""Metric enrichment.

Fills in every ``Metrics`` field for a model from its raw record, falling back
to name and organization patterns when the record is silent. The scoring core
only depends on the resulting schema, so any ``Enricher`` can be swapped in.
"""

from __future__ import annotations

import datetime as dt
import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

import pandas as pd

from ._types import UNKNOWN_PRICE, Metrics, Modality
from .entity import ModelEntity
from .ingest import get_float

logger = logging.getLogger(__name__)

IMAGE_GENERATORS = ("midjourney", "stable diffusion", "dall-e", "imagen")
VIDEO_GENERATORS = (
    "sora", "runway", "gen-2", "gen-3", "pika", "animatediff",
    "stable video", "kling", "video generation",
)
VISION_MODELS = (
    "gpt-4", "gpt-5", "claude 3", "claude 4", "gemini", "llama 3.2 11b", "llama 3.2 90b",
    "pixtral", "qvq", "vision", "-vl", "diffusion",
)
OPEN_SOURCE_FAMILIES = ("llama", "mistral", "qwen", "falcon")
ENTERPRISE_ORGS = ("openai", "anthropic", "google", "microsoft")
HIGH_END_FAMILIES = ("gpt-4", "claude", "gemini")

ENTERPRISE_MATURITY, ENTERPRISE_UPTIME = 0.95, 0.99
DEFAULT_MATURITY, DEFAULT_UPTIME = 0.5, 0.8

DEFAULT_CONTEXT_TOKENS = 100_000.0
LONG_CONTEXT_TOKENS = 160_000.0
DEFAULT_STALENESS_DAYS = 180


class Enricher(ABC):
    """Interface for metric enrichment. ``enrich`` mutates the entity in place."""

    @abstractmethod
    def enrich(self, entity: ModelEntity, raw: Mapping[str, Any]) -> None: ...


def _contains_any(text: str, needles: tuple[str, ...]) -> bool:
    return any(n in text for n in needles)


def detect_modalities(name: str, raw: Mapping[str, Any]) -> frozenset[Modality]:
    listed = raw.get("modalities")
    if isinstance(listed, list):
        found = {Modality.parse(x) for x in listed if isinstance(x, str)}
        found.discard(None)
        if found:
            return frozenset(found)

    n = name.lower()
    if _contains_any(n, IMAGE_GENERATORS):
        return frozenset({Modality.IMAGE, Modality.TEXT})
    if _contains_any(n, VIDEO_GENERATORS):
        return frozenset({Modality.VIDEO, Modality.TEXT})
    is_grok_vision = "grok" in n and _contains_any(n, ("-2", "-3", "-4"))
    is_qwen_vision = "qwen" in n and "vl" in n
    if _contains_any(n, VISION_MODELS) or is_grok_vision or is_qwen_vision:
        return frozenset({Modality.IMAGE, Modality.TEXT})
    return frozenset({Modality.TEXT})


def parse_timestamp(value: Any) -> pd.Timestamp | None:
    """Parse an ISO string or epoch number into a UTC timestamp; ``None`` if unusable."""
    if value is None or isinstance(value, bool) or value == "":
        return None
    try:
        if isinstance(value, (int, float)):
            unit = "ms" if abs(value) > 1e11 else "s"
            ts = pd.to_datetime(value, unit=unit, utc=True, errors="coerce")
        else:
            ts = pd.to_datetime(str(value), utc=True, errors="coerce")
    except (OverflowError, ValueError, pd.errors.OutOfBoundsDatetime):
        return None
    if pd.isna(ts):
        return None
    return ts


def staleness_from_name(name: str) -> int:
    n = name.lower()
    if "2025" in n:
        return 15
    if "2024" in n:
        return 90
    if "2023" in n:
        return 365
    return DEFAULT_STALENESS_DAYS


class KnowledgeBase(Enricher):
    """Default enricher: real fields first, name and organization heuristics second."""

    def __init__(self, now: dt.datetime | pd.Timestamp | None = None):
        if now is None:
            self._now = pd.Timestamp.now(tz="UTC")
        else:
            ts = pd.Timestamp(now)
            self._now = ts.tz_localize("UTC") if ts.tzinfo is None else ts.tz_convert("UTC")

    @property
    def now(self) -> pd.Timestamp:
        return self._now

    def enrich(self, entity: ModelEntity, raw: Mapping[str, Any]) -> None:
        n = entity.name.lower()
        o = entity.organization.lower()
        agg = entity.aggregate_score

        entity.modalities = detect_modalities(entity.name, raw)
        media = entity.has(Modality.IMAGE) or entity.has(Modality.VIDEO)

        enterprise = o in ENTERPRISE_ORGS
        entity.metrics = Metrics(
            reasoning_score=agg,
            coding_score=self.coding_score(n, agg, raw),
            creative_score=self.creative_score(n, agg, media, raw),
            context_window=self.context_window(n, raw),
            price_per_million=self.price(n, raw),
            tokens_per_second=self.throughput(n, raw),
            is_open_source=_contains_any(n, OPEN_SOURCE_FAMILIES),
            is_enterprise_ready=enterprise,
            org_maturity=ENTERPRISE_MATURITY if enterprise else DEFAULT_MATURITY,
            uptime_sla=ENTERPRISE_UPTIME if enterprise else DEFAULT_UPTIME,
            staleness_days=self.staleness_days(entity.name, raw),
        )

    @staticmethod
    def price(n: str, raw: Mapping[str, Any]) -> float:
        value = get_float(raw, "input_price")
        if value is not None:
            if value < 0.0:
                return UNKNOWN_PRICE
            # sub-unit prices are quoted per token
            if 0.0 < value < 1.0:
                return value * 1_000_000.0
            return value
        if "gpt-4" in n:
            return 10.0
        if "flash" in n:
            return 0.25
        return 0.0

    @staticmethod
    def coding_score(n: str, agg: float, raw: Mapping[str, Any]) -> float:
        for key in ("coding_score", "humaneval"):
            value = get_float(raw, key)
            if value is not None:
                return max(0.0, min(1.0, value))
        factor = 1.05 if "code" in n else 0.85
        return min(1.0, agg * factor)

    @staticmethod
    def creative_score(n: str, agg: float, media: bool, raw: Mapping[str, Any]) -> float:
        value = get_float(raw, "creative_score")
        if value is not None:
            return max(0.0, min(1.0, value))
        if media:
            factor = 1.1
        elif _contains_any(n, HIGH_END_FAMILIES):
            factor = 0.95
        else:
            factor = 0.80
        return min(1.0, agg * factor)

    @staticmethod
    def context_window(n: str, raw: Mapping[str, Any]) -> float:
        value = get_float(raw, "context_length")
        if value is not None:
            return max(0.0, value)
        if "128k" in n or "200k" in n:
            return LONG_CONTEXT_TOKENS
        return DEFAULT_CONTEXT_TOKENS

    @staticmethod
    def throughput(n: str, raw: Mapping[str, Any]) -> float:
        for key in ("throughput", "tokens_per_second"):
            value = get_float(raw, key)
            if value is not None:
                return max(0.0, value)
        if "turbo" in n:
            return 120.0
        if "flash" in n:
            return 150.0
        if "mini" in n:
            return 100.0
        return 50.0

    def staleness_days(self, name: str, raw: Mapping[str, Any]) -> int:
        for key in ("release_date", "updated_at"):
            ts = parse_timestamp(raw.get(key))
            if ts is not None:
                return max(0, (self._now - ts).days)
            if raw.get(key) not in (None, ""):
                logger.debug("Unparseable %s for %s: %r", key, name, raw.get(key))
        return staleness_from_name(name)


__all__ = ["Enricher", "KnowledgeBase", "detect_modalities", "parse_timestamp", "staleness_from_name"]
