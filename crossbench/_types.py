from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum

UNKNOWN_PRICE = 999999.0


class Modality(str, Enum):
    TEXT = "Text"
    IMAGE = "Image"
    VIDEO = "Video"

    @classmethod
    def parse(cls, label: str) -> Modality | None:
        key = label.strip().lower()
        if key in ("image", "vision"):
            return cls.IMAGE
        if key == "video":
            return cls.VIDEO
        if key == "text":
            return cls.TEXT
        return None


def recency_tier(staleness_days: int) -> int:
    """Bucket staleness into 0..3; the fresher the record, the higher the tier."""
    if staleness_days <= 30:
        return 3
    if staleness_days <= 90:
        return 2
    if staleness_days <= 180:
        return 1
    return 0


@dataclass(frozen=True)
class Signal:
    source: str
    score: float
    weight: float


@dataclass
class Metrics:
    reasoning_score: float = 0.0
    coding_score: float = 0.0
    creative_score: float = 0.0
    context_window: float = 0.0
    price_per_million: float = 0.0
    tokens_per_second: float = 0.0
    is_open_source: bool = False
    is_enterprise_ready: bool = False
    org_maturity: float = 0.0
    uptime_sla: float = 0.0
    staleness_days: int = 0

    @property
    def recency_tier(self) -> int:
        return recency_tier(self.staleness_days)

    @property
    def has_known_price(self) -> bool:
        return self.price_per_million < UNKNOWN_PRICE


@dataclass
class RankScores:
    overall: float = 0.0
    value: float = 0.0
    coding: float = 0.0
    image: float = 0.0
    video: float = 0.0
    speed: float = 0.0
    confidence: float = 0.0
    enterprise: float = 0.0

    def get(self, key: str) -> float:
        return float(getattr(self, key))

    def clamped(self) -> RankScores:
        """Display copy with every view clamped to [0, 100]."""
        return RankScores(**{f.name: max(0.0, min(100.0, getattr(self, f.name))) for f in fields(self)})

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ConfidenceResult:
    value: float
    reasons: tuple[str, ...] = ()

    @property
    def reason(self) -> str:
        return ", ".join(self.reasons)


@dataclass
class OrgSummary:
    organization: str
    model_count: int
    avg_score: float
    share_score: float
    market_share: float = 0.0

    def to_dict(self) -> dict[str, float | int | str]:
        return asdict(self)


@dataclass
class IngestResult:
    records: list[dict] = field(default_factory=list)
    skipped: int = 0
    duplicates: int = 0


__all__ = [
    "UNKNOWN_PRICE",
    "Modality",
    "recency_tier",
    "Signal",
    "Metrics",
    "RankScores",
    "ConfidenceResult",
    "OrgSummary",
    "IngestResult",
]
