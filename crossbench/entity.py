from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

from ._errors import DuplicateModelError
from ._types import ConfidenceResult, Metrics, Modality, RankScores, Signal
from .config import DEFAULT_SCORING, ScoringConfig
from .confidence import estimate_confidence
from .rankings import compute_rankings

logger = logging.getLogger(__name__)


@dataclass
class ModelEntity:
    """One evaluated model: its evidence, enriched metrics and derived scores."""

    name: str
    organization: str = "Unknown"
    modalities: frozenset[Modality] = frozenset()
    metrics: Metrics = field(default_factory=Metrics)
    signals: list[Signal] = field(default_factory=list)
    aggregate_score: float = 0.0
    confidence: float = DEFAULT_SCORING.confidence_floor
    confidence_reason: str = ""
    ranks: RankScores = field(default_factory=RankScores)

    def add_signal(self, source: str, raw_score: float | None, weight: float) -> None:
        """Record one observation; non-positive or missing scores are not evidence."""
        if raw_score is None or raw_score <= 0.0:
            return
        if weight <= 0.0:
            raise ValueError(f"Signal weight must be positive, got {weight} for {source}")
        self.signals.append(Signal(source, min(1.0, float(raw_score)), float(weight)))

    def aggregate(self) -> float:
        if not self.signals:
            return 0.0
        total_weight = sum(s.weight for s in self.signals)
        return sum(s.score * s.weight for s in self.signals) / total_weight

    def compute_aggregates(self) -> float:
        self.aggregate_score = self.aggregate()
        if not self.signals:
            self.confidence_reason = "No Verified Signals"
        elif self.aggregate_score > 0.9 or self.aggregate_score < 0.1:
            logger.debug(
                "Aggregate %s: score=%.3f (%d signals)", self.name, self.aggregate_score, len(self.signals)
            )
        return self.aggregate_score

    def recalculate(self, config: ScoringConfig = DEFAULT_SCORING) -> ConfidenceResult:
        """Recompute confidence and then the eight rankings from current state."""
        result = estimate_confidence(self, config)
        self.confidence = result.value
        self.confidence_reason = result.reason
        if result.value < 20.0 or result.value > 90.0:
            logger.debug("Confidence %s: %.1f%% (%s)", self.name, result.value, result.reason)
        self.ranks = compute_rankings(self, config)
        return result

    def has(self, modality: Modality) -> bool:
        return modality in self.modalities

    @property
    def primary_type(self) -> str:
        if Modality.VIDEO in self.modalities:
            return "Video"
        if Modality.IMAGE in self.modalities and len(self.modalities) == 1:
            return "Image"
        if len(self.modalities) > 1:
            return "Multimodal"
        return "Text"


class Registry:
    """Append-only collection of scored models keyed by name."""

    def __init__(self) -> None:
        self._models: dict[str, ModelEntity] = {}

    def add(self, entity: ModelEntity) -> bool:
        """Keep ``entity`` if it carries a positive aggregate score.

        Returns whether the entity was kept. Raises ``DuplicateModelError``
        when the name is already registered.
        """
        if entity.name in self._models:
            raise DuplicateModelError(entity.name)
        if entity.aggregate_score <= 0.0:
            return False
        self._models[entity.name] = entity
        return True

    def get(self, name: str) -> ModelEntity | None:
        return self._models.get(name)

    @property
    def models(self) -> list[ModelEntity]:
        return list(self._models.values())

    def __contains__(self, name: object) -> bool:
        return name in self._models

    def __iter__(self) -> Iterator[ModelEntity]:
        return iter(self._models.values())

    def __len__(self) -> int:
        return len(self._models)


__all__ = ["ModelEntity", "Registry"]
