from __future__ import annotations

from crossbench._errors import (
    APIError,
    ConfigurationError,
    CrossBenchError,
    DuplicateModelError,
    FetchError,
    MalformedRecordError,
    NotFoundError,
    PayloadError,
    RateLimitError,
    ServerError,
)
from crossbench._http import FetchClient
from crossbench._types import (
    UNKNOWN_PRICE,
    ConfidenceResult,
    IngestResult,
    Metrics,
    Modality,
    OrgSummary,
    RankScores,
    Signal,
    recency_tier,
)
from crossbench.config import DEFAULT_SCORING, FetchSettings, OutputSettings, ScoringConfig
from crossbench.confidence import estimate_confidence
from crossbench.ecosystem import compute_ecosystem
from crossbench.enrichment import Enricher, KnowledgeBase
from crossbench.entity import ModelEntity, Registry
from crossbench.ordering import VIEWS, View, rank_view, sort_for_view
from crossbench.pipeline import Pipeline, RunResult
from crossbench.rankings import compute_rankings

__version__ = "1.0.0"

__all__ = [
    "APIError",
    "ConfigurationError",
    "CrossBenchError",
    "DuplicateModelError",
    "FetchError",
    "MalformedRecordError",
    "NotFoundError",
    "PayloadError",
    "RateLimitError",
    "ServerError",
    "FetchClient",
    "UNKNOWN_PRICE",
    "ConfidenceResult",
    "IngestResult",
    "Metrics",
    "Modality",
    "OrgSummary",
    "RankScores",
    "Signal",
    "recency_tier",
    "DEFAULT_SCORING",
    "FetchSettings",
    "OutputSettings",
    "ScoringConfig",
    "estimate_confidence",
    "compute_ecosystem",
    "Enricher",
    "KnowledgeBase",
    "ModelEntity",
    "Registry",
    "VIEWS",
    "View",
    "rank_view",
    "sort_for_view",
    "Pipeline",
    "RunResult",
    "compute_rankings",
]
