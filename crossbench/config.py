"""Scoring constants and run settings.

``ScoringConfig`` is an immutable value handed to the confidence, ranking and
ordering functions; alternate weight sets are built with
``dataclasses.replace``. Run settings resolve from explicit arguments first and
``CROSSBENCH_*`` environment variables second.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from ._errors import ConfigurationError

DEFAULT_ENDPOINT = "https://api.zeroeval.com/leaderboard/models/full?justCanonicals=true"
MAX_RETRIES = 3
RETRY_DELAY = 2.0
DEFAULT_TIMEOUT = 30.0
DEFAULT_DATA_DIR = "data"
DEFAULT_OUTPUT_DIR = "output"


@dataclass(frozen=True)
class ScoringConfig:
    # Signal sources
    gpqa_source: str = "ZeroEval GPQA"
    gpqa_weight: float = 0.50
    average_source: str = "Avg Score"
    average_weight: float = 0.40

    # Overall view
    overall_core: float = 0.40
    overall_coding: float = 0.20
    overall_creative: float = 0.15
    overall_confidence: float = 0.15
    overall_price: float = 0.10
    price_scale: float = 10.0

    # Confidence
    confidence_base: float = 50.0
    confidence_signal_bonus: float = 10.0
    confidence_recency_bonus: float = 5.0
    confidence_versatile_bonus: float = 10.0
    confidence_variance_penalty: float = 50.0
    confidence_enterprise_bonus: float = 5.0
    confidence_floor: float = 10.0
    confidence_ceiling: float = 99.0
    versatile_threshold: float = 0.75
    consensus_signals: int = 3
    # (aggregate above, bonus), checked top-down
    score_ladder: tuple[tuple[float, float], ...] = ((0.85, 15.0), (0.75, 10.0), (0.65, 5.0))
    low_score_threshold: float = 0.40
    low_score_penalty: float = 10.0

    # Value view
    free_value_multiplier: float = 1000.0
    value_log_offset: float = 0.1

    # Coding view
    coding_skill: float = 0.6
    coding_reasoning: float = 0.2
    coding_context: float = 0.1
    coding_confidence: float = 0.1
    context_ceiling: float = 200_000.0

    # Image / video views
    media_core: float = 0.5
    media_creative: float = 0.3
    media_speed: float = 0.1
    media_confidence: float = 0.1
    media_speed_ceiling: float = 150.0
    video_missing_factor: float = 0.3

    # Speed view
    speed_throughput: float = 0.7
    speed_confidence: float = 0.2
    speed_price: float = 0.1
    speed_ceiling: float = 200.0

    # Enterprise view
    enterprise_confidence: float = 0.4
    enterprise_uptime: float = 0.3
    enterprise_maturity: float = 0.3

    # Ordering, on a 0..1 scale
    tie_threshold: float = 0.005

    # Ecosystem share score
    ecosystem_count_weight: float = 0.4
    ecosystem_score_weight: float = 0.3
    ecosystem_score_scale: float = 10.0

    def tie_band(self, scale: float) -> float:
        """Tie threshold expressed on a view's own scale."""
        return self.tie_threshold * scale


DEFAULT_SCORING = ScoringConfig()


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value < 1:
        raise ConfigurationError(f"{name} must be at least 1, got {value}")
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {value}")
    return value


def resolve_endpoint(endpoint: str | None = None) -> str:
    url = endpoint or os.environ.get("CROSSBENCH_ENDPOINT") or DEFAULT_ENDPOINT
    if not url.startswith(("http://", "https://")):
        raise ConfigurationError(f"Endpoint must be an http(s) URL, got {url!r}")
    return url


@dataclass(frozen=True)
class FetchSettings:
    endpoint: str = DEFAULT_ENDPOINT
    max_retries: int = MAX_RETRIES
    retry_delay: float = RETRY_DELAY
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, endpoint: str | None = None) -> FetchSettings:
        return cls(
            endpoint=resolve_endpoint(endpoint),
            max_retries=_env_int("CROSSBENCH_MAX_RETRIES", MAX_RETRIES),
            retry_delay=_env_float("CROSSBENCH_RETRY_DELAY", RETRY_DELAY),
            timeout=_env_float("CROSSBENCH_TIMEOUT", DEFAULT_TIMEOUT),
        )


@dataclass(frozen=True)
class OutputSettings:
    data_dir: Path = Path(DEFAULT_DATA_DIR)
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    max_rows: int = 100
    text_rows: int = 50

    @classmethod
    def from_env(cls, data_dir: str | None = None, output_dir: str | None = None) -> OutputSettings:
        return cls(
            data_dir=Path(data_dir or os.environ.get("CROSSBENCH_DATA_DIR") or DEFAULT_DATA_DIR),
            output_dir=Path(output_dir or os.environ.get("CROSSBENCH_OUTPUT_DIR") or DEFAULT_OUTPUT_DIR),
        )


__all__ = [
    "DEFAULT_ENDPOINT",
    "DEFAULT_SCORING",
    "ScoringConfig",
    "FetchSettings",
    "OutputSettings",
    "resolve_endpoint",
]
