"""Shared helpers for building scored entities and raw payloads."""

from __future__ import annotations

import json

import pytest

from crossbench._types import Metrics, Modality
from crossbench.config import DEFAULT_SCORING, ScoringConfig
from crossbench.entity import ModelEntity


def make_entity(
    name: str = "model",
    org: str = "Acme",
    *,
    signals: list[tuple[float, float]] | None = None,
    modalities: set[Modality] | None = None,
    staleness: int = 200,
    coding: float = 0.5,
    creative: float = 0.5,
    reasoning: float | None = None,
    context: float = 100_000.0,
    price: float = 1.0,
    tps: float = 50.0,
    enterprise: bool = False,
    open_source: bool = False,
    maturity: float = 0.5,
    uptime: float = 0.8,
    config: ScoringConfig = DEFAULT_SCORING,
    recalc: bool = True,
) -> ModelEntity:
    """Build an entity with explicit metrics, bypassing enrichment."""
    m = ModelEntity(name, org)
    for i, (score, weight) in enumerate(signals if signals is not None else [(0.7, 0.5)]):
        m.add_signal(f"src{i}", score, weight)
    m.compute_aggregates()
    m.modalities = frozenset(modalities or {Modality.TEXT})
    m.metrics = Metrics(
        reasoning_score=m.aggregate_score if reasoning is None else reasoning,
        coding_score=coding,
        creative_score=creative,
        context_window=context,
        price_per_million=price,
        tokens_per_second=tps,
        is_open_source=open_source,
        is_enterprise_ready=enterprise,
        org_maturity=maturity,
        uptime_sla=uptime,
        staleness_days=staleness,
    )
    if recalc:
        m.recalculate(config)
    return m


def payload(*records: dict) -> bytes:
    return json.dumps(list(records)).encode("utf-8")


@pytest.fixture
def sample_records() -> list[dict]:
    return [
        {
            "name": "GPT-4o",
            "organization": "OpenAI",
            "gpqa_score": 0.82,
            "input_price": "2.5",
            "context_length": 128000,
            "throughput": 90,
            "modalities": ["text", "image"],
            "release_date": "2024-05-13",
        },
        {
            "name": "Llama 3.1 405B",
            "organization": "Meta",
            "average_score": "0.71",
            "context_length": "128000",
        },
        {
            "name": "Claude 3.5 Sonnet",
            "organization": "Anthropic",
            "gpqa_score": 0.65,
            "input_price": 3,
            "coding_score": 0.9,
        },
        {"name": "No Signal Model", "organization": "Nobody"},
        {"name": "", "gpqa_score": 0.5},
        {"organization": "Ghost", "gpqa_score": 0.5},
        {"name": "Broken Numbers", "gpqa_score": "high"},
        {"name": "GPT-4o", "organization": "Impostor", "gpqa_score": 0.99},
        {"name": "Sora", "organization": "", "average_score": 0.6},
    ]
