"""Flat-file exports of a finished run.

Every ordered listing goes through ``ordering.rank_view`` so the CSV, JSON,
text and HTML outputs agree on rank order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ._types import Modality
from .config import DEFAULT_SCORING, OutputSettings, ScoringConfig
from .entity import ModelEntity
from .ordering import RANK_VIEWS, VIEWS, View, get_view, rank_view
from .pipeline import RunResult

logger = logging.getLogger(__name__)

JSON_FILE = "leaderboard_all.json"
PRICE_CSV = "leaderboard_price.csv"
LEGACY_TEXT = "output.txt"


def _pct(x: float) -> float:
    return max(0.0, min(100.0, x * 100.0))


def model_to_dict(m: ModelEntity) -> dict[str, Any]:
    return {
        "name": m.name,
        "org": m.organization,
        "metrics": {
            "score": _pct(m.aggregate_score),
            "coding": _pct(m.metrics.coding_score),
            "creative": _pct(m.metrics.creative_score),
            "price": m.metrics.price_per_million,
            "speed": m.metrics.tokens_per_second,
            "recency_bonus": m.metrics.recency_tier,
            "days_ago": m.metrics.staleness_days,
        },
        "ranks": m.ranks.clamped().to_dict(),
        "meta": {
            "confidence": m.confidence,
            "conf_reason": m.confidence_reason,
            "is_open_source": m.metrics.is_open_source,
            "is_enterprise": m.metrics.is_enterprise_ready,
            "is_image": m.has(Modality.IMAGE),
            "is_video": m.has(Modality.VIDEO),
            "is_text": m.has(Modality.TEXT),
            "primary_type": m.primary_type,
            "signals": [{"source": s.source, "score": s.score, "weight": s.weight} for s in m.signals],
        },
    }


def build_document(result: RunResult, config: ScoringConfig = DEFAULT_SCORING) -> dict[str, Any]:
    """Structured document of a ``RunResult``: every model plus the ecosystem summary."""
    models = rank_view(result.registry, "overall", config=config) + [
        m for m in result.registry if not VIEWS["overall"].include(m)
    ]
    return {
        "generated_at": result.generated_at,
        "models": [model_to_dict(m) for m in models],
        "ecosystem": {s.organization: s.share_score for s in result.ecosystem},
        "organizations": [s.to_dict() for s in result.ecosystem],
    }


def export_json(path: Path, document: dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(document, ensure_ascii=False, indent=2), "utf-8")
    return path


def _price_or_none(m: ModelEntity) -> float | None:
    return round(m.metrics.price_per_million, 2) if m.metrics.has_known_price else None


def view_frame(
    entities: Iterable[ModelEntity],
    view: View | str,
    *,
    limit: int = 100,
    config: ScoringConfig = DEFAULT_SCORING,
) -> pd.DataFrame:
    if isinstance(view, str):
        view = get_view(view)
    ranked = rank_view(entities, view, limit=limit, config=config)
    rows = [
        {
            "Rank": i,
            "Model": m.name,
            "Organization": m.organization,
            "Score": round(m.aggregate_score, 3),
            "Input Price": _price_or_none(m),
            f"{view.title} Score": round(m.ranks.clamped().get(view.rank_key), 2),
        }
        for i, m in enumerate(ranked, start=1)
    ]
    columns = ["Rank", "Model", "Organization", "Score", "Input Price", f"{view.title} Score"]
    return pd.DataFrame(rows, columns=columns)


def price_frame(entities: Iterable[ModelEntity], *, limit: int = 100) -> pd.DataFrame:
    """Cheapest first; models with an unknown price are left out."""
    priced = sorted(
        (m for m in entities if m.metrics.has_known_price),
        key=lambda m: (m.metrics.price_per_million, m.name),
    )[:limit]
    rows = [
        {
            "Rank": i,
            "Model": m.name,
            "Organization": m.organization,
            "Score": round(m.aggregate_score, 3),
            "Input Price": round(m.metrics.price_per_million, 2),
        }
        for i, m in enumerate(priced, start=1)
    ]
    return pd.DataFrame(rows, columns=["Rank", "Model", "Organization", "Score", "Input Price"])


def export_csv(path: Path, frame: pd.DataFrame) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    frame.to_csv(path, index=False, na_rep="N/A")
    return path


def legacy_text(entities: Iterable[ModelEntity], *, limit: int = 50, config: ScoringConfig = DEFAULT_SCORING) -> str:
    lines = ["AI LEADERBOARD", "------------------"]
    for i, m in enumerate(rank_view(entities, "overall", limit=limit, config=config), start=1):
        lines.append(f"{i}. {m.name} ({m.ranks.clamped().overall:.1f})")
    return "\n".join(lines) + "\n"


def export_all(
    result: RunResult,
    settings: OutputSettings | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> list[Path]:
    """Write the JSON document, one CSV per view, the price list and the text leaderboard."""
    settings = settings or OutputSettings()
    data_dir = settings.data_dir
    models = result.registry.models
    written = [export_json(data_dir / JSON_FILE, build_document(result, config))]
    for key in (*RANK_VIEWS, "opensource"):
        frame = view_frame(models, key, limit=settings.max_rows, config=config)
        written.append(export_csv(data_dir / f"leaderboard_{key}.csv", frame))
    written.append(export_csv(data_dir / PRICE_CSV, price_frame(models, limit=settings.max_rows)))

    text_path = data_dir / LEGACY_TEXT
    text_path.write_text(legacy_text(models, limit=settings.text_rows, config=config), "utf-8")
    written.append(text_path)
    logger.info("Generated %d data files in %s", len(written), data_dir)
    return written


__all__ = [
    "model_to_dict",
    "build_document",
    "export_json",
    "view_frame",
    "price_frame",
    "export_csv",
    "legacy_text",
    "export_all",
]
