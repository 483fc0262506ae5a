"""Static HTML leaderboard: one table per view plus the ecosystem summary."""

from __future__ import annotations

import logging
from html import escape
from pathlib import Path

from ._types import OrgSummary
from .config import DEFAULT_SCORING, OutputSettings, ScoringConfig
from .entity import ModelEntity
from .ordering import VIEWS, View, rank_view
from .pipeline import RunResult

logger = logging.getLogger(__name__)

REPORT_FILE = "leaderboard.html"

_STYLE = """
body { background: #020617; color: #f8fafc; font-family: system-ui, sans-serif; margin: 0; }
header { padding: 1.5rem 2rem; border-bottom: 1px solid #1e293b; }
nav a { color: #94a3b8; margin-right: 1rem; text-decoration: none; font-weight: 700; }
section { padding: 1rem 2rem; }
table { width: 100%; border-collapse: collapse; font-size: 0.9rem; }
th, td { padding: 0.5rem; border-bottom: 1px solid #1e293b; text-align: left; }
th { color: #64748b; font-size: 0.75rem; text-transform: uppercase; }
td.num { text-align: right; font-family: monospace; }
.badge { background: #14532d; color: #4ade80; border-radius: 4px; padding: 0 4px; font-size: 0.7rem; }
.bar { background: #334155; border-radius: 99px; height: 8px; width: 120px; }
.fill { height: 100%; border-radius: 99px; }
.high { background: #10b981; } .mid { background: #f59e0b; } .low { background: #f43f5e; }
"""


def _confidence_class(confidence: float) -> str:
    if confidence > 80:
        return "high"
    if confidence > 50:
        return "mid"
    return "low"


def _metric_cell(view: View, m: ModelEntity) -> str:
    if view.key == "speed":
        return f"{m.metrics.tokens_per_second:.0f} tok/s"
    if view.key in ("image", "video"):
        return f"Creative: {m.metrics.creative_score * 100:.0f}"
    if view.key == "coding":
        return f"Code: {m.metrics.coding_score * 100:.0f}"
    if not m.metrics.has_known_price:
        return "N/A"
    price = m.metrics.price_per_million
    return f"${price:.2f} per 1M" if price > 0 else "Free"


def render_view(view: View, models: list[ModelEntity], *, limit: int, config: ScoringConfig) -> str:
    ranked = rank_view(models, view, limit=limit, config=config)
    rows = []
    for i, m in enumerate(ranked, start=1):
        badge = ' <span class="badge">NEW</span>' if m.metrics.staleness_days <= 30 else ""
        score = m.ranks.clamped().get(view.rank_key)
        rows.append(
            "<tr>"
            f'<td class="num">{i}</td>'
            f"<td><strong>{escape(m.name)}</strong>{badge}<br><small>{escape(m.organization)}</small></td>"
            f"<td>{escape(m.primary_type)}</td>"
            f'<td class="num">{score:.1f}</td>'
            f'<td class="num">{escape(_metric_cell(view, m))}</td>'
            f'<td title="{escape(m.confidence_reason)}"><div class="bar">'
            f'<div class="fill {_confidence_class(m.confidence)}" style="width: {m.confidence:.0f}%"></div>'
            "</div></td>"
            "</tr>"
        )
    if not rows:
        rows.append('<tr><td colspan="6">No models available in this category.</td></tr>')
    return (
        f'<section id="{view.key}"><h2>{escape(view.title)} Leaderboard</h2>'
        f"<p>{escape(view.description)}</p><table><thead><tr>"
        f"<th>Rank</th><th>Model</th><th>Type</th><th>{escape(view.label)}</th><th>Metrics</th><th>Reliability</th>"
        f"</tr></thead><tbody>{''.join(rows)}</tbody></table></section>"
    )


def render_ecosystem(summaries: list[OrgSummary]) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{escape(s.organization)}</td>"
        f'<td class="num">{s.model_count}</td>'
        f'<td class="num">{s.avg_score * 100:.1f}</td>'
        f'<td class="num">{s.market_share * 100:.1f}%</td>'
        f'<td class="num">{s.share_score:.2f}</td>'
        "</tr>"
        for s in summaries
    )
    return (
        '<section id="ecosystem"><h2>AI Ecosystem Market Share &amp; Performance</h2><table><thead><tr>'
        "<th>Organization</th><th>Model Count</th><th>Avg Score</th><th>Market Share</th><th>Share Score</th>"
        f"</tr></thead><tbody>{rows}</tbody></table></section>"
    )


def render_report(result: RunResult, *, limit: int = 100, config: ScoringConfig = DEFAULT_SCORING) -> str:
    models = result.registry.models
    nav = "".join(f'<a href="#{v.key}">{escape(v.title)}</a>' for v in VIEWS.values())
    nav += '<a href="#ecosystem">Ecosystem</a>'
    sections = "".join(render_view(v, models, limit=limit, config=config) for v in VIEWS.values())
    return (
        '<!DOCTYPE html><html lang="en"><head><meta charset="UTF-8">'
        "<title>CrossBench - AI Model Leaderboard Aggregator</title>"
        f"<style>{_STYLE}</style></head><body>"
        "<header><h1>CrossBench</h1><p>AI Model Leaderboard Aggregator &middot; "
        f"generated {escape(result.generated_at)} &middot; {len(models)} models</p>"
        f"<nav>{nav}</nav></header>"
        f"<main>{sections}{render_ecosystem(result.ecosystem)}</main></body></html>\n"
    )


def write_report(
    result: RunResult,
    settings: OutputSettings | None = None,
    config: ScoringConfig = DEFAULT_SCORING,
) -> Path:
    settings = settings or OutputSettings()
    path = settings.output_dir / REPORT_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_report(result, limit=settings.max_rows, config=config), "utf-8")
    logger.info("Dashboard written to %s", path)
    return path


__all__ = ["REPORT_FILE", "render_report", "render_view", "render_ecosystem", "write_report"]
