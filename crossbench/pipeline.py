"""Run-once pipeline: fetch, parse, filter, score, summarize.

Each record flows through signals → aggregate → enrichment → confidence →
rankings. Records are independent of one another; only the registry and the
counters are shared.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ._errors import FetchError, MalformedRecordError, PayloadError
from ._http import FetchClient
from ._types import Modality, OrgSummary
from .config import DEFAULT_SCORING, ScoringConfig
from .ecosystem import compute_ecosystem
from .enrichment import Enricher, KnowledgeBase
from .entity import ModelEntity, Registry
from .ingest import filter_records, get_float, parse_payload

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return dt.datetime.now(dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


@dataclass
class RunResult:
    registry: Registry = field(default_factory=Registry)
    ecosystem: list[OrgSummary] = field(default_factory=list)
    processed: int = 0
    skipped: int = 0
    duplicates: int = 0
    excluded: int = 0
    aborted: bool = False
    reason: str | None = None
    generated_at: str = field(default_factory=now_iso)

    @property
    def ok(self) -> bool:
        return not self.aborted and len(self.registry) > 0


class Pipeline:
    def __init__(
        self,
        fetcher: FetchClient | None = None,
        enricher: Enricher | None = None,
        config: ScoringConfig = DEFAULT_SCORING,
    ):
        self._fetcher = fetcher
        self._enricher = enricher or KnowledgeBase()
        self._config = config

    @property
    def config(self) -> ScoringConfig:
        return self._config

    def add_signals(self, entity: ModelEntity, raw: Mapping[str, Any]) -> None:
        cfg = self._config
        gpqa = get_float(raw, "gpqa_score")
        if gpqa is not None:
            if 0.0 <= gpqa <= 1.0:
                entity.add_signal(cfg.gpqa_source, gpqa, cfg.gpqa_weight)
            return
        average = get_float(raw, "average_score")
        if average is not None and 0.0 <= average <= 1.0:
            entity.add_signal(cfg.average_source, average, cfg.average_weight)

    def score_record(self, raw: Mapping[str, Any]) -> ModelEntity:
        """Build and fully score one entity from an accepted raw record."""
        org = raw.get("organization")
        entity = ModelEntity(str(raw["name"]), "Unknown" if org is None else str(org))
        self.add_signals(entity, raw)
        entity.compute_aggregates()
        self._enricher.enrich(entity, raw)
        if not entity.modalities:
            entity.modalities = frozenset({Modality.TEXT})
        entity.recalculate(self._config)
        return entity

    def process(self, items: Iterable[Any]) -> RunResult:
        ingest = filter_records(items)
        result = RunResult(skipped=ingest.skipped, duplicates=ingest.duplicates)
        for raw in ingest.records:
            try:
                entity = self.score_record(raw)
            except MalformedRecordError as exc:
                logger.warning("Error processing model %r: %s", raw.get("name"), exc)
                result.skipped += 1
                continue
            if result.registry.add(entity):
                result.processed += 1
            else:
                result.excluded += 1

        logger.info(
            "Completed: %d models processed, %d skipped, %d without signals",
            result.processed, result.skipped, result.excluded,
        )
        self._log_modalities(result.registry)

        logger.info("Computing ecosystem statistics...")
        result.ecosystem = compute_ecosystem(result.registry, self._config)
        return result

    def run(self, payload: bytes | str | None = None) -> RunResult:
        """Fetch (unless ``payload`` is given), parse and score everything.

        A fetch failure or a malformed payload aborts the run with an empty
        registry.
        """
        if payload is None:
            if self._fetcher is None:
                self._fetcher = FetchClient()
            logger.info("Fetching live data from %s", self._fetcher.endpoint)
            try:
                payload = self._fetcher.fetch()
            except FetchError as exc:
                logger.error("No data received from API: %s", exc)
                return RunResult(aborted=True, reason=str(exc))

        try:
            items = parse_payload(payload)
        except PayloadError as exc:
            logger.error("%s", exc)
            return RunResult(aborted=True, reason=str(exc))
        logger.info("Found %d model entries", len(items))

        result = self.process(items)
        if not len(result.registry):
            result.aborted = True
            result.reason = "No models with verified signals"
            logger.error(result.reason)
        return result

    @staticmethod
    def _log_modalities(registry: Registry) -> None:
        counts = {m: sum(1 for e in registry if e.has(m)) for m in Modality}
        logger.info(
            "Modalities - Text: %d, Image: %d, Video: %d",
            counts[Modality.TEXT], counts[Modality.IMAGE], counts[Modality.VIDEO],
        )


__all__ = ["Pipeline", "RunResult", "now_iso"]
