from __future__ import annotations

import dataclasses

import pytest

from conftest import make_entity
from crossbench._types import Modality
from crossbench.config import DEFAULT_SCORING
from crossbench.confidence import estimate_confidence, score_quality_bonus, signal_dispersion


class TestDispersion:
    def test_single_score_has_none(self) -> None:
        assert signal_dispersion([0.8], 0.8) == 0.0

    def test_population_deviation(self) -> None:
        assert signal_dispersion([0.9, 0.5], 0.7) == pytest.approx(0.2)


class TestScoreLadder:
    @pytest.mark.parametrize(
        ("aggregate", "bonus"),
        [(0.9, 15.0), (0.8, 10.0), (0.7, 5.0), (0.5, 0.0), (0.3, -10.0)],
    )
    def test_ladder(self, aggregate: float, bonus: float) -> None:
        assert score_quality_bonus(aggregate) == bonus


class TestEstimateConfidence:
    def test_no_signals_is_floor(self) -> None:
        m = make_entity(signals=[], recalc=False)
        result = estimate_confidence(m)
        assert result.value == 10.0
        assert result.reason == "No Verified Signals"

    def test_worked_example(self) -> None:
        m = make_entity(
            signals=[(0.9, 0.5), (0.7, 0.4)],
            staleness=15,
            coding=0.8,
            creative=0.8,
            enterprise=True,
        )
        # 50 + 20 + 5 + 10 + 10 - 50 * dispersion + 5
        assert m.confidence == pytest.approx(94.969, abs=0.01)
        assert m.confidence_reason == "Recent Verification, Multi-Category Verified"

    def test_tier_two_recency_is_half_bonus(self) -> None:
        fresh = make_entity(signals=[(0.7, 0.5)], staleness=60)
        stale = make_entity(signals=[(0.7, 0.5)], staleness=200)
        assert fresh.confidence == pytest.approx(67.5)
        assert stale.confidence == pytest.approx(65.0)

    def test_disagreement_lowers_confidence(self) -> None:
        agree = make_entity(signals=[(0.7, 1.0), (0.7, 1.0)])
        disagree = make_entity(signals=[(0.9, 1.0), (0.5, 1.0)])
        assert agree.aggregate_score == pytest.approx(disagree.aggregate_score)
        assert disagree.confidence < agree.confidence

    def test_multimodal_counts_as_versatile(self) -> None:
        m = make_entity(modalities={Modality.TEXT, Modality.IMAGE})
        assert "Multi-Category Verified" in m.confidence_reason

    def test_high_consensus_reason(self) -> None:
        m = make_entity(signals=[(0.8, 0.5), (0.8, 0.4), (0.8, 0.3)])
        assert "High Consensus" in m.confidence_reason

    def test_clamped_to_ceiling(self) -> None:
        m = make_entity(
            signals=[(0.95, 0.5)] * 6,
            staleness=1,
            coding=0.9,
            creative=0.9,
            enterprise=True,
        )
        assert m.confidence == 99.0

    def test_stays_within_bounds(self) -> None:
        for score in (0.01, 0.2, 0.5):
            for staleness in (0, 60, 400):
                m = make_entity(signals=[(score, 0.5), (1.0, 0.1)], staleness=staleness)
                assert 10.0 < m.confidence <= 99.0

    def test_custom_config(self) -> None:
        cfg = dataclasses.replace(DEFAULT_SCORING, confidence_base=30.0)
        default = make_entity(signals=[(0.7, 0.5)])
        custom = make_entity(signals=[(0.7, 0.5)], config=cfg)
        assert default.confidence - custom.confidence == pytest.approx(20.0)
