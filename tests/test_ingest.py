from __future__ import annotations

import sys

import pytest

from crossbench._errors import MalformedRecordError, PayloadError
from crossbench.ingest import filter_records, parse_payload, to_float, validate_record


class TestParsePayload:
    def test_array(self) -> None:
        assert parse_payload(b'[{"name": "a"}]') == [{"name": "a"}]

    def test_accepts_str(self) -> None:
        assert parse_payload("[]") == []

    def test_object_rejected(self) -> None:
        with pytest.raises(PayloadError, match="expected array"):
            parse_payload(b'{"models": []}')

    def test_invalid_json(self) -> None:
        with pytest.raises(PayloadError, match="JSON parsing failed"):
            parse_payload(b"[{")

    def test_deep_nesting(self) -> None:
        with pytest.raises(PayloadError):
            parse_payload("[" * 100_000 + "]" * 100_000)

    @pytest.mark.skipif(not hasattr(sys, "get_int_max_str_digits"), reason="no int digit limit")
    def test_oversized_integer_literal(self) -> None:
        with pytest.raises(PayloadError, match="JSON parsing failed"):
            parse_payload('[{"name": "m", "context_length": ' + "9" * 5001 + "}]")


class TestToFloat:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(0.5, 0.5), (3, 3.0), ("0.71", 0.71), (" 2.5 ", 2.5), ("128,000", 128000.0), (None, None), ("", None)],
    )
    def test_accepted(self, value, expected) -> None:
        assert to_float(value) == expected

    @pytest.mark.parametrize("value", ["high", True, [1], {"v": 1}, "nan", float("inf"), 10**400])
    def test_rejected(self, value) -> None:
        with pytest.raises(MalformedRecordError):
            to_float(value)


class TestValidateRecord:
    def test_returns_name(self) -> None:
        assert validate_record({"name": "m", "gpqa_score": "0.5"}) == "m"

    @pytest.mark.parametrize(
        "item",
        [
            {"gpqa_score": 0.5},
            {"name": ""},
            {"name": 42},
            ["name", "m"],
            {"name": "m", "input_price": "cheap"},
        ],
    )
    def test_malformed(self, item) -> None:
        with pytest.raises(MalformedRecordError):
            validate_record(item)


class TestFilterRecords:
    def test_counts(self, sample_records) -> None:
        result = filter_records(sample_records)
        names = [r["name"] for r in result.records]
        assert names == ["GPT-4o", "Llama 3.1 405B", "Claude 3.5 Sonnet", "No Signal Model", "Sora"]
        assert result.skipped == 3
        assert result.duplicates == 1

    def test_first_occurrence_wins(self, sample_records) -> None:
        result = filter_records(sample_records)
        gpt = next(r for r in result.records if r["name"] == "GPT-4o")
        assert gpt["organization"] == "OpenAI"

    def test_malformed_record_does_not_claim_name(self) -> None:
        result = filter_records([{"name": "m", "gpqa_score": "x"}, {"name": "m", "gpqa_score": 0.5}])
        assert result.skipped == 1
        assert result.duplicates == 0
        assert result.records == [{"name": "m", "gpqa_score": 0.5}]

    def test_logs_skips(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level("WARNING", logger="crossbench.ingest"):
            filter_records([{"organization": "x"}])
        assert "Skipping malformed model" in caplog.text
