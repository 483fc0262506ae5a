"""Payload parsing and the ingestion filter.

The filter runs before any scoring: malformed records are dropped and
counted, repeated names are dropped silently with the first occurrence kept.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from ._errors import MalformedRecordError, PayloadError
from ._types import IngestResult

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = (
    "gpqa_score",
    "average_score",
    "input_price",
    "coding_score",
    "humaneval",
    "creative_score",
    "context_length",
    "throughput",
    "tokens_per_second",
)


def parse_payload(data: bytes | str) -> list[dict[str, Any]]:
    """Decode the leaderboard payload; the top level must be a JSON array."""
    try:
        doc = json.loads(data)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError, UnicodeDecodeError and the int digit limit are all ValueErrors
        raise PayloadError(f"JSON parsing failed: {exc}") from exc
    if not isinstance(doc, list):
        raise PayloadError(f"Invalid JSON format: expected array, got {type(doc).__name__}")
    return doc


def to_float(value: Any) -> float | None:
    """Read a number that may arrive as a native number or a numeric string."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise MalformedRecordError(f"Expected a number, got boolean {value!r}")
    if isinstance(value, (int, float)):
        try:
            result = float(value)
        except OverflowError as exc:
            raise MalformedRecordError(f"Not a finite number: {value!r:.40}") from exc
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return None
        try:
            result = float(text)
        except ValueError as exc:
            raise MalformedRecordError(f"Not a number: {value!r}") from exc
    else:
        raise MalformedRecordError(f"Expected a number, got {type(value).__name__}")
    if not math.isfinite(result):
        raise MalformedRecordError(f"Not a finite number: {value!r}")
    return result


def get_float(item: Mapping[str, Any], key: str) -> float | None:
    return to_float(item.get(key))


def validate_record(item: Any) -> str:
    """Return the record name, or raise ``MalformedRecordError``."""
    if not isinstance(item, Mapping):
        raise MalformedRecordError(f"Record is not an object: {type(item).__name__}")
    name = item.get("name")
    if not isinstance(name, str) or not name:
        raise MalformedRecordError("Record has no name")
    for key in NUMERIC_FIELDS:
        try:
            to_float(item.get(key))
        except MalformedRecordError as exc:
            raise MalformedRecordError(f"{name}: field {key!r}: {exc}") from exc
    return name


def filter_records(items: Iterable[Any]) -> IngestResult:
    result = IngestResult()
    seen: set[str] = set()
    for item in items:
        try:
            name = validate_record(item)
        except MalformedRecordError as exc:
            logger.warning("Skipping malformed model: %s", exc)
            result.skipped += 1
            continue
        if name in seen:
            result.duplicates += 1
            continue
        seen.add(name)
        result.records.append(dict(item))
    return result


__all__ = ["NUMERIC_FIELDS", "parse_payload", "to_float", "get_float", "validate_record", "filter_records"]
