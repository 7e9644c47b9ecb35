"""Common types and helpers shared across models."""

import math
from datetime import UTC, datetime
from enum import StrEnum


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"


def utc_now() -> datetime:
    return datetime.now(UTC)


def utc_now_iso() -> str:
    return utc_now().isoformat()


def is_missing(value: float | None) -> bool:
    """True for None, NaN and infinities: values that cannot be displayed."""
    return value is None or (isinstance(value, float) and not math.isfinite(value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return math.floor(value + 0.5)
