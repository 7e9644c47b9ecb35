"""Helpers for Open-Meteo style parallel-array payloads."""

import math
from typing import Any


def safe_index(values: list | None, index: int) -> Any:
    if values is None or index >= len(values):
        return None
    return values[index]


def safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(result) else result


def safe_int(value: Any) -> int | None:
    f = safe_float(value)
    if f is None or not math.isfinite(f):
        return None
    return int(f)


def first_array(block: dict, names: tuple[str, ...]) -> list | None:
    """Return the first list-valued entry among the given variable names."""
    for name in names:
        values = block.get(name)
        if isinstance(values, list):
            return values
    return None


def series_times(block: Any) -> list[str]:
    if not isinstance(block, dict):
        return []
    times = block.get("time")
    return times if isinstance(times, list) else []
