"""Helpers for reading log entries and profiles defensively.

Entries come from the store, from JSON bodies, or from old exports, so
numeric fields may be missing, strings, or garbage. One bad field must not
poison an average.
"""

from __future__ import annotations

import math
from typing import Any


def as_number(value: Any, default: float = 0.0) -> float:
    """Coerce to float; malformed, missing and NaN values become `default`."""
    if isinstance(value, bool):
        return float(value)
    try:
        n = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(n) or math.isinf(n):
        return default
    return n


def clamp(x: float, lo: float = 0.0, hi: float = 10.0) -> float:
    return max(lo, min(hi, x))


def as_level(value: Any) -> float:
    """A 0-10 level (pain, stress, sleep...) as a clamped float."""
    return clamp(as_number(value))


def as_labels(value: Any) -> list[str]:
    """Symptom/trigger/condition labels as a de-duplicated list.

    Accepts a list or a comma-separated string. Order of first appearance is kept.
    """
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        try:
            items = list(value)
        except TypeError:
            return []
    out = [str(i).strip() for i in items if i is not None and str(i).strip()]
    return list(dict.fromkeys(out))


def round_half_up(x: float) -> int:
    # Python's round() is banker's rounding; levels round .5 upward.
    return int(math.floor(x + 0.5))
