"""Numeric clamping used when reading untrusted collaborator data."""

from __future__ import annotations

import math


def _as_float(value: float) -> float:
    try:
        return float(value)
    except TypeError as exc:
        msg = f"expected a number, got {type(value).__name__}"
        raise ValueError(msg) from exc


def clamp(value: float, low: float, high: float) -> float:
    """Clamp *value* into [low, high]; NaN collapses to *low*."""
    value = _as_float(value)
    if math.isnan(value):
        return low
    return min(high, max(low, value))


def clamp_optional(value: float | None, low: float, high: float) -> float | None:
    """Clamp *value* into [low, high]; None and NaN both mean "no data"."""
    if value is None:
        return None
    value = _as_float(value)
    if math.isnan(value):
        return None
    return min(high, max(low, value))
