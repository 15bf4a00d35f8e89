"""Validation of raw numeric readings coming from weather providers.

Providers report missing observations with large negative fill values
(NASA POWER uses -999) and occasionally return physically impossible
numbers. Everything that reaches the classifier goes through
:func:`sanitize` first; a rejected reading simply becomes ``None``.
"""
from __future__ import annotations

import math
from dataclasses import replace
from typing import Any, Optional

from .entities import METRIC_FIELDS, Metrics

SENTINEL_THRESHOLD = -900.0
HUMIDITY_RANGE = (0.0, 100.0)
NON_NEGATIVE_FIELDS = frozenset({"precip_mm", "wind_kmh"})


def to_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def sanitize(value: Any, field: str) -> Optional[float]:
    """Return ``value`` as a float, or ``None`` if it is not a usable reading."""
    number = to_float(value)
    if number is None or not math.isfinite(number):
        return None
    if number <= SENTINEL_THRESHOLD:
        return None
    if field == "humidity":
        low, high = HUMIDITY_RANGE
        if number < low or number > high:
            return None
    elif field in NON_NEGATIVE_FIELDS and number < 0:
        return None
    return number


def sanitize_metrics(metrics: Metrics) -> Metrics:
    return replace(
        metrics,
        **{name: sanitize(getattr(metrics, name), name) for name in METRIC_FIELDS},
    )


__all__ = ["SENTINEL_THRESHOLD", "sanitize", "sanitize_metrics", "to_float"]
