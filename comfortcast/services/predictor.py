"""Predict a day's metrics from the trailing week of NASA POWER history."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from ..dates import shift_day, utc_today
from ..entities import Metrics
from ..providers.nasa_power import MS_TO_KMH, NasaPowerProvider, fill_value, parameter, parameters
from ..sanitize import sanitize, to_float

WINDOW_DAYS = 7
KEY_PARAMETER = "T2M"

# metric field -> (POWER parameter, unit conversion)
SERIES: Dict[str, Tuple[str, Optional[Callable[[float], float]]]] = {
    "temp_c": ("T2M", None),
    "precip_mm": ("PRECTOT", None),
    "wind_kmh": ("WS2M", lambda v: v * MS_TO_KMH),
    "humidity": ("RH2M", None),
}


@dataclass(frozen=True)
class Prediction:
    metrics: Metrics
    raw_history: Any = field(repr=False, default=None)


class HistoricalPredictor:
    """Average the last seven observed days before the requested one.

    The window never contains the target day or anything after it: for a
    future target it ends yesterday, otherwise the day before the target.
    """

    def __init__(
        self,
        provider: NasaPowerProvider,
        *,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.provider = provider
        self._clock = clock
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def window(self, target: str) -> Tuple[str, str]:
        today = utc_today(self._clock)
        end = shift_day(today if target > today else target, -1)
        return shift_day(end, -(WINDOW_DAYS - 1)), end

    def predict(self, latitude: Any, longitude: Any, target: str) -> Optional[Prediction]:
        start, end = self.window(target)
        history = self.provider.fetch_range(latitude, longitude, start, end)
        values = parameters(history)
        if values is None:
            self._log.info("No history available for %s-%s", start, end)
            return None
        key_series = values.get(KEY_PARAMETER)
        days = sorted(key_series) if isinstance(key_series, Mapping) else []
        if not days:
            self._log.info("History for %s-%s has no dated %s entries", start, end, KEY_PARAMETER)
            return None

        fill = fill_value(history)
        averages = {
            name: _series_average(parameter(values, param), days, fill, name, convert)
            for name, (param, convert) in SERIES.items()
        }
        if all(value is None for value in averages.values()):
            self._log.info("History for %s-%s holds no valid samples", start, end)
            return None
        return Prediction(metrics=Metrics(heat_index_c=None, **averages), raw_history=history)


def _series_average(
    series: Any,
    days: list,
    fill: Optional[float],
    field_name: str,
    convert: Optional[Callable[[float], float]],
) -> Optional[float]:
    if not isinstance(series, Mapping):
        return None
    total = 0.0
    count = 0
    for day in days:
        value = to_float(series.get(day))
        if value is None or not math.isfinite(value):
            continue
        if fill is not None and value == fill:
            continue
        if convert is not None:
            value = convert(value)
        if sanitize(value, field_name) is None:
            continue
        total += value
        count += 1
    if count == 0:
        return None
    return total / count


__all__ = ["HistoricalPredictor", "Prediction", "WINDOW_DAYS"]
