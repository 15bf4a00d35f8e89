from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DataSource(str, Enum):
    """Where the metrics of a forecast result came from."""

    PRIMARY_OBSERVED = "nasa-power"
    SECONDARY_FORECAST = "open-meteo"
    HISTORICAL_PREDICTED = "nasa-power-predicted"
    NONE = "none"


@dataclass(frozen=True)
class Metrics:
    """Normalized daily weather metrics.

    Every field is independently optional:
    - temperature and heat index in Celsius
    - relative humidity in percent
    - precipitation in millimetres (mm)
    - wind speed in kilometres per hour (km/h)
    """

    temp_c: Optional[float] = None
    humidity: Optional[float] = None
    precip_mm: Optional[float] = None
    wind_kmh: Optional[float] = None
    heat_index_c: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is None for f in fields(self))

    def as_dict(self) -> Dict[str, Optional[float]]:
        return {wire: getattr(self, name) for name, wire in WIRE_NAMES.items()}


WIRE_NAMES: Dict[str, str] = {
    "temp_c": "tempC",
    "humidity": "humidity",
    "precip_mm": "precipMM",
    "wind_kmh": "windKmh",
    "heat_index_c": "heatIndexC",
}

METRIC_FIELDS: Tuple[str, ...] = tuple(WIRE_NAMES)


@dataclass(frozen=True)
class ForecastResult:
    """Envelope returned by the forecast pipeline for one request."""

    source: DataSource
    date: str
    latitude: float
    longitude: float
    metrics: Metrics
    categories: Tuple[str, ...]
    no_data: bool
    raw_primary: Optional[Any] = field(default=None, repr=False)
    raw_secondary: Optional[Any] = field(default=None, repr=False)
    raw_history: Optional[Any] = field(default=None, repr=False)

    def to_dict(self, include_raw: bool = True) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "source": self.source.value,
            "date": self.date,
            "lat": self.latitude,
            "lon": self.longitude,
            "metrics": self.metrics.as_dict(),
            "categories": list(self.categories),
            "noData": self.no_data,
        }
        if include_raw:
            payload["rawPrimary"] = self.raw_primary
            payload["rawSecondary"] = self.raw_secondary
            payload["rawHistory"] = self.raw_history
        return payload


__all__ = ["DataSource", "ForecastResult", "METRIC_FIELDS", "Metrics", "WIRE_NAMES"]
