from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .base import WeatherProvider
from ..dates import iso_day
from ..entities import Metrics
from ..sanitize import to_float

DAILY_VARIABLES = (
    "temperature_2m_max",
    "temperature_2m_min",
    "precipitation_sum",
    "windspeed_10m_max",
    "relativehumidity_2m_max",
)


def _first(values: Optional[List[Any]]) -> Optional[float]:
    if not isinstance(values, list) or not values:
        return None
    return to_float(values[0])


class OpenMeteoProvider(WeatherProvider):
    """Open-Meteo daily forecast for a single day."""

    name = "open-meteo"
    base_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def fetch_point(self, latitude: Any, longitude: Any, day: str) -> Optional[Dict[str, Any]]:
        iso = iso_day(day)
        params = {
            "latitude": str(latitude),
            "longitude": str(longitude),
            "daily": ",".join(DAILY_VARIABLES),
            "timezone": "UTC",
            "start_date": iso,
            "end_date": iso,
        }
        self._log.debug("Requesting Open-Meteo daily forecast for %s at %s,%s", iso, latitude, longitude)
        return self._fetch(self.base_url, params)

    def has_daily(self, payload: Optional[Mapping[str, Any]]) -> bool:
        if not isinstance(payload, Mapping):
            return False
        daily = payload.get("daily")
        return isinstance(daily, Mapping) and bool(daily)

    def to_metrics(self, payload: Mapping[str, Any], day: str) -> Metrics:
        daily = payload.get("daily") or {}
        temp_max = _first(daily.get("temperature_2m_max"))
        temp_min = _first(daily.get("temperature_2m_min"))
        return Metrics(
            temp_c=temp_max if temp_max is not None else temp_min,
            humidity=_first(daily.get("relativehumidity_2m_max")),
            precip_mm=_first(daily.get("precipitation_sum")),
            # already km/h
            wind_kmh=_first(daily.get("windspeed_10m_max")),
            heat_index_c=None,
        )


__all__ = ["OpenMeteoProvider"]
