from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from .base import WeatherProvider
from ..entities import Metrics
from ..sanitize import to_float

MS_TO_KMH = 3.6
ALTERNATE_SUFFIX = "CORR"
PARAMETERS = ("T2M", "PRECTOT", "WS2M", "RH2M")


def _ms_to_kmh(value: Optional[float]) -> Optional[float]:
    if value is None:
        return None
    return value * MS_TO_KMH


def parameter(values: Mapping[str, Any], name: str) -> Any:
    """Look up ``name``, falling back to its corrected variant (``PRECTOTCORR``)."""
    if values.get(name) is not None:
        return values[name]
    return values.get(name + ALTERNATE_SUFFIX)


def parameters(payload: Optional[Mapping[str, Any]]) -> Optional[Dict[str, Any]]:
    """Return the ``properties.parameter`` object of a POWER payload."""
    if not isinstance(payload, Mapping):
        return None
    properties = payload.get("properties")
    if not isinstance(properties, Mapping):
        return None
    values = properties.get("parameter")
    if not isinstance(values, Mapping):
        return None
    return dict(values)


def fill_value(payload: Mapping[str, Any]) -> Optional[float]:
    header = payload.get("header")
    if not isinstance(header, Mapping):
        return None
    return to_float(header.get("fill_value"))


def _day_value(series: Any, day: str) -> Any:
    # POWER returns per-date objects; scalars show up in some community outputs
    if isinstance(series, Mapping):
        return series.get(day)
    return series


class NasaPowerProvider(WeatherProvider):
    """NASA POWER daily point observations."""

    name = "nasa-power"
    base_url = "https://power.larc.nasa.gov/api/temporal/daily/point"
    community = "AG"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def fetch_point(self, latitude: Any, longitude: Any, day: str) -> Optional[Dict[str, Any]]:
        return self.fetch_range(latitude, longitude, day, day)

    def fetch_range(self, latitude: Any, longitude: Any, start: str, end: str) -> Optional[Dict[str, Any]]:
        params = {
            "start": start,
            "end": end,
            "latitude": str(latitude),
            "longitude": str(longitude),
            "community": self.community,
            "parameters": ",".join(PARAMETERS),
            "format": "JSON",
        }
        self._log.debug("Requesting POWER range %s-%s for %s,%s", start, end, latitude, longitude)
        return self._fetch(self.base_url, params)

    def is_usable(self, payload: Optional[Mapping[str, Any]], day: str) -> bool:
        """False when every parameter for ``day`` is missing, non-finite or the fill value.

        A payload without a ``fill_value`` header is judged on missing values
        alone.
        """
        values = parameters(payload)
        if values is None:
            return False
        fill = fill_value(payload)
        for series in values.values():
            value = to_float(_day_value(series, day))
            if value is None or not math.isfinite(value):
                continue
            if fill is not None and value == fill:
                continue
            return True
        return False

    def to_metrics(self, payload: Mapping[str, Any], day: str) -> Metrics:
        values = parameters(payload) or {}

        def maybe(name: str) -> Optional[float]:
            return to_float(_day_value(parameter(values, name), day))

        return Metrics(
            temp_c=maybe("T2M"),
            humidity=maybe("RH2M"),
            precip_mm=maybe("PRECTOT"),
            wind_kmh=_ms_to_kmh(maybe("WS2M")),
            heat_index_c=maybe("HI"),
        )


__all__ = ["MS_TO_KMH", "NasaPowerProvider", "fill_value", "parameter", "parameters"]
