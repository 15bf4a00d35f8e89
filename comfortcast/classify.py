from __future__ import annotations

from typing import Dict, List, Tuple

from .entities import Metrics

VERY_HOT = "very_hot"
VERY_COLD = "very_cold"
VERY_WET = "very_wet"
VERY_WINDY = "very_windy"
VERY_UNCOMFORTABLE = "very_uncomfortable"
COMFORTABLE = "comfortable"
NO_DATA = "no_data"

HOT_TEMP_C = 35.0
COLD_TEMP_C = 5.0
WET_PRECIP_MM = 5.0
WINDY_KMH = 20.0
HEAT_STRESS_C = 32.0
HUMID_PERCENT = 80.0

CATEGORY_MESSAGES: Dict[str, str] = {
    VERY_HOT: "Very hot, stay hydrated",
    VERY_COLD: "Very cold, dress warmly",
    VERY_WET: "Very wet, bring an umbrella",
    VERY_WINDY: "Very windy, secure loose items",
    VERY_UNCOMFORTABLE: "Uncomfortable, watch the heat index",
    COMFORTABLE: "Comfortable conditions",
    NO_DATA: "No weather data available for this date",
}


def classify(metrics: Metrics) -> Tuple[str, ...]:
    """Map metrics to comfort tags.

    Rules are independent and evaluated in a fixed order, so the output is
    stable for equal input. Values are taken literally; sanitize first.
    """
    categories: List[str] = []
    temp = metrics.temp_c
    if temp is not None and temp >= HOT_TEMP_C:
        categories.append(VERY_HOT)
    if temp is not None and temp <= COLD_TEMP_C:
        categories.append(VERY_COLD)
    if (metrics.precip_mm or 0) >= WET_PRECIP_MM:
        categories.append(VERY_WET)
    if (metrics.wind_kmh or 0) >= WINDY_KMH:
        categories.append(VERY_WINDY)
    # a zero heat index means "not reported"
    effective_heat = metrics.heat_index_c or temp
    if effective_heat is not None and (
        effective_heat >= HEAT_STRESS_C or (metrics.humidity or 0) >= HUMID_PERCENT
    ):
        categories.append(VERY_UNCOMFORTABLE)
    if not categories:
        categories.append(COMFORTABLE)
    return tuple(categories)


def describe(category: str) -> str:
    return CATEGORY_MESSAGES.get(category, category)


__all__ = [
    "CATEGORY_MESSAGES",
    "COMFORTABLE",
    "NO_DATA",
    "VERY_COLD",
    "VERY_HOT",
    "VERY_UNCOMFORTABLE",
    "VERY_WET",
    "VERY_WINDY",
    "classify",
    "describe",
]
