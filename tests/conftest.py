from __future__ import annotations

from datetime import datetime, timezone

import pytest

from comfortcast.providers.nasa_power import NasaPowerProvider
from comfortcast.providers.openmeteo import OpenMeteoProvider
from comfortcast.services.forecast import ForecastPipeline
from comfortcast.services.predictor import HistoricalPredictor
from tests.payloads import OPEN_METEO_URL, POWER_URL, FixedClock


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock(datetime(2023, 9, 10, 8, 30, tzinfo=timezone.utc))


@pytest.fixture()
def nasa_power() -> NasaPowerProvider:
    return NasaPowerProvider(base_url=POWER_URL)


@pytest.fixture()
def open_meteo() -> OpenMeteoProvider:
    return OpenMeteoProvider(base_url=OPEN_METEO_URL)


@pytest.fixture()
def predictor(nasa_power: NasaPowerProvider, clock: FixedClock) -> HistoricalPredictor:
    return HistoricalPredictor(nasa_power, clock=clock)


@pytest.fixture()
def pipeline(nasa_power, open_meteo, predictor) -> ForecastPipeline:
    return ForecastPipeline(primary=nasa_power, secondary=open_meteo, predictor=predictor)
