from __future__ import annotations

from datetime import datetime, timezone

import pytest

from comfortcast.dates import parse_day, shift_day
from comfortcast.providers.nasa_power import NasaPowerProvider
from comfortcast.services.predictor import WINDOW_DAYS, HistoricalPredictor
from tests.payloads import POWER_URL, FixedClock, power_payload

WEEK = [f"202308{day:02d}" for day in range(25, 32)]


def series(*values) -> dict:
    return dict(zip(WEEK, values))


def test_window_for_past_target_ends_day_before(predictor: HistoricalPredictor) -> None:
    assert predictor.window("20230901") == ("20230825", "20230831")


def test_window_for_future_target_ends_yesterday(predictor: HistoricalPredictor) -> None:
    assert predictor.window("20231225") == ("20230903", "20230909")


def test_window_for_today_excludes_today(predictor: HistoricalPredictor) -> None:
    assert predictor.window("20230910") == ("20230903", "20230909")


def test_window_crosses_year_boundary(nasa_power: NasaPowerProvider) -> None:
    predictor = HistoricalPredictor(nasa_power, clock=FixedClock(datetime(2024, 1, 3, tzinfo=timezone.utc)))

    assert predictor.window("20240102") == ("20231226", "20240101")


@pytest.mark.parametrize("target", ["19810101", "20230228", "20230909", "20230910", "20230911", "20300101"])
def test_window_never_reaches_target_or_today(predictor: HistoricalPredictor, target: str) -> None:
    start, end = predictor.window(target)

    assert end < min(target, "20230910")
    assert (parse_day(end) - parse_day(start)).days == WINDOW_DAYS - 1
    assert shift_day(start, WINDOW_DAYS - 1) == end


def test_predict_averages_the_week(requests_mock, predictor: HistoricalPredictor) -> None:
    history = power_payload(
        {
            "T2M": series(30, 31, 32, 33, 34, 35, 36),
            "PRECTOT": series(0, 0, 7, 0, 0, 0, 0),
            "WS2M": series(1, 2, 3, 4, 5, 6, 7),
            "RH2M": series(60, 60, 60, 60, 60, 60, 60),
        }
    )
    requests_mock.get(POWER_URL, json=history)

    prediction = predictor.predict(28.6, 77.2, "20230901")

    assert prediction is not None
    assert prediction.metrics.temp_c == pytest.approx(33.0)
    assert prediction.metrics.precip_mm == pytest.approx(1.0)
    assert prediction.metrics.wind_kmh == pytest.approx(4 * 3.6)
    assert prediction.metrics.humidity == pytest.approx(60.0)
    assert prediction.metrics.heat_index_c is None
    assert prediction.raw_history == history
    query = requests_mock.last_request.qs
    assert query["start"] == ["20230825"]
    assert query["end"] == ["20230831"]


def test_fill_values_are_skipped(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(
        POWER_URL,
        json=power_payload({"T2M": series(20, -999, 22, -999, 24, None, "nan")}),
    )

    prediction = predictor.predict(0, 0, "20230901")

    assert prediction.metrics.temp_c == pytest.approx(22.0)


def test_field_with_only_fill_values_is_absent(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(
        POWER_URL,
        json=power_payload(
            {
                "T2M": series(20, 21, 22, 23, 24, 25, 26),
                "PRECTOT": series(*([-999] * 7)),
                "RH2M": series(*([-999] * 7)),
            }
        ),
    )

    metrics = predictor.predict(0, 0, "20230901").metrics

    assert metrics.temp_c == pytest.approx(23.0)
    assert metrics.precip_mm is None
    assert metrics.humidity is None
    assert metrics.wind_kmh is None


def test_undeclared_sentinels_are_still_rejected(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(
        POWER_URL,
        json=power_payload({"T2M": series(18, 18, 18, 18, 18, 18, 18), "RH2M": series(*([-999] * 7))}, fill=None),
    )

    metrics = predictor.predict(0, 0, "20230901").metrics

    assert metrics.humidity is None


def test_corrected_precipitation_series_is_used(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(
        POWER_URL,
        json=power_payload({"T2M": series(20, 20, 20, 20, 20, 20, 20), "PRECTOTCORR": series(1, 2, 3, 4, 5, 6, 7)}),
    )

    assert predictor.predict(0, 0, "20230901").metrics.precip_mm == pytest.approx(4.0)


def test_all_fields_absent_is_unavailable(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(
        POWER_URL,
        json=power_payload({"T2M": series(*([-999] * 7)), "WS2M": series(*([-999] * 7))}),
    )

    assert predictor.predict(0, 0, "20230901") is None


def test_missing_key_series_is_unavailable(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(POWER_URL, json=power_payload({"RH2M": series(50, 50, 50, 50, 50, 50, 50), "T2M": {}}))

    assert predictor.predict(0, 0, "20230901") is None


def test_provider_failure_is_unavailable(requests_mock, predictor: HistoricalPredictor) -> None:
    requests_mock.get(POWER_URL, status_code=503)

    assert predictor.predict(0, 0, "20230901") is None
