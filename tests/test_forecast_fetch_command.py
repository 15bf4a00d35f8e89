from __future__ import annotations

import json
from io import StringIO

import pytest
from django.core.management import call_command
from django.core.management.base import CommandError

from backend.api.management.commands import forecast_fetch
from comfortcast.services.forecast import ForecastPipeline
from tests.payloads import POWER_URL, power_day

DAY = "20230901"


@pytest.fixture(autouse=True)
def use_test_pipeline(monkeypatch, pipeline: ForecastPipeline) -> None:
    monkeypatch.setattr(forecast_fetch, "get_forecast_pipeline", lambda: pipeline)


def test_command_prints_json_envelope(requests_mock) -> None:
    requests_mock.get(POWER_URL, json=power_day(DAY, T2M=1.0, RH2M=65.0))
    out = StringIO()

    call_command("forecast_fetch", "--lat", "59.9", "--lon", "10.7", "--date", "2023-09-01", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["source"] == "nasa-power"
    assert payload["categories"] == ["very_cold"]
    assert "rawPrimary" in payload


def test_command_can_drop_raw_payloads(requests_mock) -> None:
    requests_mock.get(POWER_URL, json=power_day(DAY, T2M=1.0))
    out = StringIO()

    call_command("forecast_fetch", "--lat", "59.9", "--lon", "10.7", "--date", DAY, "--no-raw", stdout=out)

    payload = json.loads(out.getvalue())
    assert "rawPrimary" not in payload
    assert "rawHistory" not in payload


def test_command_text_summary(requests_mock) -> None:
    requests_mock.get(POWER_URL, json=power_day(DAY, T2M=37.0))
    out = StringIO()

    call_command("forecast_fetch", "--lat", "28.6", "--lon", "77.2", "--date", DAY, "--format", "text", stdout=out)

    line = out.getvalue().strip()
    assert line.startswith(f"{DAY} [nasa-power]")
    assert "Very hot" in line
    assert "very_hot, very_uncomfortable" in line


def test_command_rejects_missing_coordinates(requests_mock) -> None:
    with pytest.raises(CommandError):
        call_command("forecast_fetch", "--date", DAY, stdout=StringIO())

    assert requests_mock.call_count == 0
