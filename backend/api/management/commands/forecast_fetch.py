"""Management command to run a forecast using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_forecast_pipeline
from comfortcast.classify import describe
from comfortcast.services.forecast import ForecastRequestError


class Command(BaseCommand):
    help = "Classify the weather for the provided coordinates and date"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--lat", type=str, help="Latitude")
        parser.add_argument("--lon", type=str, help="Longitude")
        parser.add_argument("--date", type=str, help="Day as YYYYMMDD or YYYY-MM-DD")
        parser.add_argument("--no-raw", action="store_true", help="Omit raw provider payloads")
        parser.add_argument("--format", choices=("json", "text"), default="json")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            result = get_forecast_pipeline().run(
                latitude=options.get("lat"),
                longitude=options.get("lon"),
                date=options.get("date"),
            )
        except ForecastRequestError as exc:
            raise CommandError(str(exc)) from exc

        if options.get("format") == "text":
            primary = result.categories[0]
            self.stdout.write(f"{result.date} [{result.source.value}] {describe(primary)} ({', '.join(result.categories)})")
            return
        self.stdout.write(json.dumps(result.to_dict(include_raw=not options.get("no_raw"))))
