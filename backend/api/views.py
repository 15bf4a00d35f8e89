"""REST API views for comfort forecasts."""
from __future__ import annotations

from functools import lru_cache
import logging

from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from comfortcast.providers.base import RequestConfig
from comfortcast.providers.nasa_power import NasaPowerProvider
from comfortcast.providers.openmeteo import OpenMeteoProvider
from comfortcast.services.forecast import ForecastPipeline, ForecastRequestError
from comfortcast.services.predictor import HistoricalPredictor


logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_forecast_pipeline() -> ForecastPipeline:
    request_config = RequestConfig(
        timeout=settings.FORECAST_PROVIDER_TIMEOUT,
        user_agent=settings.FORECAST_USER_AGENT,
    )
    nasa_power = NasaPowerProvider(base_url=settings.FORECAST_NASA_POWER_URL, request_config=request_config)
    open_meteo = OpenMeteoProvider(base_url=settings.FORECAST_OPEN_METEO_URL, request_config=request_config)
    return ForecastPipeline(
        primary=nasa_power,
        secondary=open_meteo,
        predictor=HistoricalPredictor(nasa_power),
    )


class ForecastView(APIView):
    """Classify the weather at a location on a given day."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Read ``lat``, ``lon`` and ``date`` from the query string."""
        return self._forecast(request.query_params)

    def post(self, request, *args, **kwargs):  # noqa: D401
        """Read ``lat``, ``lon`` and ``date`` from the JSON body."""
        data = request.data if hasattr(request.data, "get") else {}
        return self._forecast(data)

    def _forecast(self, params) -> Response:
        try:
            result = get_forecast_pipeline().run(
                latitude=params.get("lat"),
                longitude=params.get("lon"),
                date=params.get("date"),
            )
        except ForecastRequestError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception:  # noqa: BLE001 - a pipeline defect, not missing data
            logger.exception("Forecast pipeline failed")
            return Response({"detail": "internal error"}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(result.to_dict(), status=status.HTTP_200_OK)
