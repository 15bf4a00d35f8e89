from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

from ..classify import NO_DATA, classify
from ..dates import normalize_day
from ..entities import DataSource, ForecastResult, Metrics
from ..providers.nasa_power import NasaPowerProvider
from ..providers.openmeteo import OpenMeteoProvider
from ..sanitize import sanitize_metrics
from .predictor import HistoricalPredictor


class ForecastRequestError(ValueError):
    """Raised when a forecast request is missing or has malformed parameters."""


class Stage(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    CHECK = "check"
    PREDICT = "predict"
    FINALIZE = "finalize"


@dataclass
class _PipelineState:
    latitude: float
    longitude: float
    day: str
    metrics: Metrics = field(default_factory=Metrics)
    source: Optional[DataSource] = None
    no_data: bool = True
    raw_primary: Any = None
    raw_secondary: Any = None
    raw_history: Any = None


class ForecastPipeline:
    """Fuse primary observations, secondary forecasts and history predictions.

    Sources are tried in priority order and the first usable one wins. A
    provider failure is never an error here, it only moves the request on
    to the next stage.
    """

    def __init__(
        self,
        *,
        primary: NasaPowerProvider,
        secondary: OpenMeteoProvider,
        predictor: HistoricalPredictor,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.primary = primary
        self.secondary = secondary
        self.predictor = predictor
        self._log = logger or logging.getLogger(self.__class__.__name__)
        self._handlers: Dict[Stage, Callable[[_PipelineState], Stage]] = {
            Stage.PRIMARY: self._primary,
            Stage.SECONDARY: self._secondary,
            Stage.CHECK: self._check,
            Stage.PREDICT: self._predict,
        }

    # Public API ---------------------------------------------------------
    def run(self, latitude: Any, longitude: Any, date: Any) -> ForecastResult:
        state = _PipelineState(
            latitude=_coordinate("lat", latitude),
            longitude=_coordinate("lon", longitude),
            day=_day(date),
        )
        stage = Stage.PRIMARY
        while stage is not Stage.FINALIZE:
            self._log.debug("Forecast %s: entering %s", state.day, stage.value)
            stage = self._handlers[stage](state)
        return self._finalize(state)

    # Stages -------------------------------------------------------------
    def _primary(self, state: _PipelineState) -> Stage:
        payload = self.primary.fetch_point(state.latitude, state.longitude, state.day)
        state.raw_primary = payload
        if not self.primary.is_usable(payload, state.day):
            self._log.info("Primary source has no observation for %s", state.day)
            return Stage.SECONDARY
        state.metrics = sanitize_metrics(self.primary.to_metrics(payload, state.day))
        state.source = DataSource.PRIMARY_OBSERVED
        return Stage.CHECK

    def _secondary(self, state: _PipelineState) -> Stage:
        payload = self.secondary.fetch_point(state.latitude, state.longitude, state.day)
        state.raw_secondary = payload
        if self.secondary.has_daily(payload):
            state.metrics = sanitize_metrics(self.secondary.to_metrics(payload, state.day))
            state.source = DataSource.SECONDARY_FORECAST
        return Stage.CHECK

    def _check(self, state: _PipelineState) -> Stage:
        state.no_data = state.metrics.is_empty
        return Stage.PREDICT if state.no_data else Stage.FINALIZE

    def _predict(self, state: _PipelineState) -> Stage:
        prediction = self.predictor.predict(state.latitude, state.longitude, state.day)
        if prediction is not None:
            state.metrics = prediction.metrics
            state.raw_history = prediction.raw_history
            state.source = DataSource.HISTORICAL_PREDICTED
            state.no_data = False
        elif state.source is None:
            state.source = DataSource.NONE
        return Stage.FINALIZE

    def _finalize(self, state: _PipelineState) -> ForecastResult:
        categories = (NO_DATA,) if state.no_data else classify(state.metrics)
        source = state.source or DataSource.NONE
        self._log.info("Forecast for %s resolved from %s: %s", state.day, source.value, ",".join(categories))
        return ForecastResult(
            source=source,
            date=state.day,
            latitude=state.latitude,
            longitude=state.longitude,
            metrics=state.metrics,
            categories=categories,
            no_data=state.no_data,
            raw_primary=state.raw_primary,
            raw_secondary=state.raw_secondary,
            raw_history=state.raw_history,
        )


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coordinate(name: str, value: Any) -> float:
    if _is_missing(value):
        raise ForecastRequestError(f"{name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise ForecastRequestError(f"{name} must be a valid number") from exc
    if not math.isfinite(number):
        raise ForecastRequestError(f"{name} must be a valid number")
    return number


def _day(value: Any) -> str:
    if _is_missing(value):
        raise ForecastRequestError("date is required")
    try:
        return normalize_day(value)
    except ValueError as exc:
        raise ForecastRequestError(str(exc)) from exc


__all__ = ["ForecastPipeline", "ForecastRequestError", "Stage"]
