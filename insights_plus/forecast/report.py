"""
Forecast assembly for extracted charts.

Chains the start anchor, velocity, due date and prediction for cumulative
charts, and the selection average for iteration charts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Union

from insights_plus.config import ForecastSettings
from insights_plus.models import (
    AverageResult,
    BurnupChart,
    ChartResult,
    Prediction,
    VelocityChart,
    VelocityEstimate,
)

from .average import IterationSelection, calculate_average_velocity
from .data_processor import project_start_anchor, resolve_due_date
from .date_utils import resolve_now
from .prediction import calculate_prediction
from .velocity import calculate_velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastReport:
    """Velocity and prediction for a cumulative chart."""

    velocity: VelocityEstimate
    prediction: Prediction
    start_date: datetime
    start_value: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "velocity": self.velocity.to_dict(),
            "prediction": self.prediction.to_dict(),
            "start_date": self.start_date.isoformat(),
            "start_value": self.start_value,
        }


def build_forecast(
    chart: BurnupChart,
    settings: Optional[ForecastSettings] = None,
    now: Optional[datetime] = None,
) -> ForecastReport:
    """Compute the forecast for a cumulative chart under the given settings."""
    settings = settings or ForecastSettings()
    now = resolve_now(now)

    start_date, start_value = project_start_anchor(chart, now)
    velocity = calculate_velocity(
        chart.completed_series.points,
        start_date,
        start_value,
        lookback_days=settings.lookback_days,
        now=now,
    )
    due_date = resolve_due_date(settings, chart)
    prediction = calculate_prediction(
        chart.total, chart.completed, velocity.current_rate, due_date, now=now
    )

    logger.info(
        f"Forecast: rate={velocity.current_rate}, completion={prediction.completion_date}, "
        f"on_track={prediction.on_track}"
    )
    return ForecastReport(
        velocity=velocity,
        prediction=prediction,
        start_date=start_date,
        start_value=start_value,
    )


def average_for_selection(chart: VelocityChart, selection: IterationSelection) -> AverageResult:
    """Average the chart's iterations named in ``selection``."""
    result = calculate_average_velocity(chart.iterations, selection.selected)
    logger.info(f"Average over {result.count} iterations: {result.average} ({result.status.value})")
    return result


def forecast_for(
    result: ChartResult,
    settings: Optional[ForecastSettings] = None,
    now: Optional[datetime] = None,
) -> Union[ForecastReport, AverageResult]:
    """
    Forecast appropriate to the chart kind.

    Raises:
        TypeError: If ``result`` is not a BurnupChart or VelocityChart
    """
    if isinstance(result, BurnupChart):
        return build_forecast(result, settings, now)
    if isinstance(result, VelocityChart):
        selection = IterationSelection.from_settings(result.names, settings)
        return average_for_selection(result, selection)
    raise TypeError(f"Unsupported chart result: {type(result).__name__}")
