"""Forecast package for insights-plus.

This package contains the velocity, prediction and averaging logic that
runs on extracted chart data.
"""
from .average import IterationSelection, calculate_average_velocity
from .config_validator import ConfigError, validate_period, validate_x_axis
from .data_processor import (
    CompletedDataPoints,
    get_completed_data_points,
    get_open_value_at_end_date,
    project_start_anchor,
    resolve_due_date,
)
from .prediction import calculate_prediction
from .report import ForecastReport, average_for_selection, build_forecast, forecast_for
from .velocity import calculate_velocity

__all__ = [
    # Velocity & prediction
    "calculate_velocity",
    "calculate_prediction",
    # Chart helpers
    "CompletedDataPoints",
    "get_open_value_at_end_date",
    "get_completed_data_points",
    "project_start_anchor",
    "resolve_due_date",
    # Configuration checks
    "ConfigError",
    "validate_x_axis",
    "validate_period",
    # Reports
    "ForecastReport",
    "build_forecast",
    "forecast_for",
    "IterationSelection",
    "calculate_average_velocity",
    "average_for_selection",
]
