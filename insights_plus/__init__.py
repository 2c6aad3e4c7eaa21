"""Insights Plus: data extraction and forecasting for rendered project charts."""

from insights_plus.extraction.chart_extractor import ChartExtractor, extract_chart
from insights_plus.forecast import build_forecast, calculate_prediction, calculate_velocity

__version__ = "0.1.0"

__all__ = [
    "ChartExtractor",
    "extract_chart",
    "build_forecast",
    "calculate_velocity",
    "calculate_prediction",
]
