"""Configuration module for Insights Plus."""

from .layout_config import DEFAULT_LAYOUT, ForecastLayoutConfig
from .settings import ForecastSettings, default_selected_iterations

__all__ = [
    "ForecastLayoutConfig",
    "DEFAULT_LAYOUT",
    "ForecastSettings",
    "default_selected_iterations",
]
