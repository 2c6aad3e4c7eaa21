"""
Forecast and boundary configuration.

Centralizes the magic numbers used by the forecast engine and by the
polling / transport helpers around the extraction core.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ForecastLayoutConfig:
    """
    Configuration for forecasting and chart polling.

    Durations are in seconds unless otherwise noted.
    """

    # ==================== Lookback Window ====================
    # Trailing period used for the recent completion rate (days)
    DEFAULT_LOOKBACK_DAYS: int = 21
    MIN_LOOKBACK_DAYS: int = 1
    MAX_LOOKBACK_DAYS: int = 365

    # ==================== Iteration Selection ====================
    # Number of most recent iterations selected when nothing is stored
    DEFAULT_ITERATION_COUNT: int = 3

    # ==================== Chart Polling ====================
    # Bounded retry while the chart markup is still rendering
    POLL_MAX_ATTEMPTS: int = 20
    POLL_INTERVAL: float = 0.5

    # ==================== Transport ====================
    # Wait for a single request/response handoff
    BRIDGE_TIMEOUT: float = 10.0
    # Wait for the chart container to appear at all
    PAGE_WAIT_TIMEOUT: float = 30.0


# Default configuration instance
DEFAULT_LAYOUT = ForecastLayoutConfig()
