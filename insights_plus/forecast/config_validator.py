"""
Checks that the host page's chart is configured for forecasting.

A forecast needs a time-based x-axis and a period that extends past today
(a custom range); preset periods end today and leave nothing to project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from insights_plus.preprocessing.detector_config import ChartDetectorConfig
from insights_plus.preprocessing.markup_utils import MarkupLoader, MarkupSource

from .date_utils import from_timestamp_ms, resolve_now, start_of_day

logger = logging.getLogger(__name__)

CONFIG_ERROR_XAXIS = "xaxis"
CONFIG_ERROR_PERIOD = "period"


@dataclass(frozen=True)
class ConfigError:
    """A chart setting that prevents forecasting."""

    type: str
    message: str

    def to_dict(self) -> dict:
        return {"type": self.type, "message": self.message}


def validate_x_axis(
    markup: MarkupSource, config: Optional[ChartDetectorConfig] = None
) -> Optional[ConfigError]:
    """The x-axis is time-based only when the date picker container is present."""
    config = config or ChartDetectorConfig()
    tree = MarkupLoader(config).parse(markup)
    fragment = config.date_picker_class_fragment
    if tree.select_one(f'[class*="{fragment}"]') is None:
        logger.warning("Date picker container not found; x-axis is not set to Time")
        return ConfigError(CONFIG_ERROR_XAXIS, 'X-axis must be set to "Time".')
    return None


def validate_period(x_max: float, now: Optional[datetime] = None) -> Optional[ConfigError]:
    """
    The chart must end on a day after today.

    Args:
        x_max: Right edge of the x-axis as a millisecond timestamp
        now: Reference moment
    """
    chart_end_day = start_of_day(from_timestamp_ms(x_max))
    today = start_of_day(resolve_now(now))
    if chart_end_day <= today:
        return ConfigError(
            CONFIG_ERROR_PERIOD,
            'Period must be set to "Custom range" with an end date beyond today.',
        )
    return None
