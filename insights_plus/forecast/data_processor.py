"""
Helpers that read anchors and reference values out of an extracted
cumulative chart for the forecast layer.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Tuple

from insights_plus.config import ForecastSettings
from insights_plus.models import BurnupChart, DomainPoint

from .date_utils import end_of_day, from_timestamp_ms, resolve_now
from .velocity import clean_series, latest_point_until

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompletedDataPoints:
    """Earliest completed point and the latest one up to today."""

    first: Optional[DomainPoint] = None
    today: Optional[DomainPoint] = None


def get_open_value_at_end_date(
    open_points: Iterable[DomainPoint], end_date: datetime
) -> Optional[float]:
    """
    Open (total scope) value at ``end_date``.

    Returns the value of the last point dated on or before ``end_date``.
    When ``end_date`` precedes every point the chronologically last value
    is returned, not the earliest.
    """
    points = clean_series(open_points)
    if not points:
        return None

    value = points[-1].value
    for point in points:
        if point.date > end_date:
            break
        value = point.value
    return value


def get_completed_data_points(
    completed: Iterable[DomainPoint], now: Optional[datetime] = None
) -> CompletedDataPoints:
    points = clean_series(completed)
    if not points:
        return CompletedDataPoints()
    return CompletedDataPoints(
        first=points[0],
        today=latest_point_until(points, end_of_day(resolve_now(now))),
    )


def project_start_anchor(
    chart: BurnupChart, now: Optional[datetime] = None
) -> Tuple[datetime, float]:
    """
    Project start ``(date, value)`` used as the velocity anchor.

    The date is the left edge of the x-axis, else the date range start,
    else ``now``. The value is read from the completed line's first pixel;
    that pixel is relative to the series group, so only the plot height is
    used. Without a start pixel the earliest completed value is used, and
    0 when there is none.
    """
    axes = chart.plot_geometry.axes
    plot = chart.plot_geometry.plot

    if axes.x_min:
        start_date = from_timestamp_ms(axes.x_min)
    elif chart.date_range is not None:
        start_date = chart.date_range.start
    else:
        start_date = resolve_now(now)

    start_value = 0.0
    pixel = chart.completed_start_pixel
    if pixel is not None and plot.height:
        ratio = (plot.height - pixel.y) / plot.height
        start_value = axes.y_min + ratio * (axes.y_max - axes.y_min)
    else:
        first = get_completed_data_points(chart.completed_series.points, now).first
        if first is not None:
            start_value = first.value

    logger.debug(f"Project start anchor: {start_date.isoformat()} = {start_value}")
    return start_date, start_value


def resolve_due_date(settings: ForecastSettings, chart: BurnupChart) -> Optional[datetime]:
    """Configured target date, else the chart's right edge, else the range end."""
    if settings.target_date is not None:
        return settings.target_date
    if chart.plot_geometry.axes.x_max:
        return from_timestamp_ms(chart.plot_geometry.axes.x_max)
    if chart.date_range is not None:
        return chart.date_range.end
    return None
