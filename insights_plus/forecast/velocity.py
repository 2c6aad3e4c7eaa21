"""
Velocity (completed work per day) over a trailing lookback window.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from typing import Iterable, List, Optional

from insights_plus.config import DEFAULT_LAYOUT
from insights_plus.models import DomainPoint, VelocityEstimate
from insights_plus.preprocessing.point_validators import (
    ChronologicalOrderValidator,
    FiniteValueValidator,
    ValidationPipeline,
)

from .date_utils import days_between, end_of_day, resolve_now

logger = logging.getLogger(__name__)


def clean_series(points: Iterable[DomainPoint]) -> List[DomainPoint]:
    """Valid points in date order."""
    pipeline = ValidationPipeline([FiniteValueValidator(), ChronologicalOrderValidator()])
    return pipeline.validate(list(points))


def latest_point_until(points: List[DomainPoint], until: datetime) -> Optional[DomainPoint]:
    """Last point dated on or before ``until``; the first point if none is.

    ``points`` must be sorted by date.
    """
    if not points:
        return None
    latest = None
    for point in points:
        if point.date > until:
            break
        latest = point
    return latest if latest is not None else points[0]


def _estimate(
    start: datetime, start_value: float, end: datetime, end_value: float, days: float
) -> VelocityEstimate:
    rate = (end_value - start_value) / days
    if rate <= 0:
        return VelocityEstimate.empty()
    return VelocityEstimate(
        current_rate=rate,
        period_start=start,
        period_end=end,
        period_start_value=start_value,
        period_end_value=end_value,
    )


def calculate_velocity(
    completed: Iterable[DomainPoint],
    start_date: datetime,
    start_value: float,
    lookback_days: int = DEFAULT_LAYOUT.DEFAULT_LOOKBACK_DAYS,
    now: Optional[datetime] = None,
) -> VelocityEstimate:
    """
    Estimate the current daily rate of completed work.

    The window is ``[end of today - lookback_days, end of today]``.

    With fewer than two points in the window the all-time rate from the
    project start anchor to the latest point is used. Otherwise the rate
    runs from the window start to the last in-window point, where the
    window start is the project start (when the first in-window point
    predates it) or the first in-window point's date carrying the value
    of the last point before it.

    A non-positive span or a non-positive rate yields an empty estimate;
    a rate is only reported together with the period it covers.

    Args:
        completed: Completed series points (any order; invalid points are ignored)
        start_date: Project start date
        start_value: Completed value at the project start
        lookback_days: Window length in days
        now: Reference moment

    Returns:
        VelocityEstimate
    """
    points = clean_series(completed)
    if not points:
        return VelocityEstimate.empty()

    today_end = end_of_day(resolve_now(now))
    latest = latest_point_until(points, today_end)

    window_start = today_end - timedelta(days=lookback_days)
    recent = [p for p in points if window_start <= p.date <= today_end]

    if len(recent) < 2:
        total_days = days_between(start_date, latest.date)
        if total_days <= 0:
            return VelocityEstimate.empty()

        logger.debug(f"{len(recent)} points in {lookback_days}-day window, using all-time rate")
        return _estimate(start_date, start_value, latest.date, latest.value, total_days)

    first_recent = recent[0]
    last_recent = recent[-1]

    if first_recent.date < start_date:
        period_start = start_date
        period_start_value = start_value
    else:
        period_start = first_recent.date
        before = [p for p in points if p.date < period_start]
        period_start_value = before[-1].value if before else first_recent.value

    days = days_between(period_start, last_recent.date)
    if days <= 0:
        return VelocityEstimate.empty()

    estimate = _estimate(period_start, period_start_value, last_recent.date, last_recent.value, days)
    logger.debug(f"Windowed velocity over {days:.1f} days: {estimate.current_rate}")
    return estimate
