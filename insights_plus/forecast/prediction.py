"""
Completion forecast against an optional due date.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from insights_plus.models import Prediction

from .date_utils import add_days, days_between, js_round, resolve_now

logger = logging.getLogger(__name__)


def calculate_prediction(
    total: float,
    completed: float,
    current_rate: Optional[float],
    due_date: Optional[datetime],
    now: Optional[datetime] = None,
) -> Prediction:
    """
    Project the completion date from the current rate.

    - remaining = max(0, total - completed)
    - nothing remaining: done now, ideal rate 0, on track
    - otherwise completion = now + remaining / rate (needs a positive rate)
    - ideal rate = remaining / days until due, while the due date is ahead
    - on track when the projected completion is on or before the due date

    ``days_delta`` is the rounded number of days between the due date and
    the completion date (positive means ahead of schedule).

    Args:
        total: Total scope
        completed: Completed work
        current_rate: Completed work per day, or None
        due_date: Target date, or None
        now: Reference moment

    Returns:
        Prediction
    """
    now = resolve_now(now)
    remaining = max(0.0, total - completed)

    if remaining == 0:
        return Prediction(
            completion_date=now,
            due_date=due_date,
            ideal_rate=0.0,
            on_track=True,
            days_delta=js_round(days_between(now, due_date)) if due_date else None,
        )

    completion_date = None
    if current_rate is not None and current_rate > 0:
        completion_date = add_days(now, remaining / current_rate)

    ideal_rate = None
    on_track = None
    days_delta = None

    if due_date is not None:
        days_until_due = days_between(now, due_date)
        if days_until_due > 0:
            ideal_rate = remaining / days_until_due

        if completion_date is not None:
            days_delta = js_round(days_between(completion_date, due_date))
            on_track = completion_date <= due_date

    logger.debug(
        f"Prediction: remaining={remaining}, completion={completion_date}, "
        f"ideal_rate={ideal_rate}, on_track={on_track}"
    )
    return Prediction(
        completion_date=completion_date,
        due_date=due_date,
        ideal_rate=ideal_rate,
        on_track=on_track,
        days_delta=days_delta,
    )
