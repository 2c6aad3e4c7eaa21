"""
Coordinate mapping between pixel space and the chart's domain.

Converts pixel coordinates to values and calendar dates using the plot
rectangle and axis extrema, and parses axis label text in the two locale
grammars the host page renders:

- Latin:      ``"Dec 1"``, ``"Jan 15 2026"``
- East Asian: ``"12月 1"``, ``"1月 15 2026"``

Labels rarely carry a year. The last label defaults to the current year and
the first label to the last label's year, one less when the month numbers
show the range wraps a calendar year.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional, Sequence, Tuple, Union

import numpy as np

from insights_plus.forecast.date_utils import (
    add_days,
    calendar_date,
    days_between,
    month_from_abbreviation,
    resolve_now,
)
from insights_plus.models import AxisLabel, DateRange, DomainPoint, PixelPoint, PlotRectangle
from insights_plus.preprocessing.markup_utils import parse_tick_value
from insights_plus.preprocessing.point_validators import FiniteValueValidator, default_point_pipeline

logger = logging.getLogger(__name__)

_EAST_ASIAN_LABEL_RE = re.compile(r"(\d{1,2})月\s*(\d{1,2})(?:\s*(\d{4}))?")
_LATIN_LABEL_RE = re.compile(r"([A-Za-z]{3})\s*(\d{1,2})(?:\s*(\d{4}))?")

_EAST_ASIAN_RANGE_RE = re.compile(
    r"(\d{1,2})月\s*(\d{1,2})\s*-\s*(\d{4})年(\d{1,2})月(\d{1,2})日"
)
_LATIN_RANGE_RE = re.compile(
    r"([A-Za-z]{3})\s*(\d{1,2})(?:,?\s*(\d{4}))?"
    r"\s*-\s*"
    r"([A-Za-z]{3})\s*(\d{1,2})(?:,?\s*(\d{4}))?"
)


@dataclass(frozen=True)
class LabelDate:
    """Month/day (and optional year) read from label text; ``month`` is 1-based."""

    month: int
    day: int
    year: Optional[int] = None


# ==================== PIXEL -> DOMAIN ====================


def pixel_to_value(pixel_y: float, plot: PlotRectangle, y_min: float, y_max: float) -> float:
    """Value at a vertical pixel position; NaN for a zero-height plot."""
    if plot.height == 0:
        return float("nan")
    ratio = (plot.top + plot.height - pixel_y) / plot.height
    return y_min + ratio * (y_max - y_min)


def pixel_to_date(pixel_x: float, plot: PlotRectangle, date_range: DateRange) -> Optional[datetime]:
    """Date at a horizontal pixel position.

    ``None`` for a zero-width plot or a position past the representable dates.
    """
    if plot.width == 0:
        return None
    ratio = (pixel_x - plot.left) / plot.width
    span = days_between(date_range.start, date_range.end)
    try:
        return add_days(date_range.start, ratio * span)
    except OverflowError:
        return None


def map_points(
    pixels: Iterable[PixelPoint],
    plot: PlotRectangle,
    date_range: Optional[DateRange],
    y_min: float,
    y_max: float,
    now: Optional[datetime] = None,
) -> List[DomainPoint]:
    """
    Map clipped pixel points to domain points.

    With a date range the points are dated, sorted and reduced to one per
    day. Without one every point is stamped with ``now`` and kept as drawn.
    """
    if date_range is None:
        stamp = resolve_now(now)
        points = [DomainPoint(stamp, pixel_to_value(p.y, plot, y_min, y_max)) for p in pixels]
        return FiniteValueValidator().validate(points)

    points = []
    for p in pixels:
        date = pixel_to_date(p.x, plot, date_range)
        if date is None:
            continue
        points.append(DomainPoint(date, pixel_to_value(p.y, plot, y_min, y_max)))
    return default_point_pipeline().validate(points)


# ==================== AXIS LABELS ====================


def parse_axis_date(text: str) -> Optional[LabelDate]:
    """
    Parse a date axis label.

    The East Asian grammar is tried first, then the Latin one. Returns
    ``None`` when neither matches or the month name is unknown.
    """
    match = _EAST_ASIAN_LABEL_RE.search(text)
    if match:
        year = int(match.group(3)) if match.group(3) else None
        return LabelDate(int(match.group(1)), int(match.group(2)), year)

    match = _LATIN_LABEL_RE.search(text)
    if match:
        month = month_from_abbreviation(match.group(1))
        if month is None:
            return None
        year = int(match.group(3)) if match.group(3) else None
        return LabelDate(month, int(match.group(2)), year)

    return None


def infer_date_range(
    first: LabelDate, last: LabelDate, now: Optional[datetime] = None
) -> Optional[DateRange]:
    """Build a date range from two label dates, filling in missing years.

    Returns ``None`` when either end is not a representable date.
    """
    end_year = last.year if last.year is not None else resolve_now(now).year
    start_year = first.year if first.year is not None else end_year
    if first.month > last.month and first.year is None:
        start_year = end_year - 1

    start = calendar_date(start_year, first.month, first.day)
    end = calendar_date(end_year, last.month, last.day)
    if start is None or end is None:
        logger.debug(f"Date range out of bounds: {first} .. {last}")
        return None
    return DateRange(start=start, end=end)


def extract_date_range_from_labels(
    labels: Sequence[Union[AxisLabel, str]], now: Optional[datetime] = None
) -> Optional[DateRange]:
    """
    Date range spanned by the x-axis labels.

    Only the first and last labels are read; if either fails to parse the
    range is unknown.
    """
    if not labels:
        return None

    texts = [label.text if isinstance(label, AxisLabel) else label for label in labels]
    first = parse_axis_date(texts[0])
    last = parse_axis_date(texts[-1])
    if first is None or last is None:
        logger.debug(f"Unparsable axis range: {texts[0]!r} .. {texts[-1]!r}")
        return None

    return infer_date_range(first, last, now)


def extract_date_range_from_page(text: Optional[str], now: Optional[datetime] = None) -> Optional[DateRange]:
    """
    Date range from the page's range picker text.

    Recognises ``"12月 1 - 2026年1月15日"`` and ``"Dec 1 - Jan 15, 2026"``
    (years optional on either side in the Latin form).
    """
    if not text:
        return None

    match = _EAST_ASIAN_RANGE_RE.search(text)
    if match:
        first = LabelDate(int(match.group(1)), int(match.group(2)))
        last = LabelDate(int(match.group(4)), int(match.group(5)), int(match.group(3)))
        return infer_date_range(first, last, now)

    match = _LATIN_RANGE_RE.search(text)
    if match:
        start_month = month_from_abbreviation(match.group(1))
        end_month = month_from_abbreviation(match.group(4))
        if start_month is None or end_month is None:
            return None
        first = LabelDate(
            start_month, int(match.group(2)), int(match.group(3)) if match.group(3) else None
        )
        last = LabelDate(
            end_month, int(match.group(5)), int(match.group(6)) if match.group(6) else None
        )
        return infer_date_range(first, last, now)

    return None


def y_axis_extrema(labels: Sequence[Union[AxisLabel, str]]) -> Optional[Tuple[float, float]]:
    """Smallest and largest numeric tick label, ``None`` if no label parses."""
    values = []
    for label in labels:
        value = parse_tick_value(label.text if isinstance(label, AxisLabel) else label)
        if value is not None:
            values.append(value)

    if not values:
        return None
    ticks = np.asarray(values, dtype=float)
    return float(np.min(ticks)), float(np.max(ticks))
