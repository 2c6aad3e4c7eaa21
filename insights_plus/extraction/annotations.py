"""
Grammars for the textual descriptions attached to rendered data points.

Two sentence shapes are read from the ``aria-label`` attribute:

- cumulative point: ``"Dec 19, 48. Completed."``, ``"Feb 9 2026, 154.5. Open."``
  (role words are also accepted in Japanese: ``完了``, ``オープン``)
- iteration column: ``"Iteration 3, 12. Team A."`` where the trailing group
  segment is optional

The annotation value is exact, unlike values read off path geometry.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Optional

from insights_plus.forecast.date_utils import calendar_date, end_of_day, month_from_abbreviation, resolve_now
from insights_plus.models import IterationRecord, PointMarker, SeriesRole
from insights_plus.preprocessing.markup_utils import parse_leading_float

logger = logging.getLogger(__name__)

_POINT_VALUE_RE = re.compile(r",\s*([\d.]+)\.\s+(Open|Completed|オープン|完了)", re.IGNORECASE)
_POINT_DATE_RE = re.compile(r"^([A-Za-z]{3})\s+(\d{1,2})(?:\s+(\d{4}))?")
_ITERATION_RE = re.compile(r"^(.+?),\s*([\d.]+)\.\s*(.*)$")

_ROLE_WORDS = {
    "completed": SeriesRole.COMPLETED,
    "完了": SeriesRole.COMPLETED,
    "open": SeriesRole.OPEN,
    "オープン": SeriesRole.OPEN,
}


@dataclass(frozen=True)
class PointAnnotation:
    """One parsed cumulative point description."""

    role: SeriesRole
    value: float
    date: Optional[datetime] = None


@dataclass(frozen=True)
class GroundTruth:
    """Exact latest values per role; ``None`` where no annotation was found."""

    open: Optional[float] = None
    completed: Optional[float] = None

    @property
    def complete(self) -> bool:
        return self.open is not None and self.completed is not None


# ==================== CUMULATIVE POINTS ====================


def parse_point_annotation(text: Optional[str], now: Optional[datetime] = None) -> Optional[PointAnnotation]:
    """
    Parse ``"<Mon> <D>[ <YYYY>], <value>. <Role>."``.

    The date is optional: a label without a recognisable date still yields
    a value, with ``date=None``. A missing year means the current year.
    """
    if not text:
        return None

    match = _POINT_VALUE_RE.search(text)
    if not match:
        return None

    value = parse_leading_float(match.group(1))
    if value is None:
        return None
    role = _ROLE_WORDS[match.group(2).lower()]

    date = None
    date_match = _POINT_DATE_RE.match(text)
    if date_match:
        month = month_from_abbreviation(date_match.group(1))
        if month is not None:
            year = int(date_match.group(3)) if date_match.group(3) else resolve_now(now).year
            date = calendar_date(year, month, int(date_match.group(2)))

    return PointAnnotation(role=role, value=value, date=date)


def _latest_annotation(
    annotations: List[PointAnnotation], today_end: datetime
) -> Optional[PointAnnotation]:
    if not annotations:
        return None

    dated = [a for a in annotations if a.date is not None and a.date <= today_end]
    if not dated:
        return annotations[-1]
    return max(dated, key=lambda a: a.date)


def select_ground_truth(
    markers: Iterable[PointMarker], now: Optional[datetime] = None
) -> GroundTruth:
    """
    Pick the exact open and completed values from point markers.

    For each role the annotation with the latest date on or before the end
    of today wins; when no annotation qualifies, the last one in document
    order is used.
    """
    now = resolve_now(now)
    by_role = {SeriesRole.OPEN: [], SeriesRole.COMPLETED: []}
    for marker in markers:
        annotation = parse_point_annotation(marker.annotation, now)
        if annotation is not None:
            by_role[annotation.role].append(annotation)

    today_end = end_of_day(now)
    latest_open = _latest_annotation(by_role[SeriesRole.OPEN], today_end)
    latest_completed = _latest_annotation(by_role[SeriesRole.COMPLETED], today_end)

    truth = GroundTruth(
        open=latest_open.value if latest_open else None,
        completed=latest_completed.value if latest_completed else None,
    )
    logger.debug(f"Ground truth from annotations: open={truth.open}, completed={truth.completed}")
    return truth


# ==================== ITERATION COLUMNS ====================


def parse_iteration_annotation(text: Optional[str], ordinal_index: int) -> Optional[IterationRecord]:
    """
    Parse ``"<name>, <number>. [<group>.]"`` into an IterationRecord.

    Returns ``None`` if the sentence does not match or the estimate is not
    a number.
    """
    if not text:
        return None

    match = _ITERATION_RE.match(text)
    if not match:
        return None

    estimate = parse_leading_float(match.group(2))
    if estimate is None:
        return None

    group = re.sub(r"\.$", "", match.group(3)).strip() or None
    return IterationRecord(
        name=match.group(1).strip(),
        estimate=estimate,
        ordinal_index=ordinal_index,
        group_name=group,
    )
