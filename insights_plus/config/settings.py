"""
User settings consumed by the forecast layer.

Settings come from an external key-value store. Missing or malformed
values are replaced with documented defaults; nothing here raises.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .layout_config import DEFAULT_LAYOUT

logger = logging.getLogger(__name__)

LOOKBACK_DAYS_KEY = "lookbackDays"
TARGET_DATE_KEY = "targetDate"
SELECTED_ITERATIONS_KEY = "selectedIterations"


def _parse_lookback(raw: Any) -> int:
    # bool is an int subclass; a stored True is not a window length
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return DEFAULT_LAYOUT.DEFAULT_LOOKBACK_DAYS
    if not math.isfinite(raw) or raw != int(raw):
        return DEFAULT_LAYOUT.DEFAULT_LOOKBACK_DAYS
    days = int(raw)
    if not DEFAULT_LAYOUT.MIN_LOOKBACK_DAYS <= days <= DEFAULT_LAYOUT.MAX_LOOKBACK_DAYS:
        logger.debug(f"Lookback {days} out of range, using default")
        return DEFAULT_LAYOUT.DEFAULT_LOOKBACK_DAYS
    return days


def _parse_target_date(raw: Any) -> Optional[datetime]:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        # Stored as YYYY-MM-DD; a full ISO timestamp keeps only its date part
        return datetime.strptime(raw.strip()[:10], "%Y-%m-%d")
    except ValueError:
        logger.debug(f"Ignoring malformed target date: {raw!r}")
        return None


def _parse_selection(raw: Any) -> Tuple[str, ...]:
    if not isinstance(raw, (list, tuple)):
        return ()
    return tuple(item for item in raw if isinstance(item, str))


@dataclass(frozen=True)
class ForecastSettings:
    """Validated settings snapshot.

    Attributes:
        lookback_days: Trailing window for the recent rate (1..365)
        target_date: Optional due date (midnight)
        selected_iterations: Iteration names chosen for averaging
    """

    lookback_days: int = DEFAULT_LAYOUT.DEFAULT_LOOKBACK_DAYS
    target_date: Optional[datetime] = None
    selected_iterations: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> "ForecastSettings":
        """Build settings from raw stored values, substituting defaults."""
        if not mapping:
            return cls()
        return cls(
            lookback_days=_parse_lookback(mapping.get(LOOKBACK_DAYS_KEY)),
            target_date=_parse_target_date(mapping.get(TARGET_DATE_KEY)),
            selected_iterations=_parse_selection(mapping.get(SELECTED_ITERATIONS_KEY)),
        )

    def to_mapping(self) -> dict:
        """Serialize back to the stored representation."""
        return {
            LOOKBACK_DAYS_KEY: self.lookback_days,
            TARGET_DATE_KEY: self.target_date.strftime("%Y-%m-%d") if self.target_date else None,
            SELECTED_ITERATIONS_KEY: list(self.selected_iterations),
        }


def default_selected_iterations(
    names: Sequence[str], count: int = DEFAULT_LAYOUT.DEFAULT_ITERATION_COUNT
) -> List[str]:
    """Select the last ``count`` iteration names (most recent)."""
    if count <= 0:
        return []
    return list(names[-count:])
