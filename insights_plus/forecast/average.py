"""
Average estimate across a selection of iterations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

from insights_plus.config import DEFAULT_LAYOUT, ForecastSettings, default_selected_iterations
from insights_plus.models import AverageResult, AverageStatus, IterationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IterationSelection:
    """Iterations currently on the chart and the names chosen for averaging.

    Passed explicitly into the averaging functions; nothing is kept at
    module level.
    """

    available: Tuple[str, ...] = field(default_factory=tuple)
    selected: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_settings(
        cls,
        available: Sequence[str],
        settings: Optional[ForecastSettings] = None,
        default_count: int = DEFAULT_LAYOUT.DEFAULT_ITERATION_COUNT,
    ) -> "IterationSelection":
        """Use the stored selection, or the most recent iterations when none is stored."""
        stored = settings.selected_iterations if settings is not None else ()
        selected = tuple(stored) if stored else tuple(default_selected_iterations(available, default_count))
        return cls(available=tuple(available), selected=selected)

    def toggle(self, name: str) -> "IterationSelection":
        """Add or remove ``name`` from the selection."""
        if name in self.selected:
            return replace(self, selected=tuple(n for n in self.selected if n != name))
        return replace(self, selected=self.selected + (name,))

    @property
    def stale(self) -> Tuple[str, ...]:
        """Selected names no longer present on the chart."""
        return tuple(name for name in self.selected if name not in self.available)


def calculate_average_velocity(
    iterations: Iterable[IterationRecord], selected_names: Iterable[str]
) -> AverageResult:
    """
    Average the estimates of the selected iterations.

    Returns ``average=None`` with status NOTHING_SELECTED for an empty
    selection, and STALE_SELECTION when none of the selected names exist
    among the current iterations.
    """
    records = list(iterations)
    names = set(selected_names)

    if not names:
        return AverageResult(average=None, count=0, total=0.0, status=AverageStatus.NOTHING_SELECTED)

    selected = tuple(record for record in records if record.name in names)
    if not selected:
        logger.debug(f"None of {len(names)} selected iterations are on the chart")
        return AverageResult(average=None, count=0, total=0.0, status=AverageStatus.STALE_SELECTION)

    estimates = np.asarray([record.estimate for record in selected], dtype=float)
    total = float(np.sum(estimates))
    return AverageResult(
        average=total / len(selected),
        count=len(selected),
        total=total,
        selected=selected,
    )
