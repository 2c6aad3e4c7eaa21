"""
Series identification and value reconciliation for cumulative charts.

Point clouds reconstructed from series paths carry no names. Roles are
bound from legend text, with a magnitude fallback when the legend says
nothing useful, and the headline numbers are then corrected with the exact
values found in point annotations.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from insights_plus.forecast.date_utils import js_round
from insights_plus.models import DomainPoint, LegendItem, PixelPoint, SeriesRole
from insights_plus.preprocessing.detector_config import ChartDetectorConfig

from .annotations import GroundTruth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesCloud:
    """Domain points of one series path with its anchor pixels."""

    index: int
    color: Optional[str]
    points: Tuple[DomainPoint, ...]
    start_pixel: Optional[PixelPoint] = None
    last_pixel: Optional[PixelPoint] = None

    @property
    def last_value(self) -> float:
        """Final value, 0 for an empty cloud."""
        return self.points[-1].value if self.points else 0.0


@dataclass(frozen=True)
class ResolvedSeries:
    completed: Optional[SeriesCloud] = None
    open: Optional[SeriesCloud] = None


@dataclass(frozen=True)
class ReconciledValues:
    """Headline numbers and the clouds they belong to after correction."""

    total: float
    completed: float
    completed_cloud: Optional[SeriesCloud]
    open_cloud: Optional[SeriesCloud]


def resolve_series(
    legend: Sequence[LegendItem],
    clouds: Sequence[SeriesCloud],
    config: Optional[ChartDetectorConfig] = None,
) -> ResolvedSeries:
    """
    Assign point clouds to the completed and open roles.

    1. Legend text: an entry naming a role binds the cloud at the entry's
       legend position. Later entries override earlier ones.
    2. Nothing bound and at least two clouds: of the first two, the one
       with the larger final value is open, the other completed.
    3. Completed still unbound: the first cloud not already bound to open.
    """
    config = config or ChartDetectorConfig()
    resolved = ResolvedSeries()

    for item in legend:
        role = config.role_for_text(item.name)
        if role is None or item.index >= len(clouds):
            continue
        cloud = clouds[item.index]
        if role is SeriesRole.COMPLETED:
            resolved = replace(resolved, completed=cloud)
        else:
            resolved = replace(resolved, open=cloud)

    if resolved.completed is None and resolved.open is None and len(clouds) >= 2:
        first, second = clouds[0], clouds[1]
        if first.last_value > second.last_value:
            resolved = ResolvedSeries(completed=second, open=first)
        else:
            resolved = ResolvedSeries(completed=first, open=second)
        logger.debug("Series roles assigned by final-value magnitude")
    elif resolved.completed is None:
        for cloud in clouds:
            if cloud is not resolved.open:
                resolved = replace(resolved, completed=cloud)
                break

    logger.debug(
        f"Resolved series: completed={_describe(resolved.completed)}, open={_describe(resolved.open)}"
    )
    return resolved


def _describe(cloud: Optional[SeriesCloud]) -> str:
    return "none" if cloud is None else f"#{cloud.index} ({len(cloud.points)} points)"


def reconcile(resolved: ResolvedSeries, truth: GroundTruth) -> ReconciledValues:
    """
    Compute ``total`` and ``completed``.

    Annotation values replace path-derived ones. With both annotations
    present the open annotation is the remaining scope, so ``total`` is
    their sum. A completed value above a positive total means the roles
    were swapped; values and clouds are exchanged.

    A cloud's start and last pixels move with it, so after a swap the
    completed anchors describe the line now labelled completed. Exchanging
    only the point data would leave them on the old completed line.
    """
    completed_cloud = resolved.completed
    open_cloud = resolved.open

    if truth.open is not None:
        total = truth.open
    elif open_cloud is not None and open_cloud.points:
        total = float(js_round(open_cloud.last_value))
    else:
        total = 0.0

    if truth.completed is not None:
        completed = truth.completed
    elif completed_cloud is not None and completed_cloud.points:
        completed = float(js_round(completed_cloud.last_value))
    else:
        completed = 0.0

    if truth.complete:
        total = truth.open + truth.completed

    if completed > total > 0:
        logger.debug(f"Completed ({completed}) exceeds total ({total}), swapping roles")
        completed, total = total, completed
        completed_cloud, open_cloud = open_cloud, completed_cloud

    return ReconciledValues(
        total=total,
        completed=completed,
        completed_cloud=completed_cloud,
        open_cloud=open_cloud,
    )
