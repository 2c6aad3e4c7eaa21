"""
Data types for Insights Plus.

Provides immutable dataclasses for:
- PixelPoint / PlotRectangle: device-space geometry read from chart markup
- AxisExtrema / PlotGeometry: domain bounds of the plotting area
- DomainPoint / Series / DateRange: reconstructed cumulative observations
- IterationRecord: one column of an iteration (velocity) chart
- BurnupChart / VelocityChart: the closed set of extraction results
- VelocityEstimate / Prediction / AverageResult: forecast outputs
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union


class ChartKind(str, Enum):
    """Label assigned to a chart fragment by the classifier."""

    BURNUP = "burnup"
    VELOCITY = "velocity"
    UNKNOWN = "unknown"


class SeriesRole(str, Enum):
    """Semantic role of a cumulative series."""

    COMPLETED = "completed"
    OPEN = "open"


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class PixelPoint:
    """Device-space coordinate taken from a path command."""

    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class PlotRectangle:
    """Pixel bounds of the plotting area."""

    left: float
    top: float
    width: float
    height: float

    @property
    def right(self) -> float:
        """Right edge x coordinate."""
        return self.left + self.width

    @property
    def bottom(self) -> float:
        """Bottom edge y coordinate."""
        return self.top + self.height

    def contains(self, x: float, y: float, tolerance: float = 1.0) -> bool:
        """Check whether a point lies inside the rectangle (inclusive, with tolerance)."""
        return (
            self.left - tolerance <= x <= self.right + tolerance
            and self.top - tolerance <= y <= self.bottom + tolerance
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        """Convert to (left, top, width, height) tuple."""
        return (self.left, self.top, self.width, self.height)

    def to_dict(self) -> Dict[str, float]:
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class AxisLabel:
    """Axis tick label text."""

    text: str


@dataclass(frozen=True)
class LegendItem:
    """Legend entry in legend order."""

    name: str
    color: Optional[str]
    index: int


@dataclass(frozen=True)
class SeriesPath:
    """Drawing command of one series container."""

    index: int
    color: Optional[str]
    d: Optional[str]


@dataclass(frozen=True)
class PointMarker:
    """Rendered data point with its textual description."""

    annotation: Optional[str]
    d: Optional[str] = None


@dataclass(frozen=True)
class AxisExtrema:
    """Domain bounds of the chart axes.

    ``x_min``/``x_max`` are POSIX timestamps in milliseconds for cumulative
    charts and ordinal indices for column charts.
    """

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "x_min": self.x_min,
            "x_max": self.x_max,
            "y_min": self.y_min,
            "y_max": self.y_max,
        }


@dataclass(frozen=True)
class PlotGeometry:
    """Plot rectangle together with the axis extrema it maps to."""

    plot: PlotRectangle
    axes: AxisExtrema

    def to_dict(self) -> Dict[str, Any]:
        return {"plot": self.plot.to_dict(), "axes": self.axes.to_dict()}


@dataclass(frozen=True)
class DomainPoint:
    """A reconstructed observation: calendar date and value."""

    date: datetime
    value: float

    def is_valid(self) -> bool:
        """A point is usable only with a real date and a finite value."""
        if not isinstance(self.date, datetime):
            return False
        try:
            return math.isfinite(self.value)
        except TypeError:
            return False

    def to_dict(self) -> Dict[str, Any]:
        return {"date": _iso(self.date), "value": self.value}


@dataclass(frozen=True)
class DateRange:
    """Time span covered by the chart's x-axis."""

    start: datetime
    end: datetime

    def to_dict(self) -> Dict[str, Optional[str]]:
        return {"start": _iso(self.start), "end": _iso(self.end)}


@dataclass(frozen=True)
class Series:
    """Date-ordered sequence of observations with a semantic role."""

    role: SeriesRole
    points: Tuple[DomainPoint, ...] = ()

    @property
    def latest_value(self) -> Optional[float]:
        """Value of the last point, if any."""
        return self.points[-1].value if self.points else None

    def __len__(self) -> int:
        return len(self.points)

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role.value, "points": [p.to_dict() for p in self.points]}


@dataclass(frozen=True)
class IterationRecord:
    """One categorical bar in an iteration column chart."""

    name: str
    estimate: float
    ordinal_index: int
    group_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "estimate": self.estimate,
            "group_name": self.group_name,
            "ordinal_index": self.ordinal_index,
        }


@dataclass(frozen=True)
class BurnupChart:
    """Extraction result for a cumulative (stacked-area) chart."""

    total: float
    completed: float
    completed_series: Series
    open_series: Series
    completed_start_pixel: Optional[PixelPoint]
    completed_last_pixel: Optional[PixelPoint]
    date_range: Optional[DateRange]
    plot_geometry: PlotGeometry

    kind = ChartKind.BURNUP

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "total": self.total,
            "completed": self.completed,
            "completed_series": [p.to_dict() for p in self.completed_series.points],
            "open_series": [p.to_dict() for p in self.open_series.points],
            "completed_start_pixel": (
                self.completed_start_pixel.to_dict() if self.completed_start_pixel else None
            ),
            "completed_last_pixel": (
                self.completed_last_pixel.to_dict() if self.completed_last_pixel else None
            ),
            "date_range": self.date_range.to_dict() if self.date_range else None,
            "plot_geometry": self.plot_geometry.to_dict(),
        }


@dataclass(frozen=True)
class VelocityChart:
    """Extraction result for an iteration column chart."""

    iterations: Tuple[IterationRecord, ...]
    plot_geometry: PlotGeometry

    kind = ChartKind.VELOCITY

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(record.name for record in self.iterations)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "iterations": [record.to_dict() for record in self.iterations],
            "plot_geometry": self.plot_geometry.to_dict(),
        }


ChartResult = Union[BurnupChart, VelocityChart]


@dataclass(frozen=True)
class VelocityEstimate:
    """Daily rate together with the window it was computed over.

    All fields are ``None`` together or populated together.
    """

    current_rate: Optional[float] = None
    period_start: Optional[datetime] = None
    period_end: Optional[datetime] = None
    period_start_value: Optional[float] = None
    period_end_value: Optional[float] = None

    @property
    def has_estimate(self) -> bool:
        return self.current_rate is not None

    @classmethod
    def empty(cls) -> "VelocityEstimate":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current_rate": self.current_rate,
            "period_start": _iso(self.period_start),
            "period_end": _iso(self.period_end),
            "period_start_value": self.period_start_value,
            "period_end_value": self.period_end_value,
        }


@dataclass(frozen=True)
class Prediction:
    """Completion forecast against an optional due date."""

    completion_date: Optional[datetime]
    due_date: Optional[datetime]
    ideal_rate: Optional[float]
    on_track: Optional[bool]
    days_delta: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completion_date": _iso(self.completion_date),
            "due_date": _iso(self.due_date),
            "ideal_rate": self.ideal_rate,
            "on_track": self.on_track,
            "days_delta": self.days_delta,
        }


class AverageStatus(str, Enum):
    """Outcome of averaging a selection of iterations."""

    OK = "ok"
    NOTHING_SELECTED = "nothing_selected"
    STALE_SELECTION = "stale_selection"


@dataclass(frozen=True)
class AverageResult:
    """Average estimate over a selection of iterations."""

    average: Optional[float]
    count: int
    total: float
    selected: Tuple[IterationRecord, ...] = field(default_factory=tuple)
    status: AverageStatus = AverageStatus.OK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "average": self.average,
            "count": self.count,
            "total": self.total,
            "selected": [record.name for record in self.selected],
            "status": self.status.value,
        }
