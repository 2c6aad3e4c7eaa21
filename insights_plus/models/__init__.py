"""Models package for insights-plus.

This package contains the immutable data types shared by the extraction
and forecast layers.
"""
from .data_types import (
    AverageResult,
    AverageStatus,
    AxisExtrema,
    AxisLabel,
    BurnupChart,
    ChartKind,
    ChartResult,
    DateRange,
    DomainPoint,
    IterationRecord,
    LegendItem,
    PixelPoint,
    PlotGeometry,
    PlotRectangle,
    PointMarker,
    Prediction,
    Series,
    SeriesPath,
    SeriesRole,
    VelocityChart,
    VelocityEstimate,
)

__all__ = [
    # Markup elements
    "AxisLabel",
    "LegendItem",
    "SeriesPath",
    "PointMarker",
    # Geometry
    "PixelPoint",
    "PlotRectangle",
    "AxisExtrema",
    "PlotGeometry",
    # Series
    "DomainPoint",
    "DateRange",
    "Series",
    "SeriesRole",
    "IterationRecord",
    # Results
    "ChartKind",
    "ChartResult",
    "BurnupChart",
    "VelocityChart",
    # Forecast
    "VelocityEstimate",
    "Prediction",
    "AverageResult",
    "AverageStatus",
]
