"""Iteration (velocity) column chart extractor."""

from __future__ import annotations

import logging

from bs4.element import Tag

from insights_plus.extraction.annotations import parse_iteration_annotation
from insights_plus.extraction.domain_mapper import y_axis_extrema
from insights_plus.models import AxisExtrema, PlotGeometry, VelocityChart
from insights_plus.preprocessing.chart_detector import ChartComponentDetector

logger = logging.getLogger(__name__)

# Axis bounds used when the value axis has no numeric labels
DEFAULT_Y_MIN = 0.0
DEFAULT_Y_MAX = 100.0


class IterationExtractor:
    """Parse column annotations into ordered iteration records."""

    def __init__(self, detector: ChartComponentDetector | None = None) -> None:
        self.detector = detector or ChartComponentDetector()

    def extract(self, root: Tag) -> VelocityChart:
        """Extract a VelocityChart.

        Columns whose annotation does not carry a numeric estimate are
        dropped; the survivors keep their drawing position as
        ``ordinal_index`` and are ordered by it.

        Raises
        ------
        PlotAreaNotFoundError
            If the chart has no plot background rectangle.
        """
        plot = self.detector.plot_rectangle(root)

        extrema = y_axis_extrema(self.detector.y_axis_labels(root))
        y_min, y_max = extrema if extrema is not None else (DEFAULT_Y_MIN, DEFAULT_Y_MAX)

        markers = self.detector.point_markers(root, column_only=True)
        records = []
        for index, marker in enumerate(markers):
            record = parse_iteration_annotation(marker.annotation, index)
            if record is None:
                logger.debug(f"Skipping column {index}: {marker.annotation!r}")
                continue
            records.append(record)

        records.sort(key=lambda r: r.ordinal_index)

        chart = VelocityChart(
            iterations=tuple(records),
            plot_geometry=PlotGeometry(
                plot=plot,
                axes=AxisExtrema(
                    x_min=0.0,
                    x_max=float(len(records) - 1),
                    y_min=y_min,
                    y_max=y_max,
                ),
            ),
        )
        logger.info(f"Velocity chart extracted: {len(records)}/{len(markers)} iterations")
        return chart
