"""Cumulative (burnup) chart extractor."""

from __future__ import annotations

import logging
from datetime import datetime

from bs4.element import Tag

from insights_plus.extraction.annotations import select_ground_truth
from insights_plus.extraction.domain_mapper import (
    extract_date_range_from_labels,
    extract_date_range_from_page,
    map_points,
    y_axis_extrema,
)
from insights_plus.extraction.path_interpreter import (
    first_path_point,
    interpret_path,
    last_point_in_plot,
)
from insights_plus.extraction.series_resolver import (
    SeriesCloud,
    reconcile,
    resolve_series,
)
from insights_plus.forecast.date_utils import resolve_now, to_timestamp_ms
from insights_plus.models import (
    AxisExtrema,
    BurnupChart,
    PlotGeometry,
    Series,
    SeriesRole,
)
from insights_plus.preprocessing.chart_detector import ChartComponentDetector
from insights_plus.preprocessing.detector_config import SeriesNotFoundError

logger = logging.getLogger(__name__)


class BurnupExtractor:
    """Reconstruct completed and open series from a cumulative chart.

    Pipeline: plot area and axes, date range, one point cloud per series
    path, legend role binding, annotation ground truth, reconciliation.
    """

    def __init__(self, detector: ChartComponentDetector | None = None) -> None:
        self.detector = detector or ChartComponentDetector()
        self.config = self.detector.config

    def extract(
        self,
        root: Tag,
        now: datetime | None = None,
        page_text: str | None = None,
    ) -> BurnupChart:
        """Extract a BurnupChart.

        Parameters
        ----------
        root:
            Chart root element.
        now:
            Reference moment for year inference and "today".
        page_text:
            Visible page text, scanned for a date range when the axis
            labels do not yield one.

        Raises
        ------
        PlotAreaNotFoundError
            If the chart has no plot background rectangle.
        SeriesNotFoundError
            If no series container holds a graph or area path.
        """
        now = resolve_now(now)
        plot = self.detector.plot_rectangle(root)

        # Step 1: Axes
        extrema = y_axis_extrema(self.detector.y_axis_labels(root))
        if extrema is None:
            logger.warning("No numeric y-axis labels; series values cannot be mapped")
            y_min, y_max = 0.0, float("nan")
        else:
            y_min, y_max = extrema

        date_range = extract_date_range_from_labels(self.detector.x_axis_labels(root), now)
        if date_range is None:
            date_range = extract_date_range_from_page(page_text, now)
            if date_range is None:
                logger.warning("Date range unknown; points are stamped with the current time")

        # Step 2: Point clouds
        series_paths = self.detector.series_paths(root)
        if not series_paths:
            raise SeriesNotFoundError("No series container holds a graph or area path")

        tolerance = self.config.clip_tolerance
        clouds = []
        for path in series_paths:
            pixels = interpret_path(path.d, plot, tolerance)
            points = map_points(pixels, plot, date_range, y_min, y_max, now)
            clouds.append(
                SeriesCloud(
                    index=path.index,
                    color=path.color,
                    points=tuple(points),
                    start_pixel=first_path_point(path.d),
                    last_pixel=last_point_in_plot(path.d, plot, tolerance),
                )
            )

        # Step 3: Roles and exact values
        resolved = resolve_series(self.detector.legend_items(root), clouds, self.config)
        truth = select_ground_truth(self.detector.point_markers(root), now)
        values = reconcile(resolved, truth)

        completed_cloud = values.completed_cloud
        open_cloud = values.open_cloud

        axes = AxisExtrema(
            x_min=to_timestamp_ms(date_range.start) if date_range else 0.0,
            x_max=to_timestamp_ms(date_range.end) if date_range else to_timestamp_ms(now),
            y_min=y_min,
            y_max=y_max if extrema is not None and y_max != 0 else values.total,
        )

        chart = BurnupChart(
            total=values.total,
            completed=values.completed,
            completed_series=Series(
                SeriesRole.COMPLETED, completed_cloud.points if completed_cloud else ()
            ),
            open_series=Series(SeriesRole.OPEN, open_cloud.points if open_cloud else ()),
            completed_start_pixel=completed_cloud.start_pixel if completed_cloud else None,
            completed_last_pixel=completed_cloud.last_pixel if completed_cloud else None,
            date_range=date_range,
            plot_geometry=PlotGeometry(plot=plot, axes=axes),
        )
        logger.info(
            f"Burnup chart extracted: total={chart.total}, completed={chart.completed}, "
            f"{len(chart.completed_series)} completed / {len(chart.open_series)} open points"
        )
        return chart
