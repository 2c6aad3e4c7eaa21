# insights_plus/preprocessing/chart_detector.py
"""
Chart component detection over rendered Highcharts markup.

This module locates the plot area, axis labels, legend entries, series
paths and point markers inside a chart's root ``<svg>`` element, and
classifies the chart as cumulative (burnup), column (velocity) or unknown.
"""

import logging
from typing import List, Optional

from bs4.element import Tag

from insights_plus.extraction.path_interpreter import path_opcodes
from insights_plus.models import (
    AxisLabel,
    ChartKind,
    LegendItem,
    PlotRectangle,
    PointMarker,
    SeriesPath,
)

from .detector_config import ChartDetectorConfig, PlotAreaNotFoundError
from .markup_utils import attr_float, element_text


logger = logging.getLogger(__name__)


class ChartComponentDetector:
    """
    Detects chart components (plot area, axes, legend, series) in markup.

    All methods take the chart root element and never mutate it.
    """

    def __init__(self, config: Optional[ChartDetectorConfig] = None):
        """
        Initialize detector with optional configuration.

        Args:
            config: ChartDetectorConfig with selectors and heuristics
        """
        self.config = config or ChartDetectorConfig()
        self.logger = logging.getLogger(__name__)

    # ==================== CLASSIFICATION ====================

    def classify(self, root: Optional[Tag]) -> ChartKind:
        """
        Classify a chart fragment.

        Rules, first match wins:
            1. an area path inside a series container -> BURNUP
            2. column point markers whose first marker draws a closed
               line shape and carries an iteration-like annotation -> VELOCITY
            3. a line graph path inside a series container -> BURNUP
            4. otherwise -> UNKNOWN

        Args:
            root: Chart root element (None is classified UNKNOWN)

        Returns:
            ChartKind label
        """
        if root is None:
            return ChartKind.UNKNOWN

        cfg = self.config
        if root.select_one(f"{cfg.any_series_selector} {cfg.area_path_selector}"):
            self.logger.debug("Area path found, classifying as burnup")
            return ChartKind.BURNUP

        first_point = root.select_one(cfg.column_point_selector)
        if first_point is not None and self._is_iteration_column(first_point):
            self.logger.debug("Iteration column found, classifying as velocity")
            return ChartKind.VELOCITY

        if root.select_one(f"{cfg.any_series_selector} {cfg.graph_path_selector}"):
            self.logger.debug("Graph path found, classifying as burnup")
            return ChartKind.BURNUP

        self.logger.debug("No known chart structure found")
        return ChartKind.UNKNOWN

    def _is_iteration_column(self, point: Tag) -> bool:
        opcodes = path_opcodes(point.get("d"))
        if not (opcodes & {"L", "l"} and opcodes & {"Z", "z"}):
            return False

        annotation = point.get(self.config.annotation_attribute)
        if not annotation:
            return False
        return (
            self.config.iteration_keyword in annotation
            or self.config.iteration_label_regex.search(annotation) is not None
        )

    def has_series_content(self, root: Optional[Tag]) -> bool:
        """Whether the chart has rendered series containers or column points."""
        if root is None:
            return False
        return bool(
            root.select_one(self.config.series_selector)
            or root.select_one(self.config.column_point_selector)
        )

    # ==================== GEOMETRY ====================

    def plot_rectangle(self, root: Tag) -> PlotRectangle:
        """
        Read the plot area from the background rectangle.

        Raises:
            PlotAreaNotFoundError: If no background rectangle exists
        """
        background = root.select_one(self.config.plot_background_selector)
        if background is None:
            raise PlotAreaNotFoundError(
                f"No element matches '{self.config.plot_background_selector}'"
            )

        plot = PlotRectangle(
            left=attr_float(background, "x"),
            top=attr_float(background, "y"),
            width=max(0.0, attr_float(background, "width")),
            height=max(0.0, attr_float(background, "height")),
        )
        self.logger.debug(f"Plot rectangle: {plot.as_tuple()}")
        return plot

    def x_axis_labels(self, root: Tag) -> List[AxisLabel]:
        """X-axis tick labels in document order."""
        return [
            AxisLabel(element_text(label))
            for label in root.select(self.config.x_axis_label_selector)
        ]

    def y_axis_labels(self, root: Tag) -> List[AxisLabel]:
        """Y-axis tick labels in document order."""
        return [
            AxisLabel(element_text(label))
            for label in root.select(self.config.y_axis_label_selector)
        ]

    # ==================== LEGEND & SERIES ====================

    def legend_items(self, root: Tag) -> List[LegendItem]:
        """
        Legend entries that carry text.

        ``index`` is the position among all legend entries, including
        entries without text, so it lines up with series container order.
        """
        items = []
        for i, item in enumerate(root.select(self.config.legend_item_selector)):
            text = element_text(item)
            if not text:
                continue
            items.append(LegendItem(name=text, color=self._legend_color(item), index=i))

        self.logger.debug(f"Found {len(items)} legend items")
        return items

    @staticmethod
    def _legend_color(item: Tag) -> Optional[str]:
        rect = item.find("rect")
        if rect is not None:
            return rect.get("fill")
        path = item.find("path")
        if path is not None:
            return path.get("stroke") or path.get("fill")
        return None

    def series_paths(self, root: Tag) -> List[SeriesPath]:
        """
        Drawing command of each series container in the series group.

        The line graph is preferred over the area fill; containers with
        neither are skipped but still count toward ``index``.
        """
        cfg = self.config
        paths = []
        for i, group in enumerate(root.select(cfg.series_selector)):
            graph = group.select_one(cfg.graph_path_selector)
            area = group.select_one(cfg.area_path_selector)

            element = graph if graph is not None else area
            if element is None:
                continue

            color = graph.get("stroke") if graph is not None else None
            if not color and area is not None:
                color = area.get("fill")

            paths.append(SeriesPath(index=i, color=color, d=element.get("d")))

        self.logger.debug(f"Found {len(paths)} series paths")
        return paths

    def point_markers(self, root: Tag, column_only: bool = False) -> List[PointMarker]:
        """
        Point markers in document order.

        Args:
            root: Chart root element
            column_only: Restrict to markers inside series containers

        Returns:
            Markers with their annotation text and drawing command
        """
        selector = self.config.column_point_selector if column_only else self.config.point_selector
        return [
            PointMarker(annotation=point.get(self.config.annotation_attribute), d=point.get("d"))
            for point in root.select(selector)
        ]
