# insights_plus/preprocessing/detector_config.py
"""
Configuration for chart markup detection, plus the detection exceptions.
"""
import re
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple

from insights_plus.models import SeriesRole


# ==================== CUSTOM EXCEPTIONS ====================

class ChartDetectionError(Exception):
    """Base exception for chart detection failures"""
    pass


class InvalidMarkupError(ChartDetectionError):
    """Raised when markup is empty or holds no chart root element"""
    pass


class PlotAreaNotFoundError(ChartDetectionError):
    """Raised when the plot background rectangle is missing"""
    pass


class SeriesNotFoundError(ChartDetectionError):
    """Raised when no series container holds a drawable path"""
    pass


# ==================== CONFIGURATION CLASS ====================

@dataclass
class ChartDetectorConfig:
    """
    Selectors and heuristics for reading a rendered Highcharts fragment.

    Attributes:
        root_selector: CSS selector of the chart's root ``<svg>``
        plot_background_selector: Background rectangle defining the plot area
        x_axis_label_selector / y_axis_label_selector: Axis tick label text nodes
        legend_item_selector: Legend entries (text + swatch)
        series_selector: Series containers inside the series group
        any_series_selector: Series containers anywhere (used by the classifier)
        area_path_class / graph_path_class / point_class: Element classes
        annotation_attribute: Attribute holding a point's textual description

        clip_tolerance: Pixels of slack when clipping points to the plot area

        completed_tokens / open_tokens: Legend and annotation role words
        iteration_keyword / iteration_label_pattern: Column-label heuristics
        date_picker_class_fragment: Marker of a time-based x-axis on the page
    """

    # Markup selectors
    root_selector: str = "svg.highcharts-root"
    plot_background_selector: str = ".highcharts-plot-background"
    x_axis_label_selector: str = ".highcharts-xaxis-labels text"
    y_axis_label_selector: str = ".highcharts-yaxis-labels text"
    legend_item_selector: str = ".highcharts-legend-item"
    series_selector: str = ".highcharts-series-group .highcharts-series"
    any_series_selector: str = ".highcharts-series"
    area_path_class: str = "highcharts-area"
    graph_path_class: str = "highcharts-graph"
    point_class: str = "highcharts-point"
    annotation_attribute: str = "aria-label"

    # Geometry
    clip_tolerance: float = 1.0

    # Series role vocabulary (lower-case)
    completed_tokens: Tuple[str, ...] = ("completed", "完了")
    open_tokens: Tuple[str, ...] = ("open", "オープン")

    # Column chart heuristics
    iteration_keyword: str = "Iteration"
    iteration_label_pattern: str = r"\d+(\.\d+)?\.\s*\w+"

    # Page configuration
    date_picker_class_fragment: str = "DatePickerContainer"

    # ==================== DERIVED SELECTORS ====================

    @property
    def area_path_selector(self) -> str:
        return f"path.{self.area_path_class}"

    @property
    def graph_path_selector(self) -> str:
        return f"path.{self.graph_path_class}"

    @property
    def point_selector(self) -> str:
        return f".{self.point_class}"

    @property
    def column_point_selector(self) -> str:
        """Point markers that live inside a series container."""
        return f"{self.any_series_selector} {self.point_selector}"

    @property
    def iteration_label_regex(self) -> Pattern[str]:
        return re.compile(self.iteration_label_pattern)

    def role_for_text(self, text: str) -> Optional[SeriesRole]:
        """
        Map legend or annotation text to a series role.

        Returns:
            The matching role, or None when the text names neither
        """
        lowered = text.lower()
        if any(token in lowered for token in self.completed_tokens):
            return SeriesRole.COMPLETED
        if any(token in lowered for token in self.open_tokens):
            return SeriesRole.OPEN
        return None

    def __repr__(self) -> str:
        """String representation for debugging"""
        return (
            f"ChartDetectorConfig(\n"
            f"  root_selector='{self.root_selector}',\n"
            f"  series_selector='{self.series_selector}',\n"
            f"  clip_tolerance={self.clip_tolerance}\n"
            f")"
        )
