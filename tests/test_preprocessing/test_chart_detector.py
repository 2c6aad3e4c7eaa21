"""
Tests for ChartComponentDetector.

Tests cover:
- Chart classification (burnup, velocity, unknown)
- Plot rectangle lookup
- Axis labels, legend items, series paths, point markers
"""
import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from bs4 import BeautifulSoup

from insights_plus.models import AxisLabel, ChartKind, PlotRectangle
from insights_plus.preprocessing.chart_detector import ChartComponentDetector
from insights_plus.preprocessing.detector_config import (
    ChartDetectorConfig,
    PlotAreaNotFoundError,
)


def root_of(markup):
    return BeautifulSoup(markup, "html.parser").select_one("svg.highcharts-root")


@pytest.fixture
def detector():
    return ChartComponentDetector()


# ==================== TestClassification ====================

class TestClassification:
    """Test classify rule order."""

    def test_area_path_is_burnup(self, detector, burnup_svg):
        assert detector.classify(root_of(burnup_svg)) == ChartKind.BURNUP

    def test_graph_only_is_burnup(self, detector, burnup_svg_factory):
        root = root_of(burnup_svg_factory(with_area=False))
        assert detector.classify(root) == ChartKind.BURNUP

    def test_iteration_columns_are_velocity(self, detector, velocity_svg):
        assert detector.classify(root_of(velocity_svg)) == ChartKind.VELOCITY

    def test_numbered_label_without_keyword_is_velocity(self, detector, velocity_svg_factory):
        root = root_of(velocity_svg_factory(labels=("Sprint 7, 12.5. Team A.",)))
        assert detector.classify(root) == ChartKind.VELOCITY

    def test_columns_with_plain_labels_are_unknown(self, detector, velocity_svg_factory):
        """Bar shapes alone are not enough; the annotation must look like an iteration."""
        root = root_of(velocity_svg_factory(labels=("Bananas",)))
        assert detector.classify(root) == ChartKind.UNKNOWN

    def test_open_column_shape_is_not_velocity(self, detector):
        markup = (
            '<svg class="highcharts-root"><g class="highcharts-series">'
            '<path class="highcharts-point" d="M 0 0 L 10 10" aria-label="Iteration 1, 5."/>'
            "</g></svg>"
        )
        assert detector.classify(root_of(markup)) == ChartKind.UNKNOWN

    def test_area_wins_over_columns(self, detector):
        markup = (
            '<svg class="highcharts-root"><g class="highcharts-series">'
            '<path class="highcharts-point" d="M 0 0 L 10 10 Z" aria-label="Iteration 1, 5."/>'
            '<path class="highcharts-area" d="M 0 0 L 10 10"/>'
            "</g></svg>"
        )
        assert detector.classify(root_of(markup)) == ChartKind.BURNUP

    def test_empty_chart_is_unknown(self, detector):
        assert detector.classify(root_of('<svg class="highcharts-root"></svg>')) == ChartKind.UNKNOWN

    def test_none_is_unknown(self, detector):
        assert detector.classify(None) == ChartKind.UNKNOWN

    def test_classification_never_raises_on_odd_paths(self, detector):
        markup = (
            '<svg class="highcharts-root"><g class="highcharts-series">'
            '<path class="highcharts-point" aria-label="Iteration"/>'
            "</g></svg>"
        )
        assert detector.classify(root_of(markup)) == ChartKind.UNKNOWN


# ==================== TestGeometry ====================

class TestGeometry:
    """Test plot rectangle and axis label lookup."""

    def test_plot_rectangle(self, detector, burnup_svg):
        plot = detector.plot_rectangle(root_of(burnup_svg))
        assert plot == PlotRectangle(left=50, top=0, width=300, height=200)

    def test_missing_background_raises(self, detector, burnup_svg_factory):
        root = root_of(burnup_svg_factory(with_background=False))
        with pytest.raises(PlotAreaNotFoundError):
            detector.plot_rectangle(root)

    def test_x_axis_labels(self, detector, burnup_svg):
        labels = detector.x_axis_labels(root_of(burnup_svg))
        assert [label.text for label in labels] == ["Jan 1", "Jan 31"]
        assert labels == [AxisLabel("Jan 1"), AxisLabel("Jan 31")]

    def test_y_axis_labels(self, detector, burnup_svg):
        labels = detector.y_axis_labels(root_of(burnup_svg))
        assert [label.text for label in labels] == ["0", "50", "100"]
        assert all(isinstance(label, AxisLabel) for label in labels)

    def test_has_series_content(self, detector, burnup_svg, velocity_svg):
        assert detector.has_series_content(root_of(burnup_svg))
        assert detector.has_series_content(root_of(velocity_svg))
        assert not detector.has_series_content(root_of('<svg class="highcharts-root"></svg>'))
        assert not detector.has_series_content(None)


# ==================== TestLegendAndSeries ====================

class TestLegendAndSeries:
    """Test legend, series path and point marker lookup."""

    def test_legend_items(self, detector, burnup_svg):
        items = detector.legend_items(root_of(burnup_svg))
        assert [(item.name, item.index) for item in items] == [("Open", 0), ("Completed", 1)]
        assert items[0].color == "#bf8700"

    def test_legend_index_counts_empty_items(self, detector):
        markup = (
            '<svg class="highcharts-root">'
            '<g class="highcharts-legend-item"></g>'
            '<g class="highcharts-legend-item"><text>Completed</text>'
            '<path stroke="#123456"/></g>'
            "</svg>"
        )
        items = detector.legend_items(root_of(markup))
        assert len(items) == 1
        assert items[0].index == 1
        assert items[0].color == "#123456"

    def test_series_paths_prefer_graph(self, detector, burnup_svg):
        paths = detector.series_paths(root_of(burnup_svg))
        assert len(paths) == 2
        assert paths[0].d == "M 50 100 L 100 90 L 150 80 L 200 70"
        assert paths[0].color == "#bf8700"

    def test_series_paths_fall_back_to_area(self, detector):
        markup = (
            '<svg class="highcharts-root"><g class="highcharts-series-group">'
            '<g class="highcharts-series"><path class="highcharts-area" fill="#abc" d="M 1 2"/></g>'
            "</g></svg>"
        )
        paths = detector.series_paths(root_of(markup))
        assert len(paths) == 1
        assert paths[0].color == "#abc"
        assert paths[0].d == "M 1 2"

    def test_series_without_paths_are_skipped(self, detector):
        markup = (
            '<svg class="highcharts-root"><g class="highcharts-series-group">'
            '<g class="highcharts-series"></g>'
            '<g class="highcharts-series"><path class="highcharts-graph" d="M 1 2"/></g>'
            "</g></svg>"
        )
        paths = detector.series_paths(root_of(markup))
        assert len(paths) == 1
        assert paths[0].index == 1

    def test_point_markers(self, detector, burnup_svg):
        markers = detector.point_markers(root_of(burnup_svg))
        assert len(markers) == 5
        assert markers[0].annotation == "Jan 11, 40. Open."
        assert markers[-1].annotation == "Jan 25, 40. Completed."

    def test_column_only_markers(self, detector, velocity_svg):
        markers = detector.point_markers(root_of(velocity_svg), column_only=True)
        assert len(markers) == 5
        assert markers[0].annotation == "Iteration 1, 8. Team A."
        assert markers[0].d.endswith("Z")


# ==================== TestDetectorConfig ====================

class TestDetectorConfig:
    """Test configuration helpers."""

    def test_role_for_text(self):
        config = ChartDetectorConfig()
        assert config.role_for_text("Completed").value == "completed"
        assert config.role_for_text("完了").value == "completed"
        assert config.role_for_text("OPEN").value == "open"
        assert config.role_for_text("オープン").value == "open"
        assert config.role_for_text("Scope") is None

    def test_custom_selectors(self):
        config = ChartDetectorConfig(plot_background_selector=".my-plot")
        detector = ChartComponentDetector(config)
        root = root_of(
            '<svg class="highcharts-root"><rect class="my-plot" x="1" y="2" width="3" height="4"/></svg>'
        )
        assert detector.plot_rectangle(root).as_tuple() == (1, 2, 3, 4)
