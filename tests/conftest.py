"""
Pytest fixtures for Insights Plus tests.

Provides:
- Markup builders for cumulative (burnup) and column (velocity) charts
- A fixed reference moment so date logic never depends on the clock
- Ready-made domain point series for the forecast tests
"""
import sys
from datetime import datetime
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from insights_plus.models import DomainPoint  # noqa: E402


# ==================== REFERENCE TIME ====================

# Charts below span Jan 1 .. Jan 31 2026; "today" is Jan 20.
NOW = datetime(2026, 1, 20, 12, 0)


@pytest.fixture
def now():
    return NOW


# ==================== MARKUP BUILDERS ====================
#
# Plot area: x=50, y=0, width=300, height=200.
# With x labels "Jan 1" .. "Jan 31" one day is 10px, so day d is at x = 50 + 10*d.
# With y labels 0 .. 100 one unit is 2px, so value v is at y = 200 - 2*v.

PLOT_X, PLOT_Y, PLOT_WIDTH, PLOT_HEIGHT = 50, 0, 300, 200

# Completed: Jan 1 = 0, Jan 6 = 10, Jan 11 = 20, Jan 16 = 30
COMPLETED_D = "M 50 200 L 100 180 L 150 160 L 200 140"
# Open (total scope): Jan 1 = 50, Jan 6 = 55, Jan 11 = 60, Jan 16 = 65
OPEN_D = "M 50 100 L 100 90 L 150 80 L 200 70"

DEFAULT_COMPLETED_LABELS = (
    "Jan 11, 20. Completed.",
    "Jan 16, 30. Completed.",
    "Jan 25, 40. Completed.",
)
DEFAULT_OPEN_LABELS = (
    "Jan 11, 40. Open.",
    "Jan 16, 35. Open.",
)


def _markers(labels):
    return "".join(
        f'<path class="highcharts-point" d="M 0 0" aria-label="{label}"/>' for label in labels
    )


def _series(d, color, markers=(), with_area=True, with_graph=True):
    parts = ['<g class="highcharts-series">']
    if with_area:
        parts.append(f'<path class="highcharts-area" fill="{color}" d="{d} L 200 200 L 50 200 Z"/>')
    if with_graph:
        parts.append(f'<path class="highcharts-graph" stroke="{color}" fill="none" d="{d}"/>')
    parts.append(_markers(markers))
    parts.append("</g>")
    return "".join(parts)


def build_burnup_svg(
    legend=("Open", "Completed"),
    series=None,
    x_labels=("Jan 1", "Jan 31"),
    y_labels=("0", "50", "100"),
    completed_labels=DEFAULT_COMPLETED_LABELS,
    open_labels=DEFAULT_OPEN_LABELS,
    with_background=True,
    with_area=True,
):
    """
    Cumulative chart markup.

    ``series`` is a sequence of ``(d, color, marker_labels)``; by default the
    open series is drawn first and the completed series second, matching
    the default legend order.
    """
    if series is None:
        series = [
            (OPEN_D, "#bf8700", open_labels),
            (COMPLETED_D, "#2da44e", completed_labels),
        ]

    parts = ['<svg class="highcharts-root" xmlns="http://www.w3.org/2000/svg">']
    if with_background:
        parts.append(
            f'<rect class="highcharts-plot-background" x="{PLOT_X}" y="{PLOT_Y}" '
            f'width="{PLOT_WIDTH}" height="{PLOT_HEIGHT}"/>'
        )

    parts.append('<g class="highcharts-xaxis-labels">')
    step = PLOT_WIDTH / max(1, len(x_labels) - 1)
    for i, label in enumerate(x_labels):
        parts.append(f'<text x="{PLOT_X + i * step}" y="230">{label}</text>')
    parts.append("</g>")

    parts.append('<g class="highcharts-yaxis-labels">')
    for i, label in enumerate(y_labels):
        parts.append(f'<text x="40" y="{PLOT_Y + PLOT_HEIGHT - i * 100}">{label}</text>')
    parts.append("</g>")

    parts.append('<g class="highcharts-legend">')
    colors = ["#bf8700", "#2da44e", "#8250df"]
    for i, name in enumerate(legend):
        parts.append(
            f'<g class="highcharts-legend-item"><text>{name}</text>'
            f'<rect fill="{colors[i % len(colors)]}" width="12" height="12"/></g>'
        )
    parts.append("</g>")

    parts.append('<g class="highcharts-series-group">')
    for d, color, labels in series:
        parts.append(_series(d, color, labels, with_area=with_area))
    parts.append("</g>")

    parts.append("</svg>")
    return "".join(parts)


def build_velocity_svg(
    labels=(
        "Iteration 1, 8. Team A.",
        "Iteration 2, 12. Team A.",
        "Iteration 3, 10.",
        "Iteration 4, 14. Team B.",
        "Iteration 5, 6. Team B.",
    ),
    y_labels=("0", "5", "10", "15"),
    with_background=True,
):
    """Column chart markup with one closed column shape per label."""
    parts = ['<svg class="highcharts-root" xmlns="http://www.w3.org/2000/svg">']
    if with_background:
        parts.append(
            f'<rect class="highcharts-plot-background" x="{PLOT_X}" y="{PLOT_Y}" '
            f'width="{PLOT_WIDTH}" height="{PLOT_HEIGHT}"/>'
        )

    parts.append('<g class="highcharts-yaxis-labels">')
    for i, label in enumerate(y_labels):
        parts.append(f'<text x="40" y="{PLOT_Y + PLOT_HEIGHT - i * 50}">{label}</text>')
    parts.append("</g>")

    parts.append('<g class="highcharts-series-group"><g class="highcharts-series">')
    for i, label in enumerate(labels):
        x = PLOT_X + 10 + i * 50
        parts.append(
            f'<path class="highcharts-point" '
            f'd="M {x} 200 L {x} 100 L {x + 30} 100 L {x + 30} 200 Z" '
            f'aria-label="{label}"/>'
        )
    parts.append("</g></g>")

    parts.append("</svg>")
    return "".join(parts)


@pytest.fixture
def burnup_svg():
    return build_burnup_svg()


@pytest.fixture
def burnup_svg_factory():
    return build_burnup_svg


@pytest.fixture
def velocity_svg():
    return build_velocity_svg()


@pytest.fixture
def velocity_svg_factory():
    return build_velocity_svg


@pytest.fixture
def burnup_page(burnup_svg):
    """Full page: date picker, range text and the chart."""
    return (
        "<html><body>"
        '<div class="Insights__DatePickerContainer-abc123">Jan 1 - Jan 31, 2026</div>'
        f'<div class="highcharts-container">{burnup_svg}</div>'
        "</body></html>"
    )


@pytest.fixture
def temp_markup_file(tmp_path, burnup_svg):
    file_path = tmp_path / "chart.svg"
    file_path.write_text(burnup_svg, encoding="utf-8")
    return file_path


# ==================== SERIES FIXTURES ====================

@pytest.fixture
def steady_series():
    """Completed work growing 2 per day from Jan 1 (0) to Jan 20 (38)."""
    return [DomainPoint(datetime(2026, 1, d), 2.0 * (d - 1)) for d in range(1, 21)]


@pytest.fixture
def sparse_series():
    """Two observations long before the reference moment."""
    return [
        DomainPoint(datetime(2026, 1, 5), 10.0),
        DomainPoint(datetime(2026, 1, 10), 20.0),
    ]
