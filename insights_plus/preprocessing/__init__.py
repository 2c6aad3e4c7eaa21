"""Preprocessing package for insights-plus.

This package contains markup loading, chart component detection and the
point validation pipeline.
"""

__all__ = [
    "markup_utils",
    "chart_detector",
    "detector_config",
    "point_validators",
]
