"""Extraction package for insights-plus.

This package contains the path interpreter, coordinate mapping, annotation
grammars, series resolution and the chart extractors.
"""

__all__ = [
    "path_interpreter",
    "domain_mapper",
    "annotations",
    "series_resolver",
    "burnup_extractor",
    "iteration_extractor",
    "chart_extractor",
]
