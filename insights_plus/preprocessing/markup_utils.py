"""Markup loading utilities for insights-plus.

This module provides :class:`MarkupLoader` for turning a saved page or a
bare SVG fragment into a parse tree, plus the small numeric readers used
on attribute and label text.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from .detector_config import ChartDetectorConfig, InvalidMarkupError

_LEADING_NUMBER_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

MarkupSource = Union[str, bytes, BeautifulSoup, Tag]


def parse_leading_float(text: Optional[str]) -> Optional[float]:
    """Read the numeric prefix of ``text`` (``"100px"`` -> 100.0).

    Returns ``None`` when the text does not start with a number.
    """
    if text is None:
        return None
    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return None
    return float(match.group(1))


def parse_tick_value(text: Optional[str]) -> Optional[float]:
    """Parse an axis tick label such as ``"1,000"``."""
    if text is None:
        return None
    return parse_leading_float(text.strip().replace(",", ""))


def attr_float(tag: Tag, name: str, default: float = 0.0) -> float:
    """Numeric attribute value, ``default`` when absent or unparsable."""
    value = parse_leading_float(tag.get(name))
    return default if value is None else value


def element_text(tag: Tag) -> str:
    """Concatenated descendant text, trimmed."""
    return tag.get_text().strip()


class MarkupLoader:
    """Load chart markup and locate the chart root element.

    The parser is configurable to allow swapping ``html.parser`` for
    another BeautifulSoup builder.
    """

    def __init__(self, config: Optional[ChartDetectorConfig] = None, parser: str = "html.parser"):
        self.config = config or ChartDetectorConfig()
        self.parser = parser

    def parse(self, markup: MarkupSource) -> Union[BeautifulSoup, Tag]:
        """Parse markup text; already-parsed trees are returned unchanged.

        Raises
        ------
        InvalidMarkupError
            If the markup is empty.
        """
        if isinstance(markup, Tag):
            return markup
        if not markup or not str(markup).strip():
            raise InvalidMarkupError("Markup is empty")
        return BeautifulSoup(markup, self.parser)

    def load_file(self, markup_path: Union[str, Path]) -> BeautifulSoup:
        """Load a saved page or SVG file from disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist or cannot be read.
        """
        path = Path(markup_path)
        if not path.exists():
            raise FileNotFoundError(f"Markup not found: {markup_path}")
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileNotFoundError(f"Failed to read markup '{markup_path}': {exc}") from exc
        return self.parse(text)

    def find_chart_root(self, tree: Union[BeautifulSoup, Tag]) -> Optional[Tag]:
        """Return the chart's root ``<svg>`` element, or ``None``."""
        if isinstance(tree, Tag) and tree.name == "svg":
            classes = tree.get("class") or []
            if self.config.root_selector.split(".", 1)[-1] in classes:
                return tree
        return tree.select_one(self.config.root_selector)
