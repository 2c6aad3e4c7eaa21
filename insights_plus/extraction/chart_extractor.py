"""Top-level chart extraction: load, classify, dispatch."""

from __future__ import annotations

import logging
from datetime import datetime

from insights_plus.extraction.burnup_extractor import BurnupExtractor
from insights_plus.extraction.iteration_extractor import IterationExtractor
from insights_plus.models import ChartKind, ChartResult
from insights_plus.preprocessing.chart_detector import ChartComponentDetector
from insights_plus.preprocessing.detector_config import ChartDetectionError, ChartDetectorConfig
from insights_plus.preprocessing.markup_utils import MarkupLoader, MarkupSource

logger = logging.getLogger(__name__)


class ChartExtractor:
    """Extract a typed result from rendered chart markup.

    Detection errors never escape: structural absence (no chart root, no
    plot area, no series) and unrecognised charts all yield ``None``.
    Extraction reads the markup only, so repeated calls on the same markup
    return equal results.
    """

    def __init__(
        self,
        config: ChartDetectorConfig | None = None,
        loader: MarkupLoader | None = None,
        detector: ChartComponentDetector | None = None,
    ) -> None:
        self.config = config or ChartDetectorConfig()
        self.loader = loader or MarkupLoader(self.config)
        self.detector = detector or ChartComponentDetector(self.config)
        self.burnup = BurnupExtractor(self.detector)
        self.iterations = IterationExtractor(self.detector)

    def extract(
        self,
        markup: MarkupSource,
        now: datetime | None = None,
        page_text: str | None = None,
    ) -> ChartResult | None:
        """Extract a BurnupChart or VelocityChart, or ``None``.

        Parameters
        ----------
        markup:
            Page or SVG markup, or an already parsed tree.
        now:
            Reference moment; defaults to the current time.
        page_text:
            Visible page text used as a date range fallback.
        """
        try:
            tree = self.loader.parse(markup)
            root = self.loader.find_chart_root(tree)
            if root is None:
                logger.warning(f"No chart root matches '{self.config.root_selector}'")
                return None

            kind = self.detector.classify(root)
            logger.debug(f"Chart classified as {kind.value}")

            if kind is ChartKind.BURNUP:
                return self.burnup.extract(root, now=now, page_text=page_text)
            if kind is ChartKind.VELOCITY:
                return self.iterations.extract(root)
            return None
        except ChartDetectionError as e:
            logger.warning(f"Chart extraction aborted: {e}")
            return None


def extract_chart(
    markup: MarkupSource,
    now: datetime | None = None,
    page_text: str | None = None,
) -> ChartResult | None:
    """Extract chart data with the default configuration."""
    return ChartExtractor().extract(markup, now=now, page_text=page_text)
