"""
Bounded polling for chart markup that is still rendering.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Callable, Optional

from insights_plus.config import DEFAULT_LAYOUT
from insights_plus.extraction.chart_extractor import ChartExtractor
from insights_plus.models import ChartResult
from insights_plus.preprocessing.detector_config import ChartDetectionError
from insights_plus.preprocessing.markup_utils import MarkupSource

logger = logging.getLogger(__name__)


def _has_series_content(extractor: ChartExtractor, markup: Optional[MarkupSource]) -> bool:
    if markup is None:
        return False
    try:
        tree = extractor.loader.parse(markup)
    except ChartDetectionError:
        return False
    return extractor.detector.has_series_content(extractor.loader.find_chart_root(tree))


def poll_for_chart(
    fetch_markup: Callable[[], Optional[MarkupSource]],
    extractor: Optional[ChartExtractor] = None,
    max_attempts: int = DEFAULT_LAYOUT.POLL_MAX_ATTEMPTS,
    interval: float = DEFAULT_LAYOUT.POLL_INTERVAL,
    sleep: Callable[[float], None] = time.sleep,
    now: Optional[datetime] = None,
    page_text: Optional[str] = None,
) -> Optional[ChartResult]:
    """
    Wait for series content to render, then extract once.

    ``fetch_markup`` is called once per attempt. As soon as the chart root
    holds series containers or column points the markup is extracted. After
    ``max_attempts`` the last observed markup is extracted anyway.

    Args:
        fetch_markup: Returns the current page markup, or None
        extractor: ChartExtractor to use
        max_attempts: Number of observations before giving up on waiting
        interval: Seconds between observations
        sleep: Sleep function (replaced in tests)
        now: Reference moment passed to extraction
        page_text: Visible page text passed to extraction

    Returns:
        Extraction result, or None
    """
    extractor = extractor or ChartExtractor()
    markup = None

    for attempt in range(1, max_attempts + 1):
        markup = fetch_markup()
        if _has_series_content(extractor, markup):
            logger.debug(f"Chart content ready after {attempt} attempt(s)")
            break
        if attempt < max_attempts:
            sleep(interval)
    else:
        logger.warning(f"Chart content not ready after {max_attempts} attempts, extracting anyway")

    if markup is None:
        return None
    return extractor.extract(markup, now=now, page_text=page_text)


def wait_for_container(
    is_present: Callable[[], bool],
    timeout: float = DEFAULT_LAYOUT.PAGE_WAIT_TIMEOUT,
    interval: float = DEFAULT_LAYOUT.POLL_INTERVAL,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """
    Wait until the chart container exists.

    Returns:
        True once ``is_present()`` holds, False when ``timeout`` seconds pass first
    """
    started = clock()
    while True:
        if is_present():
            return True
        if clock() - started >= timeout:
            logger.warning(f"Chart container not found after {timeout}s")
            return False
        sleep(interval)
