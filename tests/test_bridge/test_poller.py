"""
Tests for bounded chart polling.
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from insights_plus.bridge.poller import poll_for_chart, wait_for_container
from insights_plus.models import BurnupChart

EMPTY_CHART = '<svg class="highcharts-root"><rect class="highcharts-plot-background"/></svg>'


# ==================== TestPollForChart ====================

class TestPollForChart:

    def test_ready_immediately(self, burnup_svg, now):
        fetch = Mock(return_value=burnup_svg)
        sleep = Mock()
        result = poll_for_chart(fetch, sleep=sleep, now=now)

        assert isinstance(result, BurnupChart)
        assert fetch.call_count == 1
        sleep.assert_not_called()

    def test_waits_for_series(self, burnup_svg, now):
        fetch = Mock(side_effect=[None, EMPTY_CHART, burnup_svg])
        sleep = Mock()
        result = poll_for_chart(fetch, sleep=sleep, interval=0.25, now=now)

        assert result.total == 65
        assert fetch.call_count == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(0.25)

    def test_gives_up_and_extracts_last_markup(self):
        fetch = Mock(return_value=EMPTY_CHART)
        sleep = Mock()
        result = poll_for_chart(fetch, max_attempts=4, sleep=sleep)

        assert result is None
        assert fetch.call_count == 4
        # no sleep after the final attempt
        assert sleep.call_count == 3

    def test_no_markup_at_all(self):
        fetch = Mock(return_value=None)
        assert poll_for_chart(fetch, max_attempts=2, sleep=Mock()) is None

    def test_unparsable_markup_keeps_polling(self, velocity_svg):
        fetch = Mock(side_effect=["", velocity_svg])
        result = poll_for_chart(fetch, sleep=Mock())
        assert len(result.iterations) == 5

    def test_page_text_forwarded(self, burnup_svg_factory, now):
        markup = burnup_svg_factory(x_labels=())
        result = poll_for_chart(
            Mock(return_value=markup), sleep=Mock(), now=now, page_text="Jan 1 - Jan 31, 2026"
        )
        assert result.date_range is not None


# ==================== TestWaitForContainer ====================

class TestWaitForContainer:

    def test_present(self):
        sleep = Mock()
        assert wait_for_container(lambda: True, sleep=sleep) is True
        sleep.assert_not_called()

    def test_appears_later(self):
        is_present = Mock(side_effect=[False, False, True])
        clock = Mock(side_effect=[0.0, 0.5, 1.0])
        assert wait_for_container(is_present, timeout=30, clock=clock, sleep=Mock()) is True
        assert is_present.call_count == 3

    def test_times_out(self):
        clock = Mock(side_effect=[0.0, 10.0, 20.0, 30.0])
        sleep = Mock()
        assert wait_for_container(lambda: False, timeout=30, clock=clock, sleep=sleep) is False
        assert sleep.call_count == 2
