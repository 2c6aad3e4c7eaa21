"""
Tests for host chart configuration checks.
"""
import sys
from datetime import datetime
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from insights_plus.forecast.config_validator import (
    CONFIG_ERROR_PERIOD,
    CONFIG_ERROR_XAXIS,
    validate_period,
    validate_x_axis,
)
from insights_plus.forecast.date_utils import to_timestamp_ms


# ==================== TestXAxis ====================

class TestXAxis:

    def test_time_axis(self, burnup_page):
        assert validate_x_axis(burnup_page) is None

    def test_missing_date_picker(self, burnup_svg):
        error = validate_x_axis(burnup_svg)
        assert error.type == CONFIG_ERROR_XAXIS
        assert "Time" in error.message
        assert error.to_dict()["type"] == "xaxis"


# ==================== TestPeriod ====================

class TestPeriod:

    def test_future_end(self, now):
        assert validate_period(to_timestamp_ms(datetime(2026, 1, 31)), now) is None

    def test_tomorrow_is_enough(self, now):
        assert validate_period(to_timestamp_ms(datetime(2026, 1, 21)), now) is None

    def test_ending_today(self, now):
        error = validate_period(to_timestamp_ms(datetime(2026, 1, 20, 23, 0)), now)
        assert error.type == CONFIG_ERROR_PERIOD

    def test_past_end(self, now):
        assert validate_period(to_timestamp_ms(datetime(2025, 12, 31)), now).type == "period"
