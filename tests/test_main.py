"""
Tests for the command line entry point.
"""
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from main import chart_config_errors, main
from insights_plus.extraction.chart_extractor import extract_chart


# ==================== TestMain ====================

class TestMain:

    def test_burnup_to_stdout(self, temp_markup_file, capsys):
        assert main([str(temp_markup_file), "--due-date", "2030-01-01"]) == 0
        output = json.loads(capsys.readouterr().out)

        assert output["chart"]["kind"] == "burnup"
        assert len(output["chart"]["completed_series"]) == 4
        assert output["settings"]["targetDate"] == "2030-01-01"
        assert output["forecast"]["prediction"]["due_date"] == "2030-01-01T00:00:00"

    def test_velocity_to_file(self, tmp_path, velocity_svg):
        markup = tmp_path / "velocity.html"
        markup.write_text(velocity_svg, encoding="utf-8")
        out = tmp_path / "result.json"

        assert main([str(markup), "-o", str(out), "--select", "Iteration 1"]) == 0
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["chart"]["kind"] == "velocity"
        assert data["forecast"]["average"] == 8

    def test_invalid_lookback_uses_default(self, temp_markup_file, capsys):
        assert main([str(temp_markup_file), "--lookback-days", "900"]) == 0
        assert json.loads(capsys.readouterr().out)["settings"]["lookbackDays"] == 21

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.svg")]) == 1
        assert "not found" in capsys.readouterr().err

    def test_unsupported_format(self, tmp_path, capsys):
        path = tmp_path / "chart.png"
        path.write_bytes(b"\x89PNG")
        assert main([str(path)]) == 1
        assert "Unsupported" in capsys.readouterr().err

    def test_no_chart(self, tmp_path, capsys):
        path = tmp_path / "page.html"
        path.write_text("<html><body>No charts</body></html>", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "No burnup or velocity chart" in capsys.readouterr().err

    def test_empty_markup(self, tmp_path, capsys):
        path = tmp_path / "empty.svg"
        path.write_text("", encoding="utf-8")
        assert main([str(path)]) == 1
        assert "Markup is empty" in capsys.readouterr().err

    def test_burnup_warnings(self, temp_markup_file, capsys):
        # bare chart markup carries no date picker
        assert main([str(temp_markup_file)]) == 0
        warnings = json.loads(capsys.readouterr().out)["warnings"]
        assert "xaxis" in [w["type"] for w in warnings]
        assert all(set(w) == {"type", "message"} for w in warnings)

    def test_velocity_has_no_warnings(self, tmp_path, velocity_svg, capsys):
        markup = tmp_path / "velocity.svg"
        markup.write_text(velocity_svg, encoding="utf-8")
        assert main([str(markup)]) == 0
        assert json.loads(capsys.readouterr().out)["warnings"] == []


# ==================== TestChartConfigErrors ====================

class TestChartConfigErrors:

    def test_date_picker_satisfies_x_axis(self, burnup_page, now):
        result = extract_chart(burnup_page, now=now)
        types = [error.type for error in chart_config_errors(burnup_page, result)]
        assert "xaxis" not in types

    def test_velocity_not_checked(self, velocity_svg):
        assert chart_config_errors(velocity_svg, extract_chart(velocity_svg)) == []
