"""
Insights Plus - Chart Data Extraction and Forecasting

Extract data from a saved project chart (HTML page or SVG) and forecast
completion from it.

Usage:
    python main.py <markup_path> [--output output.json] [--lookback-days N]
                   [--due-date YYYY-MM-DD] [--select NAME ...]
                   [--page-text FILE] [--verbose]

Examples:
    python main.py burnup.svg
    python main.py page.html -o result.json --lookback-days 14
    python main.py velocity.svg --select "Iteration 4" "Iteration 5"
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from insights_plus.config import ForecastSettings
from insights_plus.config.settings import (
    LOOKBACK_DAYS_KEY,
    SELECTED_ITERATIONS_KEY,
    TARGET_DATE_KEY,
)
from insights_plus.extraction.chart_extractor import ChartExtractor
from insights_plus.forecast import ConfigError, forecast_for, validate_period, validate_x_axis
from insights_plus.models import BurnupChart, ChartResult
from insights_plus.preprocessing.detector_config import ChartDetectionError
from insights_plus.preprocessing.markup_utils import MarkupLoader, MarkupSource

SUPPORTED_FORMATS = [".svg", ".html", ".htm", ".xml"]


def chart_config_errors(markup: MarkupSource, result: ChartResult) -> List[ConfigError]:
    """Chart settings that make a cumulative forecast unreliable."""
    if not isinstance(result, BurnupChart):
        return []
    errors = [
        validate_x_axis(markup),
        validate_period(result.plot_geometry.axes.x_max),
    ]
    return [error for error in errors if error is not None]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Extract data and forecasts from rendered project charts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py chart.svg                          # Print JSON to stdout
  python main.py chart.svg -o result.json           # Save to file
  python main.py chart.svg --due-date 2026-03-31    # Forecast against a due date
        """
    )
    parser.add_argument(
        "markup",
        type=str,
        help="Path to saved chart markup (SVG, HTML)"
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Output JSON file path (default: print to stdout)"
    )
    parser.add_argument(
        "--lookback-days",
        type=int,
        default=None,
        help="Velocity lookback window in days, 1-365 (default: 21)"
    )
    parser.add_argument(
        "--due-date",
        type=str,
        default=None,
        help="Target date as YYYY-MM-DD (default: chart end)"
    )
    parser.add_argument(
        "--select",
        nargs="+",
        default=None,
        metavar="NAME",
        help="Iteration names to average (default: last 3 iterations)"
    )
    parser.add_argument(
        "--page-text",
        type=str,
        default=None,
        help="Text file with the page's visible text, used to find the date range"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    # Validate input file exists
    markup_path = Path(args.markup)
    if not markup_path.exists():
        print(f"Error: Markup not found: {args.markup}", file=sys.stderr)
        return 1

    if markup_path.suffix.lower() not in SUPPORTED_FORMATS:
        print(
            f"Error: Unsupported markup format: {markup_path.suffix}\n"
            f"Supported formats: {', '.join(SUPPORTED_FORMATS)}",
            file=sys.stderr
        )
        return 1

    page_text = None
    if args.page_text:
        try:
            page_text = Path(args.page_text).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: Failed to read page text: {e}", file=sys.stderr)
            return 1

    settings = ForecastSettings.from_mapping({
        LOOKBACK_DAYS_KEY: args.lookback_days,
        TARGET_DATE_KEY: args.due_date,
        SELECTED_ITERATIONS_KEY: args.select,
    })

    # Extract data from chart
    try:
        tree = MarkupLoader().load_file(markup_path)
        result = ChartExtractor().extract(tree, page_text=page_text)
    except (FileNotFoundError, ChartDetectionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if result is None:
        print("Error: No burnup or velocity chart found", file=sys.stderr)
        return 1

    output = {
        "chart": result.to_dict(),
        "forecast": forecast_for(result, settings).to_dict(),
        "warnings": [error.to_dict() for error in chart_config_errors(tree, result)],
        "settings": settings.to_mapping(),
    }

    # Format output as JSON
    output_json = json.dumps(output, indent=2, ensure_ascii=False)

    # Write to file or stdout
    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(output_json, encoding="utf-8")
            print(f"Result saved to: {args.output}")
        except IOError as e:
            print(f"Error: Failed to write output file: {e}", file=sys.stderr)
            return 1
    else:
        print(output_json)

    return 0


if __name__ == "__main__":
    sys.exit(main())
