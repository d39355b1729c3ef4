"""Command-line entrypoint for the campaign analyzer.

Loads a contact export, applies the requested dimension, drill-down and
expanded cell, prints the summary table, and optionally requests AI insights
or exports the table. ``--interactive`` hands over to the questionary
dashboard instead.

Exit codes
----------
0
    Success.
1
    The upload was rejected (unreadable, empty, or missing columns).
2
    Insight generation or export failed.

Examples
--------
>>> # In shell
>>> campaign-analyzer contacts.csv --drill-down combined --expand "Spring Promo=High"
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
from pathlib import Path

from rich.console import Console

from campaign_analyzer.config import DRILL_DOWN_LABELS
from campaign_analyzer.dashboard.app import DashboardApp
from campaign_analyzer.dashboard.renderer import render_dashboard, render_error, render_insights
from campaign_analyzer.dashboard.state import ViewStateController
from campaign_analyzer.exceptions import ConfigurationError, ExportError
from campaign_analyzer.logging_setup import configure_logging, file_logging_disabled
from campaign_analyzer.pipeline.aggregation import Dimension, export_table_csv
from campaign_analyzer.pipeline.ingestion import load_contacts_file
from campaign_analyzer.pipeline.insights import GeminiConfig, InsightService

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UPLOAD_FAILED = 1
EXIT_ACTION_FAILED = 2


def parse_expand(value: str) -> tuple[str, str]:
    """Parse ``PRIMARY=KEY`` into a tuple for ``--expand``.

    The split is on the last ``=``, so the primary value may contain ``=``
    but the breakdown key may not.
    """
    primary, sep, key = value.rpartition("=")
    if not sep or not primary or not key:
        raise argparse.ArgumentTypeError("expected PRIMARY=KEY")
    return primary, key


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="campaign-analyzer",
        description="Summarize a marketing-contact CSV export by ad group or campaign.",
    )
    parser.add_argument("csv_file", nargs="?", type=Path, default=None)
    parser.add_argument(
        "--dimension",
        choices=[dimension.value for dimension in Dimension],
        default=Dimension.AD_GROUP.value,
    )
    parser.add_argument(
        "--drill-down", choices=list(DRILL_DOWN_LABELS), default="none"
    )
    parser.add_argument(
        "--expand",
        type=parse_expand,
        default=None,
        metavar="PRIMARY=KEY",
        help=(
            "Expand one combined-mode cell. Split on the last '=': the primary "
            "value may contain '=', the ICP key may not."
        ),
    )
    parser.add_argument("--insights", action="store_true", help="Request AI insights")
    parser.add_argument("--export", type=Path, default=None, metavar="PATH")
    parser.add_argument("-i", "--interactive", action="store_true")
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "WARNING")
    )
    args = parser.parse_args(argv)
    if args.csv_file is None and not args.interactive:
        parser.error("csv_file is required unless --interactive is given")
    return args


def request_insights(console: Console, controller: ViewStateController) -> bool:
    try:
        service = InsightService(GeminiConfig())
    except ConfigurationError as err:
        console.print(render_error(err.message))
        return False
    result = asyncio.run(service.request_insights(controller.table))
    if not result.ok:
        console.print(render_error(result.error.message))
        return False
    console.print(render_insights(result.text))
    return True


def main(argv: list[str] | None = None, console: Console | None = None) -> int:
    """Run the CLI and return its exit code."""
    args = parse_arguments(argv)
    configure_logging(args.log_level, enable_file=not file_logging_disabled())
    console = console or Console()

    if args.interactive:
        DashboardApp(console=console).run(args.csv_file)
        return EXIT_OK

    upload = load_contacts_file(args.csv_file)
    if not upload.ok:
        console.print(render_error(upload.message))
        return EXIT_UPLOAD_FAILED

    controller = ViewStateController()
    controller.load_records(upload.records, upload.source_name)
    controller.set_dimension(args.dimension)
    controller.set_drill_down(args.drill_down)
    if args.expand is not None:
        controller.toggle_cell(*args.expand)
    console.print(render_dashboard(controller.state))

    exit_code = EXIT_OK
    if args.insights and not request_insights(console, controller):
        exit_code = EXIT_ACTION_FAILED
    if args.export is not None:
        try:
            written = export_table_csv(controller.table, args.export)
            console.print(f"Saved table to {written}")
        except ExportError as err:
            console.print(render_error(err.message))
            exit_code = EXIT_ACTION_FAILED
    return exit_code


def entry_point() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    entry_point()
