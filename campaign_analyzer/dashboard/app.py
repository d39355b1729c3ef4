"""Interactive terminal dashboard.

The loop mirrors the browser dashboard: choose the primary dimension, choose
a drill-down, expand a combined-mode cell, generate AI insights, export the
table, or upload a new file. All state changes go through
:class:`~campaign_analyzer.dashboard.state.ViewStateController`; rendering is
delegated to :mod:`campaign_analyzer.dashboard.renderer`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from rich.console import Console

from campaign_analyzer.config import DEFAULT_EXPORT_DIR, DRILL_DOWN_LABELS
from campaign_analyzer.exceptions import ConfigurationError, ExportError
from campaign_analyzer.pipeline.aggregation import Dimension, DrillDown, export_table_csv
from campaign_analyzer.pipeline.ingestion import UploadResult, load_contacts_file
from campaign_analyzer.pipeline.insights import GeminiConfig, InsightService

from . import prompts
from .renderer import render_dashboard, render_error, render_insights
from .state import ViewStateController

logger = logging.getLogger(__name__)

ACTION_DIMENSION = "Measure by"
ACTION_DRILL_DOWN = "Drill down by"
ACTION_EXPAND = "Expand cell"
ACTION_INSIGHTS = "Generate insights"
ACTION_EXPORT = "Export table"
ACTION_UPLOAD = "Upload new file"
ACTION_QUIT = "Quit"

_LABEL_TO_DRILL_DOWN = {label: key for key, label in DRILL_DOWN_LABELS.items()}


class DashboardApp:
    """Questionary-driven dashboard over a single active record set.

    Parameters
    ----------
    console : Console | None, optional
        Rich console used for output.
    insight_service : InsightService | None, optional
        Service used for AI insights. Built lazily from ``GeminiConfig`` on
        first use when omitted.
    """

    def __init__(
        self,
        console: Console | None = None,
        insight_service: InsightService | None = None,
    ) -> None:
        self.console = console or Console()
        self._insight_service = insight_service
        self.controller = ViewStateController(on_change=self._invalidate_insights)

    def _invalidate_insights(self) -> None:
        if self._insight_service is not None:
            self._insight_service.invalidate()

    @property
    def insight_service(self) -> InsightService:
        if self._insight_service is None:
            self._insight_service = InsightService(GeminiConfig())
        return self._insight_service

    def upload(self, path: Path) -> UploadResult:
        """Load ``path``; on failure the previous record set stays active."""
        result = load_contacts_file(path)
        if result.ok:
            self.controller.load_records(result.records, result.source_name)
        else:
            self.console.print(render_error(result.message))
        return result

    def actions(self) -> list[str]:
        items = [ACTION_DIMENSION, ACTION_DRILL_DOWN]
        if self.controller.state.drill_down is DrillDown.COMBINED:
            items.append(ACTION_EXPAND)
        items.extend([ACTION_INSIGHTS, ACTION_EXPORT, ACTION_UPLOAD, ACTION_QUIT])
        return items

    def choose_dimension(self) -> None:
        choices = [dimension.value for dimension in Dimension]
        current = self.controller.state.dimension
        self.controller.set_dimension(prompts.ask_select(ACTION_DIMENSION, choices, current))

    def choose_drill_down(self) -> None:
        choices = list(_LABEL_TO_DRILL_DOWN)
        current = self.controller.state.drill_down.label
        label = prompts.ask_select(ACTION_DRILL_DOWN, choices, current)
        self.controller.set_drill_down(_LABEL_TO_DRILL_DOWN[label])

    def choose_cell(self) -> None:
        """Toggle one non-empty (row, ICP) cell of the combined table."""
        table = self.controller.table
        options = {
            f"{row.primary_value} / {key}": (row.primary_value, key)
            for row in table.rows
            for key in table.dynamic_headers
            if row.count_for(key) > 0
        }
        if not options:
            self.console.print(render_error("No cells to expand."))
            return
        choice = prompts.ask_select(ACTION_EXPAND, list(options))
        self.controller.toggle_cell(*options[choice])

    def generate_insights(self) -> bool:
        """Request and display insights for the current view."""
        try:
            service = self.insight_service
        except ConfigurationError as err:
            self.console.print(render_error(err.message))
            return False
        with self.console.status("Generating insights..."):
            result = asyncio.run(service.request_insights(self.controller.table))
        if not service.is_current(result):
            logger.info("Discarding stale insight result #%d", result.request_id)
            return False
        if not result.ok:
            self.console.print(render_error(result.error.message))
            return False
        self.console.print(render_insights(result.text))
        return True

    def export(self) -> None:
        default = str(DEFAULT_EXPORT_DIR / "campaign_summary.csv")
        target = Path(prompts.ask_text("Export to", default))
        try:
            written = export_table_csv(self.controller.table, target)
        except ExportError as err:
            self.console.print(render_error(err.message))
            return
        self.console.print(f"Saved table to {written}")

    def run(self, initial_file: Path | None = None) -> None:
        """Run the loop until the user quits."""
        if initial_file is not None:
            self.upload(initial_file)
        while True:
            if not self.controller.state.has_data:
                path = prompts.ask_path("CSV file to analyze (empty to quit)")
                if not path:
                    return
                self.upload(Path(path))
                continue

            self.console.print(render_dashboard(self.controller.state))
            action = prompts.ask_select("Action", self.actions(), ACTION_QUIT)
            if action == ACTION_QUIT:
                return
            if action == ACTION_DIMENSION:
                self.choose_dimension()
            elif action == ACTION_DRILL_DOWN:
                self.choose_drill_down()
            elif action == ACTION_EXPAND:
                self.choose_cell()
            elif action == ACTION_INSIGHTS:
                self.generate_insights()
            elif action == ACTION_EXPORT:
                self.export()
            elif action == ACTION_UPLOAD:
                self.controller.reset()
