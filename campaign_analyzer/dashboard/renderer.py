"""Rich renderables for the campaign dashboard.

This module turns a :class:`~campaign_analyzer.dashboard.state.ViewState`
into Rich objects: the summary table (with the expanded lifecycle panel in
combined mode), the AI narrative, and error panels. It performs no I/O;
the caller prints the renderables on a ``rich.console.Console``.

Examples
--------
>>> from rich.console import Console
>>> from campaign_analyzer.dashboard.state import ViewState
>>> console = Console(record=True, width=120)
>>> console.print(render_table(ViewState()))  # doctest: +SKIP
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from campaign_analyzer.config import NO_DATA_TEXT
from campaign_analyzer.pipeline.aggregation import DrillDown, format_cell, format_percentage

from .state import ViewState

TITLE = "Campaign Performance Analyzer"


def render_lifecycle_panel(
    breakdown_key: str, distribution: dict[str, int], bucket_total: int
) -> Panel:
    """Render the lifecycle-stage distribution of one ICP bucket.

    Percentages are relative to the ICP bucket count, not the row total.
    """
    grid = Table.grid(padding=(0, 3))
    for stage, count in distribution.items():
        grid.add_row(
            Text(stage, style="dim"),
            Text(f"{count} ({format_percentage(count, bucket_total)}%)", style="bold"),
        )
    if not distribution:
        grid.add_row(Text("No lifecycle stages recorded.", style="dim"))
    return Panel(
        grid,
        title=f'Lifecycle Stage distribution for "{breakdown_key}"',
        border_style="magenta",
    )


def render_table(state: ViewState) -> Table:
    """Render the aggregate table for ``state``.

    In combined mode the expanded cell is highlighted and, directly under its
    row, a full-width row holds the lifecycle panel.
    """
    table_model = state.table
    caption = f"Displaying data from: {state.source_name}" if state.source_name else None
    table = Table(title=TITLE, caption=caption, show_lines=False, expand=False)
    headers = table_model.headers or [state.dimension, "Total Contacts"]
    for index, header in enumerate(headers):
        table.add_column(header, justify="left" if index == 0 else "right", no_wrap=True)

    if not table_model.rows:
        table.add_row(Text(NO_DATA_TEXT, style="dim"), *[""] * (len(headers) - 1))
        return table

    combined = table_model.drill_down is DrillDown.COMBINED
    expanded = state.expanded_cell
    for row in table_model.rows:
        cells: list[RenderableType] = [
            Text(row.primary_value, style="bold"),
            Text(str(row.total), style="bold"),
        ]
        for header in table_model.dynamic_headers:
            count = row.count_for(header)
            style = "dim" if count == 0 else ""
            if combined and expanded == (row.primary_value, header) and count > 0:
                style = "reverse"
            cells.append(Text(format_cell(count, row.total), style=style))
        table.add_row(*cells)

        if combined and expanded is not None and expanded.primary_value == row.primary_value:
            panel = render_lifecycle_panel(
                expanded.breakdown_key,
                row.lifecycle_for(expanded.breakdown_key),
                row.count_for(expanded.breakdown_key),
            )
            table.add_row(panel, *[""] * (len(headers) - 1))
    return table


def render_insights(text: str) -> Panel:
    """Render the AI narrative as Markdown inside a titled panel."""
    return Panel(Markdown(text), title="AI-Powered Insights", border_style="cyan")


def render_error(message: str) -> Panel:
    return Panel(Text(message, style="red"), title="Error", border_style="red")


def render_dashboard(state: ViewState) -> RenderableType:
    """Render the status line plus table, or the upload hint when empty."""
    if not state.has_data:
        return Panel(
            Text(
                "Upload your CSV file to begin.\nRequired columns: 'Ad Group Name', "
                "'Ad Campaign Name', 'Company ICP Priority for Contacts', "
                "'Lifecycle Stage', 'Job Title', 'Department'."
            ),
            title=TITLE,
        )
    status = Text(
        f"Measure by: {state.dimension} | Drill down by: {state.drill_down.label}",
        style="cyan",
    )
    return Group(status, render_table(state))
