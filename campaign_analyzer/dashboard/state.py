"""Dashboard view state as immutable snapshots.

:class:`ViewState` holds the active record set, the primary dimension, the
drill-down mode and the single expanded cell. Every operation returns a new
snapshot; the aggregate table is recomputed from ``(records, dimension,
drill_down)`` on each access and never cached.

:class:`ViewStateController` is the mutable holder used by the interactive
dashboard: it assigns each new snapshot to ``state`` and tells the insight
service to drop responses for superseded views.

Examples
--------
>>> state = ViewState().toggle_cell("G1", "High")
>>> state.expanded_cell
ExpandedCell(primary_value='G1', breakdown_key='High')
>>> state.toggle_cell("G1", "High").expanded_cell is None
True
>>> state.set_drill_down("combined").expanded_cell is None
True
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import NamedTuple

from campaign_analyzer.pipeline.aggregation import (
    DEFAULT_DIMENSION,
    DEFAULT_DRILL_DOWN,
    AggregateTable,
    DrillDown,
    aggregate,
)

logger = logging.getLogger(__name__)


class ExpandedCell(NamedTuple):
    primary_value: str
    breakdown_key: str


@dataclass(frozen=True)
class ViewState:
    """One immutable snapshot of the dashboard view.

    Attributes
    ----------
    records : tuple[dict[str, str], ...]
        Active record set (empty before the first upload or after reset).
    source_name : str
        Name of the uploaded file.
    dimension : str
        Primary grouping column.
    drill_down : DrillDown
        Secondary breakdown mode.
    expanded_cell : ExpandedCell | None
        The row/column pair whose nested breakdown is shown.
    """

    records: tuple[dict[str, str], ...] = ()
    source_name: str = ""
    dimension: str = DEFAULT_DIMENSION
    drill_down: DrillDown = DEFAULT_DRILL_DOWN
    expanded_cell: ExpandedCell | None = None

    @property
    def has_data(self) -> bool:
        return bool(self.records)

    @property
    def table(self) -> AggregateTable:
        """Aggregate of the current records, dimension and drill-down."""
        return aggregate(self.records, self.dimension, self.drill_down)

    def set_dimension(self, dimension: str) -> ViewState:
        """Replace the primary dimension; the expanded cell is kept."""
        return replace(self, dimension=str(getattr(dimension, "value", dimension)))

    def set_drill_down(self, drill_down: DrillDown | str) -> ViewState:
        """Replace the drill-down mode and always clear the expanded cell."""
        return replace(self, drill_down=DrillDown(drill_down), expanded_cell=None)

    def toggle_cell(self, primary_value: str, breakdown_key: str) -> ViewState:
        """Collapse the cell if it is the expanded one, otherwise expand it."""
        cell = ExpandedCell(primary_value, breakdown_key)
        if self.expanded_cell == cell:
            return replace(self, expanded_cell=None)
        return replace(self, expanded_cell=cell)

    def load_records(
        self, records: Iterable[Mapping[str, str]], source_name: str = ""
    ) -> ViewState:
        """Replace the record set wholesale and reset the view to defaults."""
        return ViewState(
            records=tuple(dict(record) for record in records), source_name=source_name
        )

    def reset(self) -> ViewState:
        """Clear the record set and reset the view to defaults."""
        return ViewState()

    def expanded_distribution(self) -> dict[str, int] | None:
        """Lifecycle distribution of the expanded cell in combined mode."""
        if self.drill_down is not DrillDown.COMBINED or self.expanded_cell is None:
            return None
        row = self.table.row_for(self.expanded_cell.primary_value)
        if row is None:
            return None
        return row.lifecycle_for(self.expanded_cell.breakdown_key)


class ViewStateController:
    """Mutable holder that serializes view operations for the dashboard.

    Parameters
    ----------
    on_change : Callable[[], None] | None, optional
        Called after operations that change the aggregate view (load, reset,
        dimension, drill-down), typically ``InsightService.invalidate``.
    """

    def __init__(self, on_change: Callable[[], None] | None = None) -> None:
        self.state = ViewState()
        self._on_change = on_change

    def _apply(self, new_state: ViewState, *, view_changed: bool) -> ViewState:
        logger.debug(
            "View state: dimension=%s drill_down=%s expanded=%s records=%d",
            new_state.dimension,
            new_state.drill_down.value,
            new_state.expanded_cell,
            len(new_state.records),
        )
        self.state = new_state
        if view_changed and self._on_change is not None:
            self._on_change()
        return new_state

    @property
    def table(self) -> AggregateTable:
        return self.state.table

    def set_dimension(self, dimension: str) -> ViewState:
        return self._apply(self.state.set_dimension(dimension), view_changed=True)

    def set_drill_down(self, drill_down: DrillDown | str) -> ViewState:
        return self._apply(self.state.set_drill_down(drill_down), view_changed=True)

    def toggle_cell(self, primary_value: str, breakdown_key: str) -> ViewState:
        return self._apply(
            self.state.toggle_cell(primary_value, breakdown_key), view_changed=False
        )

    def load_records(
        self, records: Iterable[Mapping[str, str]], source_name: str = ""
    ) -> ViewState:
        return self._apply(
            self.state.load_records(records, source_name), view_changed=True
        )

    def reset(self) -> ViewState:
        return self._apply(self.state.reset(), view_changed=True)
