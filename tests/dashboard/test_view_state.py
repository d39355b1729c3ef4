"""Tests for immutable view state and its controller."""

from campaign_analyzer.dashboard.state import ExpandedCell, ViewState, ViewStateController
from campaign_analyzer.pipeline.aggregation import Dimension, DrillDown


def test_defaults():
    state = ViewState()
    assert state.dimension == "Ad Group Name"
    assert state.drill_down is DrillDown.NONE
    assert state.expanded_cell is None
    assert not state.has_data
    assert state.table.rows == []


def test_toggle_twice_collapses_again():
    state = ViewState()
    expanded = state.toggle_cell("G1", "High")
    assert expanded.expanded_cell == ExpandedCell("G1", "High")
    assert expanded.toggle_cell("G1", "High").expanded_cell is None
    assert state.expanded_cell is None


def test_toggle_other_cell_replaces_expansion():
    state = ViewState().toggle_cell("G1", "High").toggle_cell("G1", "Low")
    assert state.expanded_cell == ExpandedCell("G1", "Low")


def test_set_drill_down_always_clears_expansion():
    state = ViewState().set_drill_down("combined").toggle_cell("G1", "High")
    assert state.set_drill_down(DrillDown.COMBINED).expanded_cell is None
    assert state.set_drill_down("icp").expanded_cell is None


def test_set_dimension_keeps_expansion():
    state = ViewState().toggle_cell("G1", "High").set_dimension(Dimension.AD_CAMPAIGN)
    assert state.dimension == "Ad Campaign Name"
    assert state.expanded_cell == ExpandedCell("G1", "High")


def test_load_and_reset_restore_defaults(sample_records):
    state = (
        ViewState()
        .set_dimension("Ad Campaign Name")
        .set_drill_down("combined")
        .toggle_cell("Spring Promo", "High")
    )
    loaded = state.load_records(sample_records, "contacts.csv")
    assert loaded.has_data and loaded.source_name == "contacts.csv"
    assert loaded.dimension == "Ad Group Name"
    assert loaded.drill_down is DrillDown.NONE
    assert loaded.expanded_cell is None
    assert loaded.reset() == ViewState()


def test_loaded_records_are_copied(sample_records):
    state = ViewState().load_records(sample_records)
    sample_records[0]["Ad Group Name"] = "Mutated"
    assert state.records[0]["Ad Group Name"] == "Group B"


def test_table_is_recomputed_for_each_snapshot(sample_records):
    state = ViewState().load_records(sample_records)
    assert [r.primary_value for r in state.table.rows] == ["Group B", "Group A"]
    by_campaign = state.set_dimension("Ad Campaign Name")
    assert [r.primary_value for r in by_campaign.table.rows] == ["Spring Promo", "Summer Launch"]
    assert state.table.dimension == "Ad Group Name"


def test_expanded_distribution_only_in_combined_mode(sample_records):
    state = ViewState().load_records(sample_records).set_drill_down("combined")
    assert state.expanded_distribution() is None
    expanded = state.toggle_cell("Group B", "High")
    assert expanded.expanded_distribution() == {"Lead": 1, "MQL": 1}
    assert expanded.toggle_cell("Nope", "High").expanded_distribution() is None
    # Expansion survives a dimension change but no longer matches a row.
    assert expanded.set_dimension("Ad Campaign Name").expanded_distribution() is None


def test_controller_assigns_snapshots_and_notifies(sample_records):
    calls = []
    controller = ViewStateController(on_change=lambda: calls.append(1))
    controller.load_records(sample_records, "contacts.csv")
    controller.set_drill_down("combined")
    controller.toggle_cell("Group B", "High")
    assert controller.state.expanded_cell == ExpandedCell("Group B", "High")
    assert len(calls) == 2
    controller.set_dimension("Ad Campaign Name")
    assert controller.table.dimension == "Ad Campaign Name"
    controller.reset()
    assert controller.state == ViewState()
    assert len(calls) == 4
