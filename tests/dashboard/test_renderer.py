"""Rendering tests using a recording Rich console."""

from rich.console import Console

from campaign_analyzer.dashboard.renderer import (
    render_dashboard,
    render_error,
    render_insights,
    render_table,
)
from campaign_analyzer.dashboard.state import ViewState


def rendered(renderable) -> str:
    console = Console(record=True, width=160, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_empty_state_shows_upload_hint():
    text = rendered(render_dashboard(ViewState()))
    assert "Upload your CSV file to begin." in text
    assert "Company ICP Priority for Contacts" in text


def test_table_without_rows_shows_no_data():
    state = ViewState(records=({"Ad Group Name": ""},))
    text = rendered(render_table(state))
    assert "No data for selected criteria." in text


def test_flat_table_cells_and_dimmed_zeroes(sample_records):
    state = ViewState().load_records(sample_records, "contacts.csv").set_drill_down("department")
    text = rendered(render_table(state))
    assert "Total Contacts" in text
    assert "2 (66.7%)" in text
    assert "1 (50.0%)" in text
    assert "Displaying data from: contacts.csv" in text


def test_dashboard_status_line(sample_records):
    state = ViewState().load_records(sample_records).set_drill_down("icp")
    text = rendered(render_dashboard(state))
    assert "Measure by: Ad Group Name | Drill down by: Company ICP Priority" in text


def test_combined_expanded_cell_shows_lifecycle_panel(sample_records):
    state = (
        ViewState()
        .load_records(sample_records)
        .set_drill_down("combined")
        .toggle_cell("Group B", "High")
    )
    text = rendered(render_table(state))
    assert 'Lifecycle Stage distribution for "High"' in text
    assert "Lead" in text and "MQL" in text


def test_combined_without_expansion_has_no_panel(sample_records):
    state = ViewState().load_records(sample_records).set_drill_down("combined")
    assert "Lifecycle Stage distribution" not in rendered(render_table(state))


def test_insights_and_error_panels():
    assert "Top performer" in rendered(render_insights("**Top performer**: Group B"))
    text = rendered(render_error("CSV file is empty or invalid."))
    assert "Error" in text and "CSV file is empty or invalid." in text
