"""Campaign Analyzer package.

Turns a CSV export of marketing-contact records into an interactive summary
table grouped by ad group or campaign, with optional drill-downs and an
AI-written narrative of the aggregate.

Package Structure
-----------------
- `pipeline/`:
    Headless processing: CSV ingestion and validation, the aggregation
    engine, and the AI insight boundary (prompt, client, service).
- `dashboard/`:
    Immutable view state, Rich rendering and the questionary-driven loop.
- `cli.py`: argparse entrypoint (``campaign-analyzer``).
- `config.py`: Configuration constants, as UPPER_SNAKE_CASE.
- `exceptions.py`: The ``AppError`` taxonomy.

Examples
--------
>>> from campaign_analyzer.pipeline.ingestion import load_contacts_text
>>> from campaign_analyzer.pipeline.aggregation import aggregate
"""

__version__ = "1.0.0"
