"""Headless processing layer: ingestion, aggregation and AI insights.

Nothing in this package renders output or prompts the user; the dashboard
layer consumes it.
"""
