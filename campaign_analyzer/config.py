"""Global configuration constants for the project.

Defines paths, column contracts, labels and AI defaults used across the
ingestion, aggregation, insight and dashboard layers.
"""

from __future__ import annotations

from pathlib import Path

# Project directories
PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
PACKAGE_DIR: Path = PROJECT_ROOT / "campaign_analyzer"
LOG_DIR: Path = PROJECT_ROOT / "logs"
DEFAULT_EXPORT_DIR: Path = PROJECT_ROOT / "output"

# Logging
LOG_FILENAME: str = "campaign_analyzer.log"
LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# CSV contract
ICP_COLUMN: str = "Company ICP Priority for Contacts"
LIFECYCLE_COLUMN: str = "Lifecycle Stage"
JOB_TITLE_COLUMN: str = "Job Title"
DEPARTMENT_COLUMN: str = "Department"
AD_GROUP_COLUMN: str = "Ad Group Name"
AD_CAMPAIGN_COLUMN: str = "Ad Campaign Name"

REQUIRED_COLUMNS: tuple[str, ...] = (
    AD_GROUP_COLUMN,
    AD_CAMPAIGN_COLUMN,
    ICP_COLUMN,
    LIFECYCLE_COLUMN,
    JOB_TITLE_COLUMN,
    DEPARTMENT_COLUMN,
)
UPLOAD_FILE_ENCODING: str = "utf-8-sig"
ALLOWED_UPLOAD_EXTENSIONS: tuple[str, ...] = (".csv",)

# Table labels
TOTAL_CONTACTS_LABEL: str = "Total Contacts"
NO_BREAKDOWN_TEXT: str = "No breakdown"
NO_DATA_TEXT: str = "No data for selected criteria."

# Human-readable drill-down labels shown in menus
DRILL_DOWN_LABELS: dict[str, str] = {
    "none": "None",
    "icp": "Company ICP Priority",
    "lifecycle": "Lifecycle Stage",
    "job_title": "Job Title",
    "department": "Department",
    "combined": "ICP & Lifecycle Combined",
}

# Error messages surfaced to the presentation layer
EMPTY_OR_INVALID_MESSAGE: str = "CSV file is empty or invalid."
MISSING_COLUMNS_MESSAGE: str = "CSV is missing columns: {columns}"
FILE_READ_FAILED_MESSAGE: str = "Failed to read the file."

# Gemini defaults
DEFAULT_GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GEMINI_MODEL: str = "gemini-2.0-flash"
DEFAULT_MAX_RETRIES: int = 2
DEFAULT_BACKOFF_FACTOR: float = 2.0
DEFAULT_RETRY_SLEEP_ON_429: int = 30
DEFAULT_REQUEST_TIMEOUT: int = 60
DEFAULT_TARGET_RPM: int = 15

INSIGHT_PROMPT_TEMPLATE: str = """You are a marketing campaign analyst. Based on the following data summary, provide actionable insights.
The data is grouped by "{dimension}" and drilled down by "{drill_down}". The available data points for drill down include 'Company ICP Priority for Contacts', 'Lifecycle Stage', 'Job Title', and 'Department'.

Data:
{data_summary}

Please analyze this data and identify:
1. Top-performing groups based on total contacts and their composition (e.g., Company ICP Priority, Lifecycle Stage, Job Title, Department).
2. Any underperforming groups or areas that might need attention.
3. Interesting or surprising trends in the data, considering all available dimensions.
4. Provide 2-3 specific, actionable recommendations for optimizing future campaigns based on these findings.

Present the insights in a clear, easy-to-read format."""
