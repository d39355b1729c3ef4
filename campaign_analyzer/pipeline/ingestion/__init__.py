"""CSV ingestion: parsing, required-column validation and the upload gate."""

from .csv_parser import parse_csv, split_header, tokenize_line
from .loader import UploadResult, load_contacts_file, load_contacts_text, read_upload_file
from .validator import find_missing_columns, validate_records

__all__ = [
    "UploadResult",
    "find_missing_columns",
    "load_contacts_file",
    "load_contacts_text",
    "parse_csv",
    "read_upload_file",
    "split_header",
    "tokenize_line",
    "validate_records",
]
