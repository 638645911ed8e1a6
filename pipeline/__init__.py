"""File ingestion and analysis pipeline behind the dashboard."""

from .assembler import detect_file_type, process_bytes, process_file
from .config import DashboardSettings, load_settings
from .errors import DashboardError, ParseError, ReadError, UnsupportedFormat
from .export import export_filename, table_to_csv
from .models import DashboardBundle, InsightEntry, RawTable
from .parsers import NaiveDelimitedParser, PandasDelimitedParser, WorkbookParser

__all__ = [
    "detect_file_type",
    "process_bytes",
    "process_file",
    "DashboardSettings",
    "load_settings",
    "DashboardError",
    "ParseError",
    "ReadError",
    "UnsupportedFormat",
    "export_filename",
    "table_to_csv",
    "DashboardBundle",
    "InsightEntry",
    "RawTable",
    "NaiveDelimitedParser",
    "PandasDelimitedParser",
    "WorkbookParser",
]
