"""Streamlit views rendering a :class:`pipeline.DashboardBundle`."""

from .chart_view import render_charts
from .state import bootstrap_state, reset_dashboard, store_bundle, store_error
from .summary_view import render_summary
from .table_view import render_tables
from .style import apply_dashboard_style
from .upload import render_column_form, render_uploader

__all__ = [
    "render_charts",
    "bootstrap_state",
    "reset_dashboard",
    "store_bundle",
    "store_error",
    "render_summary",
    "render_tables",
    "apply_dashboard_style",
    "render_column_form",
    "render_uploader",
]
