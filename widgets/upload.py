"""Upload widget with size validation and the optional column allow-list."""

from __future__ import annotations

import logging
from typing import List, Optional

import streamlit as st

from pipeline import DashboardError, DashboardSettings
from pipeline.assembler import available_columns
from pipeline.parsers import format_megabytes

logger = logging.getLogger(__name__)

ACCEPTED_TYPES = ["csv", "xlsx", "xls", "pdf"]


def validate_upload_size(size: int, settings: DashboardSettings) -> Optional[str]:
    """Return an error message when ``size`` exceeds the configured limit."""

    if size > settings.max_upload_bytes:
        return f"Arquivo muito grande. Tamanho máximo: {settings.max_upload_mb:g}MB"
    return None


def render_uploader(settings: DashboardSettings, disabled: bool = False):
    """Render the file picker; returns the uploaded file or ``None``."""

    uploaded = st.file_uploader(
        "Selecione um arquivo",
        type=ACCEPTED_TYPES,
        disabled=disabled,
        help=f"Excel, CSV ou PDF. Máximo: {settings.max_upload_mb:g}MB",
    )
    if uploaded is None:
        return None
    message = validate_upload_size(uploaded.size, settings)
    if message:
        st.error(message)
        return None
    st.caption(f"{uploaded.name} · {format_megabytes(uploaded.size)}")
    return uploaded


def render_column_form(uploaded) -> Optional[List[str]]:
    """Let the user restrict the columns; returns the selection on submit.

    An empty list means "all columns".  ``None`` means the form was not
    submitted yet.
    """

    try:
        columns = available_columns(uploaded)
    except DashboardError as exc:
        # the full run reports the same error
        logger.info("Column preview failed for %s: %s", uploaded.name, exc)
        columns = []

    with st.form("column_selection"):
        selected: List[str] = []
        if columns:
            st.markdown("### Colunas")
            st.caption("Deixe vazio para analisar todas as colunas.")
            selected = st.multiselect("Colunas a importar", options=columns, default=[])
        submitted = st.form_submit_button("Processar arquivo")
    if not submitted:
        return None
    return list(selected)
