"""Dados tab: searchable, paginated tables with CSV download."""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import pandas as pd
import streamlit as st

from pipeline.export import export_filename, table_to_csv
from pipeline.models import Record, TableSection


def filter_records(records: Sequence[Record], columns: Sequence[str], term: str) -> List[Record]:
    """Rows where any column contains ``term`` (case-insensitive)."""

    if not term:
        return list(records)
    needle = term.lower()
    return [
        row
        for row in records
        if any(needle in str(row.get(col, "")).lower() for col in columns)
    ]


def paginate(records: Sequence[Record], page: int, per_page: int) -> Tuple[List[Record], int, int]:
    """Return ``(rows, page, total_pages)`` with ``page`` clamped to range."""

    total_pages = max(1, math.ceil(len(records) / per_page))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * per_page
    return list(records[start : start + per_page]), page, total_pages


def render_table(section: TableSection, key: str, per_page: int) -> None:
    searches = st.session_state.setdefault("table_search", {})
    pages = st.session_state.setdefault("table_pages", {})

    left, right = st.columns([3, 1])
    with left:
        term = st.text_input("Buscar", value=searches.get(key, ""), key=f"{key}-search")
    if term != searches.get(key, ""):
        pages[key] = 1
    searches[key] = term

    filtered = filter_records(section.records, section.columns, term)
    with right:
        st.download_button(
            "Exportar CSV",
            data=table_to_csv(filtered, section.columns).encode("utf-8"),
            file_name=export_filename(section.title),
            mime="text/csv",
            key=f"{key}-export",
        )

    total_pages = max(1, math.ceil(len(filtered) / per_page))
    page = st.number_input(
        "Página",
        min_value=1,
        max_value=total_pages,
        value=min(pages.get(key, 1), total_pages),
        key=f"{key}-page",
    )
    rows, page, total_pages = paginate(filtered, int(page), per_page)
    pages[key] = page

    st.dataframe(pd.DataFrame(rows, columns=section.columns), use_container_width=True, hide_index=True)
    st.caption(
        f"Página {page} de {total_pages} · {len(filtered)} de {section.meta.total_rows} registros"
    )


def render_tables(sections: List[TableSection], per_page: int = 10) -> None:
    visible = [s for s in sections if s.records and s.columns]
    if not visible:
        st.info("Nenhuma tabela disponível.")
        return
    for index, section in enumerate(visible):
        with st.container(border=True):
            st.subheader(section.title)
            render_table(section, key=f"table-{index}", per_page=per_page)
