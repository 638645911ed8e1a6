from __future__ import annotations

import logging

import streamlit as st

from pipeline import DashboardError, load_settings, process_file
from widgets import (
    apply_dashboard_style,
    bootstrap_state,
    render_charts,
    render_column_form,
    render_summary,
    render_tables,
    render_uploader,
    reset_dashboard,
    store_bundle,
    store_error,
)

APP_TITLE = "Painel de Análise de Dados"

logger = logging.getLogger("dashboard")


def _handle_upload(uploaded, selected_columns, settings) -> None:
    with st.spinner("Analisando dados e gerando insights automáticos..."):
        try:
            bundle = process_file(uploaded, selected_columns or None, settings=settings)
        except DashboardError as exc:
            logger.warning("Upload of %s failed: %s", uploaded.name, exc)
            store_error(str(exc))
            return
    store_bundle(bundle)


def main() -> None:
    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    st.set_page_config(page_title=APP_TITLE, layout="wide")
    bootstrap_state()

    apply_dashboard_style()

    header, action = st.columns([4, 1])
    with header:
        st.title(APP_TITLE)
        st.caption(
            "Importe arquivos Excel, CSV ou PDF para gerar análises e visualizações automáticas."
        )
    bundle = st.session_state.bundle
    with action:
        if bundle is not None and st.button("Novo arquivo"):
            reset_dashboard()
            st.rerun()

    if st.session_state.error:
        st.error(st.session_state.error)

    if bundle is None:
        uploaded = render_uploader(settings)
        if uploaded is not None:
            selected = render_column_form(uploaded)
            if selected is not None:
                _handle_upload(uploaded, selected, settings)
                st.rerun()
        return

    st.success(
        f"Arquivo processado: {bundle.metadata.file_name} · "
        f"{bundle.metadata.total_records} registros analisados"
    )
    summary_tab, charts_tab, tables_tab = st.tabs(["Resumo", "Gráficos", "Dados"])
    with summary_tab:
        render_summary(bundle)
    with charts_tab:
        render_charts(bundle.charts)
    with tables_tab:
        render_tables(bundle.tables, per_page=settings.table_page_size)


if __name__ == "__main__":
    main()
