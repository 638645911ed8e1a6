"""Gráficos tab: plotly figures for every chart section."""

from __future__ import annotations

from typing import List, Optional

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from pipeline.chart_shapes import (
    AREA,
    AUTO,
    BAR,
    LINE,
    PIE,
    ChartAnalysis,
    analyze_structure,
    available_chart_types,
    prepare_chart,
    resolve_chart_type,
)
from pipeline.models import ChartSection

CHART_LABELS = {
    AUTO: "Automático",
    BAR: "Barras",
    LINE: "Linha",
    PIE: "Pizza",
    AREA: "Área",
}

CHART_HINTS = {
    BAR: "Compara categorias e valores.",
    LINE: "Mostra tendências e evolução ao longo do tempo.",
    PIE: "Visualiza proporções entre os campos numéricos.",
    AREA: "Exibe a acumulação dos valores linha a linha.",
}


def build_figure(analysis: ChartAnalysis, chart_type: str, title: str) -> Optional[go.Figure]:
    """Plotly figure for ``chart_type`` or ``None`` when there is nothing to draw."""

    rows = prepare_chart(analysis, chart_type)
    if not rows:
        return None
    df = pd.DataFrame(rows)
    if chart_type == BAR:
        fig = px.bar(df, x=analysis.text[0], y=analysis.numeric, barmode="group", title=title)
    elif chart_type == LINE:
        x = analysis.dates[0] if analysis.dates else "index"
        fig = px.line(df, x=x, y=analysis.numeric, markers=True, title=title)
    elif chart_type == PIE:
        fig = px.pie(df, names="name", values="value", title=title)
    else:
        fig = px.area(df, x="index", y=analysis.numeric, title=title)
    fig.update_layout(legend_title_text="", margin=dict(t=60, b=40, l=20, r=20))
    return fig


def chart_type_options(analysis: ChartAnalysis) -> List[str]:
    return [AUTO] + available_chart_types(analysis)


def render_chart(section: ChartSection, key: str) -> None:
    analysis = analyze_structure(section)
    choices = st.session_state.setdefault("chart_types", {})
    options = chart_type_options(analysis)
    current = choices.get(key, AUTO)
    requested = st.radio(
        "Tipo de gráfico",
        options=options,
        format_func=lambda v: CHART_LABELS[v],
        index=options.index(current) if current in options else 0,
        horizontal=True,
        key=f"{key}-type",
    )
    choices[key] = requested
    chart_type = resolve_chart_type(analysis, requested)

    st.caption(
        f"{len(section.points)} registros · {len(analysis.numeric)} colunas numéricas · "
        f"{CHART_HINTS[chart_type]}"
    )
    fig = build_figure(analysis, chart_type, section.title)
    if fig is None:
        st.info("Sem valores positivos suficientes para este tipo de gráfico.")
        return
    st.plotly_chart(fig, use_container_width=True, config={"displaylogo": False})


def render_charts(sections: List[ChartSection]) -> None:
    if not sections:
        st.info(
            "Nenhum gráfico disponível. Certifique-se de que há dados numéricos no arquivo."
        )
        return
    for index, section in enumerate(sections):
        with st.container(border=True):
            st.subheader(section.title)
            render_chart(section, key=f"chart-{index}")
