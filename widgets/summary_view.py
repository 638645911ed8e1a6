"""Resumo tab: headline cards, one block of metric cards per analysed sheet
and a processing footer."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple

import streamlit as st

from pipeline import DashboardBundle
from pipeline.insights import HeadlineMetrics, format_number, headline_metrics

CARDS_PER_ROW = 4

Card = Tuple[str, str, str]


def format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, (int, float)):
        return format_number(value)
    return str(value)


def _chunks(items: List[Any], size: int) -> List[List[Any]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


def headline_cards(metrics: HeadlineMetrics) -> List[Card]:
    """``(label, value, caption)`` for each headline card."""

    product = metrics.product_column
    consumption = metrics.consumption_column
    return [
        (
            "Total de Produtos",
            str(metrics.total_products),
            f"Produtos únicos em {product}" if product else "Produtos únicos na planilha",
        ),
        (
            "Consumo Mensal Total",
            format_number(metrics.total_consumption, max_fraction_digits=0),
            f"Soma de {consumption}" if consumption else "Soma de todos os consumos mensais",
        ),
        (
            "Média Mensal por Produto",
            format_number(metrics.average_per_product, max_fraction_digits=0),
            f"Consumo médio entre {metrics.total_products} produtos",
        ),
        (
            "Produto Mais Consumido",
            metrics.top_product,
            "Maior consumo total no período",
        ),
    ]


def headline_for(bundle: DashboardBundle) -> Optional[HeadlineMetrics]:
    if not bundle.tables:
        return None
    first = bundle.tables[0]
    return headline_metrics(first.records, first.columns)


def _render_headline(bundle: DashboardBundle) -> None:
    st.markdown("#### Métricas principais dos seus dados de consumo")
    metrics = headline_for(bundle)
    if metrics is None:
        st.warning("Não foi possível calcular métricas: dados insuficientes")
        return
    for column, (label, value, caption) in zip(
        st.columns(CARDS_PER_ROW), headline_cards(metrics)
    ):
        with column:
            st.metric(label, value)
            st.markdown(f'<p class="headline-caption">{caption}</p>', unsafe_allow_html=True)


def _render_footer(bundle: DashboardBundle) -> None:
    meta = bundle.metadata
    with st.container(border=True):
        st.markdown("##### Processamento Concluído")
        records, analyses, file_format = st.columns(3)
        records.metric("Registros Processados", format_value(meta.total_records))
        analyses.metric("Análises Geradas", len(bundle.summary))
        file_format.metric("Formato do Arquivo", meta.file_type.upper())
        st.caption(f"Processado em {meta.processed_at:%d/%m/%Y %H:%M}")


def render_summary(bundle: DashboardBundle) -> None:
    meta = bundle.metadata
    st.markdown(f'<span class="file-badge">{meta.file_name}</span>', unsafe_allow_html=True)

    if not bundle.summary:
        st.info("Nenhum resumo disponível para este arquivo.")
        return

    _render_headline(bundle)

    st.subheader("Análise Detalhada")
    st.caption(
        f"{len(bundle.summary)} {'dataset' if len(bundle.summary) == 1 else 'datasets'} analisados"
    )
    for section in bundle.summary:
        st.markdown(f"**{section.title}** · {len(section.insights)} insights descobertos")
        for row in _chunks(section.insights, CARDS_PER_ROW):
            for column, entry in zip(st.columns(CARDS_PER_ROW), row):
                with column:
                    st.metric(entry.metric, format_value(entry.value))

    _render_footer(bundle)
