import plotly.graph_objects as go

from pipeline import DashboardSettings, process_bytes
from pipeline.chart_shapes import AREA, AUTO, BAR, LINE, PIE, analyze_structure
from widgets.chart_view import build_figure, chart_type_options
from widgets.state import bootstrap_state, reset_dashboard, store_bundle, store_error
from widgets.summary_view import format_value, headline_cards, headline_for
from widgets.table_view import filter_records, paginate
from widgets.upload import validate_upload_size

RECORDS = [
    {"name": "Apple", "city": "Recife"},
    {"name": "banana", "city": "Natal"},
    {"name": "cherry", "city": "São Paulo"},
]


def test_filter_records_is_case_insensitive():
    assert filter_records(RECORDS, ["name", "city"], "") == RECORDS
    assert filter_records(RECORDS, ["name", "city"], "APP") == [RECORDS[0]]
    assert filter_records(RECORDS, ["name", "city"], "natal") == [RECORDS[1]]
    assert filter_records(RECORDS, ["name"], "natal") == []


def test_paginate_clamps_page():
    rows = [{"i": i} for i in range(23)]
    page_rows, page, total = paginate(rows, 3, 10)
    assert (page, total) == (3, 3)
    assert page_rows == rows[20:]
    assert paginate(rows, 9, 10)[1] == 3
    assert paginate([], 1, 10) == ([], 1, 1)


def test_upload_size_limit():
    settings = DashboardSettings(max_upload_mb=1)
    assert validate_upload_size(1024 * 1024, settings) is None
    assert "1MB" in validate_upload_size(1024 * 1024 + 1, settings)


def test_state_lifecycle_keeps_previous_bundle_on_error():
    state = {}
    bootstrap_state(state)
    assert state["bundle"] is None

    bundle = process_bytes(b"a,b\n1,2\n", "f.csv")
    store_bundle(bundle, state)
    store_error("Arquivo CSV vazio", state)
    assert state["bundle"] is bundle
    assert state["error"] == "Arquivo CSV vazio"

    state["chart_types"]["Gráfico CSV"] = "pie"
    reset_dashboard(state)
    assert state["bundle"] is None
    assert state["error"] is None
    assert state["chart_types"] == {}


def test_figures_for_every_available_type():
    bundle = process_bytes(
        b"loja,vendas,custo\nA,10,4\nB,20,6\nA,5,1\n", "lojas.csv"
    )
    analysis = analyze_structure(bundle.charts[0])
    assert chart_type_options(analysis) == [AUTO, BAR, LINE, PIE, AREA]
    for chart_type in (BAR, LINE, PIE, AREA):
        assert isinstance(build_figure(analysis, chart_type, "t"), go.Figure)


def test_format_value_groups_numbers():
    assert format_value(12345) == "12.345"
    assert format_value("5.00") == "5.00"


def test_headline_cards_from_first_table():
    bundle = process_bytes(
        b"produto,consumo\nDipirona,1200\nSoro,800\nDipirona,300\n", "consumo.csv"
    )
    cards = headline_cards(headline_for(bundle))
    assert [label for label, _, _ in cards] == [
        "Total de Produtos",
        "Consumo Mensal Total",
        "Média Mensal por Produto",
        "Produto Mais Consumido",
    ]
    assert cards[0][1:] == ("2", "Produtos únicos em produto")
    assert cards[1][1:] == ("2.300", "Soma de consumo")
    assert cards[2][1] == "1.150"
    assert cards[3][1] == "Dipirona"


def test_headline_for_header_only_file_is_none():
    bundle = process_bytes(b"produto,consumo\n", "vazio.csv")
    assert headline_for(bundle) is None
