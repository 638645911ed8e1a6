from pipeline.models import RawTable, resolve_labels
from pipeline.projection import (
    CHART_ROW_CAP,
    build_chart_section,
    build_summary_section,
    build_table_section,
    chart_points,
)


def test_rows_are_padded_to_header_width():
    table = RawTable(headers=["a", "b"], rows=[["1"], ["1", "2", "3"]])
    assert table.rows == [["1", ""], ["1", "2"]]


def test_table_section_uses_label_keyed_records():
    table = RawTable(headers=["a", ""], rows=[["1"]])
    section = build_table_section("Dados CSV", table, "csv", "f.csv")
    assert section.columns == ["a", "Coluna 2"]
    assert section.records == [{"a": "1", "Coluna 2": ""}]
    assert section.meta.total_rows == 1
    assert section.meta.total_columns == 2


def test_duplicate_headers_get_distinct_labels():
    assert resolve_labels(["x", "x", "", "x"]) == ["x", "x (2)", "Coluna 3", "x (3)"]


def test_select_keeps_caller_order_and_drops_unknown_labels():
    table = RawTable(headers=["a", "b", "c"], rows=[[1, 2, 3], [4, 5, 6]])
    selected = table.select(["c", "zz", "a"])
    assert selected.headers == ["c", "a"]
    assert selected.rows == [[3, 1], [6, 4]]
    assert table.select(None) is table
    assert table.select([]) is table
    assert table.select(["a", "b", "c"]) == table


def test_chart_section_caps_rows_and_coerces_numbers():
    rows = [[f"item {i}", str(i)] for i in range(25)]
    table = RawTable(headers=["name", "qty"], rows=rows)
    section = build_chart_section("Gráfico CSV", table, "csv", "f.csv")
    assert section is not None
    assert len(section.points) == CHART_ROW_CAP
    assert section.points[3] == {"name": "item 3", "qty": 3.0}
    assert section.meta.total_rows == CHART_ROW_CAP


def test_blank_rows_are_dropped_from_chart_points():
    records = [{"a": "", "b": ""}, {"a": "1", "b": "x"}]
    assert chart_points(records, ["a", "b"]) == [{"a": 1.0, "b": "x"}]


def test_chart_section_requires_two_columns():
    table = RawTable(headers=["qty"], rows=[["1"], ["2"]])
    assert build_chart_section("g", table, "csv", "f.csv") is None


def test_chart_section_requires_a_fully_numeric_labelled_column():
    text_only = RawTable(headers=["a", "b"], rows=[["x", "y"]])
    mixed = RawTable(headers=["a", "b"], rows=[["x", "1"], ["y", "z"]])
    unlabelled = RawTable(headers=["name", ""], rows=[["a", "1"]])
    assert build_chart_section("g", text_only, "csv", "f.csv") is None
    assert build_chart_section("g", mixed, "csv", "f.csv") is None
    assert build_chart_section("g", unlabelled, "csv", "f.csv") is None


def test_chart_section_is_not_emitted_without_rows():
    blank = RawTable(headers=["a", "b"], rows=[["", ""]])
    empty = RawTable(headers=["a", "b"], rows=[])
    assert build_chart_section("g", blank, "csv", "f.csv") is None
    assert build_chart_section("g", empty, "csv", "f.csv") is None


def test_summary_section_wraps_insights():
    table = RawTable(headers=["name", "qty"], rows=[["apple", "10"]])
    section = build_summary_section("Análise", table, "csv", "f.csv")
    assert section.insights[0].metric == "Total de Registros"
    assert section.insights[0].value == 1
    assert section.meta.total_columns == 2
