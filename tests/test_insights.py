from pipeline.insights import (
    average_completeness,
    build_insight_report,
    format_number,
    generate_insights,
    headline_metrics,
    headline_numeric_columns,
)


def _pairs(entries):
    return [(entry.metric, entry.value) for entry in entries]


def test_fruit_scenario_reports_numeric_and_categorical_blocks():
    records = [
        {"name": "apple", "qty": "10"},
        {"name": "banana", "qty": "0"},
        {"name": "cherry", "qty": "5"},
    ]
    assert _pairs(generate_insights(records, ["name", "qty"])) == [
        ("Total de Registros", 3),
        ("Total de Campos", 2),
        ("Completude dos Dados", "100.0%"),
        ("Campos Numéricos", 1),
        ("qty (Média)", "5.00"),
        ("qty (Máximo)", "10"),
        ("qty (Mínimo)", "0"),
        ("name (Valores Únicos)", 3),
        ("name (Mais Frequente)", "apple (1x)"),
    ]


def test_completeness_bounds():
    full = [{"a": "x", "b": 1}, {"a": "y", "b": 0}]
    empty = [{"a": "", "b": None}, {"a": "", "b": ""}]
    half = [{"a": "x", "b": ""}, {"a": "y", "b": ""}]
    assert average_completeness(full, ["a", "b"]) == 100.0
    assert average_completeness(empty, ["a", "b"]) == 0.0
    assert average_completeness(half, ["a", "b"]) == 50.0
    assert average_completeness([], ["a"]) == 0.0


def test_empty_input_only_reports_counts():
    assert _pairs(generate_insights([], [])) == [
        ("Total de Registros", 0),
        ("Total de Campos", 0),
        ("Completude dos Dados", "0.0%"),
    ]


def test_non_numeric_cells_are_excluded_from_statistics():
    records = [{"v": "10"}, {"v": "x"}, {"v": "20"}, {"v": "30"}, {"v": ""}]
    report = build_insight_report(records, ["v"])
    assert report.numeric is not None
    assert report.numeric.mean == 20.0
    assert report.numeric.minimum == 10.0
    assert report.categorical is None


def test_mode_ties_keep_first_seen_value():
    records = [{"c": "b"}, {"c": "a"}, {"c": "b"}, {"c": "a"}, {"c": ""}]
    report = build_insight_report(records, ["c"])
    assert report.categorical.unique_count == 2
    assert report.categorical.mode == "b"
    assert report.categorical.mode_count == 2


def test_date_columns_are_counted_last():
    records = [{"when": "05/01/2024", "total": "1234.5"}]
    entries = generate_insights(records, ["when", "total"])
    assert entries[-1].metric == "Campos de Data Detectados"
    assert entries[-1].value == 1
    assert ("total (Máximo)", "1.234,5") in _pairs(entries)


def test_entry_count_depends_on_content():
    text_only = generate_insights([{"a": "x"}], ["a"])
    assert [e.metric for e in text_only] == [
        "Total de Registros",
        "Total de Campos",
        "Completude dos Dados",
        "a (Valores Únicos)",
        "a (Mais Frequente)",
    ]


def test_format_number_uses_brazilian_grouping():
    assert format_number(1234567.5) == "1.234.567,5"
    assert format_number(0.1234) == "0,123"
    assert format_number(-1500) == "-1.500"
    assert format_number(10.0) == "10"
    assert format_number(1234.5, thousands=",", decimal=".") == "1,234.5"


def test_headline_picks_columns_by_keyword():
    records = [
        {"codigo": "1", "Medicamento": "Dipirona", "unidade": "cx", "Quantidade Mensal": "30"},
        {"codigo": "2", "Medicamento": "Soro", "unidade": "fr", "Quantidade Mensal": "50"},
        {"codigo": "3", "Medicamento": "Dipirona", "unidade": "cx", "Quantidade Mensal": "25"},
    ]
    columns = ["codigo", "Medicamento", "unidade", "Quantidade Mensal"]
    metrics = headline_metrics(records, columns)
    assert metrics.consumption_column == "Quantidade Mensal"
    assert metrics.product_column == "Medicamento"
    assert metrics.total_products == 2
    assert metrics.total_consumption == 105
    assert metrics.average_per_product == 52.5
    assert metrics.top_product == "Dipirona"


def test_headline_falls_back_to_first_numeric_and_categorical():
    records = [
        {"setor": "UTI", "nome": "Luva", "mes1": "4", "mes2": "9"},
        {"setor": "UTI", "nome": "Gaze", "mes1": "6", "mes2": "1"},
    ]
    metrics = headline_metrics(records, ["setor", "nome", "mes1", "mes2"])
    assert metrics.consumption_column == "mes1"
    assert metrics.product_column == "setor"
    assert metrics.total_products == 1
    assert metrics.total_consumption == 10
    assert metrics.top_product == "UTI"


def test_headline_numeric_rule_ignores_zeros_and_needs_more_than_one_value():
    records = [{"a": "0", "b": "3", "c": "x"}, {"a": "0", "b": "", "c": "7"}]
    assert headline_numeric_columns(records, ["a", "b", "c"]) == []
    records.append({"a": "2", "b": "4", "c": "8"})
    assert headline_numeric_columns(records, ["a", "b", "c"]) == ["b", "c"]


def test_headline_tie_keeps_first_product_and_shortens_long_names():
    long_name = "Cloreto de Sodio 0,9% Frasco 500ml"
    records = [
        {"produto": long_name, "total": "10"},
        {"produto": "Agulha", "total": "10"},
        {"produto": "", "total": "99"},
    ]
    metrics = headline_metrics(records, ["produto", "total"])
    assert metrics.top_product == long_name[:22] + "..."
    assert metrics.total_products == 2
    assert metrics.total_consumption == 119


def test_headline_without_numeric_column():
    records = [{"produto": "Luva"}, {"produto": "Gaze"}]
    metrics = headline_metrics(records, ["produto"])
    assert metrics.consumption_column is None
    assert metrics.total_products == 2
    assert metrics.total_consumption == 0
    assert metrics.average_per_product == 0
    assert metrics.top_product == "N/A"


def test_headline_needs_rows():
    assert headline_metrics([], ["produto"]) is None
