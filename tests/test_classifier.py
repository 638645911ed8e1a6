import pytest

from pipeline.classifier import (
    AGGREGATE_POLICY,
    CATEGORICAL,
    CHART_POLICY,
    DATE_LIKE,
    NUMERIC,
    NumericPolicy,
    classify_columns,
    is_date_like,
    parse_number,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("10", 10.0),
        (" 3.5 ", 3.5),
        ("-.5", -0.5),
        ("1e3", 1000.0),
        (7, 7.0),
        ("", None),
        ("abc", None),
        ("1_000", None),
        ("nan", None),
        (True, None),
        (float("nan"), None),
        (None, None),
    ],
)
def test_parse_number(value, expected):
    assert parse_number(value) == expected


def test_aggregate_policy_needs_half_of_filled_values():
    assert AGGREGATE_POLICY.is_numeric(["1", "2", "x"])
    assert AGGREGATE_POLICY.is_numeric(["1", "x", ""])
    assert not AGGREGATE_POLICY.is_numeric(["1", "x", "y"])
    assert not AGGREGATE_POLICY.is_numeric(["", ""])
    assert not AGGREGATE_POLICY.is_numeric([])


def test_chart_policy_needs_every_sampled_value():
    assert not CHART_POLICY.is_numeric(["1", "x"])
    assert CHART_POLICY.is_numeric(["1", ""])
    assert CHART_POLICY.is_numeric(["", ""])
    # only the first rows are sampled
    assert CHART_POLICY.is_numeric(["1"] * 10 + ["x"])


def test_date_pattern():
    assert is_date_like("05/01/2024")
    assert is_date_like("2024-1-5")
    assert is_date_like("criado em 2024-01-05 10:00")
    assert not is_date_like("2024/01/05")
    assert not is_date_like("")
    assert not is_date_like(None)


def test_classify_columns_groups_by_kind():
    records = [
        {"name": "apple", "qty": "10", "when": "2024-01-05"},
        {"name": "banana", "qty": "0", "when": "2024-02-05"},
    ]
    result = classify_columns(records, ["name", "qty", "when"])
    assert result.numeric == ["qty"]
    assert result.categorical == ["name", "when"]
    assert result.date_like == ["when"]
    assert result.kind_of("when") == DATE_LIKE
    assert result.kind_of("name") == CATEGORICAL


def test_classify_empty_table():
    result = classify_columns([], [])
    assert result.numeric == []
    assert result.categorical == []
    assert result.date_like == []


def test_numeric_wins_over_date_like():
    def parse_anything(value):
        return 1.0 if value else None

    policy = NumericPolicy(threshold=0.5, parse=parse_anything)
    result = classify_columns([{"when": "2024-01-05"}], ["when"], policy)
    assert result.numeric == ["when"]
    assert result.date_like == ["when"]
    assert result.kind_of("when") == NUMERIC
    assert result.temporal == []
