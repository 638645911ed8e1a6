"""Build the table, chart and summary views of one parsed sheet."""

from __future__ import annotations

from typing import Any, List, Optional, Sequence

from .classifier import CHART_POLICY, NumericPolicy, classify_columns
from .insights import generate_insights
from .models import (
    ChartSection,
    InsightEntry,
    RawTable,
    Record,
    SectionMeta,
    SummarySection,
    TableSection,
    is_blank,
)

CHART_ROW_CAP = 10


def _meta(total_rows: int, total_columns: int, file_type: str, file_name: str) -> SectionMeta:
    return SectionMeta(
        total_rows=total_rows,
        total_columns=total_columns,
        file_type=file_type,
        file_name=file_name,
    )


def build_table_section(
    title: str, table: RawTable, file_type: str, file_name: str
) -> TableSection:
    columns = table.labels
    return TableSection(
        title=title,
        records=table.records(),
        columns=columns,
        meta=_meta(table.row_count, len(columns), file_type, file_name),
    )


def coerce_cell(value: Any, policy: NumericPolicy = CHART_POLICY) -> Any:
    """Return the number behind ``value`` when there is one, else ``value``."""

    number = policy.parse(value)
    return value if number is None else number


def chart_points(
    records: Sequence[Record],
    columns: Sequence[str],
    row_cap: int = CHART_ROW_CAP,
    policy: NumericPolicy = CHART_POLICY,
) -> List[Record]:
    points = []
    for row in records[:row_cap]:
        point = {col: coerce_cell(row.get(col, ""), policy) for col in columns}
        if any(not is_blank(v) for v in point.values()):
            points.append(point)
    return points


def build_chart_section(
    title: str,
    table: RawTable,
    file_type: str,
    file_name: str,
    row_cap: int = CHART_ROW_CAP,
    policy: NumericPolicy = CHART_POLICY,
) -> Optional[ChartSection]:
    """Chart-ready rows for a sheet, or ``None`` when nothing can be plotted.

    A sheet is charted when it has at least two columns, at least one column
    with a non-empty header passes ``policy`` and at least one of the first
    ``row_cap`` rows has a value.
    """

    columns = table.labels
    if len(columns) < 2 or table.row_count == 0:
        return None
    records = table.records()
    classification = classify_columns(records, columns, policy)
    labelled = {label for label, header in zip(columns, table.headers) if header}
    if not any(col in labelled for col in classification.numeric):
        return None
    points = chart_points(records, columns, row_cap, policy)
    if not points:
        return None
    return ChartSection(
        title=title,
        points=points,
        columns=columns,
        meta=_meta(len(points), len(columns), file_type, file_name),
    )


def build_summary_section(
    title: str,
    table: RawTable,
    file_type: str,
    file_name: str,
    thousands: str = ".",
    decimal: str = ",",
) -> SummarySection:
    columns = table.labels
    insights: List[InsightEntry] = generate_insights(
        table.records(), columns, thousands, decimal
    )
    return SummarySection(
        title=title,
        insights=insights,
        meta=_meta(table.row_count, len(columns), file_type, file_name),
    )
