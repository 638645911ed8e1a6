"""Reshape chart sections into the data each chart type plots.

The automatic choice is: line when there is a date-like column and a
numeric one, bar when there is a text column and a numeric one, pie for two
or more numeric columns, area otherwise.  A user choice overrides it only
if the data has the column kinds that chart needs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from .classifier import CHART_POLICY, NumericPolicy, classify_columns
from .models import ChartSection, Record, is_blank

AUTO = "auto"
BAR = "bar"
LINE = "line"
PIE = "pie"
AREA = "area"
CHART_TYPES = (BAR, LINE, PIE, AREA)

SAMPLE_POINTS = 15
MAX_BAR_CATEGORIES = 12
MAX_PIE_SLICES = 6
MAX_AREA_POINTS = 20
PIE_LABEL_LIMIT = 15
FALLBACK_CATEGORY = "Outros"


@dataclass
class ChartAnalysis:
    numeric: List[str]
    text: List[str]
    dates: List[str]
    sample: List[Record]


def analyze_structure(
    section: ChartSection, policy: NumericPolicy = CHART_POLICY
) -> ChartAnalysis:
    classification = classify_columns(section.points, section.columns, policy)
    return ChartAnalysis(
        numeric=classification.numeric,
        text=classification.categorical,
        dates=classification.temporal,
        sample=list(section.points[:SAMPLE_POINTS]),
    )


def _value(point: Record, column: str, policy: NumericPolicy = CHART_POLICY) -> float:
    return policy.parse(point.get(column)) or 0.0


def prepare_bar(analysis: ChartAnalysis) -> Optional[List[Record]]:
    """Sum every numeric column per category of the first text column."""

    if not analysis.text or not analysis.numeric:
        return None
    category_col = analysis.text[0]
    grouped: Dict[str, Record] = {}
    for point in analysis.sample:
        raw = point.get(category_col)
        category = FALLBACK_CATEGORY if is_blank(raw) else str(raw)
        bucket = grouped.setdefault(category, {category_col: category})
        for col in analysis.numeric:
            bucket[col] = bucket.get(col, 0.0) + _value(point, col)
    return list(grouped.values())[:MAX_BAR_CATEGORIES]


def prepare_line(analysis: ChartAnalysis) -> Optional[List[Record]]:
    if not analysis.numeric:
        return None
    rows = []
    for position, point in enumerate(analysis.sample, start=1):
        row: Record = {"index": position}
        if analysis.dates:
            row[analysis.dates[0]] = point.get(analysis.dates[0])
        for col in analysis.numeric:
            row[col] = _value(point, col)
        rows.append(row)
    return rows


def _short_name(name: str) -> str:
    if len(name) > PIE_LABEL_LIMIT:
        return name[:12] + "..."
    return name


def prepare_pie(analysis: ChartAnalysis) -> Optional[List[Record]]:
    """Total of each of the first numeric columns; non-positive totals dropped."""

    if len(analysis.numeric) < 2:
        return None
    slices = []
    for col in analysis.numeric[:MAX_PIE_SLICES]:
        total = sum(_value(point, col) for point in analysis.sample)
        if total > 0:
            slices.append({"name": _short_name(col), "value": total})
    return slices


def prepare_area(analysis: ChartAnalysis) -> Optional[List[Record]]:
    """Running total of every numeric column down the first rows."""

    if not analysis.numeric:
        return None
    running = {col: 0.0 for col in analysis.numeric}
    rows = []
    for position, point in enumerate(analysis.sample[:MAX_AREA_POINTS], start=1):
        row: Record = {"index": position}
        for col in analysis.numeric:
            running[col] += _value(point, col)
            row[col] = running[col]
        rows.append(row)
    return rows


PREPARERS = {
    BAR: prepare_bar,
    LINE: prepare_line,
    PIE: prepare_pie,
    AREA: prepare_area,
}


def available_chart_types(analysis: ChartAnalysis) -> List[str]:
    available = []
    if analysis.text and analysis.numeric:
        available.append(BAR)
    if analysis.numeric:
        available.append(LINE)
    if len(analysis.numeric) >= 2:
        available.append(PIE)
    if analysis.numeric:
        available.append(AREA)
    return available


def auto_chart_type(analysis: ChartAnalysis) -> str:
    if analysis.dates and analysis.numeric:
        return LINE
    if analysis.text and analysis.numeric:
        return BAR
    if len(analysis.numeric) >= 2:
        return PIE
    return AREA


def resolve_chart_type(analysis: ChartAnalysis, requested: Optional[str] = AUTO) -> str:
    """Chart type to draw; unavailable requests fall back to the automatic pick."""

    if requested and requested != AUTO and requested in available_chart_types(analysis):
        return requested
    return auto_chart_type(analysis)


def prepare_chart(analysis: ChartAnalysis, chart_type: str) -> Optional[List[Record]]:
    try:
        preparer = PREPARERS[chart_type]
    except KeyError:
        raise ValueError(f"Tipo de gráfico desconhecido: {chart_type}") from None
    return preparer(analysis)