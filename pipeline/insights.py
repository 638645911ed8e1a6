"""Summary insights for one sheet.

The report is computed into :class:`InsightReport`, whose optional parts
mirror which kinds of columns the sheet has, and only then flattened into
the ordered ``(metric, value)`` list the summary view renders.  The order
is fixed: record count, field count, completeness, numeric block,
categorical block, date block.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import pandas as pd

from .classifier import (
    AGGREGATE_POLICY,
    NumericPolicy,
    classify_columns,
    column_values,
    parse_number,
)
from .models import InsightEntry, Record, is_blank

logger = logging.getLogger(__name__)


def format_number(
    value: float,
    thousands: str = ".",
    decimal: str = ",",
    max_fraction_digits: int = 3,
) -> str:
    """Group digits the way ``toLocaleString('pt-BR')`` does.

    >>> format_number(1234567.5)
    '1.234.567,5'
    """

    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text.replace(",", "\0").replace(".", decimal).replace("\0", thousands)


@dataclass(frozen=True)
class NumericSummary:
    column_count: int
    column: str
    mean: Optional[float] = None
    maximum: Optional[float] = None
    minimum: Optional[float] = None


@dataclass(frozen=True)
class CategoricalSummary:
    column: str
    unique_count: int
    mode: Optional[str] = None
    mode_count: int = 0


@dataclass(frozen=True)
class InsightReport:
    total_records: int
    total_fields: int
    completeness: float
    numeric: Optional[NumericSummary] = None
    categorical: Optional[CategoricalSummary] = None
    date_column_count: Optional[int] = None

    def to_entries(self, thousands: str = ".", decimal: str = ",") -> List[InsightEntry]:
        entries = [
            InsightEntry("Total de Registros", self.total_records),
            InsightEntry("Total de Campos", self.total_fields),
            InsightEntry("Completude dos Dados", f"{self.completeness:.1f}%"),
        ]
        numeric = self.numeric
        if numeric is not None:
            entries.append(InsightEntry("Campos Numéricos", numeric.column_count))
            if numeric.mean is not None:
                entries.extend(
                    [
                        InsightEntry(f"{numeric.column} (Média)", f"{numeric.mean:.2f}"),
                        InsightEntry(
                            f"{numeric.column} (Máximo)",
                            format_number(numeric.maximum, thousands, decimal),
                        ),
                        InsightEntry(
                            f"{numeric.column} (Mínimo)",
                            format_number(numeric.minimum, thousands, decimal),
                        ),
                    ]
                )
        categorical = self.categorical
        if categorical is not None:
            entries.append(
                InsightEntry(f"{categorical.column} (Valores Únicos)", categorical.unique_count)
            )
            if categorical.mode is not None:
                entries.append(
                    InsightEntry(
                        f"{categorical.column} (Mais Frequente)",
                        f"{categorical.mode} ({categorical.mode_count}x)",
                    )
                )
        if self.date_column_count:
            entries.append(InsightEntry("Campos de Data Detectados", self.date_column_count))
        return entries


def average_completeness(records: Sequence[Record], columns: Sequence[str]) -> float:
    """Mean percentage of filled cells per column (0.0 for empty input)."""

    if not records or not columns:
        return 0.0
    total = len(records)
    ratios = [
        sum(1 for v in column_values(records, col) if not is_blank(v)) / total * 100
        for col in columns
    ]
    return sum(ratios) / len(columns)


def _numeric_summary(
    records: Sequence[Record], numeric_columns: Sequence[str], policy: NumericPolicy
) -> NumericSummary:
    first = numeric_columns[0]
    values = pd.Series(
        [policy.parse(v) for v in column_values(records, first)], dtype="float64"
    ).dropna()
    if values.empty:
        return NumericSummary(column_count=len(numeric_columns), column=first)
    return NumericSummary(
        column_count=len(numeric_columns),
        column=first,
        mean=float(values.mean()),
        maximum=float(values.max()),
        minimum=float(values.min()),
    )


def _categorical_summary(records: Sequence[Record], column: str) -> CategoricalSummary:
    values = [str(v) for v in column_values(records, column) if not is_blank(v)]
    counts = Counter(values)
    if not counts:
        return CategoricalSummary(column=column, unique_count=0)
    # most_common keeps insertion order among equal counts
    mode, mode_count = counts.most_common()[0]
    return CategoricalSummary(
        column=column, unique_count=len(counts), mode=mode, mode_count=mode_count
    )


def build_insight_report(
    records: Sequence[Record],
    columns: Sequence[str],
    policy: NumericPolicy = AGGREGATE_POLICY,
) -> InsightReport:
    classification = classify_columns(records, columns, policy)
    logger.debug(
        "Classified %d columns: numeric=%s date=%s",
        len(columns),
        classification.numeric,
        classification.date_like,
    )
    numeric = None
    if classification.numeric:
        numeric = _numeric_summary(records, classification.numeric, policy)
    categorical = None
    if classification.categorical:
        categorical = _categorical_summary(records, classification.categorical[0])
    return InsightReport(
        total_records=len(records),
        total_fields=len(columns),
        completeness=average_completeness(records, columns),
        numeric=numeric,
        categorical=categorical,
        date_column_count=len(classification.date_like) or None,
    )


def generate_insights(
    records: Sequence[Record],
    columns: Sequence[str],
    thousands: str = ".",
    decimal: str = ",",
) -> List[InsightEntry]:
    return build_insight_report(records, columns).to_entries(thousands, decimal)


CONSUMPTION_KEYWORDS = ("consumo", "quantidade", "total", "valor")
PRODUCT_KEYWORDS = ("produto", "item", "medicamento", "material")
HEADLINE_NUMERIC_SHARE = 0.1
PRODUCT_NAME_LIMIT = 25
NO_PRODUCT = "N/A"


@dataclass(frozen=True)
class HeadlineMetrics:
    """The four cards shown above the per-sheet insights.

    Computed from the first table of the bundle.  ``product_column`` and
    ``consumption_column`` are ``None`` when no column qualifies.
    """

    product_column: Optional[str]
    consumption_column: Optional[str]
    total_products: int
    total_consumption: float
    average_per_product: float
    top_product: str = NO_PRODUCT


def headline_numeric_columns(records: Sequence[Record], columns: Sequence[str]) -> List[str]:
    """Columns with more than ``max(1, 10% of rows)`` non-zero numbers."""

    minimum = max(1, len(records) * HEADLINE_NUMERIC_SHARE)
    numeric = []
    for col in columns:
        parsed = (parse_number(v) for v in column_values(records, col))
        if sum(1 for n in parsed if n) > minimum:
            numeric.append(col)
    return numeric


def _pick_column(candidates: Sequence[str], keywords: Sequence[str]) -> Optional[str]:
    for col in candidates:
        lowered = col.lower()
        if any(word in lowered for word in keywords):
            return col
    return candidates[0] if candidates else None


def _shorten(name: str) -> str:
    if len(name) > PRODUCT_NAME_LIMIT:
        return name[: PRODUCT_NAME_LIMIT - 3] + "..."
    return name


def headline_metrics(
    records: Sequence[Record], columns: Sequence[str]
) -> Optional[HeadlineMetrics]:
    """Product/consumption overview of a table, or ``None`` without rows."""

    if not records or not columns:
        return None

    numeric = headline_numeric_columns(records, columns)
    categorical = [col for col in columns if col not in numeric]
    consumption_column = _pick_column(numeric, CONSUMPTION_KEYWORDS)
    product_column = _pick_column(categorical, PRODUCT_KEYWORDS)

    def amount(row: Record) -> float:
        if consumption_column is None:
            return 0.0
        return parse_number(row.get(consumption_column)) or 0.0

    total_consumption = sum(amount(row) for row in records)

    per_product: Dict[str, float] = {}
    if product_column is not None:
        for row in records:
            product = row.get(product_column)
            if is_blank(product):
                continue
            key = str(product)
            per_product[key] = per_product.get(key, 0.0) + amount(row)

    total_products = len(per_product)
    average = 0.0
    if total_products > 0 and total_consumption > 0:
        average = total_consumption / total_products

    top_product = NO_PRODUCT
    if per_product and consumption_column is not None:
        # sorted is stable, so the first product seen wins a tie
        ranked = sorted(per_product.items(), key=lambda item: -item[1])
        top_product = _shorten(ranked[0][0])

    return HeadlineMetrics(
        product_column=product_column,
        consumption_column=consumption_column,
        total_products=total_products,
        total_consumption=total_consumption,
        average_per_product=average,
        top_product=top_product,
    )
