"""Heuristic column-kind inference (numeric / categorical / date-like).

Two numeric policies are in use and they are deliberately different:

``AGGREGATE_POLICY``
    Used by the summary insights.  A column is numeric when at least half of
    its non-empty values parse as numbers, so a few stray labels in a column
    of amounts do not hide its statistics.
``CHART_POLICY``
    Used when deciding whether a sheet can be charted and which columns feed
    the series.  Every sampled value must be empty or numeric, because a
    single text cell would otherwise be plotted as zero.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from numbers import Number
from typing import Any, Callable, Iterable, List, Optional, Sequence

from .models import Record, is_blank

NUMBER_PATTERN = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
DATE_PATTERN = re.compile(r"\d{1,2}/\d{1,2}/\d{4}|\d{4}-\d{1,2}-\d{1,2}")

NUMERIC = "numeric"
CATEGORICAL = "categorical"
DATE_LIKE = "date"


def parse_number(value: Any) -> Optional[float]:
    """Return ``value`` as a float, or ``None`` when it is not a number."""

    if isinstance(value, bool):
        return None
    if isinstance(value, Number):
        number = float(value)
        return None if math.isnan(number) else number
    if isinstance(value, str):
        text = value.strip()
        if NUMBER_PATTERN.match(text):
            return float(text)
    return None


def is_date_like(value: Any) -> bool:
    if is_blank(value):
        return False
    return DATE_PATTERN.search(str(value)) is not None


@dataclass(frozen=True)
class NumericPolicy:
    """Decides whether a column of values is numeric.

    ``threshold`` is the minimum share of sampled non-empty values that must
    parse.  ``sample_size`` limits the inspection to a prefix of the rows
    (``None`` inspects all of them).
    """

    threshold: float
    parse: Callable[[Any], Optional[float]] = parse_number
    empty_column_is_numeric: bool = False
    sample_size: Optional[int] = None

    def sample(self, values: Sequence[Any]) -> Sequence[Any]:
        if self.sample_size is None:
            return values
        return values[: self.sample_size]

    def is_numeric(self, values: Sequence[Any]) -> bool:
        filled = [v for v in self.sample(values) if not is_blank(v)]
        if not filled:
            return self.empty_column_is_numeric
        parsed = sum(1 for v in filled if self.parse(v) is not None)
        return parsed / len(filled) >= self.threshold


AGGREGATE_NUMERIC_THRESHOLD = 0.5
CHART_NUMERIC_THRESHOLD = 1.0
CHART_SAMPLE_SIZE = 10

AGGREGATE_POLICY = NumericPolicy(threshold=AGGREGATE_NUMERIC_THRESHOLD)
CHART_POLICY = NumericPolicy(
    threshold=CHART_NUMERIC_THRESHOLD,
    empty_column_is_numeric=True,
    sample_size=CHART_SAMPLE_SIZE,
)


@dataclass
class ColumnClassification:
    """Column labels grouped by inferred kind, in column order.

    ``numeric`` and ``date_like`` may overlap; ``categorical`` is every
    column that is not numeric.
    """

    numeric: List[str] = field(default_factory=list)
    categorical: List[str] = field(default_factory=list)
    date_like: List[str] = field(default_factory=list)

    def kind_of(self, column: str) -> str:
        """Return one exclusive kind: numeric wins over date-like."""

        if column in self.numeric:
            return NUMERIC
        if column in self.date_like:
            return DATE_LIKE
        return CATEGORICAL

    @property
    def temporal(self) -> List[str]:
        """Date-like columns that are not also numeric."""

        return [c for c in self.date_like if c not in self.numeric]


def column_values(records: Iterable[Record], column: str) -> List[Any]:
    return [row.get(column, "") for row in records]


def classify_columns(
    records: Sequence[Record],
    columns: Sequence[str],
    policy: NumericPolicy = AGGREGATE_POLICY,
) -> ColumnClassification:
    result = ColumnClassification()
    for column in columns:
        values = column_values(records, column)
        if policy.is_numeric(values):
            result.numeric.append(column)
        else:
            result.categorical.append(column)
        if any(is_date_like(v) for v in policy.sample(values)):
            result.date_like.append(column)
    return result
