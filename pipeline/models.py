"""Data containers passed between the pipeline stages and the views."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

Record = Dict[str, Any]


def is_blank(value: Any) -> bool:
    """Return ``True`` for cells that count as empty (``None`` or ``""``)."""

    return value is None or value == ""


def resolve_labels(headers: Sequence[str]) -> List[str]:
    """Return unique display labels for a header row.

    Empty headers become ``Coluna N`` (1-based position) and repeated labels
    get a ``(2)``, ``(3)`` ... suffix so records never overwrite a cell.
    """

    labels: List[str] = []
    seen: Dict[str, int] = {}
    for position, header in enumerate(headers, start=1):
        label = header or f"Coluna {position}"
        count = seen.get(label, 0) + 1
        seen[label] = count
        if count > 1:
            label = f"{label} ({count})"
        labels.append(label)
    return labels


@dataclass
class RawTable:
    """Header labels plus positional rows for one sheet.

    Every row is padded with ``""`` (or truncated) to the header width on
    construction.
    """

    headers: List[str]
    rows: List[List[Any]] = field(default_factory=list)

    def __post_init__(self) -> None:
        width = len(self.headers)
        self.headers = [str(h) if h is not None else "" for h in self.headers]
        self.rows = [
            (list(row) + [""] * (width - len(row)))[:width] for row in self.rows
        ]

    @property
    def labels(self) -> List[str]:
        return resolve_labels(self.headers)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def records(self) -> List[Record]:
        labels = self.labels
        return [
            {label: ("" if cell is None else cell) for label, cell in zip(labels, row)}
            for row in self.rows
        ]

    def select(self, columns: Optional[Sequence[str]]) -> "RawTable":
        """Keep only ``columns`` in the caller's order.

        Labels are matched against the source headers (first occurrence);
        unknown labels are ignored.  ``None`` or an empty sequence returns
        the table unchanged.
        """

        if not columns:
            return self
        indexes = [self.headers.index(col) for col in columns if col in self.headers]
        return RawTable(
            headers=[self.headers[i] for i in indexes],
            rows=[[row[i] for i in indexes] for row in self.rows],
        )


@dataclass(frozen=True)
class InsightEntry:
    metric: str
    value: Any


@dataclass(frozen=True)
class SectionMeta:
    total_rows: int
    total_columns: int
    file_type: str
    file_name: str


@dataclass
class SummarySection:
    title: str
    insights: List[InsightEntry]
    meta: SectionMeta


@dataclass
class ChartSection:
    title: str
    points: List[Record]
    columns: List[str]
    meta: SectionMeta


@dataclass
class TableSection:
    title: str
    records: List[Record]
    columns: List[str]
    meta: SectionMeta


@dataclass(frozen=True)
class BundleMetadata:
    file_name: str
    file_type: str
    processed_at: datetime
    total_records: int


@dataclass
class DashboardBundle:
    """Everything the views need to render one upload."""

    summary: List[SummarySection]
    charts: List[ChartSection]
    tables: List[TableSection]
    metadata: BundleMetadata

    def to_dict(self) -> Dict[str, Any]:
        payload = asdict(self)
        payload["metadata"]["processed_at"] = self.metadata.processed_at.isoformat()
        return payload
