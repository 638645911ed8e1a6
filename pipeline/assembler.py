"""Entry point of the pipeline: one uploaded file in, one bundle out.

``process_file`` picks a parser from the file extension, filters columns
right after parsing, then builds the table, chart and summary sections for
each sheet.  Any failure aborts the whole upload; there is no partial
bundle.
"""

from __future__ import annotations

import io
import logging
import os
import pathlib
from dataclasses import dataclass
from datetime import datetime
from typing import BinaryIO, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .config import DashboardSettings
from .errors import ReadError, UnsupportedFormat
from .models import (
    BundleMetadata,
    ChartSection,
    DashboardBundle,
    RawTable,
    SectionMeta,
    SummarySection,
    TableSection,
)
from .parsers import (
    NaiveDelimitedParser,
    TableParser,
    WorkbookParser,
    describe_opaque_document,
)
from .projection import build_chart_section, build_summary_section, build_table_section

logger = logging.getLogger(__name__)

FileSource = Union[str, pathlib.Path, BinaryIO]

EXCEL = "excel"
CSV = "csv"
PDF = "pdf"

FILE_TYPES: Dict[str, str] = {
    "xlsx": EXCEL,
    "xls": EXCEL,
    "csv": CSV,
    "pdf": PDF,
}

Titles = Callable[[Optional[str]], Tuple[str, str, str]]


def _csv_titles(_: Optional[str]) -> Tuple[str, str, str]:
    return "Dados CSV", "Gráfico CSV", "Análise Detalhada CSV"


def _sheet_titles(sheet: Optional[str]) -> Tuple[str, str, str]:
    return f"Planilha: {sheet}", f"Gráfico: {sheet}", f"Análise: {sheet}"


TITLES: Dict[str, Titles] = {CSV: _csv_titles, EXCEL: _sheet_titles}


def file_extension(file_name: str) -> str:
    return file_name.rsplit(".", 1)[-1].lower()


def detect_file_type(file_name: str) -> str:
    """Return ``excel``, ``csv`` or ``pdf`` for a file name.

    Raises
    ------
    UnsupportedFormat
        When the extension is not one of ``.xlsx``, ``.xls``, ``.csv``,
        ``.pdf``.
    """

    extension = file_extension(file_name)
    try:
        return FILE_TYPES[extension]
    except KeyError:
        raise UnsupportedFormat(extension) from None


def _source_name(source: FileSource) -> str:
    if isinstance(source, (str, pathlib.Path)):
        return os.path.basename(str(source))
    name = getattr(source, "name", None)
    if not name:
        raise ValueError("Informe um arquivo com nome e extensão.")
    return os.path.basename(str(name))


def read_bytes(source: FileSource) -> bytes:
    try:
        if isinstance(source, (str, pathlib.Path)):
            with open(source, "rb") as f:
                return f.read()
        if hasattr(source, "getvalue"):
            return source.getvalue()
        source.seek(0)
        return source.read()
    except OSError as exc:
        raise ReadError(str(exc)) from exc


@dataclass
class SheetResult:
    table: TableSection
    summary: SummarySection
    chart: Optional[ChartSection]

    @property
    def row_count(self) -> int:
        return self.table.meta.total_rows


def process_sheet(
    sheet_name: Optional[str],
    table: RawTable,
    file_type: str,
    file_name: str,
    settings: DashboardSettings,
) -> SheetResult:
    table_title, chart_title, summary_title = TITLES[file_type](sheet_name)
    return SheetResult(
        table=build_table_section(table_title, table, file_type, file_name),
        summary=build_summary_section(
            summary_title,
            table,
            file_type,
            file_name,
            settings.thousands_separator,
            settings.decimal_separator,
        ),
        chart=build_chart_section(
            chart_title, table, file_type, file_name, row_cap=settings.chart_row_cap
        ),
    )


def _opaque_bundle(file_name: str, size: int, processed_at: datetime) -> DashboardBundle:
    table, insights = describe_opaque_document(file_name, size)
    return DashboardBundle(
        summary=[
            SummarySection(
                title="Resumo PDF",
                insights=insights,
                meta=SectionMeta(0, 0, PDF, file_name),
            )
        ],
        charts=[],
        tables=[
            TableSection(
                title="Informações do PDF",
                records=table.records(),
                columns=table.labels,
                meta=SectionMeta(table.row_count, len(table.headers), PDF, file_name),
            )
        ],
        metadata=BundleMetadata(
            file_name=file_name,
            file_type=PDF,
            processed_at=processed_at,
            total_records=0,
        ),
    )


def process_file(
    source: FileSource,
    selected_columns: Optional[Sequence[str]] = None,
    *,
    csv_parser: Optional[TableParser] = None,
    settings: Optional[DashboardSettings] = None,
    now: Optional[Callable[[], datetime]] = None,
) -> DashboardBundle:
    """Parse ``source`` and build the dashboard bundle.

    Parameters
    ----------
    source:
        A path or a file-like object exposing ``name`` (Streamlit's
        ``UploadedFile`` or a ``BytesIO`` with ``name`` set).
    selected_columns:
        Optional allow-list of header labels.  Applied to every sheet before
        any analysis; unknown labels are ignored.
    csv_parser:
        Parser used for ``.csv`` files.  Defaults to
        :class:`NaiveDelimitedParser`.
    """

    settings = settings or DashboardSettings()
    clock = now or datetime.now
    file_name = _source_name(source)
    file_type = detect_file_type(file_name)

    content = read_bytes(source)
    logger.info("Processing %s (%s, %d bytes)", file_name, file_type, len(content))

    if file_type == PDF:
        return _opaque_bundle(file_name, len(content), clock())

    parser: TableParser = WorkbookParser() if file_type == EXCEL else (
        csv_parser or NaiveDelimitedParser()
    )
    sheets = [
        (sheet_name, table.select(selected_columns))
        for sheet_name, table in parser.parse(content, file_name)
    ]

    results: List[SheetResult] = [
        process_sheet(sheet_name, table, file_type, file_name, settings)
        for sheet_name, table in sheets
    ]
    total_records = sum(result.row_count for result in results)
    logger.info("Built %d sheet(s), %d record(s) from %s", len(results), total_records, file_name)

    return DashboardBundle(
        summary=[r.summary for r in results],
        charts=[r.chart for r in results if r.chart is not None],
        tables=[r.table for r in results],
        metadata=BundleMetadata(
            file_name=file_name,
            file_type=file_type,
            processed_at=clock(),
            total_records=total_records,
        ),
    )


def available_columns(
    source: FileSource, *, csv_parser: Optional[TableParser] = None
) -> List[str]:
    """Header labels across all sheets, first occurrence order.

    Used to offer the column allow-list before the real processing run.
    Opaque documents have no columns to choose from.
    """

    file_name = _source_name(source)
    file_type = detect_file_type(file_name)
    if file_type == PDF:
        return []
    content = read_bytes(source)
    parser: TableParser = WorkbookParser() if file_type == EXCEL else (
        csv_parser or NaiveDelimitedParser()
    )
    columns: List[str] = []
    for _, table in parser.parse(content, file_name):
        columns.extend(h for h in table.headers if h and h not in columns)
    return columns


def process_bytes(content: bytes, file_name: str, **kwargs) -> DashboardBundle:
    """Convenience wrapper for in-memory content."""

    buffer = io.BytesIO(content)
    buffer.name = file_name
    return process_file(buffer, **kwargs)
