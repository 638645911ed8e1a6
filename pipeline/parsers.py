"""Readers turning uploaded bytes into one or more :class:`RawTable`.

Every parser exposes ``parse(content, file_name)`` and returns a list of
``(sheet_name, RawTable)`` pairs.  Delimited text has a single unnamed
sheet (``None``); workbooks yield one pair per non-empty sheet in workbook
order.
"""

from __future__ import annotations

import codecs
import io
import logging
import math
from typing import Any, List, Optional, Protocol, Tuple

import chardet
import numpy as np
import pandas as pd

from .errors import ParseError
from .models import InsightEntry, RawTable

logger = logging.getLogger(__name__)

Sheet = Tuple[Optional[str], RawTable]

DELIMITER = ","


class TableParser(Protocol):
    def parse(self, content: bytes, file_name: str) -> List[Sheet]:
        ...


def normalise_cell(value: Any) -> Any:
    """Map pandas/NumPy cell values onto plain Python values.

    Missing values become ``""`` and floats without a fractional part become
    ``int`` so ``10.0`` is rendered and counted as ``10``.
    """

    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, np.generic):
        return normalise_cell(value.item())
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return int(value)
    return value


def _split_line(line: str) -> List[str]:
    return [cell.strip().replace('"', "") for cell in line.split(DELIMITER)]


class NaiveDelimitedParser:
    """Comma splitter without quoting rules.

    Quotes are stripped from every cell and commas inside quoted fields
    still split the field.  Swap in :class:`PandasDelimitedParser` when
    the input needs a real CSV grammar.
    """

    def parse(self, content: bytes, file_name: str) -> List[Sheet]:
        text = content.decode("utf-8-sig", errors="replace")
        lines = [line for line in text.split("\n") if line.strip()]
        if not lines:
            raise ParseError("Arquivo CSV vazio")
        headers = _split_line(lines[0])
        rows = [_split_line(line) for line in lines[1:]]
        logger.debug("Split %s into %d columns and %d rows", file_name, len(headers), len(rows))
        return [(None, RawTable(headers=headers, rows=rows))]


def _detect_encoding(raw: bytes) -> str:
    return chardet.detect(raw[:4096])["encoding"] or "utf-8"


def frame_to_table(df: pd.DataFrame) -> Optional[RawTable]:
    """Convert a header-less frame (first row = labels) into a table.

    Returns ``None`` when the frame has no rows left after dropping fully
    blank ones.
    """

    df = df.dropna(how="all")
    if df.empty:
        return None
    values = [[normalise_cell(v) for v in row] for row in df.itertuples(index=False)]
    headers = [str(v) for v in values[0]]
    return RawTable(headers=headers, rows=values[1:])


class PandasDelimitedParser:
    """Grammar-aware CSV reader backed by :func:`pandas.read_csv`."""

    def parse(self, content: bytes, file_name: str) -> List[Sheet]:
        if content.startswith(codecs.BOM_UTF8):
            content, encoding = content[len(codecs.BOM_UTF8):], "utf-8"
        else:
            encoding = _detect_encoding(content)
        if not content.strip():
            raise ParseError("Arquivo CSV vazio")
        try:
            df = pd.read_csv(
                io.BytesIO(content),
                encoding=encoding,
                header=None,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
            )
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
            raise ParseError(f"Erro ao processar arquivo CSV: {exc}") from exc
        table = frame_to_table(df)
        if table is None:
            raise ParseError("Arquivo CSV vazio")
        return [(None, table)]


class WorkbookParser:
    """Reads every sheet of an ``.xlsx``/``.xls`` workbook."""

    def parse(self, content: bytes, file_name: str) -> List[Sheet]:
        try:
            frames = pd.read_excel(
                io.BytesIO(content), sheet_name=None, header=None, dtype=object
            )
        except Exception as exc:
            raise ParseError(f"Erro ao processar arquivo Excel: {exc}") from exc

        sheets: List[Sheet] = []
        for sheet_name, df in frames.items():
            table = frame_to_table(df)
            if table is None:
                logger.info("Skipping empty sheet %r in %s", sheet_name, file_name)
                continue
            sheets.append((str(sheet_name), table))
        return sheets


def format_megabytes(size: int) -> str:
    return f"{size / 1024 / 1024:.2f} MB"


def describe_opaque_document(
    file_name: str, size: int, kind: str = "PDF"
) -> Tuple[RawTable, List[InsightEntry]]:
    """Property table and summary for files whose content is not extracted."""

    size_text = format_megabytes(size)
    table = RawTable(
        headers=["propriedade", "valor"],
        rows=[
            ["Nome do Arquivo", file_name],
            ["Tamanho", size_text],
            ["Tipo", kind],
        ],
    )
    summary = [
        InsightEntry("Tipo de Arquivo", kind),
        InsightEntry("Tamanho", size_text),
    ]
    return table, summary
