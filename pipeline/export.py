"""CSV export of table sections for the download button."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional, Sequence

from .models import Record

BOM = "\ufeff"
_NEEDS_QUOTES = (",", '"', "\n")


def escape_csv_value(value: Any) -> str:
    if value is None:
        return ""
    text = str(value)
    if any(token in text for token in _NEEDS_QUOTES):
        return '"' + text.replace('"', '""') + '"'
    return text


def table_to_csv(records: Sequence[Record], columns: Sequence[str]) -> str:
    """Serialise records with a UTF-8 BOM so spreadsheet apps pick the encoding."""

    lines = [",".join(escape_csv_value(col) for col in columns)]
    lines.extend(
        ",".join(escape_csv_value(row.get(col)) for col in columns) for row in records
    )
    return BOM + "\n".join(lines)


def export_filename(title: str, today: Optional[date] = None) -> str:
    """``Planilha: Vendas 2024`` -> ``Planilha_Vendas_2024_2024-05-01.csv``."""

    today = today or date.today()
    clean = re.sub(r"[^a-z0-9\s]", "", title, flags=re.IGNORECASE)
    clean = re.sub(r"\s+", "_", clean)
    return f"{clean}_{today.isoformat()}.csv"
