from __future__ import annotations

import csv
from collections.abc import Mapping, Sequence
from typing import Any

import pandas as pd

from ..models.options import OptionsError, SUPPORTED_DELIMITERS
from ..models.table import ColumnDef, ParsedTable

"""Reverse serializer: records + columns -> delimited text.

Used by the save/re-upload flow. The header row carries field keys, not
labels, so re-parsing yields the same keys. Quoting is minimal: only cells
containing the delimiter, a quote or a line break are quoted ("" escapes).
"""

__all__ = [
    "to_delimited_text",
    "to_csv_text",
]


def _render_cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_delimited_text(
    rows: Sequence[Mapping[str, Any]],
    columns: Sequence[ColumnDef],
    *,
    delimiter: str = ",",
) -> str:
    """Serialize ``rows`` in ``columns`` order. Missing fields become ""."""
    if delimiter not in SUPPORTED_DELIMITERS:
        raise OptionsError(f"unsupported delimiter {delimiter!r}")
    if not columns:
        return ""
    fields = [c.field for c in columns]
    frame = pd.DataFrame(
        [[_render_cell(row.get(f)) for f in fields] for row in rows],
        columns=fields,
        dtype=object,
    )
    return frame.to_csv(
        index=False,
        sep=delimiter,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        quotechar='"',
        doublequote=True,
    )


def to_csv_text(table: ParsedTable, delimiter: str = ",") -> str:
    """Serialize a ParsedTable (e.g. for re-upload after editing)."""
    return to_delimited_text(table.rows, table.columns, delimiter=delimiter)
