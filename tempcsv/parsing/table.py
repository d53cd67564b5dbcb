from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from typing import Any

from ..models.options import ParserOptions
from ..models.table import ColumnDef, ParsedTable, ParseWarning, RowMatrix
from .errors import EmptyDataError, ParseError

"""Row matrix -> ParsedTable.

Steps:
1. Drop blank rows (when skip_empty_lines)
2. Split off the header row (when has_headers)
3. Decide whether the first column is a synthetic 1..N row index
4. Build ColumnDefs (index column excluded) and one record per data row
5. Optionally coerce numeric/boolean-looking cells
"""

logger = logging.getLogger(__name__)

__all__ = [
    "is_row_index_column",
    "unique_field_names",
    "build_columns",
    "coerce_value",
    "build_table",
]

_DIGITS_RE = re.compile(r"[0-9]+")
_INT_RE = re.compile(r"\s*-?[0-9]+\s*")
_FLOAT_RE = re.compile(r"\s*-?([0-9]+\.?|\.[0-9]+|[0-9]+\.[0-9]+)([eE][-+]?[0-9]+)?\s*")


def is_row_index_column(values: Sequence[str | None]) -> bool:
    """Decide whether ``values`` (first column, one per data row) is a row index.

    True when every value is an unsigned integer after trimming AND either
    - the values are exactly 1, 2, ..., N in row order, or
    - the first value is "1" and the last value is exactly N (the row count).

    The second rule accepts gaps in between; it also means [1, 5] is not an
    index for two rows because 5 != 2.
    """
    if not values:
        return False
    trimmed: list[str] = []
    for v in values:
        if v is None:
            return False
        t = str(v).strip()
        if not _DIGITS_RE.fullmatch(t):
            return False
        trimmed.append(t)

    if all(int(t) == pos for pos, t in enumerate(trimmed, start=1)):
        return True
    return trimmed[0] == "1" and trimmed[-1] == str(len(trimmed))


def unique_field_names(headers: Sequence[str]) -> list[str]:
    """Trim header names and suffix duplicates (``a``, ``a_1``, ``a_2``)."""
    seen: set[str] = set()
    fields: list[str] = []
    for raw in headers:
        name = str(raw).strip()
        candidate = name
        n = 0
        while candidate in seen:
            n += 1
            candidate = f"{name}_{n}"
        seen.add(candidate)
        fields.append(candidate)
    return fields


def build_columns(
    has_row_index: bool,
    headers: Sequence[str] | None = None,
    width: int = 0,
) -> list[ColumnDef]:
    """Build display columns, excluding the row-index column when detected.

    Header mode (``headers`` given): field = unique trimmed header, label =
    header text or "Column N". Positional mode: ``width`` columns named
    ``ColumnN`` / "Column N". N is 1-based among the remaining columns.
    """
    start = 1 if has_row_index else 0
    if headers is not None:
        fields = unique_field_names(headers)
        return [
            ColumnDef(
                field=fld,
                label=str(raw).strip() or f"Column {pos}",
                sortable=True,
            )
            for pos, (fld, raw) in enumerate(zip(fields[start:], headers[start:]), start=1)
        ]
    return [
        ColumnDef(field=f"Column{pos}", label=f"Column {pos}", sortable=True)
        for pos in range(1, max(width - start, 0) + 1)
    ]


def coerce_value(text: str) -> Any:
    """Convert a boolean- or numeric-looking string; anything else is returned as is."""
    lowered = text.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if _INT_RE.fullmatch(text):
        return int(text)
    if _FLOAT_RE.fullmatch(text):
        return float(text)
    return text


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _is_blank(row: Sequence[str]) -> bool:
    return all(str(c).strip() == "" for c in row)


def build_table(
    rows: RowMatrix,
    options: ParserOptions | None = None,
    *,
    meta: dict[str, Any] | None = None,
    warnings: Sequence[ParseWarning] = (),
) -> ParsedTable:
    """Normalize a row matrix into a ParsedTable.

    Raises:
        ParseError: no rows are left and the tokenizer reported problems
        EmptyDataError: no data rows are left
    """
    options = (options or ParserOptions()).validate()
    collected: list[ParseWarning] = list(warnings)

    # keep the 1-based source position for warnings
    numbered = [(i, row) for i, row in enumerate(rows, start=1)]
    if options.skip_empty_lines:
        numbered = [(i, row) for i, row in numbered if not _is_blank(row)]

    if not numbered:
        if collected:
            raise ParseError(collected[0].message)
        raise EmptyDataError("File contains no data")

    headers: list[str] | None = None
    if options.has_headers:
        headers = [str(h).strip() for h in numbered[0][1]]
        numbered = numbered[1:]
        if not numbered:
            if collected:
                raise ParseError(collected[0].message)
            raise EmptyDataError("File contains a header row but no data rows")

    first_column = [row[0] if row else None for _, row in numbered]
    has_row_index = (
        options.detect_row_index
        and len(numbered) >= 2
        and is_row_index_column(first_column)
    )

    columns = build_columns(has_row_index, headers=headers, width=len(numbered[0][1]))
    fields = [c.field for c in columns]
    start = 1 if has_row_index else 0

    records: list[dict[str, Any]] = []
    for source_row, row in numbered:
        cells = list(row[start:])
        if len(cells) > len(fields):
            dropped = cells[len(fields):]
            cells = cells[: len(fields)]
        else:
            dropped = []
        # warn only when a dropped cell holds data
        if not _is_blank(dropped):
            collected.append(
                ParseWarning(
                    row=source_row,
                    code="TOO_MANY_FIELDS",
                    message=f"row {source_row}: expected {len(fields)} fields, saw {len(fields) + len(dropped)}; extra fields dropped",
                )
            )
        record: dict[str, Any] = {}
        for fld, cell in zip(fields, cells):
            if options.dynamic_typing and cell != "":
                typed = coerce_value(cell)
                source = cell.strip().lower() if isinstance(typed, bool) else cell.strip()
                if not isinstance(typed, str) and _render(typed) != source:
                    collected.append(
                        ParseWarning(
                            row=source_row,
                            code="LOSSY_COERCION",
                            message=f"row {source_row} field {fld!r}: {cell!r} coerced to {typed!r}",
                        )
                    )
                record[fld] = typed
            else:
                record[fld] = cell
        records.append(record)

    for w in collected[len(warnings):]:
        logger.warning("table: %s", w.message)

    table_meta = dict(meta or {})
    table_meta.setdefault("fields", fields)
    logger.debug(
        "table: %d columns x %d rows (row_index=%s headers=%s)",
        len(columns), len(records), has_row_index, options.has_headers,
    )
    return ParsedTable(
        columns=columns,
        rows=records,
        has_row_index=has_row_index,
        meta=table_meta,
        warnings=collected,
    )
