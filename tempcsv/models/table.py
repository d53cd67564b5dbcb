from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""Table models: ColumnDef, ParsedTable, Workbook.

A ParsedTable is built once per load and never mutated afterwards; the
display layer only reads from it.
"""

__all__ = [
    "ColumnDef",
    "ParseWarning",
    "ParsedTable",
    "RowMatrix",
    "Workbook",
]

# Ordered rows of ordered string cells. Row 0 is the header row when headers are enabled.
RowMatrix = list[list[str]]


@dataclass(frozen=True)
class ColumnDef:
    """Display metadata for one logical data column."""
    field: str  # unique record key
    label: str  # display name, "Column N" when the header is blank
    sortable: bool = True


@dataclass(frozen=True)
class ParseWarning:
    """Non-fatal problem found while parsing; never aborts the parse.

    Attributes:
        row: 1-based source row, -1 when unknown
        code: UPPER_SNAKE classification
        message: Human readable description
    """
    row: int
    code: str
    message: str


@dataclass(frozen=True)
class ParsedTable:
    columns: list[ColumnDef]
    rows: list[dict[str, Any]]
    has_row_index: bool = False
    meta: dict[str, Any] = field(default_factory=dict)
    warnings: list[ParseWarning] = field(default_factory=list)

    @property
    def fields(self) -> list[str]:
        return [c.field for c in self.columns]

    @property
    def column_count(self) -> int:
        return len(self.columns)

    @property
    def row_count(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class Workbook:
    """All sheets of a binary workbook, in source order.

    Every cell is already a string; empty cells are "".
    """
    sheet_names: list[str]
    sheets_data: list[RowMatrix]

    def __post_init__(self) -> None:
        if len(self.sheet_names) != len(self.sheets_data):
            raise ValueError("sheet_names and sheets_data must have the same length")

    @property
    def sheet_count(self) -> int:
        return len(self.sheet_names)

    @property
    def is_multi_sheet(self) -> bool:
        return len(self.sheet_names) > 1

    def sheet(self, index: int) -> RowMatrix:
        if not 0 <= index < len(self.sheets_data):
            raise IndexError(f"sheet index {index} out of range (0..{len(self.sheets_data) - 1})")
        return self.sheets_data[index]
