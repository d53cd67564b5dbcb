from __future__ import annotations

import logging
import math
from enum import Enum
from typing import Any

from ..models.options import ParserOptions, ViewerConfig
from ..models.table import ColumnDef, ParsedTable
from ..parsing.errors import TableError
from ..parsing.serializer import to_csv_text
from .loader import LoadedDocument, load_table

"""Display model for one loaded table.

State transitions: loading -> (ready | error). A new load replaces the
previous document; nothing is kept across loads.

Rendering limits are applied here, never in the parser:
- at most ``max_columns`` header/row cells (``columns_truncated`` tells the caller)
- ``rows_per_page`` rows per page, 1-based pages
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ViewState",
    "TableView",
]


class ViewState(Enum):
    """Lifecycle of a TableView.

    - LOADING: a load is in progress (or nothing loaded yet)
    - READY: a document is loaded and can be rendered
    - ERROR: the last load failed; ``error`` holds the message for the user
    """
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


def _display(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TableView:
    """Paginated, column-capped view over a LoadedDocument."""

    def __init__(self, config: ViewerConfig | None = None) -> None:
        self.config = (config or ViewerConfig()).validate()
        self.state = ViewState.LOADING
        self.document: LoadedDocument | None = None
        self.error: str | None = None
        self.current_page = 1

    def load(self, name: str, content: bytes | str, options: ParserOptions | None = None) -> TableView:
        """Load ``content``; on failure the view moves to ERROR with the parser message."""
        self.state = ViewState.LOADING
        self.document = None
        self.error = None
        self.current_page = 1
        try:
            document = load_table(name, content, options)
        except TableError as e:
            logger.error("view: failed to load %s: %s", name, e)
            self.state = ViewState.ERROR
            self.error = str(e) or "Failed to load file"
            return self
        self.show(document)
        return self

    def show(self, document: LoadedDocument) -> None:
        self.document = document
        self.error = None
        self.current_page = 1
        self.state = ViewState.READY

    @property
    def table(self) -> ParsedTable:
        if self.document is None:
            raise RuntimeError(f"no table loaded (state={self.state.value})")
        return self.document.table

    # --- sheets -------------------------------------------------------------

    @property
    def sheet_selector(self) -> list[str]:
        """Sheet names to offer; empty unless the workbook has several sheets."""
        if self.document is None or not self.document.is_multi_sheet:
            return []
        return self.document.sheet_names

    def select_sheet(self, index: int) -> None:
        if self.document is None:
            raise RuntimeError("no document loaded")
        try:
            self.document = self.document.select_sheet(index)
        except TableError as e:
            logger.error("view: sheet %d: %s", index, e)
            self.state = ViewState.ERROR
            self.error = str(e)
            return
        self.current_page = 1
        self.state = ViewState.READY

    # --- columns ------------------------------------------------------------

    @property
    def visible_columns(self) -> list[ColumnDef]:
        return self.table.columns[: self.config.max_columns]

    @property
    def headers(self) -> list[str]:
        return [c.label for c in self.visible_columns]

    @property
    def columns_truncated(self) -> bool:
        return self.table.column_count > self.config.max_columns

    @property
    def hidden_column_count(self) -> int:
        return max(self.table.column_count - self.config.max_columns, 0)

    # --- rows / pages -------------------------------------------------------

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.table.row_count / self.config.rows_per_page))

    def go_to_page(self, page: int) -> int:
        """Move to ``page``, clamped to 1..total_pages; returns the new page."""
        self.current_page = min(max(page, 1), self.total_pages)
        return self.current_page

    def page_rows(self, page: int | None = None) -> list[list[str]]:
        """Cells of the visible columns for ``page`` (current page when None)."""
        if page is not None:
            self.go_to_page(page)
        size = self.config.rows_per_page
        start = (self.current_page - 1) * size
        fields = [c.field for c in self.visible_columns]
        return [
            [_display(record.get(f)) for f in fields]
            for record in self.table.rows[start : start + size]
        ]

    def to_text(self, delimiter: str = ",") -> str:
        """Body for the save/re-upload flow (all columns, not just visible ones)."""
        return to_csv_text(self.table, delimiter=delimiter)
