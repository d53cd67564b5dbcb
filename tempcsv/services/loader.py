from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..models.options import ParserOptions
from ..models.table import ParsedTable, ParseWarning, RowMatrix, Workbook
from ..models.table_format import FormatFamily, TableFormat
from ..parsing.delimiter import detect_delimiter
from ..parsing.errors import EmptyInputError, ParseError
from ..parsing.formats import detect_format
from ..parsing.table import build_table
from ..parsing.text import parse_text
from ..parsing.workbook import parse_workbook

"""Load service: file name + content -> LoadedDocument.

Used by the upload preview (local bytes), the remote fetch (bytes handed over
by an HTTP client) and the re-fetch after save. Each call is independent and
keeps no state between calls.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "LoadedDocument",
    "decode_text",
    "load_table",
    "load_file",
]

Content = bytes | str


@dataclass(frozen=True)
class _RawSource:
    rows: RowMatrix
    meta: dict[str, Any]
    workbook: Workbook | None = None
    warnings: list[ParseWarning] = field(default_factory=list)


@dataclass(frozen=True)
class LoadedDocument:
    """One loaded file: its format, the active table and (for workbooks) all sheets."""
    name: str
    format: TableFormat
    table: ParsedTable
    options: ParserOptions
    workbook: Workbook | None = None
    sheet_index: int = 0

    @property
    def sheet_names(self) -> list[str]:
        return list(self.workbook.sheet_names) if self.workbook else []

    @property
    def sheet_name(self) -> str:
        return self.workbook.sheet_names[self.sheet_index] if self.workbook else ""

    @property
    def is_multi_sheet(self) -> bool:
        return self.workbook is not None and self.workbook.is_multi_sheet

    def select_sheet(self, index: int) -> LoadedDocument:
        """Return a new document whose active table is sheet ``index``."""
        if self.workbook is None:
            if index != 0:
                raise IndexError(f"{self.format.value} files have a single table")
            return self
        table = _sheet_table(self.workbook, index, self.format, self.options)
        return dataclasses.replace(self, table=table, sheet_index=index)


def decode_text(content: Content) -> str:
    """Decode text content as UTF-8, dropping a leading BOM."""
    if isinstance(content, str):
        return content
    try:
        return bytes(content).decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"file is not valid UTF-8 text: {e}") from e


def _read_text(content: Content, fmt: TableFormat, options: ParserOptions) -> _RawSource:
    text = decode_text(content)
    if not text.strip():
        raise EmptyInputError("CSV content is empty")
    if fmt is TableFormat.TSV:
        delimiter = "\t"
    else:
        delimiter = options.delimiter or detect_delimiter(text)
    result = parse_text(text, delimiter, skip_empty_lines=options.skip_empty_lines)
    meta = {"format": fmt.value, "delimiter": result.delimiter}
    return _RawSource(rows=result.rows, meta=meta, warnings=result.warnings)


def _read_workbook(content: Content, fmt: TableFormat, options: ParserOptions) -> _RawSource:
    if isinstance(content, str):
        raise ParseError(f"{fmt.value} content must be binary, got text")
    workbook = parse_workbook(bytes(content), fmt)
    meta = {"format": fmt.value, "sheet_name": workbook.sheet_names[0], "sheet_index": 0}
    return _RawSource(rows=workbook.sheet(0), meta=meta, workbook=workbook)


_READERS: dict[FormatFamily, Callable[[Content, TableFormat, ParserOptions], _RawSource]] = {
    FormatFamily.TEXT: _read_text,
    FormatFamily.WORKBOOK: _read_workbook,
}


def _sheet_table(workbook: Workbook, index: int, fmt: TableFormat, options: ParserOptions) -> ParsedTable:
    rows = workbook.sheet(index)
    meta = {"format": fmt.value, "sheet_name": workbook.sheet_names[index], "sheet_index": index}
    return build_table(rows, options, meta=meta)


def load_table(
    name: str,
    content: Content,
    options: ParserOptions | None = None,
    *,
    sheet_index: int = 0,
) -> LoadedDocument:
    """Parse ``content`` according to the format of ``name``.

    Args:
        name: File name or URL; only its extension is used
        content: Text (csv/tsv) or raw bytes (any format)
        options: Parser options, defaults when None
        sheet_index: Sheet to activate for workbooks

    Raises:
        TableError subclasses (EmptyInputError, ParseError, EmptyDataError, NoSheetError)
        IndexError: ``sheet_index`` is not 0 for a text format
    """
    options = (options or ParserOptions()).validate()
    fmt = detect_format(name)
    if fmt.family is FormatFamily.TEXT and sheet_index != 0:
        raise IndexError(f"{fmt.value} files have a single table")
    logger.debug("load: %s as %s", name, fmt.value)
    source = _READERS[fmt.family](content, fmt, options)

    if source.workbook is not None and sheet_index != 0:
        table = _sheet_table(source.workbook, sheet_index, fmt, options)
    else:
        table = build_table(source.rows, options, meta=source.meta, warnings=source.warnings)

    return LoadedDocument(
        name=name,
        format=fmt,
        table=table,
        options=options,
        workbook=source.workbook,
        sheet_index=sheet_index,
    )


def load_file(path: Path, options: ParserOptions | None = None, *, sheet_index: int = 0) -> LoadedDocument:
    """Read ``path`` fully into memory and load it."""
    return load_table(path.name, path.read_bytes(), options, sheet_index=sheet_index)
