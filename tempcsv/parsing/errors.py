from __future__ import annotations

"""Error taxonomy for a single parse attempt.

All four kinds are terminal for the attempt; nothing here retries.
``error_type`` is the UPPER_SNAKE label written to the error log.
"""

__all__ = [
    "TableError",
    "EmptyInputError",
    "ParseError",
    "EmptyDataError",
    "NoSheetError",
]


class TableError(Exception):
    """Base class for every parse failure surfaced to callers."""
    error_type = "TABLE_ERROR"


class EmptyInputError(TableError):
    """Raised when the raw input is empty or whitespace-only."""
    error_type = "EMPTY_INPUT"


class ParseError(TableError):
    """Raised on a structural tokenizer or workbook decoding failure.

    The message of the underlying library is kept verbatim.
    """
    error_type = "PARSE_ERROR"


class EmptyDataError(TableError):
    """Raised when parsing succeeds but no data rows remain."""
    error_type = "EMPTY_DATA"


class NoSheetError(TableError):
    """Raised when a workbook contains no sheets."""
    error_type = "NO_SHEET"
