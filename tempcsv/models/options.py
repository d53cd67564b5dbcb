from __future__ import annotations

from dataclasses import dataclass

"""Per-call configuration structures.

ParserOptions is validated once at the entry point of every parse call;
ViewerConfig only affects the display model and is never seen by the parser.
"""

__all__ = [
    "SUPPORTED_DELIMITERS",
    "OptionsError",
    "ParserOptions",
    "ViewerConfig",
]

# comma, semicolon, tab, pipe
SUPPORTED_DELIMITERS: tuple[str, ...] = (",", ";", "\t", "|")

DEFAULT_MAX_COLUMNS = 100
DEFAULT_ROWS_PER_PAGE = 50


class OptionsError(ValueError):
    """Raised when a ParserOptions / ViewerConfig value is out of range."""


@dataclass(frozen=True)
class ParserOptions:
    """Options consumed by the table parser.

    Attributes:
        delimiter: Field delimiter. Empty string means auto-detect.
        has_headers: Row 0 holds field names.
        detect_row_index: Drop a leading 1..N sequence column.
        skip_empty_lines: Skip rows whose cells are all blank.
        dynamic_typing: Convert numeric/boolean-looking cells to int/float/bool.
    """
    delimiter: str = ""
    has_headers: bool = True
    detect_row_index: bool = True
    skip_empty_lines: bool = True
    dynamic_typing: bool = False

    def validate(self) -> ParserOptions:
        if self.delimiter and self.delimiter not in SUPPORTED_DELIMITERS:
            raise OptionsError(
                f"unsupported delimiter {self.delimiter!r}; expected one of {list(SUPPORTED_DELIMITERS)}"
            )
        return self


@dataclass(frozen=True)
class ViewerConfig:
    """Display-time limits applied by the caller, not the parser."""
    max_columns: int = DEFAULT_MAX_COLUMNS
    rows_per_page: int = DEFAULT_ROWS_PER_PAGE

    def validate(self) -> ViewerConfig:
        # bool is an int subclass; reject it explicitly
        for name in ("max_columns", "rows_per_page"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise OptionsError(f"{name} must be a positive integer, got {value!r}")
        return self
