"""Table parsing & normalization.

Control flow::

    name -> detect_format -> (detect_delimiter ->) parse_text | parse_workbook
         -> row matrix -> build_table -> ParsedTable

``to_csv_text`` goes the other way for the save/re-upload flow.
"""

from .delimiter import detect_delimiter
from .errors import EmptyDataError, EmptyInputError, NoSheetError, ParseError, TableError
from .formats import detect_format, get_extension
from .serializer import to_csv_text
from .table import build_columns, build_table, is_row_index_column
from .text import parse_text
from .workbook import parse_workbook

__all__ = [
    "EmptyDataError",
    "EmptyInputError",
    "NoSheetError",
    "ParseError",
    "TableError",
    "build_columns",
    "build_table",
    "detect_delimiter",
    "detect_format",
    "get_extension",
    "is_row_index_column",
    "parse_text",
    "parse_workbook",
    "to_csv_text",
]
