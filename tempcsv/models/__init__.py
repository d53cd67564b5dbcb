"""Domain models for the Temp CSV table engine.

Everything here is a plain frozen dataclass or enum; parsing logic lives in
``tempcsv.parsing`` and display logic in ``tempcsv.services``.
"""

from .options import ParserOptions, ViewerConfig
from .table import ColumnDef, ParsedTable, ParseWarning, Workbook
from .table_format import FormatFamily, TableFormat

__all__ = [
    # Configuration models
    "ParserOptions",
    "ViewerConfig",
    # Table models
    "ColumnDef",
    "ParsedTable",
    "ParseWarning",
    "Workbook",
    "FormatFamily",
    "TableFormat",
]
