from __future__ import annotations

from enum import Enum

"""TableFormat / FormatFamily enums.

A format is resolved once from the file name and carries its family, so the
rest of the code dispatches on ``family`` instead of comparing extension strings.
"""

__all__ = [
    "FormatFamily",
    "TableFormat",
]


class FormatFamily(Enum):
    """How the bytes of a format are turned into rows.

    - TEXT: delimited text (tokenized by the text parser)
    - WORKBOOK: binary spreadsheet container with one or more sheets
    """
    TEXT = "text"
    WORKBOOK = "workbook"


class TableFormat(Enum):
    CSV = "csv"
    TSV = "tsv"
    XLSX = "xlsx"
    XLS = "xls"
    ODS = "ods"

    @property
    def family(self) -> FormatFamily:
        if self in (TableFormat.CSV, TableFormat.TSV):
            return FormatFamily.TEXT
        return FormatFamily.WORKBOOK

    @property
    def is_binary(self) -> bool:
        return self.family is FormatFamily.WORKBOOK

    @property
    def extension(self) -> str:
        return f".{self.value}"
