from __future__ import annotations

import io
import logging
import math
from datetime import date, datetime, time
from typing import Any

import pandas as pd

from ..models.table import RowMatrix, Workbook
from ..models.table_format import TableFormat
from .errors import EmptyInputError, NoSheetError, ParseError, TableError

"""Binary workbook (xlsx / xls / ods) -> Workbook.

pandas reads every sheet headerless with NA detection off; every cell is then
rendered to text so that the output never contains None or NaN.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ENGINES",
    "cell_to_text",
    "parse_workbook",
]

# pandas reader engine per container format
ENGINES: dict[TableFormat, str] = {
    TableFormat.XLSX: "openpyxl",
    TableFormat.XLS: "xlrd",
    TableFormat.ODS: "odf",
}


def cell_to_text(value: Any) -> str:
    """Render one workbook cell as text.

    >>> cell_to_text(3.0), cell_to_text(True), cell_to_text(None)
    ('3', 'true', '')
    >>> cell_to_text(datetime(2024, 5, 1))
    '2024-05-01'
    """
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def _frame_to_matrix(df: pd.DataFrame) -> RowMatrix:
    return [[cell_to_text(v) for v in record] for record in df.itertuples(index=False, name=None)]


def parse_workbook(content: bytes, fmt: TableFormat) -> Workbook:
    """Read all sheets of a workbook, in source order.

    Raises:
        EmptyInputError: ``content`` is empty
        NoSheetError: the workbook has no sheets
        ParseError: the container could not be decoded
    """
    if not content:
        raise EmptyInputError("workbook content is empty")
    engine = ENGINES.get(fmt)
    if engine is None:
        raise ParseError(f"{fmt.value} is not a workbook format")

    names: list[str] = []
    sheets: list[RowMatrix] = []
    try:
        with pd.ExcelFile(io.BytesIO(content), engine=engine) as xls:
            if not xls.sheet_names:
                raise NoSheetError("No sheet found in file")
            for name in xls.sheet_names:
                df = xls.parse(name, header=None, dtype=object, na_filter=False)
                names.append(str(name))
                sheets.append(_frame_to_matrix(df))
    except TableError:
        raise
    except Exception as e:
        # zipfile / xlrd / odf / openpyxl all raise their own types
        raise ParseError(str(e) or type(e).__name__) from e

    logger.debug("workbook: %s sheets=%s", fmt.value, names)
    return Workbook(sheet_names=names, sheets_data=sheets)
