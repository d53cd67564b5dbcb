from __future__ import annotations

import io
import logging
import re
import warnings
from dataclasses import dataclass, field

import pandas as pd
from pandas.errors import EmptyDataError as PandasEmptyDataError
from pandas.errors import ParserError, ParserWarning

from ..models.table import ParseWarning, RowMatrix
from .delimiter import count_fields, split_records
from .errors import EmptyInputError, ParseError

"""Delimited text -> row matrix.

pandas' C tokenizer does the actual work. It is run headerless with every cell
kept as text (no NA conversion), so the output is exactly what the file says.

- quoted fields may contain the delimiter and line breaks; "" is an escaped quote
- \\n and \\r\\n line endings are both accepted
- empty lines are skipped by default; trailing line breaks always are
- rows are padded to the widest row, so wider rows are kept for build_table
- an unterminated quoted field is fatal (ParseError with the tokenizer message)
"""

logger = logging.getLogger(__name__)

__all__ = [
    "TextParseResult",
    "parse_text",
]

_SKIPPED_LINE_RE = re.compile(r"line (\d+)")


@dataclass(frozen=True)
class TextParseResult:
    rows: RowMatrix
    delimiter: str
    warnings: list[ParseWarning] = field(default_factory=list)


def _collect_warnings(caught: list[warnings.WarningMessage]) -> list[ParseWarning]:
    result: list[ParseWarning] = []
    for w in caught:
        if not issubclass(w.category, ParserWarning):
            # not ours: hand it back to the warnings machinery
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)
            continue
        for line in str(w.message).splitlines():
            line = line.strip()
            if not line:
                continue
            m = _SKIPPED_LINE_RE.search(line)
            result.append(
                ParseWarning(row=int(m.group(1)) if m else -1, code="MALFORMED_ROW", message=line)
            )
    return result


def parse_text(text: str, delimiter: str, *, skip_empty_lines: bool = True) -> TextParseResult:
    """Tokenize delimited ``text`` into rows of string cells.

    Args:
        text: Full decoded file content
        delimiter: Single delimiter character (already detected or forced)
        skip_empty_lines: Drop interior lines with no content at all;
            trailing line breaks are always dropped

    Raises:
        EmptyInputError: ``text`` is empty or whitespace-only
        ParseError: the tokenizer hit a fatal structural error
    """
    if not text or not text.strip():
        raise EmptyInputError("CSV content is empty")
    text = text.lstrip("\ufeff").rstrip("\r\n") + "\n"

    # the tokenizer fixes its width from the first row unless told otherwise
    counts = [count_fields(r, delimiter) for r in split_records(text, skip_blank=skip_empty_lines)]
    width = max(counts, default=1)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ParserWarning)
        try:
            df = pd.read_csv(
                io.StringIO(text),
                sep=delimiter,
                header=None,
                names=list(range(width)),
                index_col=False,
                dtype=str,
                na_filter=False,
                keep_default_na=False,
                skip_blank_lines=skip_empty_lines,
                quotechar='"',
                doublequote=True,
                engine="c",
                on_bad_lines="warn",
            )
        except ParserError as e:
            # partial result is discarded
            raise ParseError(str(e)) from e
        except PandasEmptyDataError as e:
            raise EmptyInputError(str(e)) from e

    row_warnings = _collect_warnings(caught)
    for w in row_warnings:
        logger.warning("csv: %s", w.message)

    # short rows are padded by pandas; padding becomes ""
    rows: RowMatrix = [
        ["" if pd.isna(cell) else str(cell) for cell in record]
        for record in df.itertuples(index=False, name=None)
    ]
    if rows and counts:
        # the header row keeps its own width, not the widest row's
        rows[0] = rows[0][: counts[0]]
    logger.debug("csv: %d rows x %d columns (delimiter=%r)", len(rows), width, delimiter)
    return TextParseResult(rows=rows, delimiter=delimiter, warnings=row_warnings)
