from __future__ import annotations

import re

from ..models.table_format import TableFormat

"""Format detection from a file name or URL.

Never fails: anything unrecognised is treated as CSV.
"""

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "ACCEPT_UPLOAD",
    "get_extension",
    "detect_format",
]

SUPPORTED_EXTENSIONS: tuple[str, ...] = tuple(f.extension for f in TableFormat)
ACCEPT_UPLOAD = ",".join(SUPPORTED_EXTENSIONS)

# extension right before a query string, fragment or end of input
_EXTENSION_RE = re.compile(r"\.([A-Za-z0-9]+)(?:[?#]|$)")


def get_extension(url_or_file_name: str) -> str:
    """Return the lowercased extension (with dot) of a name or URL, ``.csv`` if unsupported."""
    match = _EXTENSION_RE.search(url_or_file_name or "")
    ext = f".{match.group(1).lower()}" if match else ".csv"
    return ext if ext in SUPPORTED_EXTENSIONS else ".csv"


def detect_format(url_or_file_name: str) -> TableFormat:
    """Classify a file name or URL as one of the supported formats.

    >>> detect_format("https://example.com/files/report.XLSX?download=1")
    <TableFormat.XLSX: 'xlsx'>
    >>> detect_format("notes.txt")
    <TableFormat.CSV: 'csv'>
    """
    return TableFormat(get_extension(url_or_file_name)[1:])
