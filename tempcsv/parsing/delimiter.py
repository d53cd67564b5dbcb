from __future__ import annotations

import logging

from ..models.options import SUPPORTED_DELIMITERS

"""Delimiter auto-detection.

Each candidate splits a sample of records; the winner is the candidate whose
field count changes least from record to record, ties broken by the higher
average field count. A candidate that never yields at least two fields per
record on average is not considered.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "DEFAULT_DELIMITER",
    "SAMPLE_RECORDS",
    "count_fields",
    "detect_delimiter",
    "split_records",
]

DEFAULT_DELIMITER = ","
SAMPLE_RECORDS = 10
QUOTE_CHAR = '"'


def split_records(text: str, limit: int | None = None, *, skip_blank: bool = True) -> list[str]:
    """Split ``text`` into records, at most ``limit`` of them when given.

    Line breaks inside quoted fields do not end a record. Whitespace-only
    records are dropped unless ``skip_blank`` is false.
    """
    records: list[str] = []
    current: list[str] = []
    in_quotes = False
    prev = ""
    for ch in text:
        after_cr, prev = prev == "\r", ch
        if ch == QUOTE_CHAR:
            in_quotes = not in_quotes
        if ch in "\r\n" and not in_quotes:
            if ch == "\n" and after_cr:
                # second half of \r\n
                continue
            record = "".join(current)
            if record.strip() or not skip_blank:
                records.append(record)
                if limit is not None and len(records) >= limit:
                    return records
            current = []
            continue
        current.append(ch)
    tail = "".join(current)
    if tail.strip() and (limit is None or len(records) < limit):
        records.append(tail)
    return records


def count_fields(record: str, delimiter: str) -> int:
    count = 1
    in_quotes = False
    for ch in record:
        if ch == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            count += 1
    return count


def detect_delimiter(
    text: str,
    candidates: tuple[str, ...] = SUPPORTED_DELIMITERS,
    sample_records: int = SAMPLE_RECORDS,
) -> str:
    """Guess the field delimiter of delimited ``text``.

    Falls back to comma when the input is empty or no candidate produces a
    consistent multi-field split.
    """
    if not text or not text.strip():
        return DEFAULT_DELIMITER

    records = split_records(text.lstrip("\ufeff"), sample_records)
    best: str | None = None
    best_delta: int | None = None
    best_avg = 0.0

    for delim in candidates:
        counts = [count_fields(r, delim) for r in records]
        if not counts:
            continue
        avg = sum(counts) / len(counts)
        if avg < 2:
            continue
        delta = sum(abs(b - a) for a, b in zip(counts, counts[1:]))
        if best_delta is None or delta < best_delta or (delta == best_delta and avg > best_avg):
            best, best_delta, best_avg = delim, delta, avg

    if best is None:
        logger.debug("delimiter detection inconclusive -> %r", DEFAULT_DELIMITER)
        return DEFAULT_DELIMITER
    logger.debug("detected delimiter %r (delta=%s avg=%.2f)", best, best_delta, best_avg)
    return best
