from __future__ import annotations

import json

import jsonschema
import pytest
from jsonschema.exceptions import ValidationError

from tempcsv.logging.error_log import SCHEMA_PATH
from tempcsv.models.error_record import ErrorRecord

"""Error log JSON schema contract test."""


def _schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_error_log_schema_valid_example():
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "book.xlsx",
        "sheet": "Sheet2",
        "row": -1,
        "error_type": "EMPTY_DATA",
        "message": "File contains a header row but no data rows",
    }
    jsonschema.validate(record, _schema())


def test_error_log_schema_rejects_extra_key():
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "data.csv",
        "sheet": "",
        "row": 3,
        "error_type": "MALFORMED_ROW",
        "message": "Skipping line 3: expected 2 fields, saw 3",
        "extra": "not allowed",
    }
    with pytest.raises(ValidationError):
        jsonschema.validate(record, _schema())


def test_created_record_matches_schema():
    rec = ErrorRecord.create("data.csv", "", 2, "TOO_MANY_FIELDS", "row 2: expected 2 fields, saw 3")
    jsonschema.validate(json.loads(rec.to_json_line()), _schema())
