from __future__ import annotations

import pytest

from tempcsv.models.options import OptionsError
from tempcsv.models.table import ColumnDef
from tempcsv.parsing.serializer import to_csv_text, to_delimited_text
from tempcsv.parsing.table import build_table


def _cols(*fields: str) -> list[ColumnDef]:
    return [ColumnDef(field=f, label=f.upper()) for f in fields]


def test_header_uses_field_keys_not_labels():
    text = to_delimited_text([{"a": "1", "b": "2"}], _cols("a", "b"))
    assert text == "a,b\n1,2\n"


def test_missing_fields_become_empty():
    text = to_delimited_text([{"a": "1"}, {"b": "2"}], _cols("a", "b"))
    assert text == "a,b\n1,\n,2\n"


def test_minimal_quoting():
    rows = [{"a": "x,y", "b": 'say "hi"', "c": "two\nlines", "d": "plain"}]
    text = to_delimited_text(rows, _cols("a", "b", "c", "d"))
    assert text == 'a,b,c,d\n"x,y","say ""hi""","two\nlines",plain\n'


def test_custom_delimiter():
    text = to_delimited_text([{"a": "1;2", "b": "3"}], _cols("a", "b"), delimiter=";")
    assert text == 'a;b\n"1;2";3\n'


def test_header_is_written_without_rows():
    assert to_delimited_text([], _cols("a", "b")) == "a,b\n"


def test_no_columns_gives_empty_text():
    assert to_delimited_text([{"a": "1"}], []) == ""


def test_typed_values_are_rendered():
    text = to_delimited_text([{"n": 7, "f": 1.5, "ok": True, "none": None}], _cols("n", "f", "ok", "none"))
    assert text == "n,f,ok,none\n7,1.5,true,\n"


def test_unsupported_delimiter():
    with pytest.raises(OptionsError):
        to_delimited_text([{"a": "1"}], _cols("a"), delimiter="x")


def test_to_csv_text_from_parsed_table():
    table = build_table([["name", "city"], ["Alice", "Paris"], ["Bob", "Rome, IT"]])
    assert to_csv_text(table) == 'name,city\nAlice,Paris\nBob,"Rome, IT"\n'
