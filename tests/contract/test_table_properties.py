from __future__ import annotations

import pytest

from tempcsv.models.options import ParserOptions
from tempcsv.parsing.errors import EmptyDataError
from tempcsv.parsing.serializer import to_csv_text
from tempcsv.services.loader import load_table
from tempcsv.services.viewer import TableView

"""Behavioural contract of the parsing engine (round-trip, delimiters, row index, errors)."""

WELL_FORMED = [
    "name,city,note\nAlice,Paris,\"likes, commas\"\nBob,Berlin,\"quote \"\"here\"\"\"\n",
    "a,b\r\nx,\"multi\nline\"\r\ny,z\r\n",
    "k;v\nalpha;1\nbeta;2\ngamma;3\n",
    "only\nx\ny\n",
]


def _cells(table) -> list[list[str]]:
    return [[str(row.get(f, "")) for f in table.fields] for row in table.rows]


@pytest.mark.parametrize("text", WELL_FORMED)
def test_round_trip(text):
    first = load_table("in.csv", text).table
    again = load_table("out.csv", to_csv_text(first)).table
    assert again.column_count == first.column_count
    assert again.row_count == first.row_count
    assert again.fields == first.fields
    assert _cells(again) == _cells(first)


@pytest.mark.parametrize("delimiter", [",", ";", "\t"])
@pytest.mark.parametrize("explicit", [True, False])
def test_delimiter_invariance(delimiter, explicit):
    rows = [["name", "qty", "city"], ["apple", "3", "Paris"], ["pear", "5", "Rome"]]
    text = "\n".join(delimiter.join(r) for r in rows) + "\n"
    options = ParserOptions(delimiter=delimiter if explicit else "")
    table = load_table("data.csv", text, options).table
    assert table.fields == ["name", "qty", "city"]
    assert _cells(table) == [["apple", "3", "Paris"], ["pear", "5", "Rome"]]


def test_sequential_first_column_is_row_index():
    text = "idx,a,b,c,d\n" + "".join(f"{i},x,y,z,w\n" for i in range(1, 6))
    table = load_table("t.csv", text).table
    assert table.has_row_index is True
    assert table.column_count == 4


def test_non_numeric_first_column_is_not_row_index():
    table = load_table("t.csv", "k,v\nA,1\nB,2\nC,3\n").table
    assert table.has_row_index is False


def test_bounding_heuristic_boundary_one_then_five():
    # first value "1", last value "5", but there are only 2 rows
    table = load_table("t.csv", "k,v\n1,a\n5,b\n").table
    assert table.has_row_index is False


def test_empty_lines_are_skipped():
    table = load_table("t.csv", "a,b\n\n1,2\n", ParserOptions(skip_empty_lines=True)).table
    assert table.rows == [{"a": "1", "b": "2"}]


def test_trailing_blank_line_skipped_when_keeping_empty_lines():
    table = load_table("t.csv", "a,b\n1,2\n\n", ParserOptions(skip_empty_lines=False)).table
    assert table.rows == [{"a": "1", "b": "2"}]


def test_rows_with_trailing_delimiter_are_kept():
    table = load_table("t.csv", "a,b\n1,2,\n3,4,\n5,6\n").table
    assert table.fields == ["a", "b"]
    assert table.rows == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}, {"a": "5", "b": "6"}]
    assert table.warnings == []


def test_rows_wider_than_header_are_truncated_with_warning():
    table = load_table("t.csv", "a,b\n1,2,3\n").table
    assert table.rows == [{"a": "1", "b": "2"}]
    assert [(w.row, w.code) for w in table.warnings] == [(2, "TOO_MANY_FIELDS")]


def test_quoted_comma_is_literal():
    table = load_table("t.csv", 'a,b\n"1,5",2\n').table
    assert table.rows[0] == {"a": "1,5", "b": "2"}


def test_multi_sheet_workbook(make_workbook):
    content = make_workbook(
        {
            "Sheet1": [["a", "b"], ["x", "y"]],
            "Sheet2": [["h1", "h2"], ["p", "q"], ["r", "s"]],
        }
    )
    doc = load_table("book.xlsx", content)
    assert len(doc.sheet_names) == 2
    assert doc.select_sheet(1).table.row_count == 2


def test_header_only_csv_is_empty_data():
    with pytest.raises(EmptyDataError):
        load_table("t.csv", "a,b,c\n")


def test_column_truncation():
    header = ",".join(f"c{i}" for i in range(150))
    row = ",".join("v" for _ in range(150))
    view = TableView().load("wide.csv", f"{header}\n{row}\n")
    assert len(view.headers) == 100
    assert view.columns_truncated is True
