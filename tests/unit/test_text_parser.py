from __future__ import annotations

import pytest

from tempcsv.parsing.errors import EmptyInputError, ParseError
from tempcsv.parsing.text import parse_text


def test_basic_rows():
    result = parse_text("a,b\n1,2\n3,4\n", ",")
    assert result.rows == [["a", "b"], ["1", "2"], ["3", "4"]]
    assert result.delimiter == ","
    assert result.warnings == []


def test_quoted_field_keeps_delimiter():
    result = parse_text('a,b\n"1,5",2\n', ",")
    assert result.rows[1] == ["1,5", "2"]


def test_escaped_quotes_and_line_breaks_inside_quotes():
    text = 'a,b\n"say ""hi""","line1\nline2"\n'
    result = parse_text(text, ",")
    assert result.rows[1] == ['say "hi"', "line1\nline2"]


def test_crlf_line_endings():
    result = parse_text("a,b\r\n1,2\r\n3,4\r\n", ",")
    assert result.rows == [["a", "b"], ["1", "2"], ["3", "4"]]


def test_blank_lines_skipped_by_default():
    result = parse_text("a,b\n\n1,2\n\n", ",")
    assert result.rows == [["a", "b"], ["1", "2"]]


def test_cells_are_kept_as_text():
    result = parse_text("code,flag,empty\n007,NA,\n", ",")
    assert result.rows[1] == ["007", "NA", ""]


def test_short_rows_are_padded_with_empty_strings():
    result = parse_text("a,b,c\n1\n", ",")
    assert result.rows[1] == ["1", "", ""]


def test_wider_rows_are_kept_and_others_padded():
    result = parse_text("a,b\n1,2\n3,4,5\n6,7\n", ",")
    assert result.rows == [["a", "b"], ["1", "2", ""], ["3", "4", "5"], ["6", "7", ""]]
    assert result.warnings == []


def test_trailing_delimiters_keep_rows():
    result = parse_text("a,b\n1,2,\n3,4,\n", ",")
    assert result.rows == [["a", "b"], ["1", "2", ""], ["3", "4", ""]]


def test_trailing_blank_line_dropped_even_when_keeping_empty_lines():
    result = parse_text("a,b\n1,2\n\n", ",", skip_empty_lines=False)
    assert result.rows == [["a", "b"], ["1", "2"]]


def test_interior_blank_line_kept_when_not_skipping():
    result = parse_text("a,b\n\n1,2\r\n\r\n", ",", skip_empty_lines=False)
    assert result.rows == [["a", "b"], ["", ""], ["1", "2"]]


def test_semicolon_delimiter():
    result = parse_text("a;b\n1;2\n", ";")
    assert result.rows == [["a", "b"], ["1", "2"]]


def test_bom_is_stripped():
    result = parse_text("\ufeffa,b\n1,2\n", ",")
    assert result.rows[0] == ["a", "b"]


@pytest.mark.parametrize("text", ["", "   ", "\n\n"])
def test_empty_input(text):
    with pytest.raises(EmptyInputError):
        parse_text(text, ",")


def test_unterminated_quote_is_fatal():
    with pytest.raises(ParseError) as e:
        parse_text('a,b\n"unterminated,2\n3,4\n', ",")
    assert "EOF inside string" in str(e.value)
