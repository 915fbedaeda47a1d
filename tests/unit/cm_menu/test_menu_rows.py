"""Tests for the CSV row codec."""

from __future__ import annotations

import csv

import pytest

from cm_common.errors import MenuParseError
from cm_menu.rows import decode_rows, encode_row, encode_rows


pytestmark = pytest.mark.unit_menu


def test_decode_handles_quotes_bom_and_blank_lines() -> None:
    text = '\ufeffmenu,help\n"A, B","say ""hi"""\n\n"multi\nline",x\n'
    assert decode_rows(text) == [
        ["menu", "help"],
        ["A, B", 'say "hi"'],
        [],
        ["multi\nline", "x"],
    ]


def test_decode_empty_input() -> None:
    assert decode_rows("") == []
    assert decode_rows(None) == []


def test_decode_crlf_line_endings() -> None:
    assert decode_rows("a,b\r\nc,d\r\n") == [["a", "b"], ["c", "d"]]


def test_encode_quotes_only_when_needed() -> None:
    assert encode_row(["display_name", "Acme, Inc"]) == 'display_name,"Acme, Inc"'
    assert encode_row(["brand", "Acme"]) == "brand,Acme"
    assert encode_rows([["a"], ["b", 'q"t']]) == 'a\nb,"q""t"\n'


def test_decode_cells_beyond_default_csv_limit() -> None:
    bitmap = "A" * 200_000
    rows = decode_rows(f"menu\nPhoto,ISO\ncamera_menu_config,\nicon:big,{bitmap}\n")
    assert rows[-1] == ["icon:big", bitmap]


def test_csv_errors_become_parse_errors() -> None:
    previous = csv.field_size_limit(8)
    try:
        with pytest.raises(MenuParseError, match="not valid CSV") as excinfo:
            decode_rows("menu\nPhoto,a-very-long-cell\n")
    finally:
        csv.field_size_limit(previous)
    assert excinfo.value.context == {"line": 2}
