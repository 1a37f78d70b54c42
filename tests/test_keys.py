"""Tests for typist.tui.keys -- raw input to key identifiers."""

from __future__ import annotations

import pytest

from typist.tui.keys import Key, parse_key, printable_char


class TestKeyConstants:
    def test_names(self):
        assert Key.escape == "escape"
        assert Key.enter == "enter"
        assert Key.backspace == "backspace"
        assert Key.page_up == "pageUp"

    def test_combinators(self):
        assert Key.ctrl("c") == "ctrl+c"
        assert Key.shift("tab") == "shift+tab"
        assert Key.alt("x") == "alt+x"


class TestParseKey:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[A", "up"),
            ("\x1b[B", "down"),
            ("\x1bOC", "right"),
            ("\x1b[D", "left"),
            ("\x1b[3~", "delete"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[Z", "shift+tab"),
        ],
    )
    def test_escape_sequences(self, data, expected):
        assert parse_key(data) == expected

    def test_modified_cursor_keys(self):
        assert parse_key("\x1b[1;5A") == "ctrl+up"
        assert parse_key("\x1b[1;2D") == "shift+left"
        assert parse_key("\x1b[1;3C") == "alt+right"

    def test_single_byte_keys(self):
        assert parse_key("\x1b") == "escape"
        assert parse_key("\r") == "enter"
        assert parse_key("\n") == "enter"
        assert parse_key("\t") == "tab"
        assert parse_key("\x7f") == "backspace"
        assert parse_key("\x08") == "backspace"
        assert parse_key("\x00") == "ctrl+space"

    def test_ctrl_letters(self):
        assert parse_key("\x03") == "ctrl+c"
        assert parse_key("\x01") == "ctrl+a"
        assert parse_key("\x1a") == "ctrl+z"

    def test_alt_keys(self):
        assert parse_key("\x1bB") == "alt+b"
        assert parse_key("\x1b\x7f") == "alt+backspace"
        assert parse_key("\x1b\x1b") == "alt+escape"

    def test_printable_case_preserved(self):
        assert parse_key("a") == "a"
        assert parse_key("Q") == "Q"
        assert parse_key(" ") == " "
        assert parse_key("\u00e9") == "\u00e9"

    def test_unknown(self):
        assert parse_key("") is None
        assert parse_key("\x1b[99z") is None
        assert parse_key("abc") is None


class TestPrintableChar:
    def test_characters(self):
        assert printable_char("a") == "a"
        assert printable_char(" ") == " "

    def test_named_keys_are_not_text(self):
        assert printable_char("enter") is None
        assert printable_char("ctrl+c") is None
        assert printable_char(None) is None
        assert printable_char("\x03") is None
