"""Tests for typist.tui.utils -- terminal text utilities."""

from __future__ import annotations

from typist.tui.utils import grapheme_width, graphemes, strip_ansi, visible_width

# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the visible terminal width of text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("the cat") == 7

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1;31mWPM\x1b[0m") == 3

    def test_only_ansi(self) -> None:
        assert visible_width("\x1b[0m") == 0

    def test_wide_characters(self) -> None:
        assert visible_width("世") == 2
        assert visible_width("A世B") == 4

    def test_repeat_measurement_is_stable(self) -> None:
        assert visible_width("été") == visible_width("été") == 3


# ---------------------------------------------------------------------------
# grapheme_width / graphemes
# ---------------------------------------------------------------------------


class TestGraphemeWidth:
    def test_ascii(self) -> None:
        assert grapheme_width("a") == 1

    def test_control_characters(self) -> None:
        assert grapheme_width("\x07") == 0
        assert grapheme_width("") == 0

    def test_combining_sequence_is_one_column(self) -> None:
        assert grapheme_width("e\u0301") == 1

    def test_emoji(self) -> None:
        assert grapheme_width("\U0001F600") == 2
        assert grapheme_width("\u2764\ufe0f") == 2


class TestGraphemes:
    def test_ascii_fast_path(self) -> None:
        assert graphemes("abc") == ["a", "b", "c"]

    def test_combining_mark_stays_attached(self) -> None:
        assert graphemes("ce\u0301!") == ["c", "e\u0301", "!"]


class TestStripAnsi:
    def test_removes_csi(self) -> None:
        assert strip_ansi("\x1b[38;2;1;2;3mhi\x1b[0m") == "hi"

    def test_plain_text_untouched(self) -> None:
        assert strip_ansi("Acc: 98%") == "Acc: 98%"
