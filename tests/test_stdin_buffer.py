"""Tests for typist.tui.stdin_buffer.StdinBuffer."""

from __future__ import annotations

import asyncio

import pytest

from typist.tui.stdin_buffer import (
    BRACKETED_PASTE_END,
    BRACKETED_PASTE_START,
    ESC,
    StdinBuffer,
    _sequence_end,
    split_sequences,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class Collector:
    """Records emitted key sequences and pastes."""

    def __init__(self) -> None:
        self.data: list[str] = []
        self.pastes: list[str] = []


def make_buffer(timeout: float = 0.01) -> tuple[StdinBuffer, Collector]:
    buf = StdinBuffer(timeout=timeout)
    col = Collector()
    buf.on_data(col.data.append)
    buf.on_paste(col.pastes.append)
    return buf, col


# ---------------------------------------------------------------------------
# _sequence_end
# ---------------------------------------------------------------------------


class TestSequenceEnd:
    def test_plain_character(self) -> None:
        assert _sequence_end("t", 0) == 1

    def test_lone_escape_is_cut_off(self) -> None:
        assert _sequence_end(ESC, 0) is None

    def test_alt_key(self) -> None:
        assert _sequence_end(f"{ESC}b", 0) == 2

    def test_csi(self) -> None:
        assert _sequence_end(f"{ESC}[", 0) is None
        assert _sequence_end(f"{ESC}[1;", 0) is None
        assert _sequence_end(f"{ESC}[D", 0) == 3
        assert _sequence_end(f"{ESC}[1;5C", 0) == 6
        assert _sequence_end(f"{ESC}[3~", 0) == 4

    def test_ss3(self) -> None:
        assert _sequence_end(f"{ESC}O", 0) is None
        assert _sequence_end(f"{ESC}OA", 0) == 3

    def test_offset(self) -> None:
        assert _sequence_end(f"x{ESC}[Ay", 1) == 4


# ---------------------------------------------------------------------------
# split_sequences
# ---------------------------------------------------------------------------


class TestSplitSequences:
    def test_empty(self) -> None:
        assert split_sequences("") == ([], "")

    def test_typed_word_splits_per_char(self) -> None:
        assert split_sequences("cat") == (["c", "a", "t"], "")

    def test_keys_between_letters(self) -> None:
        assert split_sequences(f"a{ESC}[Db") == (["a", f"{ESC}[D", "b"], "")

    def test_partial_sequence_kept(self) -> None:
        assert split_sequences(f"z{ESC}[1") == (["z"], f"{ESC}[1")


# ---------------------------------------------------------------------------
# StdinBuffer.process
# ---------------------------------------------------------------------------


class TestProcess:
    def test_fast_typing_in_one_read(self) -> None:
        buf, col = make_buffer()
        buf.process("the ")
        assert col.data == ["t", "h", "e", " "]

    def test_arrow_keys(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{ESC}[A{ESC}[B")
        assert col.data == [f"{ESC}[A", f"{ESC}[B"]

    def test_lone_escape_without_loop_flushes_at_once(self) -> None:
        buf, col = make_buffer()
        buf.process(ESC)
        assert col.data == [ESC]
        assert buf.get_buffer() == ""

    @pytest.mark.asyncio
    async def test_split_arrow_key_is_not_escape(self) -> None:
        buf, col = make_buffer()
        buf.process(ESC)
        assert col.data == []
        buf.process("[B")
        assert col.data == [f"{ESC}[B"]

    @pytest.mark.asyncio
    async def test_lone_escape_flushed_after_timeout(self) -> None:
        buf, col = make_buffer(timeout=0.02)
        buf.process(ESC)
        assert buf.get_buffer() == ESC
        await asyncio.sleep(0.06)
        assert col.data == [ESC]

    @pytest.mark.asyncio
    async def test_completed_sequence_not_emitted_twice(self) -> None:
        buf, col = make_buffer(timeout=0.03)
        buf.process(ESC)
        buf.process("[A")
        await asyncio.sleep(0.06)
        assert col.data == [f"{ESC}[A"]


# ---------------------------------------------------------------------------
# Bracketed paste
# ---------------------------------------------------------------------------


class TestBracketedPaste:
    def test_paste_reported_separately(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{BRACKETED_PASTE_START}the cat{BRACKETED_PASTE_END}")
        assert col.pastes == ["the cat"]
        assert col.data == []

    def test_keys_around_paste(self) -> None:
        buf, col = make_buffer()
        buf.process(f"a{BRACKETED_PASTE_START}xyz{BRACKETED_PASTE_END}b")
        assert col.data == ["a", "b"]
        assert col.pastes == ["xyz"]

    def test_paste_across_reads(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{BRACKETED_PASTE_START}sat ")
        assert col.pastes == []
        buf.process(f"on{BRACKETED_PASTE_END}")
        assert col.pastes == ["sat on"]


# ---------------------------------------------------------------------------
# flush / clear
# ---------------------------------------------------------------------------


class TestFlushAndClear:
    def test_flush_empty(self) -> None:
        buf, _ = make_buffer()
        assert buf.flush() == []

    @pytest.mark.asyncio
    async def test_flush_returns_pending(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{ESC}[")
        assert buf.flush() == [f"{ESC}["]
        assert buf.get_buffer() == ""
        assert col.data == []

    def test_clear_drops_paste_state(self) -> None:
        buf, col = make_buffer()
        buf.process(f"{BRACKETED_PASTE_START}half")
        buf.clear()
        buf.process("k")
        assert col.data == ["k"]
        assert col.pastes == []
