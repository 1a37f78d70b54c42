"""Split raw stdin reads into whole key sequences.

One ``read`` can hold several keystrokes (fast typing) or only part of one
(``ESC`` arriving before ``[A``).  ``StdinBuffer`` re-cuts the stream so
each callback receives exactly one key sequence, and reports bracketed
pastes separately so pasted text is never mistaken for typing.
"""

from __future__ import annotations

import asyncio
from typing import Callable

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"


def _sequence_end(data: str, start: int) -> int | None:
    """Index just past the sequence starting at *start*, ``None`` if cut off."""
    if data[start] != ESC:
        return start + 1
    if start + 1 == len(data):
        return None
    introducer = data[start + 1]
    if introducer == "[":
        # CSI runs to the first final byte (0x40-0x7e)
        for i in range(start + 2, len(data)):
            if 0x40 <= ord(data[i]) <= 0x7E:
                return i + 1
        return None
    if introducer == "O":
        return start + 3 if start + 2 < len(data) else None
    # ESC + one character: an Alt chord
    return start + 2


def split_sequences(data: str) -> tuple[list[str], str]:
    """Return the complete sequences in *data* and the cut-off tail."""
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        end = _sequence_end(data, pos)
        if end is None:
            return sequences, data[pos:]
        sequences.append(data[pos:end])
        pos = end
    return sequences, ""


class StdinBuffer:
    """Re-cuts stdin into key sequences and pastes.

    A cut-off escape sequence waits *timeout* seconds for the rest.  If
    nothing arrives it is flushed as it is, so a lone ``ESC`` still reads as
    the Escape key.  Without a running event loop the wait is skipped.
    """

    def __init__(self, *, timeout: float = 0.01) -> None:
        self._timeout = timeout
        self._pending = ""
        # Text of an unfinished bracketed paste, or None outside a paste
        self._paste: str | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        self._on_paste = callback

    def process(self, data: str) -> None:
        """Feed one read's worth of input."""
        self._cancel_timer()
        if self._paste is not None:
            self._paste += data
            self._finish_paste()
            return

        data = self._pending + data
        self._pending = ""

        paste_at = data.find(BRACKETED_PASTE_START)
        if paste_at != -1:
            keys, tail = split_sequences(data[:paste_at])
            self._emit_all(keys + ([tail] if tail else []))
            self._paste = data[paste_at + len(BRACKETED_PASTE_START) :]
            self._finish_paste()
            return

        keys, self._pending = split_sequences(data)
        self._emit_all(keys)
        if self._pending:
            self._wait_for_rest()

    def flush(self) -> list[str]:
        """Give up waiting and return whatever is pending."""
        self._cancel_timer()
        if not self._pending:
            return []
        pending, self._pending = self._pending, ""
        return [pending]

    def clear(self) -> None:
        self._cancel_timer()
        self._pending = ""
        self._paste = None

    def get_buffer(self) -> str:
        return self._pending

    def destroy(self) -> None:
        self.clear()

    # -- internals ------------------------------------------------------------

    def _emit_all(self, sequences: list[str]) -> None:
        if self._on_data is None:
            return
        for sequence in sequences:
            self._on_data(sequence)

    def _finish_paste(self) -> None:
        paste = self._paste or ""
        end = paste.find(BRACKETED_PASTE_END)
        if end == -1:
            return
        text, rest = paste[:end], paste[end + len(BRACKETED_PASTE_END) :]
        self._paste = None
        if self._on_paste is not None:
            self._on_paste(text)
        if rest:
            self.process(rest)

    def _wait_for_rest(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._emit_all(self.flush())
            return
        self._timer = loop.call_later(self._timeout, lambda: self._emit_all(self.flush()))

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
