"""Keyboard input parsing for terminal applications.

Turns one complete input sequence (as split by
:class:`~typist.tui.stdin_buffer.StdinBuffer`) into a key id: a named key
such as ``"up"``, ``"enter"`` or ``"ctrl+c"``, or the printable character
itself.  Characters keep their case, because the typing test compares them
with the target text.
"""

from __future__ import annotations

import re

KeyId = str


class Key:
    """Named key ids and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

# Final letter of CSI / SS3 cursor sequences
_CURSOR_FINALS: dict[str, KeyId] = {
    "A": Key.up,
    "B": Key.down,
    "C": Key.right,
    "D": Key.left,
    "H": Key.home,
    "F": Key.end,
}

# Number of ``ESC [ <n> ~`` sequences
_TILDE_CODES: dict[str, KeyId] = {
    "1": Key.home,
    "3": Key.delete,
    "4": Key.end,
    "5": Key.page_up,
    "6": Key.page_down,
}

_SINGLE_BYTES: dict[str, KeyId] = {
    "\x1b": Key.escape,
    "\r": Key.enter,
    "\n": Key.enter,
    "\t": Key.tab,
    "\x7f": Key.backspace,
    "\x08": Key.backspace,
    "\x00": Key.ctrl("space"),
}

_CURSOR_RE = re.compile(r"^\x1b[\[O]([ABCDHF])$")
_MODIFIED_CURSOR_RE = re.compile(r"^\x1b\[1;(\d+)([ABCDHF])$")
_TILDE_RE = re.compile(r"^\x1b\[(\d)~$")

# xterm modifier parameter is 1 + bitmask
_SHIFT, _ALT, _CTRL = 1, 2, 4


def _with_modifiers(param: int, key: KeyId) -> KeyId:
    mask = param - 1
    if mask & _ALT:
        key = Key.alt(key)
    if mask & _SHIFT:
        key = Key.shift(key)
    if mask & _CTRL:
        key = Key.ctrl(key)
    return key


def parse_key(data: str) -> KeyId | None:
    """Return the key id for *data*, or ``None`` for unrecognised input."""
    if not data:
        return None
    if data in _SINGLE_BYTES:
        return _SINGLE_BYTES[data]

    if data.startswith("\x1b"):
        if data == "\x1b[Z":
            return Key.shift(Key.tab)
        m = _CURSOR_RE.match(data)
        if m:
            return _CURSOR_FINALS[m.group(1)]
        m = _MODIFIED_CURSOR_RE.match(data)
        if m:
            return _with_modifiers(int(m.group(1)), _CURSOR_FINALS[m.group(2)])
        m = _TILDE_RE.match(data)
        if m:
            return _TILDE_CODES.get(m.group(1))
        if len(data) == 2:
            return _alt_key(data[1])
        return None

    if len(data) != 1:
        return None
    if 1 <= ord(data) <= 26:
        return Key.ctrl(chr(ord(data) + ord("a") - 1))
    return data if data.isprintable() else None


def _alt_key(ch: str) -> KeyId | None:
    if ch == "\x1b":
        return Key.alt(Key.escape)
    if ch in ("\x7f", "\x08"):
        return Key.alt(Key.backspace)
    if ch.isprintable():
        return Key.alt(ch.lower())
    return None


def printable_char(key_id: KeyId | None) -> str | None:
    """Return the character a key id types, or ``None`` for non-text keys."""
    if key_id is None or len(key_id) != 1:
        return None
    return key_id if key_id.isprintable() else None
