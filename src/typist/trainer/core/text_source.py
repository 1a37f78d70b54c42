"""Target text, the typed buffer and per-character correctness.

The typed buffer only ever grows by appending and shrinks by truncating;
``cursor_pos`` tracks its length.  Typed characters beyond the end of the
target text are extra characters and always count as errors.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class InvariantViolation(RuntimeError):
    """Raised when the typed buffer and cursor disagree.

    This is a programming fault; nothing in the session catches it.
    """


@dataclass(frozen=True)
class TextSource:
    full_text: str
    is_scrollable: bool = False

    @property
    def total_words(self) -> int:
        return len(self.full_text.split())

    def __len__(self) -> int:
        return len(self.full_text)


class TypedBuffer:
    """What the user has typed so far, plus the cursor."""

    def __init__(self) -> None:
        self.typed_text: str = ""
        self.cursor_pos: int = 0

    def __len__(self) -> int:
        return len(self.typed_text)

    def push(self, ch: str) -> None:
        self.typed_text += ch
        self.cursor_pos = len(self.typed_text)

    def backspace(self) -> bool:
        """Remove the last typed character; ``False`` when already empty."""
        if not self.typed_text:
            return False
        self.typed_text = self.typed_text[:-1]
        self.cursor_pos = len(self.typed_text)
        return True

    def clear(self) -> None:
        self.typed_text = ""
        self.cursor_pos = 0

    def check(self, target_len: int) -> None:
        if not 0 <= self.cursor_pos <= max(len(self.typed_text), target_len):
            raise InvariantViolation(
                f"cursor {self.cursor_pos} outside buffer of {len(self.typed_text)} / text of {target_len}"
            )
        if self.cursor_pos != len(self.typed_text):
            raise InvariantViolation(
                f"cursor {self.cursor_pos} does not follow typed length {len(self.typed_text)}"
            )


# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------


class CharClass(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURSOR = "cursor"
    PENDING = "pending"


def classify(typed: str, full_text: str, index: int, cursor_pos: int) -> CharClass:
    """Classify position *index* of the target text (or of an overrun)."""
    if index < len(typed):
        if index >= len(full_text):
            return CharClass.INCORRECT
        return CharClass.CORRECT if typed[index] == full_text[index] else CharClass.INCORRECT
    if index == cursor_pos:
        return CharClass.CURSOR
    return CharClass.PENDING


def count_correct(typed: str, full_text: str) -> int:
    return sum(1 for a, b in zip(typed, full_text) if a == b)


# ---------------------------------------------------------------------------
# Scrolling window
# ---------------------------------------------------------------------------


def display_window(full_text: str, cursor_pos: int, width: int, is_quote: bool) -> tuple[int, int]:
    """Return the ``(start, end)`` slice of *full_text* to draw.

    Only quotes longer than ``4 * width`` characters scroll.  Once the
    cursor passes the middle of the window, the start follows it, snapped
    back to just after the previous space so no word is cut in half.
    """
    window = 4 * width
    if not is_quote or len(full_text) <= window:
        return 0, len(full_text)

    start = 0
    half = window // 2
    if cursor_pos > half:
        start = cursor_pos - half
        space = full_text.rfind(" ", 0, start)
        start = space + 1 if space != -1 else 0
    return start, min(start + window, len(full_text))
