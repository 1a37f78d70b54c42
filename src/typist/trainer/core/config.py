"""Test configuration: modes, difficulty and the per-test snapshot.

``Config`` is the mutable, persisted user configuration.  ``SessionConfig``
is the frozen copy taken when a test starts, so edits made in the menus
never change the rules of a test already in progress.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

# ---------------------------------------------------------------------------
# Test modes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Timed:
    """Type for a fixed number of seconds."""

    seconds: int


@dataclass(frozen=True)
class Words:
    """Type a fixed number of generated words."""

    count: int


@dataclass(frozen=True)
class Quote:
    """Type one quotation from the corpus."""


@dataclass(frozen=True)
class Custom:
    """Type the user's own text."""


TestMode = Union[Timed, Words, Quote, Custom]

DEFAULT_TEST_MODE: TestMode = Timed(30)


class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    CUSTOM = "custom"

    @property
    def label(self) -> str:
        return self.value.capitalize()


def mode_to_dict(mode: TestMode) -> dict[str, Any]:
    match mode:
        case Timed(seconds):
            return {"type": "timed", "seconds": seconds}
        case Words(count):
            return {"type": "words", "count": count}
        case Quote():
            return {"type": "quote"}
        case Custom():
            return {"type": "custom"}
    raise TypeError(f"unknown test mode: {mode!r}")


def mode_from_dict(data: Any) -> TestMode | None:
    """Parse a persisted test mode; ``None`` when the value is unusable."""
    if not isinstance(data, dict):
        return None
    kind = data.get("type")
    if kind == "timed":
        seconds = data.get("seconds")
        if isinstance(seconds, int) and seconds > 0:
            return Timed(seconds)
    elif kind == "words":
        count = data.get("count")
        if isinstance(count, int) and count > 0:
            return Words(count)
    elif kind == "quote":
        return Quote()
    elif kind == "custom":
        return Custom()
    return None


# ---------------------------------------------------------------------------
# Snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SessionConfig:
    """The rules of one test, fixed at test start."""

    test_mode: TestMode = DEFAULT_TEST_MODE
    difficulty: Difficulty = Difficulty.MEDIUM
    repeat_test: bool = False
    end_on_first_error: bool = False


@dataclass
class Config:
    """Mutable user configuration owned by the session."""

    test_mode: TestMode = DEFAULT_TEST_MODE
    difficulty: Difficulty = Difficulty.MEDIUM
    repeat_test: bool = False
    end_on_first_error: bool = False
    theme: str = "Dark"
    custom_text: str | None = None
    custom_words: list[str] = field(default_factory=list)

    def snapshot(self) -> SessionConfig:
        return SessionConfig(
            test_mode=self.test_mode,
            difficulty=self.difficulty,
            repeat_test=self.repeat_test,
            end_on_first_error=self.end_on_first_error,
        )
