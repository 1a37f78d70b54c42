"""Menu states and the repeat-mode warning.

Each menu state is a small frozen dataclass carrying its own selection
index (or, for the numeric prompts, its input buffer).  Exactly one state
is active at a time; the session swaps whole values rather than mutating.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from typist.trainer.core.config import Difficulty, TestMode
from typist.trainer.core.themes import THEME_NAMES

# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MainMenu:
    idx: int = 0


@dataclass(frozen=True)
class TestModeMenu:
    idx: int = 0


@dataclass(frozen=True)
class DifficultyMenu:
    idx: int = 0


@dataclass(frozen=True)
class TimeMenu:
    idx: int = 0


@dataclass(frozen=True)
class WordCountMenu:
    idx: int = 0


@dataclass(frozen=True)
class ThemeMenu:
    idx: int = 0


@dataclass(frozen=True)
class SettingsMenu:
    idx: int = 0


@dataclass(frozen=True)
class CustomTimedInput:
    buffer: str = ""


@dataclass(frozen=True)
class CustomWordsInput:
    buffer: str = ""


@dataclass(frozen=True)
class Help:
    pass


@dataclass(frozen=True)
class TestComplete:
    pass


@dataclass(frozen=True)
class Typing:
    pass


MenuState = Union[
    MainMenu,
    TestModeMenu,
    DifficultyMenu,
    TimeMenu,
    WordCountMenu,
    ThemeMenu,
    SettingsMenu,
    CustomTimedInput,
    CustomWordsInput,
    Help,
    TestComplete,
    Typing,
]

SelectableMenu = Union[
    MainMenu,
    TestModeMenu,
    DifficultyMenu,
    TimeMenu,
    WordCountMenu,
    ThemeMenu,
    SettingsMenu,
]

# ---------------------------------------------------------------------------
# Items
# ---------------------------------------------------------------------------

MAIN_MENU_ITEMS = ("Test Mode", "Difficulty", "Theme", "Settings", "Help", "Back")
TEST_MODE_ITEMS = ("Timed", "Words", "Quote", "Back")
DIFFICULTY_ITEMS = ("Easy", "Medium", "Hard", "Back")
TIME_OPTIONS = (15, 30, 60, 120)
TIME_ITEMS = tuple(f"{s} seconds" for s in TIME_OPTIONS) + ("Custom...", "Back")
WORD_OPTIONS = (10, 25, 50)
WORD_ITEMS = tuple(f"{n} words" for n in WORD_OPTIONS) + ("Custom...", "Back")
THEME_ITEMS = THEME_NAMES + ("Back",)
SETTINGS_ITEMS = ("Toggle Repeat Mode", "Toggle End on First Error", "Back")

MENU_DIFFICULTIES = (Difficulty.EASY, Difficulty.MEDIUM, Difficulty.HARD)


def menu_items(state: MenuState) -> tuple[str, ...]:
    """Return the selectable item labels of a menu state (empty for others)."""
    match state:
        case MainMenu():
            return MAIN_MENU_ITEMS
        case TestModeMenu():
            return TEST_MODE_ITEMS
        case DifficultyMenu():
            return DIFFICULTY_ITEMS
        case TimeMenu():
            return TIME_ITEMS
        case WordCountMenu():
            return WORD_ITEMS
        case ThemeMenu():
            return THEME_ITEMS
        case SettingsMenu():
            return SETTINGS_ITEMS
        case _:
            return ()


def parent_state(state: MenuState) -> MenuState:
    """Where Esc leads from *state*, with the parent's selection restored."""
    match state:
        case MainMenu():
            return Typing()
        case TestModeMenu():
            return MainMenu(0)
        case DifficultyMenu():
            return MainMenu(1)
        case ThemeMenu():
            return MainMenu(2)
        case SettingsMenu():
            return MainMenu(3)
        case Help():
            return MainMenu(4)
        case TimeMenu():
            return TestModeMenu(0)
        case WordCountMenu():
            return TestModeMenu(1)
        case CustomTimedInput():
            return TimeMenu(len(TIME_OPTIONS))
        case CustomWordsInput():
            return WordCountMenu(len(WORD_OPTIONS))
        case TestComplete():
            return MainMenu(0)
        case Typing():
            return MainMenu(0)
    raise TypeError(f"unknown menu state: {state!r}")


def with_index(state: SelectableMenu, idx: int) -> SelectableMenu:
    return type(state)(idx)


# ---------------------------------------------------------------------------
# Repeat-mode warning
# ---------------------------------------------------------------------------


class SettingKind(Enum):
    TEST_MODE = "test_mode"
    DIFFICULTY = "difficulty"


@dataclass(frozen=True)
class SettingChange:
    """A deferred test-mode or difficulty change."""

    kind: SettingKind
    value: Union[TestMode, Difficulty]
    description: str
    # Where to go once the change is applied
    return_to: MenuState = MainMenu(0)


@dataclass(frozen=True)
class RepeatModeSettings:
    """Blocks a setting change while repeat mode is on."""

    change: SettingChange
    prev_state: MenuState

    @property
    def action(self) -> str:
        return self.change.description


WarningState = Union[RepeatModeSettings, None]
