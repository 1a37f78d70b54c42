"""typist.trainer: typing test engine, session state machine and views."""

from typist.trainer.core.config import (
    Config,
    Custom,
    Difficulty,
    Quote,
    SessionConfig,
    TestMode,
    Timed,
    Words,
)
from typist.trainer.core.corpus import Corpus
from typist.trainer.core.session import Session
from typist.trainer.core.settings import SettingsManager
from typist.trainer.core.stats import StatsEngine, StatsState, calculate_accuracy, calculate_wpm
from typist.trainer.core.text_source import InvariantViolation, TextSource, TypedBuffer
from typist.trainer.core.themes import THEMES, Theme
from typist.trainer.ui.render import render_frame

__all__ = [
    # Config
    "Config",
    "Custom",
    "Difficulty",
    "Quote",
    "SessionConfig",
    "TestMode",
    "Timed",
    "Words",
    # Engine
    "Corpus",
    "InvariantViolation",
    "StatsEngine",
    "StatsState",
    "TextSource",
    "TypedBuffer",
    "calculate_accuracy",
    "calculate_wpm",
    # Session
    "Session",
    "SettingsManager",
    # Views
    "THEMES",
    "Theme",
    "render_frame",
]
