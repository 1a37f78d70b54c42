"""The typing session: test lifecycle, menus and the repeat-mode guard.

``Session`` owns every piece of mutable state the UI shows.  Key presses
arrive through :meth:`Session.handle_key` and the periodic timer through
:meth:`Session.tick`; rendering only ever reads from a session.
"""

from __future__ import annotations

import dataclasses
import logging

from typist.trainer.core.clock import Clock, RealClock
from typist.trainer.core.config import Config, Difficulty, Quote, SessionConfig, TestMode, Timed, Words
from typist.trainer.core.corpus import Corpus
from typist.trainer.core.help import HELP_LINES
from typist.trainer.core.menu import (
    MENU_DIFFICULTIES,
    TIME_OPTIONS,
    WORD_OPTIONS,
    CustomTimedInput,
    CustomWordsInput,
    DifficultyMenu,
    Help,
    MainMenu,
    MenuState,
    RepeatModeSettings,
    SelectableMenu,
    SettingChange,
    SettingKind,
    SettingsMenu,
    TestComplete,
    TestModeMenu,
    ThemeMenu,
    TimeMenu,
    Typing,
    WarningState,
    WordCountMenu,
    menu_items,
    parent_state,
    with_index,
)
from typist.trainer.core.settings import SettingsManager
from typist.trainer.core.stats import StatsEngine, StatsState
from typist.trainer.core.text_source import TextSource, TypedBuffer, count_correct
from typist.trainer.core.themes import THEME_NAMES, Theme, get_theme
from typist.tui.keys import Key, KeyId, printable_char

logger = logging.getLogger(__name__)

REASON_TIME_UP = "Time's up"
REASON_FIRST_ERROR = "Stopped on first error"
REASON_TEXT_COMPLETED = "Text completed"


def describe_mode(mode: TestMode) -> str:
    match mode:
        case Timed(seconds):
            return f"Timed {seconds}s"
        case Words(count):
            return f"Words {count}"
        case Quote():
            return "Quote"
        case _:
            return "Custom"


class Session:
    """State machine for one user's typing session.

    Args:
        config: Initial configuration; loaded from *settings* when omitted.
        settings: Persists applied configuration changes (optional).
        corpus: Text generator; defaults to the built-in corpus.
        clock: Monotonic time source; tests pass a fake one.
    """

    def __init__(
        self,
        config: Config | None = None,
        *,
        settings: SettingsManager | None = None,
        corpus: Corpus | None = None,
        clock: Clock | None = None,
    ) -> None:
        if config is None:
            config = settings.load_config() if settings is not None else Config()
        self.config = config
        self.settings = settings
        self.corpus = corpus or Corpus(custom_text=config.custom_text, custom_words=config.custom_words)
        self.clock: Clock = clock or RealClock()
        self.theme: Theme = get_theme(config.theme)

        self.menu_state: MenuState = MainMenu(0)
        self.warning_state: WarningState = None
        self.help_scroll_offset: int = 0
        self.should_quit: bool = False

        self.stats_engine = StatsEngine()
        self.buffer = TypedBuffer()
        self.session_config: SessionConfig = config.snapshot()
        self.text_source: TextSource = TextSource("")
        self.start_time: float | None = None
        self.end_time: float | None = None
        self.test_end_reason: str | None = None
        self._paused_at: float | None = None

        self.start_new_test()

    # ------------------------------------------------------------------
    # Read-only views for the renderer
    # ------------------------------------------------------------------

    @property
    def stats(self) -> StatsState:
        return self.stats_engine.state

    @property
    def typed_text(self) -> str:
        return self.buffer.typed_text

    @property
    def cursor_pos(self) -> int:
        return self.buffer.cursor_pos

    @property
    def started(self) -> bool:
        return self.start_time is not None

    @property
    def finished(self) -> bool:
        return self.end_time is not None

    @property
    def paused(self) -> bool:
        return self._paused_at is not None

    def elapsed(self) -> float:
        """Seconds of typing so far, excluding time spent paused in menus."""
        if self.start_time is None:
            return 0.0
        if self.end_time is not None:
            return self.end_time - self.start_time
        if self._paused_at is not None:
            return self._paused_at - self.start_time
        return self.clock.now() - self.start_time

    @property
    def duration(self) -> float:
        """Length of the finished test, 0.0 before it ends."""
        if self.start_time is None or self.end_time is None:
            return 0.0
        return self.end_time - self.start_time

    @property
    def time_remaining(self) -> int | None:
        """Whole seconds left in a running timed test, else ``None``."""
        match self.session_config.test_mode:
            case Timed(seconds) if self.started:
                return max(0, seconds - int(self.elapsed()))
        return None

    # ------------------------------------------------------------------
    # Test lifecycle
    # ------------------------------------------------------------------

    def start_new_test(self, *, same_text: bool = False) -> None:
        """Reset typing state; keep the current text when *same_text* is set."""
        self.session_config = self.config.snapshot()
        if not (same_text and self.text_source.full_text):
            self.text_source = self.corpus.text_for(self.session_config)
        self.buffer.clear()
        self.stats_engine.reset()
        self.start_time = None
        self.end_time = None
        self._paused_at = None
        self.test_end_reason = None
        logger.info(
            "new test: mode=%s difficulty=%s repeat=%s chars=%d",
            describe_mode(self.session_config.test_mode),
            self.session_config.difficulty.label,
            same_text,
            len(self.text_source),
        )

    def restart(self) -> None:
        """Begin the next test, reusing the text when repeat mode is on."""
        self.start_new_test(same_text=self.config.repeat_test)
        self._set_state(Typing())

    def _finish(self, reason: str | None, *, at: float | None = None) -> None:
        if self.start_time is None:
            self.start_time = self.clock.now()
        self.end_time = at if at is not None else self.clock.now()
        self.test_end_reason = reason
        typed = self.buffer.typed_text
        correct = count_correct(typed, self.text_source.full_text)
        self.stats_engine.update(correct, len(typed), self.duration)
        self.stats_engine.sample(self.duration)
        final = self.stats_engine.finish(correct, len(typed), self.duration)
        self._set_state(TestComplete())
        logger.info(
            "test finished (%s): wpm=%.1f raw=%.1f accuracy=%.1f%% time=%.1fs",
            reason or "completed",
            final.wpm,
            final.raw_wpm,
            final.accuracy,
            self.duration,
        )

    def _pause(self) -> None:
        if self.started and not self.finished and self._paused_at is None:
            self._paused_at = self.clock.now()
            logger.debug("test paused at %.2fs", self.elapsed())

    def _resume(self) -> None:
        if self._paused_at is not None and self.start_time is not None:
            self.start_time += self.clock.now() - self._paused_at
            self._paused_at = None
            logger.debug("test resumed at %.2fs", self.elapsed())

    def _refresh_stats(self) -> None:
        typed = self.buffer.typed_text
        correct = count_correct(typed, self.text_source.full_text)
        self.stats_engine.update(correct, len(typed), self.elapsed())

    def _set_state(self, state: MenuState) -> None:
        # A finished test only leaves TestComplete through restart
        if isinstance(state, Typing) and self.finished:
            state = TestComplete()
        if state != self.menu_state:
            logger.debug("state %s -> %s", self.menu_state, state)
        if isinstance(state, Typing):
            self._resume()
        self.menu_state = state

    def _check(self) -> None:
        self.buffer.check(len(self.text_source))

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------

    def tick(self) -> bool:
        """Advance timed behaviour; returns ``True`` if anything changed.

        Order: countdown expiry, then sampling, then live stats.
        """
        if not isinstance(self.menu_state, Typing) or self.warning_state is not None:
            return False
        if not self.started or self.finished or self.paused:
            return False

        elapsed = self.elapsed()
        match self.session_config.test_mode:
            case Timed(seconds) if elapsed >= seconds:
                self._finish(REASON_TIME_UP, at=self.start_time + seconds)
                return True

        self.stats_engine.sample(elapsed)
        self._refresh_stats()
        return True

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def handle_key(self, key: KeyId) -> None:
        """Apply one key press to the current state."""
        if key == Key.ctrl("c"):
            logger.info("quit requested")
            self.should_quit = True
            return

        if self.warning_state is not None:
            if key == Key.enter:
                self.confirm_warning()
            elif key == Key.escape:
                self.cancel_warning()
            return

        match self.menu_state:
            case Typing():
                self._handle_typing_key(key)
            case TestComplete():
                if key in (Key.enter, Key.tab):
                    self.restart()
                elif key == Key.escape:
                    self._set_state(parent_state(self.menu_state))
            case Help():
                self._handle_help_key(key)
            case CustomTimedInput(buffer) | CustomWordsInput(buffer):
                self._handle_numeric_key(key, buffer)
            case _:
                self._handle_menu_key(key, self.menu_state)

        self._check()

    def _handle_typing_key(self, key: KeyId) -> None:
        if key == Key.escape:
            self._pause()
            self._set_state(MainMenu(0))
            return
        if key == Key.tab:
            self.restart()
            return
        if key == Key.backspace:
            if self.buffer.backspace():
                self._refresh_stats()
            return

        ch = printable_char(key)
        if ch is None:
            return
        self._type_char(ch)

    def _type_char(self, ch: str) -> None:
        if self.finished:
            return
        full_text = self.text_source.full_text
        if self.start_time is None:
            self.start_time = self.clock.now()
            logger.debug("clock started")
        match self.session_config.test_mode:
            case Timed(seconds) if self.elapsed() >= seconds:
                self._finish(REASON_TIME_UP, at=self.start_time + seconds)
                return

        index = len(self.buffer)
        self.buffer.push(ch)
        self._refresh_stats()

        mismatch = index >= len(full_text) or full_text[index] != ch
        if self.session_config.end_on_first_error and mismatch:
            self._finish(REASON_FIRST_ERROR)
            return

        if len(self.buffer) >= len(full_text):
            reason = REASON_TEXT_COMPLETED if isinstance(self.session_config.test_mode, Timed) else None
            self._finish(reason)

    def _handle_help_key(self, key: KeyId) -> None:
        if key == Key.up:
            self.help_scroll_offset = max(0, self.help_scroll_offset - 1)
        elif key == Key.down:
            self.help_scroll_offset = min(len(HELP_LINES) - 1, self.help_scroll_offset + 1)
        elif key == Key.escape:
            self._set_state(parent_state(self.menu_state))

    def _handle_numeric_key(self, key: KeyId, buffer: str) -> None:
        state = self.menu_state
        if key == Key.escape:
            self._set_state(parent_state(state))
            return
        if key == Key.backspace:
            self._set_state(type(state)(buffer[:-1]))
            return
        if key == Key.enter:
            value = int(buffer) if buffer else 0
            if value <= 0:
                return
            if isinstance(state, CustomTimedInput):
                self.request_change(self._mode_change(Timed(value), TestModeMenu(0)))
            else:
                self.request_change(self._mode_change(Words(value), TestModeMenu(1)))
            return
        ch = printable_char(key)
        if ch is not None and ch.isdigit() and ch.isascii():
            self._set_state(type(state)(buffer + ch))

    def _handle_menu_key(self, key: KeyId, state: SelectableMenu) -> None:
        count = len(menu_items(state))
        if key == Key.up:
            self._set_state(with_index(state, (state.idx - 1) % count))
        elif key == Key.down:
            self._set_state(with_index(state, (state.idx + 1) % count))
        elif key == Key.escape:
            self._set_state(parent_state(state))
        elif key == Key.enter:
            self._select(state)

    def _select(self, state: SelectableMenu) -> None:  # noqa: C901
        idx = state.idx
        back = idx == len(menu_items(state)) - 1
        match state:
            case MainMenu():
                targets: list[MenuState] = [
                    TestModeMenu(0),
                    DifficultyMenu(0),
                    ThemeMenu(0),
                    SettingsMenu(0),
                    Help(),
                    Typing(),
                ]
                if isinstance(targets[idx], Help):
                    self.help_scroll_offset = 0
                self._set_state(targets[idx])
            case TestModeMenu():
                if back:
                    self._set_state(parent_state(state))
                elif idx == 0:
                    self._set_state(TimeMenu(0))
                elif idx == 1:
                    self._set_state(WordCountMenu(0))
                else:
                    self.request_change(self._mode_change(Quote(), MainMenu(0)))
            case DifficultyMenu():
                if back:
                    self._set_state(parent_state(state))
                else:
                    difficulty = MENU_DIFFICULTIES[idx]
                    self.request_change(
                        SettingChange(
                            SettingKind.DIFFICULTY,
                            difficulty,
                            f"Change difficulty to {difficulty.label}",
                            return_to=MainMenu(1),
                        )
                    )
            case TimeMenu():
                if back:
                    self._set_state(parent_state(state))
                elif idx == len(TIME_OPTIONS):
                    self._set_state(CustomTimedInput(""))
                else:
                    self.request_change(self._mode_change(Timed(TIME_OPTIONS[idx]), TestModeMenu(0)))
            case WordCountMenu():
                if back:
                    self._set_state(parent_state(state))
                elif idx == len(WORD_OPTIONS):
                    self._set_state(CustomWordsInput(""))
                else:
                    self.request_change(self._mode_change(Words(WORD_OPTIONS[idx]), TestModeMenu(1)))
            case ThemeMenu():
                if not back:
                    self.set_theme(THEME_NAMES[idx])
                self._set_state(parent_state(state))
            case SettingsMenu():
                if idx == 0:
                    self.set_repeat_test(not self.config.repeat_test)
                elif idx == 1:
                    self.set_end_on_first_error(not self.config.end_on_first_error)
                else:
                    self._set_state(parent_state(state))

    # ------------------------------------------------------------------
    # Configuration changes
    # ------------------------------------------------------------------

    @staticmethod
    def _mode_change(mode: TestMode, return_to: MenuState) -> SettingChange:
        return SettingChange(
            SettingKind.TEST_MODE,
            mode,
            f"Change test mode to {describe_mode(mode)}",
            return_to=return_to,
        )

    def request_change(self, change: SettingChange) -> None:
        """Apply *change*, or raise the repeat-mode warning if it is locked."""
        if self.config.repeat_test:
            self.warning_state = RepeatModeSettings(change=change, prev_state=self.menu_state)
            logger.debug("repeat mode blocks: %s", change.description)
            return
        self._apply_change(change)

    def _apply_change(self, change: SettingChange) -> None:
        match change.value:
            case Difficulty() as difficulty:
                self.config.difficulty = difficulty
                if self.settings is not None:
                    self.settings.set_difficulty(difficulty)
            case mode:
                self.config.test_mode = mode
                if self.settings is not None:
                    self.settings.set_test_mode(mode)
        logger.info("setting applied: %s", change.description)
        self.start_new_test()
        self._set_state(change.return_to)

    def confirm_warning(self) -> None:
        """Disable repeat mode and replay the blocked change."""
        warning = self.warning_state
        if warning is None:
            return
        self.warning_state = None
        self.set_repeat_test(False)
        self._apply_change(warning.change)

    def cancel_warning(self) -> None:
        """Drop the blocked change and return to where the user was."""
        warning = self.warning_state
        if warning is None:
            return
        self.warning_state = None
        self._set_state(warning.prev_state)

    def set_theme(self, name: str) -> None:
        self.theme = get_theme(name)
        self.config.theme = self.theme.name
        if self.settings is not None:
            self.settings.set_theme(self.theme.name)
        logger.info("theme set to %s", self.theme.name)

    def set_repeat_test(self, enabled: bool) -> None:
        self.config.repeat_test = enabled
        self.session_config = dataclasses.replace(self.session_config, repeat_test=enabled)
        if self.settings is not None:
            self.settings.set_repeat_test(enabled)
        logger.info("repeat mode %s", "on" if enabled else "off")

    def set_end_on_first_error(self, enabled: bool) -> None:
        self.config.end_on_first_error = enabled
        self.session_config = dataclasses.replace(self.session_config, end_on_first_error=enabled)
        if self.settings is not None:
            self.settings.set_end_on_first_error(enabled)
        logger.info("end on first error %s", "on" if enabled else "off")
