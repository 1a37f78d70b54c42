"""Layout decisions for every terminal size.

Pure functions from a session snapshot and a size to the view, region
and strings that should be drawn.  The thresholds are fixed literals and
every subtraction saturates at zero, so no size ever makes drawing fail.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from typist.trainer.core.config import Quote, Timed, Words
from typist.trainer.core.menu import TestComplete, Typing
from typist.trainer.core.text_source import TextSource
from typist.tui.layout import Direction, Length, Min, Rect, centered, split

if TYPE_CHECKING:
    from typist.trainer.core.session import Session

APP_NAME = "Typist"

MIN_WIDTH = 82
MIN_HEIGHT = 22

ESC_HINT = "Press ESC for menu"


def _sat(a: int, b: int) -> int:
    return max(0, a - b)


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FrameLayout:
    too_small: bool
    main: Rect | None = None
    stats: Rect | None = None


def too_small_message(width: int, height: int) -> str:
    return (
        "Terminal too small\n"
        f"Minimum size: {MIN_WIDTH}x{MIN_HEIGHT}\n"
        f"Current size: {width}x{height}"
    )


def stats_height(height: int) -> int:
    return 3 if height < 15 else 6


def frame_layout(width: int, height: int) -> FrameLayout:
    if width < MIN_WIDTH or height < MIN_HEIGHT:
        return FrameLayout(too_small=True)
    main, stats = split(
        Rect(0, 0, width, height),
        Direction.VERTICAL,
        [Min(5), Length(stats_height(height))],
    )
    return FrameLayout(too_small=False, main=main, stats=stats)


class MainView(Enum):
    WARNING = "warning"
    TEST_COMPLETE = "test_complete"
    MENU = "menu"
    TYPING = "typing"


def main_view(session: Session) -> MainView:
    if session.warning_state is not None:
        return MainView.WARNING
    if isinstance(session.menu_state, TestComplete):
        return MainView.TEST_COMPLETE
    if not isinstance(session.menu_state, Typing):
        return MainView.MENU
    return MainView.TYPING


# ---------------------------------------------------------------------------
# Typing view header
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeaderInfo:
    title: str
    mode: str
    difficulty: str
    repeat: str
    end_on_error: str
    time: str
    stats: str
    wpm: float
    raw_wpm: float


def app_title(repeat_test: bool) -> str:
    return APP_NAME + (" [Repeat Mode]" if repeat_test else "")


def header_info(session: Session) -> HeaderInfo:
    config = session.config
    match config.test_mode:
        case Timed(seconds):
            mode = f"Mode: Timed {seconds}s"
        case Words(count):
            mode = f"Mode: Words {count}"
        case Quote():
            mode = "Mode: Quote"
        case _:
            mode = "Mode: Custom"

    remaining = session.time_remaining
    if remaining is not None:
        time = f"Time: {remaining}s" if isinstance(config.test_mode, Timed) else ""
    elif isinstance(config.test_mode, Timed):
        time = f"Time: {config.test_mode.seconds}s"
    else:
        time = ""

    stats = session.stats
    return HeaderInfo(
        title=app_title(config.repeat_test),
        mode=mode,
        difficulty=f"Difficulty: {config.difficulty.label}",
        repeat=f"Repeat: {'ON' if config.repeat_test else 'OFF'}",
        end_on_error=f"End on Error: {'Yes' if config.end_on_first_error else 'No'}",
        time=time,
        stats=f"WPM: {stats.wpm:.1f} | Raw WPM: {stats.raw_wpm:.1f} | Acc: {stats.accuracy:.1f}%",
        wpm=stats.wpm,
        raw_wpm=stats.raw_wpm,
    )


@dataclass(frozen=True)
class TypingHeader:
    """Header text for the typing view.

    ``first`` is the border title.  ``second`` (when set) goes on the first
    inner row, and ``third`` on the row after it.
    """

    first: str
    second: str | None = None
    third: str | None = None

    @property
    def single_line(self) -> bool:
        return self.second is None


def typing_header(info: HeaderInfo, width: int) -> TypingHeader:  # noqa: C901
    parts = [info.title, info.mode, info.difficulty, info.repeat, info.end_on_error, info.stats]
    if info.time:
        parts.append(info.time)
    single = " | ".join(parts + [ESC_HINT])

    avail = int(width * 0.9)
    if len(single) <= avail:
        return TypingHeader(first=single)

    if width < 40:
        first = f"{info.title} | {info.time}" if info.time else info.title
        second = f"WPM: {info.wpm:.1f} | ESC:Menu"
    elif width < 60:
        first = f"{info.title} | {info.time}" if info.time else f"{info.title} | {info.mode}"
        second = f"WPM: {info.wpm:.1f} | Raw: {info.raw_wpm:.1f} | {ESC_HINT}"
    else:
        if width <= 90:
            config_row = f"{info.title} | {info.mode}"
        else:
            config_row = " | ".join(
                [info.title, info.mode, info.difficulty, info.repeat, info.end_on_error]
            )
        time_row = f"{config_row} | {info.time}" if info.time else config_row

        if width <= 90:
            first = f"{time_row} | {info.stats}"
            second = f"{info.difficulty} | {info.repeat} | {info.end_on_error} | {ESC_HINT}"
        elif len(time_row) + len(info.stats) + 3 <= avail:
            first = f"{time_row} | {info.stats}"
            second = ESC_HINT
        elif len(config_row) + len(info.time) + 3 <= avail:
            first = time_row
            second = f"{info.stats} | {ESC_HINT}"
        else:
            first = config_row
            second = f"{info.stats} | {ESC_HINT}"

    third = info.stats if 50 <= width < 80 else None
    return TypingHeader(first=first, second=second, third=third)


def typing_text_area(inner: Rect, header: TypingHeader) -> Rect:
    """The part of the bordered typing block left for the target text."""
    if header.single_line or inner.height <= 1:
        return inner
    if header.third is not None and inner.height > 2:
        return inner.inner(top=2)
    return inner.inner(top=1)


# ---------------------------------------------------------------------------
# Popups
# ---------------------------------------------------------------------------


class CompletionView(Enum):
    TEXT = "text"
    COMPACT = "compact"
    POPUP = "popup"


def completion_popup(area: Rect) -> tuple[CompletionView, Rect]:
    width = min(max(min(_sat(area.width, 10), 60), 20), area.width)
    height = min(max(min(_sat(area.height, 2), 15), 3), area.height)
    if width < 15 or height < 3:
        return CompletionView.TEXT, area
    if height < 5 or width < 25:
        return CompletionView.COMPACT, area
    return CompletionView.POPUP, centered(area, width, height)


def completion_two_columns(inner: Rect) -> bool:
    return inner.width >= 40 and inner.height >= 8


def menu_popup(area: Rect) -> Rect | None:
    """Menu panel, or ``None`` when only the text fallback fits."""
    width = min(_sat(area.width, 4), area.width)
    height = min(_sat(area.height, 2), area.height)
    if width < 30 or height < 10:
        return None
    return centered(area, width, height)


def warning_popup(area: Rect) -> Rect | None:
    """Warning panel, or ``None`` when only the text fallback fits."""
    width = min(max(min(_sat(area.width, 10), 80), 30), area.width)
    height = min(10, _sat(area.height, 4), area.height)
    if width < 30 or height < 5:
        return None
    return centered(area, width, height)


# ---------------------------------------------------------------------------
# Stats region
# ---------------------------------------------------------------------------


class StatsView(Enum):
    NONE = "none"
    COMPACT = "compact"
    MINIMAL_GAUGE = "minimal_gauge"
    GAUGES = "gauges"
    GAUGES_AND_CHART = "gauges_and_chart"


def stats_view(area: Rect) -> StatsView:
    if area.width < 8 or area.height < 2:
        return StatsView.NONE
    if area.width < 30 or area.height < 3:
        return StatsView.COMPACT
    if area.width < 40 or area.height < 5:
        return StatsView.MINIMAL_GAUGE
    if area.width < 60 or area.height < 6:
        return StatsView.GAUGES
    return StatsView.GAUGES_AND_CHART


def progress_percent(typed_text: str, source: TextSource) -> int:
    """Completion percentage: by words for scrolling texts, else by characters."""
    full_text = source.full_text
    if not full_text:
        return 0
    if source.is_scrollable:
        total_words = source.total_words
        if total_words == 0:
            return 0
        progress = len(typed_text.split()) * 100 // total_words
    else:
        progress = min(len(typed_text), len(full_text)) * 100 // len(full_text)
    return min(progress, 100)


@dataclass(frozen=True)
class ChartData:
    wpm: list[tuple[float, float]]
    raw_wpm: list[tuple[float, float]]
    x_max: float
    y_max: float

    @property
    def x_labels(self) -> list[str]:
        return ["0", f"{int(self.x_max)}"]

    @property
    def y_labels(self) -> list[str]:
        return ["0", f"{self.y_max / 2:.0f}", f"{self.y_max:.0f}"]


def chart_data(wpm_samples: list[float], raw_wpm_samples: list[float]) -> ChartData:
    """Chart series and bounds; an empty series plots as a single zero."""
    wpm = list(wpm_samples) or [0.0]
    raw = list(raw_wpm_samples) or [0.0]
    y_max = max([20.0, *wpm, *raw]) * 1.1
    return ChartData(
        wpm=[(float(i), v) for i, v in enumerate(wpm)],
        raw_wpm=[(float(i), v) for i, v in enumerate(raw)],
        x_max=float(max(1, len(wpm))),
        y_max=y_max,
    )
