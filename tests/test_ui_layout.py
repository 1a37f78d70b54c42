"""Tests for the size-driven layout decisions."""

from __future__ import annotations

import pytest

from typist.trainer.core.config import Config, Timed, Words
from typist.trainer.ui.layout import (
    ESC_HINT,
    CompletionView,
    HeaderInfo,
    MainView,
    StatsView,
    app_title,
    chart_data,
    completion_popup,
    completion_two_columns,
    frame_layout,
    header_info,
    main_view,
    menu_popup,
    stats_height,
    stats_view,
    typing_header,
    typing_text_area,
    warning_popup,
)
from typist.tui.layout import Rect

from .conftest import FakeClock, make_session


def info(**overrides: object) -> HeaderInfo:
    values: dict[str, object] = dict(
        title="Typist",
        mode="Mode: Timed 30s",
        difficulty="Difficulty: Medium",
        repeat="Repeat: OFF",
        end_on_error="End on Error: No",
        time="Time: 30s",
        stats="WPM: 0.0 | Raw WPM: 0.0 | Acc: 0.0%",
        wpm=0.0,
        raw_wpm=0.0,
    )
    values.update(overrides)
    return HeaderInfo(**values)  # type: ignore[arg-type]


class TestFrame:
    def test_below_minimum_width(self) -> None:
        assert frame_layout(81, 22).too_small

    def test_below_minimum_height(self) -> None:
        assert frame_layout(82, 21).too_small

    def test_minimum_size_is_normal(self) -> None:
        layout = frame_layout(82, 22)
        assert not layout.too_small
        assert layout.main == Rect(0, 0, 82, 16)
        assert layout.stats == Rect(0, 16, 82, 6)

    def test_stats_height(self) -> None:
        assert stats_height(14) == 3
        assert stats_height(15) == 6


class TestMainView:
    def test_priority(self, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Words(10), repeat_test=True), clock)
        assert main_view(session) is MainView.TYPING
        session.handle_key("escape")
        assert main_view(session) is MainView.MENU
        session.handle_key("down")
        session.handle_key("enter")
        session.handle_key("enter")
        assert session.warning_state is not None
        assert main_view(session) is MainView.WARNING

    def test_test_complete(self, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Words(2)), clock)
        for ch in session.text_source.full_text:
            session.handle_key(ch)
        assert main_view(session) is MainView.TEST_COMPLETE


class TestHeader:
    def test_app_title(self) -> None:
        assert app_title(False) == "Typist"
        assert app_title(True) == "Typist [Repeat Mode]"

    def test_header_info_before_start(self, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Timed(60)), clock)
        assert header_info(session).time == "Time: 60s"
        assert header_info(session).mode == "Mode: Timed 60s"

    def test_header_info_counts_down(self, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Timed(60)), clock)
        session.handle_key("x")
        clock.advance(10.5)
        assert header_info(session).time == "Time: 50s"

    def test_header_info_words_has_no_time(self, clock: FakeClock) -> None:
        session = make_session(Config(test_mode=Words(10)), clock)
        assert header_info(session).time == ""

    def test_single_line_when_it_fits(self) -> None:
        header = typing_header(info(), 250)
        assert header.single_line
        assert header.first.startswith("Typist | Mode: Timed 30s")
        assert header.first.endswith(f"Time: 30s | {ESC_HINT}")

    def test_narrow(self) -> None:
        header = typing_header(info(wpm=42.25), 35)
        assert header.first == "Typist | Time: 30s"
        assert header.second == "WPM: 42.2 | ESC:Menu"
        assert header.third is None

    def test_medium_adds_stats_row(self) -> None:
        header = typing_header(info(time=""), 55)
        assert header.first == "Typist | Mode: Timed 30s"
        assert header.second.startswith("WPM: 0.0 | Raw: 0.0")
        assert header.third == info().stats

    def test_up_to_90_columns(self) -> None:
        header = typing_header(info(), 85)
        assert header.first == f"Typist | Mode: Timed 30s | Time: 30s | {info().stats}"
        assert header.second == f"Difficulty: Medium | Repeat: OFF | End on Error: No | {ESC_HINT}"
        assert header.third is None

    def test_wide_splits_stats(self) -> None:
        header = typing_header(info(), 150)
        assert not header.single_line
        assert header.first.startswith("Typist | Mode: Timed 30s | Difficulty: Medium")
        assert header.second is not None
        assert header.second.endswith(ESC_HINT)

    def test_text_area_below_header_rows(self) -> None:
        inner = Rect(1, 1, 60, 10)
        assert typing_text_area(inner, typing_header(info(), 250)) == inner
        assert typing_text_area(inner, typing_header(info(), 85)) == Rect(1, 2, 60, 9)
        assert typing_text_area(inner, typing_header(info(), 55)) == Rect(1, 3, 60, 8)


class TestPopups:
    def test_completion_tiers(self) -> None:
        assert completion_popup(Rect(0, 0, 14, 10))[0] is CompletionView.TEXT
        assert completion_popup(Rect(0, 0, 24, 10))[0] is CompletionView.COMPACT
        assert completion_popup(Rect(0, 0, 30, 4))[0] is CompletionView.COMPACT
        view, rect = completion_popup(Rect(0, 0, 82, 16))
        assert view is CompletionView.POPUP
        assert rect == Rect(11, 1, 60, 14)

    def test_completion_columns(self) -> None:
        assert completion_two_columns(Rect(0, 0, 40, 8))
        assert not completion_two_columns(Rect(0, 0, 39, 8))
        assert not completion_two_columns(Rect(0, 0, 58, 7))

    def test_menu_popup(self) -> None:
        assert menu_popup(Rect(0, 0, 82, 16)) == Rect(2, 1, 78, 14)
        assert menu_popup(Rect(0, 0, 33, 16)) is None
        assert menu_popup(Rect(0, 0, 82, 11)) is None

    def test_warning_popup(self) -> None:
        assert warning_popup(Rect(0, 0, 82, 16)) == Rect(5, 3, 72, 10)
        assert warning_popup(Rect(0, 0, 82, 8)) is None
        assert warning_popup(Rect(0, 0, 29, 16)) is None

    def test_zero_area_never_fails(self) -> None:
        empty = Rect(0, 0, 0, 0)
        assert completion_popup(empty)[0] is CompletionView.TEXT
        assert menu_popup(empty) is None
        assert warning_popup(empty) is None


class TestStatsView:
    def test_tiers(self) -> None:
        assert stats_view(Rect(0, 0, 7, 6)) is StatsView.NONE
        assert stats_view(Rect(0, 0, 80, 1)) is StatsView.NONE
        assert stats_view(Rect(0, 0, 29, 6)) is StatsView.COMPACT
        assert stats_view(Rect(0, 0, 39, 6)) is StatsView.MINIMAL_GAUGE
        assert stats_view(Rect(0, 0, 80, 4)) is StatsView.MINIMAL_GAUGE
        assert stats_view(Rect(0, 0, 59, 6)) is StatsView.GAUGES
        assert stats_view(Rect(0, 0, 82, 5)) is StatsView.GAUGES
        assert stats_view(Rect(0, 0, 82, 6)) is StatsView.GAUGES_AND_CHART


class TestChartData:
    def test_empty_series_plot_zero(self) -> None:
        data = chart_data([], [])
        assert data.wpm == [(0.0, 0.0)]
        assert data.raw_wpm == [(0.0, 0.0)]
        assert data.x_max == 1.0
        assert data.y_max == pytest.approx(22.0)

    def test_bounds_follow_samples(self) -> None:
        data = chart_data([10.0, 50.0], [12.0, 60.0])
        assert data.x_max == 2.0
        assert data.y_max == pytest.approx(66.0)
        assert data.x_labels == ["0", "2"]
        assert data.y_labels == ["0", "33", "66"]
