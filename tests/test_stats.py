"""Tests for WPM / accuracy calculation and the stats engine."""

from __future__ import annotations

import pytest

from typist.trainer.core.stats import StatsEngine, calculate_accuracy, calculate_wpm


class TestCalculateWpm:
    def test_five_chars_per_word(self) -> None:
        assert calculate_wpm(50, 60.0) == pytest.approx(10.0)

    def test_half_minute(self) -> None:
        assert calculate_wpm(25, 30.0) == pytest.approx(10.0)

    def test_zero_elapsed(self) -> None:
        assert calculate_wpm(50, 0.0) == 0.0

    def test_negative_elapsed(self) -> None:
        assert calculate_wpm(50, -1.0) == 0.0


class TestCalculateAccuracy:
    def test_nothing_typed(self) -> None:
        assert calculate_accuracy(0, 0) == 0.0

    def test_all_correct(self) -> None:
        assert calculate_accuracy(7, 7) == 100.0

    def test_partial(self) -> None:
        assert calculate_accuracy(3, 4) == pytest.approx(75.0)


class TestStatsEngine:
    def test_update(self) -> None:
        engine = StatsEngine()
        engine.update(correct=40, total=50, elapsed_s=60.0)
        assert engine.state.wpm == pytest.approx(8.0)
        assert engine.state.raw_wpm == pytest.approx(10.0)
        assert engine.state.accuracy == pytest.approx(80.0)

    def test_raw_never_below_wpm(self) -> None:
        engine = StatsEngine()
        for correct, total in [(0, 0), (1, 1), (3, 5), (10, 10)]:
            engine.update(correct, total, 12.0)
            assert engine.state.raw_wpm >= engine.state.wpm

    def test_sample_fills_whole_seconds(self) -> None:
        engine = StatsEngine()
        engine.update(10, 10, 1.0)
        assert engine.sample(0.9) == 0
        assert engine.sample(3.2) == 3
        assert engine.sample(3.9) == 0
        assert engine.state.wpm_samples == [engine.state.wpm] * 3
        assert len(engine.state.raw_wpm_samples) == 3

    def test_finish_freezes(self) -> None:
        engine = StatsEngine()
        final = engine.finish(5, 5, 60.0)
        assert engine.finished
        assert final.duration_s == 60.0
        assert final.wpm == pytest.approx(1.0)

        engine.update(100, 100, 1.0)
        assert engine.sample(10.0) == 0
        assert engine.state.wpm == pytest.approx(1.0)
        assert engine.state.wpm_samples == []

    def test_finish_twice_keeps_first(self) -> None:
        engine = StatsEngine()
        engine.finish(5, 5, 60.0)
        engine.finish(50, 50, 1.0)
        assert engine.state.duration_s == 60.0

    def test_reset(self) -> None:
        engine = StatsEngine()
        engine.update(5, 5, 1.0)
        engine.sample(2.0)
        engine.finish(5, 5, 2.0)
        engine.reset()
        assert not engine.finished
        assert engine.state.wpm == 0.0
        assert engine.state.wpm_samples == []
