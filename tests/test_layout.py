"""Tests for Rect geometry and constraint splitting."""

from __future__ import annotations

from typist.tui.layout import Direction, Length, Min, Percentage, Rect, centered, split


class TestRect:
    def test_edges(self) -> None:
        r = Rect(2, 3, 10, 4)
        assert (r.left, r.right, r.top, r.bottom) == (2, 12, 3, 7)
        assert r.area == 40

    def test_inner_saturates(self) -> None:
        assert Rect(0, 0, 10, 5).inner(1, 1, 1, 1) == Rect(1, 1, 8, 3)
        shrunk = Rect(0, 0, 1, 1).inner(2, 2, 2, 2)
        assert shrunk.is_empty()
        assert shrunk.width == 0 and shrunk.height == 0

    def test_intersection(self) -> None:
        assert Rect(0, 0, 10, 10).intersection(Rect(5, 5, 10, 10)) == Rect(5, 5, 5, 5)
        assert Rect(0, 0, 2, 2).intersection(Rect(5, 5, 1, 1)).is_empty()

    def test_contains(self) -> None:
        r = Rect(1, 1, 2, 2)
        assert r.contains(1, 1)
        assert not r.contains(3, 1)


class TestCentered:
    def test_centres(self) -> None:
        assert centered(Rect(0, 0, 82, 16), 60, 14) == Rect(11, 1, 60, 14)

    def test_clamped_to_area(self) -> None:
        assert centered(Rect(4, 4, 10, 3), 50, 50) == Rect(4, 4, 10, 3)


class TestSplit:
    def test_min_takes_leftover(self) -> None:
        top, rest = split(Rect(0, 0, 80, 20), Direction.VERTICAL, [Length(3), Min(1)])
        assert top == Rect(0, 0, 80, 3)
        assert rest == Rect(0, 3, 80, 17)

    def test_horizontal(self) -> None:
        left, right = split(Rect(0, 0, 100, 5), Direction.HORIZONTAL, [Length(25), Min(30)])
        assert left == Rect(0, 0, 25, 5)
        assert right == Rect(25, 0, 75, 5)

    def test_percentages(self) -> None:
        a, b = split(Rect(0, 0, 10, 1), Direction.HORIZONTAL, [Percentage(50), Percentage(50)])
        assert (a.width, b.width) == (5, 5)

    def test_last_segment_absorbs_without_min(self) -> None:
        a, b = split(Rect(0, 0, 10, 1), Direction.HORIZONTAL, [Length(2), Length(2)])
        assert (a.width, b.width) == (2, 8)

    def test_overflow_shrinks_from_end(self) -> None:
        parts = split(Rect(0, 0, 5, 1), Direction.HORIZONTAL, [Length(3), Length(3), Length(3)])
        assert [p.width for p in parts] == [3, 2, 0]

    def test_zero_area(self) -> None:
        parts = split(Rect(0, 0, 0, 0), Direction.VERTICAL, [Length(3), Min(1)])
        assert all(p.is_empty() for p in parts)

    def test_no_constraints(self) -> None:
        assert split(Rect(0, 0, 5, 5), Direction.VERTICAL, []) == []
