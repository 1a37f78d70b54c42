"""Rectangle geometry and constraint-based splitting.

A ``Rect`` is a cell-aligned region of the screen.  ``split`` divides one
along an axis according to ``Length`` / ``Min`` / ``Percentage``
constraints.  All arithmetic saturates at zero, so a region never ends up
with a negative width or height however small the terminal gets.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def left(self) -> int:
        return self.x

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def top(self) -> int:
        return self.y

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def inner(self, left: int = 0, top: int = 0, right: int = 0, bottom: int = 0) -> Rect:
        """Shrink by the given margins, never below zero size."""
        width = max(0, self.width - left - right)
        height = max(0, self.height - top - bottom)
        return Rect(
            min(self.x + left, self.right),
            min(self.y + top, self.bottom),
            width,
            height,
        )

    def intersection(self, other: Rect) -> Rect:
        x1 = max(self.x, other.x)
        y1 = max(self.y, other.y)
        x2 = min(self.right, other.right)
        y2 = min(self.bottom, other.bottom)
        return Rect(x1, y1, max(0, x2 - x1), max(0, y2 - y1))

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom


def centered(area: Rect, width: int, height: int) -> Rect:
    """Return a *width* x *height* rect centred in *area* (clamped to it)."""
    width = min(width, area.width)
    height = min(height, area.height)
    x = area.x + max(0, area.width - width) // 2
    y = area.y + max(0, area.height - height) // 2
    return Rect(x, y, width, height)


# ---------------------------------------------------------------------------
# Constraints
# ---------------------------------------------------------------------------


class Direction(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class Length:
    value: int


@dataclass(frozen=True)
class Min:
    value: int


@dataclass(frozen=True)
class Percentage:
    value: int


Constraint = Union[Length, Min, Percentage]


def split(area: Rect, direction: Direction, constraints: list[Constraint]) -> list[Rect]:
    """Divide *area* along *direction*.

    Fixed sizes (``Length``, ``Percentage`` of the total, ``Min`` at its
    minimum) are allocated first.  Leftover space goes to the first ``Min``
    constraint, or to the last segment when there is none.  When the
    request exceeds the space, segments are shrunk from the end backwards.
    """
    if not constraints:
        return []

    total = area.height if direction is Direction.VERTICAL else area.width

    sizes: list[int] = []
    for c in constraints:
        if isinstance(c, Percentage):
            sizes.append(total * max(0, c.value) // 100)
        else:
            sizes.append(max(0, c.value))

    used = sum(sizes)
    if used < total:
        flex = next(
            (i for i, c in enumerate(constraints) if isinstance(c, Min)),
            len(constraints) - 1,
        )
        sizes[flex] += total - used
    elif used > total:
        overflow = used - total
        for i in range(len(sizes) - 1, -1, -1):
            cut = min(sizes[i], overflow)
            sizes[i] -= cut
            overflow -= cut
            if overflow == 0:
                break

    rects: list[Rect] = []
    offset = 0
    for size in sizes:
        if direction is Direction.VERTICAL:
            rects.append(Rect(area.x, area.y + offset, area.width, size))
        else:
            rects.append(Rect(area.x + offset, area.y, size, area.height))
        offset += size
    return rects
