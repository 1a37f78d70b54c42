"""Cell frame buffer.

A ``Buffer`` holds one styled ``Cell`` per terminal position.  Widgets draw
into it with clipped writes, and the finished frame is serialised into one
ANSI string per row for the differential renderer in :mod:`typist.tui.tui`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from typing import Union

from typist.tui.layout import Rect
from typist.tui.utils import grapheme_width, graphemes

# An RGB triple or one of the names in ``_NAMED_COLORS``.
Color = Union[tuple[int, int, int], str]

_NAMED_COLORS: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "gray": 90,
}

_RESET = "\x1b[0m"


class Modifier(IntFlag):
    NONE = 0
    BOLD = 1
    DIM = 2
    SLOW_BLINK = 4
    REVERSED = 8


_MODIFIER_CODES: list[tuple[Modifier, str]] = [
    (Modifier.BOLD, "1"),
    (Modifier.DIM, "2"),
    (Modifier.SLOW_BLINK, "5"),
    (Modifier.REVERSED, "7"),
]


def _color_code(color: Color, background: bool) -> str:
    if isinstance(color, tuple):
        r, g, b = color
        return f"{48 if background else 38};2;{r};{g};{b}"
    base = _NAMED_COLORS[color]
    return str(base + 10 if background else base)


@dataclass(frozen=True)
class Style:
    fg: Color | None = None
    bg: Color | None = None
    modifiers: Modifier = Modifier.NONE

    def patch(self, other: Style) -> Style:
        """Overlay *other* on this style: set colours win, modifiers add up."""
        return Style(
            fg=other.fg if other.fg is not None else self.fg,
            bg=other.bg if other.bg is not None else self.bg,
            modifiers=self.modifiers | other.modifiers,
        )

    def add_modifier(self, modifier: Modifier) -> Style:
        return Style(self.fg, self.bg, self.modifiers | modifier)

    def sgr(self) -> str:
        """Return the SGR escape that selects this style (empty for default)."""
        codes = [code for flag, code in _MODIFIER_CODES if self.modifiers & flag]
        if self.fg is not None:
            codes.append(_color_code(self.fg, background=False))
        if self.bg is not None:
            codes.append(_color_code(self.bg, background=True))
        if not codes:
            return ""
        return "\x1b[" + ";".join(codes) + "m"


@dataclass
class Cell:
    symbol: str = " "
    style: Style = field(default_factory=Style)


class Buffer:
    """A width x height grid of cells covering *area*."""

    def __init__(self, area: Rect) -> None:
        self.area = area
        self._cells: list[Cell] = [Cell() for _ in range(area.width * area.height)]

    @classmethod
    def empty(cls, width: int, height: int) -> Buffer:
        return cls(Rect(0, 0, max(0, width), max(0, height)))

    def _index(self, x: int, y: int) -> int:
        return (y - self.area.y) * self.area.width + (x - self.area.x)

    def cell(self, x: int, y: int) -> Cell | None:
        if not self.area.contains(x, y):
            return None
        return self._cells[self._index(x, y)]

    def set_string(
        self,
        x: int,
        y: int,
        text: str,
        style: Style = Style(),
        max_width: int | None = None,
    ) -> int:
        """Write *text* starting at (*x*, *y*), clipped to the buffer.

        Returns the column after the last written grapheme.
        """
        limit = self.area.right if max_width is None else min(self.area.right, x + max(0, max_width))
        if not (self.area.top <= y < self.area.bottom):
            return x
        for g in graphemes(text):
            w = grapheme_width(g)
            if w == 0:
                continue
            if x + w > limit:
                break
            if x >= self.area.left:
                cell = self._cells[self._index(x, y)]
                cell.symbol = g
                cell.style = cell.style.patch(style)
                # Wide graphemes own the following cell
                for extra in range(1, w):
                    cont = self._cells[self._index(x + extra, y)]
                    cont.symbol = ""
                    cont.style = cont.style.patch(style)
            x += w
        return x

    def set_style(self, area: Rect, style: Style) -> None:
        """Patch *style* onto every cell of *area* (clipped)."""
        area = area.intersection(self.area)
        for y in range(area.top, area.bottom):
            for x in range(area.left, area.right):
                cell = self._cells[self._index(x, y)]
                cell.style = cell.style.patch(style)

    def set_symbol(self, x: int, y: int, symbol: str, style: Style = Style()) -> None:
        cell = self.cell(x, y)
        if cell is not None:
            cell.symbol = symbol
            cell.style = cell.style.patch(style)

    # -- inspection -----------------------------------------------------------

    def row_text(self, y: int) -> str:
        """Plain text of row *y* (styles dropped)."""
        start = self._index(self.area.x, y)
        return "".join(c.symbol for c in self._cells[start : start + self.area.width])

    def text(self) -> list[str]:
        return [self.row_text(y) for y in range(self.area.top, self.area.bottom)]

    def find(self, needle: str) -> tuple[int, int] | None:
        """Return (x, y) of the first occurrence of *needle*, or ``None``.

        ``x`` is a character offset into the row text, which equals the
        column for rows without wide graphemes.
        """
        for y in range(self.area.top, self.area.bottom):
            idx = self.row_text(y).find(needle)
            if idx != -1:
                return self.area.x + idx, y
        return None

    # -- serialisation ----------------------------------------------------------

    def to_lines(self) -> list[str]:
        """Serialise every row into an ANSI string."""
        lines: list[str] = []
        width = self.area.width
        for row in range(self.area.height):
            cells = self._cells[row * width : (row + 1) * width]
            parts: list[str] = []
            current: Style | None = None
            for cell in cells:
                if cell.style != current:
                    parts.append(_RESET + cell.style.sgr())
                    current = cell.style
                parts.append(cell.symbol)
            parts.append(_RESET)
            lines.append("".join(parts))
        return lines
