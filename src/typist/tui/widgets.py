"""Widgets that draw into a :class:`~typist.tui.buffer.Buffer`.

``Block`` draws borders and a title, ``Paragraph`` draws styled text with
optional word wrapping, ``Gauge`` draws a horizontal fill bar and ``Chart``
plots line datasets on two labelled axes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag

from typist.tui.buffer import Buffer, Style
from typist.tui.layout import Rect
from typist.tui.utils import grapheme_width, graphemes, visible_width

# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class Span:
    content: str
    style: Style = Style()

    @property
    def width(self) -> int:
        return visible_width(self.content)


@dataclass
class Line:
    spans: list[Span] = field(default_factory=list)
    alignment: Alignment | None = None

    @classmethod
    def raw(cls, text: str, style: Style = Style()) -> Line:
        return cls([Span(text, style)] if text else [])

    @property
    def width(self) -> int:
        return sum(s.width for s in self.spans)

    @property
    def plain(self) -> str:
        return "".join(s.content for s in self.spans)


def _to_lines(content: list[Line] | str) -> list[Line]:
    if isinstance(content, str):
        return [Line.raw(part) for part in content.split("\n")]
    return content


# ---------------------------------------------------------------------------
# Block
# ---------------------------------------------------------------------------


class Borders(IntFlag):
    NONE = 0
    TOP = 1
    RIGHT = 2
    BOTTOM = 4
    LEFT = 8
    ALL = TOP | RIGHT | BOTTOM | LEFT


class BorderType(Enum):
    PLAIN = "plain"
    ROUNDED = "rounded"


_BORDER_SYMBOLS: dict[BorderType, dict[str, str]] = {
    BorderType.PLAIN: {
        "h": "─", "v": "│", "tl": "┌", "tr": "┐", "bl": "└", "br": "┘",
    },
    BorderType.ROUNDED: {
        "h": "─", "v": "│", "tl": "╭", "tr": "╮", "bl": "╰", "br": "╯",
    },
}


@dataclass
class Block:
    title: str | list[Span] | None = None
    borders: Borders = Borders.NONE
    border_type: BorderType = BorderType.PLAIN
    border_style: Style = Style()
    title_style: Style = Style()
    style: Style = Style()

    def inner(self, area: Rect) -> Rect:
        b = self.borders
        top = 1 if (b & Borders.TOP or self.title) else 0
        return area.inner(
            left=1 if b & Borders.LEFT else 0,
            top=top,
            right=1 if b & Borders.RIGHT else 0,
            bottom=1 if b & Borders.BOTTOM else 0,
        )

    def render(self, area: Rect, buf: Buffer) -> None:
        area = area.intersection(buf.area)
        if area.is_empty():
            return
        buf.set_style(area, self.style)

        sym = _BORDER_SYMBOLS[self.border_type]
        b = self.borders
        bs = self.border_style
        last_x = area.right - 1
        last_y = area.bottom - 1

        if b & Borders.TOP:
            for x in range(area.left, area.right):
                buf.set_symbol(x, area.top, sym["h"], bs)
        if b & Borders.BOTTOM:
            for x in range(area.left, area.right):
                buf.set_symbol(x, last_y, sym["h"], bs)
        if b & Borders.LEFT:
            for y in range(area.top, area.bottom):
                buf.set_symbol(area.left, y, sym["v"], bs)
        if b & Borders.RIGHT:
            for y in range(area.top, area.bottom):
                buf.set_symbol(last_x, y, sym["v"], bs)

        if b & Borders.TOP and b & Borders.LEFT:
            buf.set_symbol(area.left, area.top, sym["tl"], bs)
        if b & Borders.TOP and b & Borders.RIGHT:
            buf.set_symbol(last_x, area.top, sym["tr"], bs)
        if b & Borders.BOTTOM and b & Borders.LEFT:
            buf.set_symbol(area.left, last_y, sym["bl"], bs)
        if b & Borders.BOTTOM and b & Borders.RIGHT:
            buf.set_symbol(last_x, last_y, sym["br"], bs)

        if self.title:
            left = area.left + (1 if b & Borders.LEFT else 0)
            right = area.right - (1 if b & Borders.RIGHT else 0)
            spans = [Span(self.title)] if isinstance(self.title, str) else self.title
            x = left
            for span in spans:
                x = buf.set_string(
                    x, area.top, span.content, self.title_style.patch(span.style), right - x
                )


# ---------------------------------------------------------------------------
# Paragraph
# ---------------------------------------------------------------------------

_Styled = tuple[str, Style]


def _line_graphemes(line: Line) -> list[_Styled]:
    out: list[_Styled] = []
    for span in line.spans:
        for g in graphemes(span.content):
            if grapheme_width(g) > 0:
                out.append((g, span.style))
    return out


def _width_of(row: list[_Styled]) -> int:
    return sum(grapheme_width(g) for g, _ in row)


def wrap_line(line: Line, width: int, trim: bool = True) -> list[list[_Styled]]:
    """Word-wrap one line into rows of at most *width* columns.

    Words longer than the row are broken.  With *trim*, whitespace at a
    wrap point is dropped instead of starting the next row.
    """
    cells = _line_graphemes(line)
    if width <= 0:
        return []
    if not cells:
        return [[]]

    # Tokenise into alternating whitespace / word runs
    tokens: list[list[_Styled]] = []
    for cell in cells:
        is_space = cell[0].isspace()
        if tokens and tokens[-1][0][0].isspace() == is_space:
            tokens[-1].append(cell)
        else:
            tokens.append([cell])

    rows: list[list[_Styled]] = []
    current: list[_Styled] = []
    current_w = 0
    pending: list[_Styled] = []

    for token in tokens:
        token_w = _width_of(token)
        if token[0][0].isspace():
            pending = token
            continue

        pending_w = _width_of(pending)
        if current_w + pending_w + token_w <= width:
            current.extend(pending)
            current.extend(token)
            current_w += pending_w + token_w
            pending = []
            continue

        # Trailing whitespace that still fits stays on the current row
        if pending and current_w + pending_w <= width:
            current.extend(pending)
        elif pending and not trim:
            current.extend(pending[: max(0, width - current_w)])
        if current or rows or pending:
            rows.append(current)
        current, current_w, pending = [], 0, []

        for cell in token:
            w = grapheme_width(cell[0])
            if current_w + w > width:
                rows.append(current)
                current, current_w = [], 0
            current.append(cell)
            current_w += w

    if pending:
        pending_w = _width_of(pending)
        if current_w + pending_w <= width:
            current.extend(pending)
        else:
            fit: list[_Styled] = []
            for cell in pending:
                if current_w + _width_of(fit) + grapheme_width(cell[0]) > width:
                    break
                fit.append(cell)
            current.extend(fit)
    rows.append(current)
    # A row is never emitted empty because of a leading wrap
    if len(rows) > 1 and not rows[0]:
        rows.pop(0)
    return rows


@dataclass
class Paragraph:
    text: list[Line] | str
    block: Block | None = None
    style: Style = Style()
    alignment: Alignment = Alignment.LEFT
    wrap: bool = False
    scroll: int = 0

    def _rows(self, width: int) -> list[tuple[list[_Styled], Alignment]]:
        rows: list[tuple[list[_Styled], Alignment]] = []
        for line in _to_lines(self.text):
            align = line.alignment or self.alignment
            if self.wrap:
                for row in wrap_line(line, width, trim=True):
                    rows.append((row, align))
            else:
                rows.append((_line_graphemes(line), align))
        return rows

    def render(self, area: Rect, buf: Buffer) -> None:
        area = area.intersection(buf.area)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty():
            return
        buf.set_style(area, self.style)

        rows = self._rows(area.width)[self.scroll :]
        for offset, (row, align) in enumerate(rows[: area.height]):
            row_w = _width_of(row)
            if align is Alignment.CENTER:
                x = area.left + max(0, area.width - row_w) // 2
            elif align is Alignment.RIGHT:
                x = area.left + max(0, area.width - row_w)
            else:
                x = area.left
            y = area.top + offset
            for g, style in row:
                w = grapheme_width(g)
                if x + w > area.right:
                    break
                buf.set_string(x, y, g, style)
                x += w


# ---------------------------------------------------------------------------
# Gauge
# ---------------------------------------------------------------------------


@dataclass
class Gauge:
    percent: int = 0
    label: str | None = None
    block: Block | None = None
    gauge_style: Style = Style()

    def render(self, area: Rect, buf: Buffer) -> None:
        area = area.intersection(buf.area)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.is_empty():
            return

        percent = max(0, min(100, self.percent))
        buf.set_style(area, self.gauge_style)
        filled_end = area.left + round(area.width * percent / 100)
        fill = Style(fg=self.gauge_style.bg, bg=self.gauge_style.fg)
        for y in range(area.top, area.bottom):
            for x in range(area.left, filled_end):
                buf.set_symbol(x, y, " ", fill)

        label = self.label if self.label is not None else f"{percent}%"
        label_w = visible_width(label)
        label_x = area.left + max(0, area.width - label_w) // 2
        label_y = area.top + area.height // 2
        buf.set_string(label_x, label_y, label, max_width=area.right - label_x)


# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------


class Marker(Enum):
    DOT = "dot"
    BRAILLE = "braille"


# Braille dot bit for (column, row) inside a 2x4 cell
_BRAILLE_BITS = (
    (0x01, 0x08),
    (0x02, 0x10),
    (0x04, 0x20),
    (0x40, 0x80),
)
_BRAILLE_BASE = 0x2800


@dataclass
class Dataset:
    name: str
    data: list[tuple[float, float]]
    marker: Marker = Marker.DOT
    style: Style = Style()


@dataclass
class Axis:
    title: str | None = None
    bounds: tuple[float, float] = (0.0, 1.0)
    labels: list[str] = field(default_factory=list)
    style: Style = Style()


def _scale(value: float, lo: float, hi: float, steps: int) -> int | None:
    if hi <= lo or steps <= 0:
        return None
    pos = (value - lo) / (hi - lo)
    if pos < 0 or pos > 1:
        return None
    return min(steps - 1, int(pos * steps))


@dataclass
class Chart:
    datasets: list[Dataset]
    block: Block | None = None
    x_axis: Axis = field(default_factory=Axis)
    y_axis: Axis = field(default_factory=Axis)

    def render(self, area: Rect, buf: Buffer) -> None:  # noqa: C901
        area = area.intersection(buf.area)
        if self.block is not None:
            self.block.render(area, buf)
            area = self.block.inner(area)
        if area.width < 3 or area.height < 3:
            return

        y_label_w = max((visible_width(label) for label in self.y_axis.labels), default=0)
        axis_x = area.left + y_label_w
        x_labels_row = area.bottom - 1 if self.x_axis.labels else None
        axis_y = (x_labels_row - 1) if x_labels_row is not None else area.bottom - 1
        graph = Rect(axis_x + 1, area.top, max(0, area.right - axis_x - 1), max(0, axis_y - area.top))
        if graph.is_empty():
            return

        # -- axes ---------------------------------------------------------------
        for y in range(graph.top, axis_y):
            buf.set_symbol(axis_x, y, "│", self.y_axis.style)
        for x in range(graph.left, graph.right):
            buf.set_symbol(x, axis_y, "─", self.x_axis.style)
        buf.set_symbol(axis_x, axis_y, "└", self.x_axis.style)

        # -- labels -------------------------------------------------------------
        labels = self.y_axis.labels
        if labels:
            span = axis_y - graph.top
            for i, label in enumerate(labels):
                if len(labels) == 1:
                    y = axis_y
                else:
                    y = axis_y - (i * span) // (len(labels) - 1)
                buf.set_string(area.left, y, label, self.y_axis.style, y_label_w)

        if x_labels_row is not None:
            labels = self.x_axis.labels
            for i, label in enumerate(labels):
                w = visible_width(label)
                if i == 0:
                    x = axis_x
                elif i == len(labels) - 1:
                    x = area.right - w
                else:
                    x = graph.left + (i * graph.width) // (len(labels) - 1) - w // 2
                buf.set_string(max(area.left, x), x_labels_row, label, self.x_axis.style)

        # -- titles -------------------------------------------------------------
        if self.y_axis.title:
            buf.set_string(graph.left, graph.top, self.y_axis.title, self.y_axis.style, graph.width)
        if self.x_axis.title:
            w = visible_width(self.x_axis.title)
            buf.set_string(
                max(graph.left, graph.right - w), graph.bottom - 1, self.x_axis.title, self.x_axis.style
            )

        # -- data ---------------------------------------------------------------
        x_lo, x_hi = self.x_axis.bounds
        y_lo, y_hi = self.y_axis.bounds
        for dataset in self.datasets:
            if dataset.marker is Marker.BRAILLE:
                self._plot_braille(dataset, graph, buf, x_lo, x_hi, y_lo, y_hi)
            else:
                for px, py in dataset.data:
                    cx = _scale(px, x_lo, x_hi, graph.width)
                    cy = _scale(py, y_lo, y_hi, graph.height)
                    if cx is None or cy is None:
                        continue
                    buf.set_symbol(graph.left + cx, graph.bottom - 1 - cy, "•", dataset.style)

        # -- legend -------------------------------------------------------------
        names = [d for d in self.datasets if d.name]
        legend_w = max((visible_width(d.name) for d in names), default=0)
        if names and graph.width >= legend_w + 2 and graph.height > len(names) + 1:
            for i, dataset in enumerate(names):
                buf.set_string(graph.right - legend_w, graph.top + i, dataset.name.ljust(legend_w), dataset.style)

    @staticmethod
    def _plot_braille(
        dataset: Dataset, graph: Rect, buf: Buffer, x_lo: float, x_hi: float, y_lo: float, y_hi: float
    ) -> None:
        dots: dict[tuple[int, int], int] = {}
        for px, py in dataset.data:
            dx = _scale(px, x_lo, x_hi, graph.width * 2)
            dy = _scale(py, y_lo, y_hi, graph.height * 4)
            if dx is None or dy is None:
                continue
            row_from_top = graph.height * 4 - 1 - dy
            cell = (dx // 2, row_from_top // 4)
            dots[cell] = dots.get(cell, 0) | _BRAILLE_BITS[row_from_top % 4][dx % 2]
        for (cx, cy), bits in dots.items():
            buf.set_symbol(graph.left + cx, graph.top + cy, chr(_BRAILLE_BASE + bits), dataset.style)
