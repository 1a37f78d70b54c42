"""typist.tui: full-screen terminal UI toolkit with differential rendering."""

# Cell buffer
from typist.tui.buffer import Buffer, Cell, Color, Modifier, Style

# Keyboard input handling
from typist.tui.keys import Key, KeyId, parse_key, printable_char

# Geometry
from typist.tui.layout import Direction, Length, Min, Percentage, Rect, centered, split

# Stdin buffering
from typist.tui.stdin_buffer import StdinBuffer

# Terminal
from typist.tui.terminal import ProcessTerminal, Terminal

# Core TUI
from typist.tui.tui import TUI, Component

# Utilities
from typist.tui.utils import graphemes, visible_width

# Widgets
from typist.tui.widgets import (
    Alignment,
    Axis,
    Block,
    Borders,
    BorderType,
    Chart,
    Dataset,
    Gauge,
    Line,
    Marker,
    Paragraph,
    Span,
)

__all__ = [
    # Buffer
    "Buffer",
    "Cell",
    "Color",
    "Modifier",
    "Style",
    # Keys
    "Key",
    "KeyId",
    "parse_key",
    "printable_char",
    # Layout
    "Direction",
    "Length",
    "Min",
    "Percentage",
    "Rect",
    "centered",
    "split",
    # Input
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # TUI
    "TUI",
    "Component",
    # Utils
    "graphemes",
    "visible_width",
    # Widgets
    "Alignment",
    "Axis",
    "Block",
    "Borders",
    "BorderType",
    "Chart",
    "Dataset",
    "Gauge",
    "Line",
    "Marker",
    "Paragraph",
    "Span",
]
