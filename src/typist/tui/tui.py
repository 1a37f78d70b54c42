"""Full-screen TUI driver with differential rendering.

Provides the ``Component`` protocol and the ``TUI`` class, which owns a
single root component, renders it to exactly one line per terminal row,
and rewrites only the rows that changed since the previous frame.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from typist.tui.terminal import Terminal

__all__ = [
    "Component",
    "TUI",
]

logger = logging.getLogger(__name__)

_MOVE_TO_FMT = "\x1b[{};1H"
_CLEAR_LINE_END = "\x1b[K"
_CLEAR_SCREEN = "\x1b[2J"
_SYNC_START = "\x1b[?2026h"
_SYNC_END = "\x1b[?2026l"

# ---------------------------------------------------------------------------
# Protocols
# ---------------------------------------------------------------------------


class Component(Protocol):
    """A renderable full-screen component.

    ``handle_input`` is optional -- checked at the call site via
    ``getattr``.
    """

    def render(self, width: int, height: int) -> list[str]:
        """Render into at most *height* terminal lines of *width* columns."""
        ...


# ---------------------------------------------------------------------------
# TUI
# ---------------------------------------------------------------------------


class TUI:
    """Main TUI controller: rendering and input dispatch.

    * Differential rendering -- only changed rows are re-written.
    * A terminal size change forces a full redraw.
    * Render requests coalesce into one pass per event-loop tick.
    """

    def __init__(self, terminal: Terminal, root: Component | None = None) -> None:
        self.terminal: Terminal = terminal
        self.root: Component | None = root

        # Previous render state (for differential updates)
        self._previous_lines: list[str] = []
        self._previous_size: tuple[int, int] = (0, 0)

        self._render_requested: bool = False
        self._full_redraw_count: int = 0
        self._stopped: bool = True

        # Called for every raw input chunk before the root sees it
        self.on_input: Callable[[str], None] | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def full_redraws(self) -> int:
        """Number of full (non-differential) redraws performed."""
        return self._full_redraw_count

    @property
    def previous_lines(self) -> list[str]:
        return list(self._previous_lines)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Start the terminal and schedule the first frame."""
        self._stopped = False
        self.terminal.start(self.handle_input, self.handle_resize)
        self.terminal.hide_cursor()
        self.request_render()

    def stop(self) -> None:
        """Stop rendering and restore the terminal."""
        if self._stopped:
            return
        self._stopped = True
        self.terminal.show_cursor()
        self.terminal.stop()

    def invalidate(self) -> None:
        """Forget the previous frame so the next render repaints everything."""
        self._previous_lines = []
        self._previous_size = (0, 0)
        self.request_render()

    # ------------------------------------------------------------------
    # Render scheduling
    # ------------------------------------------------------------------

    def request_render(self) -> None:
        """Schedule a render on the next event-loop tick.

        Multiple calls coalesce into a single render pass.
        """
        if self._render_requested or self._stopped:
            return
        self._render_requested = True
        try:
            loop = asyncio.get_running_loop()
            loop.call_soon(self._do_render_tick)
        except RuntimeError:
            # No running event loop -- render synchronously
            self._do_render_tick()

    def _do_render_tick(self) -> None:
        self._render_requested = False
        if self._stopped:
            return
        self.do_render()

    # ------------------------------------------------------------------
    # Input handling
    # ------------------------------------------------------------------

    def handle_input(self, data: str) -> None:
        """Dispatch terminal input to the root component."""
        if self._stopped:
            return
        if self.on_input is not None:
            self.on_input(data)
        handler = getattr(self.root, "handle_input", None)
        if callable(handler):
            handler(data)
        self.request_render()

    def handle_resize(self) -> None:
        logger.debug("terminal resized to %dx%d", self.terminal.columns, self.terminal.rows)
        self.request_render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def do_render(self) -> None:
        """Perform a differential (or full) render pass."""
        if self._stopped or self.root is None:
            return

        width = self.terminal.columns
        height = self.terminal.rows
        if width <= 0 or height <= 0:
            return

        lines = self.root.render(width, height)[:height]
        if len(lines) < height:
            lines = lines + [""] * (height - len(lines))

        force_full = (width, height) != self._previous_size
        out: list[str] = [_SYNC_START]

        if force_full:
            self._full_redraw_count += 1
            out.append(_CLEAR_SCREEN)
            changed = range(height)
        else:
            changed = [
                i
                for i, line in enumerate(lines)
                if i >= len(self._previous_lines) or self._previous_lines[i] != line
            ]

        if not force_full and not changed:
            return

        for i in changed:
            out.append(_MOVE_TO_FMT.format(i + 1))
            out.append(lines[i])
            out.append(_CLEAR_LINE_END)

        out.append(_SYNC_END)
        self.terminal.write("".join(out))

        self._previous_lines = lines
        self._previous_size = (width, height)
