"""Interactive typing test: binds a :class:`Session` to the terminal UI."""

from __future__ import annotations

import asyncio
import logging

from typist.trainer.core.session import Session
from typist.trainer.ui.layout import APP_NAME
from typist.trainer.ui.render import render_frame
from typist.tui.keys import parse_key
from typist.tui.stdin_buffer import BRACKETED_PASTE_START
from typist.tui.terminal import ProcessTerminal, Terminal
from typist.tui.tui import TUI

logger = logging.getLogger(__name__)

TICK_INTERVAL = 0.1


class TypingApp:
    """Root component: renders the session and feeds it key presses."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.quit_event = asyncio.Event()

    def render(self, width: int, height: int) -> list[str]:
        return render_frame(self.session, width, height).to_lines()

    def handle_input(self, data: str) -> None:
        if data.startswith(BRACKETED_PASTE_START):
            logger.debug("ignoring %d pasted characters", len(data))
            return
        key = parse_key(data)
        if key is None:
            logger.debug("unhandled input %r", data)
            return
        self.session.handle_key(key)
        if self.session.should_quit:
            self.quit_event.set()


async def run_app(
    session: Session,
    terminal: Terminal | None = None,
    *,
    tick_interval: float = TICK_INTERVAL,
) -> None:
    """Run the typing test until the user quits.

    The terminal is restored on every exit path, including cancellation.
    """
    app = TypingApp(session)
    tui = TUI(terminal or ProcessTerminal(), app)

    tui.start()
    tui.terminal.set_title(APP_NAME)
    logger.info("started at %dx%d", tui.terminal.columns, tui.terminal.rows)
    try:
        while not session.should_quit:
            try:
                await asyncio.wait_for(app.quit_event.wait(), timeout=tick_interval)
            except asyncio.TimeoutError:
                pass
            if session.tick():
                tui.request_render()
    finally:
        tui.stop()
        logger.info("stopped")
