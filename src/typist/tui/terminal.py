"""Terminal abstraction for raw-mode stdin/stdout interaction.

``Terminal`` is the protocol the :class:`~typist.tui.tui.TUI` drives.
``ProcessTerminal`` implements it on the controlling tty: it owns the
alternate screen for the lifetime of the app and hands every complete key
sequence (or bracketed paste) to one input callback.
"""

from __future__ import annotations

import asyncio
import codecs
import logging
import os
import signal
import sys
import termios
import tty
from typing import Callable, Protocol

from typist.tui.stdin_buffer import BRACKETED_PASTE_END, BRACKETED_PASTE_START, StdinBuffer

logger = logging.getLogger(__name__)

# Alternate screen + bracketed paste + hidden cursor; _LEAVE undoes them in reverse.
_ENTER = "\x1b[?1049h\x1b[?2004h\x1b[?25l"
_LEAVE = "\x1b[?25h\x1b[?2004l\x1b[?1049l"

_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_SET_TITLE_FMT = "\x1b]0;{}\x07"

_READ_SIZE = 4096
_FALLBACK_SIZE = os.terminal_size((80, 24))


class Terminal(Protocol):
    """What the TUI needs from a terminal."""

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None: ...

    def stop(self) -> None: ...

    def write(self, data: str) -> None: ...

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def hide_cursor(self) -> None: ...

    def show_cursor(self) -> None: ...

    def set_title(self, title: str) -> None: ...


class ProcessTerminal:
    """The real tty behind ``sys.stdin`` / ``sys.stdout``.

    :meth:`start` must run inside an asyncio loop, which reads keystrokes
    through a loop reader.  Setting ``TYPIST_WRITE_LOG`` to a path appends
    every frame written to that file.
    """

    def __init__(self) -> None:
        self._on_input: Callable[[str], None] | None = None
        self._on_resize: Callable[[], None] | None = None
        self._keys: StdinBuffer | None = None
        self._saved_attrs: list | None = None
        self._saved_sigwinch: signal.Handlers | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._write_log = os.environ.get("TYPIST_WRITE_LOG", "")
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def _size(self) -> os.terminal_size:
        try:
            return os.get_terminal_size(sys.stdout.fileno())
        except (ValueError, OSError):
            return _FALLBACK_SIZE

    @property
    def columns(self) -> int:
        return self._size().columns

    @property
    def rows(self) -> int:
        return self._size().lines

    # -- lifecycle ----------------------------------------------------------

    def start(
        self,
        on_input: Callable[[str], None],
        on_resize: Callable[[], None],
    ) -> None:
        """Enter raw mode and the alternate screen, then listen for keys."""
        self._on_input = on_input
        self._on_resize = on_resize

        fd = sys.stdin.fileno()
        self._saved_attrs = termios.tcgetattr(fd)
        tty.setraw(fd)
        self._emit(_ENTER)

        self._saved_sigwinch = signal.getsignal(signal.SIGWINCH)
        signal.signal(signal.SIGWINCH, self._handle_sigwinch)

        self._keys = StdinBuffer(timeout=0.01)
        self._keys.on_data(self._deliver)
        self._keys.on_paste(lambda text: self._deliver(BRACKETED_PASTE_START + text + BRACKETED_PASTE_END))

        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("no running event loop; keyboard input disabled")
        else:
            self._loop.add_reader(fd, self._read_stdin)
        logger.debug("terminal started (%dx%d)", self.columns, self.rows)

    def stop(self) -> None:
        """Undo everything :meth:`start` did, in reverse order."""
        if self._loop is not None:
            self._loop.remove_reader(sys.stdin.fileno())
            self._loop = None
        if self._keys is not None:
            self._keys.destroy()
            self._keys = None

        if self._saved_sigwinch is not None:
            signal.signal(signal.SIGWINCH, self._saved_sigwinch)
            self._saved_sigwinch = None

        self._emit(_LEAVE)
        if self._saved_attrs is not None:
            termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, self._saved_attrs)
            self._saved_attrs = None

        self._on_input = None
        self._on_resize = None
        logger.debug("terminal stopped")

    # -- output -------------------------------------------------------------

    def write(self, data: str) -> None:
        self._emit(data)
        if not self._write_log:
            return
        try:
            with open(self._write_log, "a", encoding="utf-8") as f:
                f.write(data)
        except OSError as e:
            logger.warning("could not append to write log %s: %s", self._write_log, e)

    def hide_cursor(self) -> None:
        self._emit(_HIDE_CURSOR)

    def show_cursor(self) -> None:
        self._emit(_SHOW_CURSOR)

    def set_title(self, title: str) -> None:
        self._emit(_SET_TITLE_FMT.format(title))

    @staticmethod
    def _emit(data: str) -> None:
        sys.stdout.write(data)
        sys.stdout.flush()

    # -- input --------------------------------------------------------------

    def _read_stdin(self) -> None:
        try:
            raw = os.read(sys.stdin.fileno(), _READ_SIZE)
        except BlockingIOError:
            return
        if raw and self._keys is not None:
            self._keys.process(self._decoder.decode(raw))

    def _deliver(self, data: str) -> None:
        if self._on_input is not None:
            self._on_input(data)

    def _handle_sigwinch(self, signum: int, frame: object) -> None:
        if self._on_resize is not None:
            self._on_resize()
