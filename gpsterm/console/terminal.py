"""Curses-backed operator console.

The window is put in no-delay mode so ``poll_key`` returns immediately when
no key is waiting, and keypad mode so arrow and editing keys arrive as
single curses key codes. Output scrolls like a plain terminal.
"""

import curses
import logging

from gpsterm.console.keys import KeyEvent, key_from_code

__all__ = ["ConsoleLogHandler", "CursesConsole"]

logger = logging.getLogger(__name__)

_NO_KEY = -1


class CursesConsole:
    """Raw keyboard input and scrolling line output on a curses window.

    Args:
        window: The screen from ``curses.wrapper`` (or any window).
    """

    def __init__(self, window: "curses.window") -> None:
        self._window = window
        window.nodelay(True)
        window.keypad(True)
        window.scrollok(True)
        window.idlok(True)

    def poll_key(self) -> KeyEvent | None:
        """Return the next key event, or None if no key is waiting."""
        while True:
            code = self._window.getch()
            if code == _NO_KEY:
                return None
            event = key_from_code(code)
            if event is not None:
                return event

    def write_line(self, text: str) -> None:
        """Append a line of text, scrolling when the window is full."""
        try:
            self._window.addstr(text.replace("\x00", "\\0") + "\n")
        except curses.error:
            # addstr reports an error after writing into the last cell
            pass
        except ValueError as e:
            logger.debug("Line not displayed: %s", e)
        self._window.refresh()


class ConsoleLogHandler(logging.Handler):
    """Logging handler that writes records into a console window.

    Installed while curses owns the terminal, so log output does not get
    painted over the screen from stderr.
    """

    def __init__(self, console: CursesConsole, level: int = logging.WARNING) -> None:
        super().__init__(level)
        self._console = console

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._console.write_line(self.format(record))
        except Exception:
            self.handleError(record)
