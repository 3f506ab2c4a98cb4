"""Operator key events and their translation to device bytes.

Cursor and editing keys are sent as ANSI CSI sequences (ESC '[' ...), the
form VT100-style devices expect. There is no terminfo negotiation; the table
is fixed.
"""

import curses
import enum
from dataclasses import dataclass

__all__ = ["EXIT_CHAR", "KeyEvent", "SpecialKey", "key_from_code", "translate_key"]

EXIT_CHAR = "!"

_ESC = b"\x1b"
_CSI = _ESC + b"["

# Escape interrupts the remote program the way Ctrl+C (ETX) does
_INTERRUPT = b"\x03"

# curses delivers UTF-8 input one byte per getch code, so codes 0-255 are
# raw bytes and must go out unchanged
_BYTE_ENCODING = "latin-1"


class SpecialKey(enum.Enum):
    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    DELETE = "delete"
    HOME = "home"
    END = "end"
    ESCAPE = "escape"
    EXIT = "exit"


@dataclass(frozen=True)
class KeyEvent:
    """One key captured from the console.

    Attributes:
        char: The typed character for ordinary keys, "" for special keys
            (except EXIT, which keeps its "!").
        special: Which special key was pressed, NONE for ordinary keys.
    """

    char: str = ""
    special: SpecialKey = SpecialKey.NONE

    @classmethod
    def of(cls, char: str) -> "KeyEvent":
        """Build the event for a typed character."""
        if char == EXIT_CHAR:
            return cls(char, SpecialKey.EXIT)
        return cls(char)


def _encode_char(char: str) -> bytes:
    try:
        return char.encode(_BYTE_ENCODING)
    except UnicodeEncodeError:
        return char.encode("utf-8")


# EXIT is handled locally and never sent
_SPECIAL_SEQUENCES: dict[SpecialKey, bytes | None] = {
    SpecialKey.EXIT: None,
    SpecialKey.ESCAPE: _INTERRUPT,
    SpecialKey.UP: _CSI + b"A",
    SpecialKey.DOWN: _CSI + b"B",
    SpecialKey.RIGHT: _CSI + b"C",
    SpecialKey.LEFT: _CSI + b"D",
    SpecialKey.DELETE: _CSI + b"3~",
    SpecialKey.HOME: _CSI + b"7~",
    SpecialKey.END: _CSI + b"8~",
}


def translate_key(event: KeyEvent) -> bytes | None:
    """Translate a key event to the bytes to transmit.

    Returns:
        The byte sequence for the key, or None for the local exit command
        ('!'), which closes the session instead of being transmitted.

    Example:
        >>> translate_key(KeyEvent(special=SpecialKey.UP))
        b'\\x1b[A'
        >>> translate_key(KeyEvent("a"))
        b'a'
        >>> translate_key(KeyEvent.of("!")) is None
        True
    """
    if event.special is SpecialKey.NONE:
        if event.char == EXIT_CHAR:
            return None
        return _encode_char(event.char)
    return _SPECIAL_SEQUENCES[event.special]


_CURSES_SPECIAL_KEYS: dict[int, SpecialKey] = {
    curses.KEY_UP: SpecialKey.UP,
    curses.KEY_DOWN: SpecialKey.DOWN,
    curses.KEY_LEFT: SpecialKey.LEFT,
    curses.KEY_RIGHT: SpecialKey.RIGHT,
    curses.KEY_DC: SpecialKey.DELETE,
    curses.KEY_HOME: SpecialKey.HOME,
    curses.KEY_END: SpecialKey.END,
    27: SpecialKey.ESCAPE,
}

_ENTER_CODES = (10, 13, curses.KEY_ENTER)
_BACKSPACE_CODES = (8, 127, curses.KEY_BACKSPACE)


def key_from_code(code: int) -> KeyEvent | None:
    """Map a curses ``getch`` code to a key event.

    Enter is sent as a carriage return and Backspace as DEL, matching what
    a serial terminal transmits. Returns None for "no key" (-1) and for
    curses function keys without a translation.
    """
    special = _CURSES_SPECIAL_KEYS.get(code)
    if special is not None:
        return KeyEvent(special=special)
    if code in _ENTER_CODES:
        return KeyEvent("\r")
    if code in _BACKSPACE_CODES:
        return KeyEvent("\x7f")
    if 0 <= code <= 0xFF:
        return KeyEvent.of(chr(code))
    return None
