"""Operator console: key translation, sentence echo and the curses window."""

from gpsterm.console.echo import escape_field, format_sentence
from gpsterm.console.keys import KeyEvent, SpecialKey, key_from_code, translate_key
from gpsterm.console.terminal import ConsoleLogHandler, CursesConsole

__all__ = [
    "ConsoleLogHandler",
    "CursesConsole",
    "KeyEvent",
    "SpecialKey",
    "escape_field",
    "format_sentence",
    "key_from_code",
    "translate_key",
]
