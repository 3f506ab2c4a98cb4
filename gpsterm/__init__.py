"""Interactive serial terminal that decodes NMEA 0183 GPS sentences."""

from gpsterm.console import KeyEvent, SpecialKey, translate_key
from gpsterm.nmea import (
    GpsFix,
    NmeaSentence,
    SentenceType,
    build_fix,
    convert_to_decimal_degrees,
    parse_sentence,
)
from gpsterm.port import PortConfig, SerialChannel
from gpsterm.session import SessionState, TerminalSession
from gpsterm.track import TrackLogger

__all__ = [
    "GpsFix",
    "KeyEvent",
    "NmeaSentence",
    "PortConfig",
    "SentenceType",
    "SerialChannel",
    "SessionState",
    "SpecialKey",
    "TerminalSession",
    "TrackLogger",
    "build_fix",
    "convert_to_decimal_degrees",
    "parse_sentence",
    "translate_key",
]
