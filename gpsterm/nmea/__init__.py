"""NMEA 0183 sentence tokenizer and GGA/RMC fix extraction."""

from gpsterm.nmea.fields import convert_to_decimal_degrees
from gpsterm.nmea.fix import build_fix
from gpsterm.nmea.sentence import parse_sentence
from gpsterm.nmea.types import GpsFix, NmeaSentence, SentenceType

__all__ = [
    "GpsFix",
    "NmeaSentence",
    "SentenceType",
    "build_fix",
    "convert_to_decimal_degrees",
    "parse_sentence",
]
