"""Human-readable echo of received sentences.

Each sentence is shown as a header line naming its type, followed by one
index-prefixed line per raw field:

    GGA - Global Positioning System Fix Data (GP)
    [0] $GPGGA
    [1] 123519
    ...
    [14] *47\\R

Carriage returns, line feeds and NULs inside a field are shown as the
literals ``\\R``, ``\\N`` and ``\\0``, other control characters as ``\\xHH``.
Line noise can then never break the console layout.
"""

from gpsterm.nmea.types import NmeaSentence, SentenceType

__all__ = ["escape_field", "format_sentence"]

_DESCRIPTIONS: dict[SentenceType, str] = {
    SentenceType.GGA: "Global Positioning System Fix Data",
    SentenceType.GLL: "Geographic Position - Latitude/Longitude",
    SentenceType.GSA: "GNSS DOP and Active Satellites",
    SentenceType.GSV: "GNSS Satellites in View",
    SentenceType.RMC: "Recommended Minimum Navigation Information",
    SentenceType.VTG: "Track Made Good and Ground Speed",
}


_NAMED_ESCAPES = {"\r": "\\R", "\n": "\\N", "\x00": "\\0"}


def _escape_char(char: str) -> str:
    escaped = _NAMED_ESCAPES.get(char)
    if escaped is not None:
        return escaped
    if char < " " or char == "\x7f":
        return f"\\x{ord(char):02X}"
    return char


def escape_field(value: str) -> str:
    """Make control characters visible: CR, LF and NUL as \\R, \\N and \\0,
    any other as \\xHH."""
    return "".join(_escape_char(char) for char in value)


def _header(sentence: NmeaSentence) -> str:
    if sentence.malformed:
        return "Malformed sentence"
    description = _DESCRIPTIONS.get(sentence.sentence_type)
    if description is None:
        return f"Unrecognized sentence [{escape_field(sentence.code)}]"
    talker = escape_field(sentence.talker_id)
    return f"{sentence.sentence_type.value} - {description} ({talker})"


def format_sentence(sentence: NmeaSentence) -> list[str]:
    """Return the echo lines for *sentence*: a header, then one per field."""
    lines = [_header(sentence)]
    lines.extend(
        f"[{index}] {escape_field(value)}"
        for index, value in enumerate(sentence.fields)
    )
    return lines
