"""NMEA data types for parsed sentences and track fixes.

Design Decisions:
    1. Fields stay strings: the track log records values exactly as the
       receiver sent them, so only the coordinates are converted. An empty
       string means "no data", the same way the receiver signals it with
       consecutive commas.

    2. Frozen dataclasses: a sentence or fix is built once per received line
       and handed to several consumers (echo, track log). Freezing them keeps
       every consumer looking at the same values.

    3. UNKNOWN covers both unrecognised sentence codes and lines too short to
       carry a code at all; ``NmeaSentence.malformed`` tells the two apart.
"""

import enum
from dataclasses import dataclass
from datetime import datetime

# "$GPGGA": '$' + 2-character talker ID + 3-character sentence code
_TALKER_SLICE = slice(1, 3)
_CODE_SLICE = slice(3, 6)
MINIMUM_ID_LENGTH = 6


class SentenceType(enum.Enum):
    """Sentence types the terminal recognises.

    Only GGA and RMC produce a ``GpsFix``; the others are echoed.
    """

    GGA = "GGA"
    GLL = "GLL"
    GSA = "GSA"
    GSV = "GSV"
    RMC = "RMC"
    VTG = "VTG"
    UNKNOWN = "Unknown"

    @classmethod
    def from_code(cls, code: str) -> "SentenceType":
        """Look up a 3-character sentence code, falling back to UNKNOWN."""
        try:
            return cls(code)
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class NmeaSentence:
    """One tokenised NMEA line.

    Attributes:
        talker_id: 2-character source prefix ("GP", "GN", ...), or "" when
            the first field is too short to carry one.
        sentence_type: Resolved sentence type.
        fields: Every comma-separated field, the "$GPGGA" identifier
            included at index 0.
        raw_text: The line as it was read from the channel.

    Example:
        >>> s = parse_sentence("$GPGGA,123519,4807.038,N,...")
        >>> s.talker_id, s.sentence_type
        ('GP', <SentenceType.GGA: 'GGA'>)
        >>> s.fields[2]
        '4807.038'
    """

    talker_id: str
    sentence_type: SentenceType
    fields: tuple[str, ...]
    raw_text: str

    @property
    def identifier(self) -> str:
        return self.fields[0] if self.fields else ""

    @property
    def malformed(self) -> bool:
        """True when the first field is too short to hold talker and code."""
        return len(self.identifier) < MINIMUM_ID_LENGTH

    @property
    def code(self) -> str:
        """The literal 3-character sentence code, "" when malformed."""
        if self.malformed:
            return ""
        return self.identifier[_CODE_SLICE]


@dataclass(frozen=True)
class GpsFix:
    """A position fix extracted from a GGA or RMC sentence.

    All measurement fields are the receiver's raw strings except latitude
    and longitude, which are decimal degrees with 6 fractional digits.
    Fields the sentence type does not carry are "" (GGA has no speed or
    course, RMC has no altitude, satellites, quality or HDOP).

    Attributes:
        timestamp: Local wall-clock time the line was captured. This is not
            the UTC time field of the sentence.
        sentence_type: GGA or RMC.
        latitude: Signed decimal degrees, positive=North, or "".
        longitude: Signed decimal degrees, positive=East, or "".
            Latitude and longitude are either both set or both "".
        altitude: Altitude above MSL in meters (GGA).
        speed_knots: Speed over ground in knots (RMC).
        course_degrees: Course over ground in degrees true (RMC).
        satellites_in_use: Satellites used in the solution (GGA).
        fix_quality: Fix quality indicator, "0" meaning no fix (GGA).
        hdop: Horizontal dilution of precision (GGA).
    """

    timestamp: datetime
    sentence_type: SentenceType
    latitude: str = ""
    longitude: str = ""
    altitude: str = ""
    speed_knots: str = ""
    course_degrees: str = ""
    satellites_in_use: str = ""
    fix_quality: str = ""
    hdop: str = ""

    @property
    def has_position(self) -> bool:
        return bool(self.latitude) and bool(self.longitude)


def split_identifier(identifier: str) -> tuple[str, str]:
    """Split "$GPGGA" into ("GP", "GGA"); ("", "") when too short."""
    if len(identifier) < MINIMUM_ID_LENGTH:
        return "", ""
    return identifier[_TALKER_SLICE], identifier[_CODE_SLICE]
