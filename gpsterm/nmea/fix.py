"""Fix extraction from GGA and RMC sentences.

GGA Sentence Format:
    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
           |      |        | |         | | |  |   |     | |    |
           |      |        | |         | | |  |   |     | |    +-- DGPS info
           |      |        | |         | | |  |   |     | +-- Geoid height
           |      |        | |         | | |  |   +-----+-- Altitude above MSL
           |      |        | |         | | |  +-- HDOP
           |      |        | |         | | +-- Number of satellites
           |      |        | |         | +-- Fix quality (0-6)
           |      |        | +---------+-- Longitude + E/W
           |      +--------+-- Latitude + N/S
           +-- UTC time (HHMMSS)

RMC Sentence Format:
    $GPRMC,123519,A,4807.038,N,01131.000,E,022.4,084.4,230394,003.1,W*6A
           |      | |        | |         | |     |     |      |
           |      | |        | |         | |     |     |      +-- Magnetic variation
           |      | |        | |         | |     |     +-- Date (DDMMYY)
           |      | |        | |         | |     +-- Course over ground (degrees)
           |      | |        | |         | +-- Speed over ground (knots)
           |      | |        | +---------+-- Longitude + E/W
           |      | +--------+-- Latitude + N/S
           |      +-- Status (A=valid, V=void)
           +-- UTC time

The RMC status flag is not consulted: a void fix with coordinates is still
logged.
"""

from collections.abc import Callable
from datetime import datetime

from gpsterm.errors import IncompleteFieldSet
from gpsterm.nmea.fields import convert_to_decimal_degrees
from gpsterm.nmea.types import GpsFix, NmeaSentence, SentenceType

# Field counts include the "$GPxxx" identifier at index 0
_GGA_MINIMUM_FIELD_COUNT = 15
_RMC_MINIMUM_FIELD_COUNT = 12


def _convert_position(
    latitude: str, north_south: str, longitude: str, east_west: str
) -> tuple[str, str]:
    """Convert both coordinates, or neither."""
    lat = convert_to_decimal_degrees(latitude, north_south)
    lon = convert_to_decimal_degrees(longitude, east_west)
    if not lat or not lon:
        return "", ""
    return lat, lon


def _require_fields(sentence: NmeaSentence, minimum: int) -> None:
    if len(sentence.fields) < minimum:
        raise IncompleteFieldSet(
            f"{sentence.sentence_type.value} sentence has {len(sentence.fields)} "
            f"fields, expected at least {minimum}."
        )


def _build_gga_fix(sentence: NmeaSentence, captured_at: datetime) -> GpsFix:
    """Map GGA field indices to a GpsFix.

        fields[2]/[3] -> latitude, N/S
        fields[4]/[5] -> longitude, E/W
        fields[6]     -> fix quality
        fields[7]     -> satellites in use
        fields[8]     -> HDOP
        fields[9]     -> altitude (meters)
    """
    _require_fields(sentence, _GGA_MINIMUM_FIELD_COUNT)
    fields = sentence.fields
    latitude, longitude = _convert_position(
        fields[2], fields[3], fields[4], fields[5]
    )
    return GpsFix(
        timestamp=captured_at,
        sentence_type=SentenceType.GGA,
        latitude=latitude,
        longitude=longitude,
        altitude=fields[9],
        satellites_in_use=fields[7],
        fix_quality=fields[6],
        hdop=fields[8],
    )


def _build_rmc_fix(sentence: NmeaSentence, captured_at: datetime) -> GpsFix:
    """Map RMC field indices to a GpsFix.

        fields[3]/[4] -> latitude, N/S
        fields[5]/[6] -> longitude, E/W
        fields[7]     -> speed over ground (knots)
        fields[8]     -> course over ground (degrees)
    """
    _require_fields(sentence, _RMC_MINIMUM_FIELD_COUNT)
    fields = sentence.fields
    latitude, longitude = _convert_position(
        fields[3], fields[4], fields[5], fields[6]
    )
    return GpsFix(
        timestamp=captured_at,
        sentence_type=SentenceType.RMC,
        latitude=latitude,
        longitude=longitude,
        speed_knots=fields[7],
        course_degrees=fields[8],
    )


_FIX_BUILDERS: dict[
    SentenceType, Callable[[NmeaSentence, datetime], GpsFix]
] = {
    SentenceType.GGA: _build_gga_fix,
    SentenceType.RMC: _build_rmc_fix,
}


def build_fix(sentence: NmeaSentence, captured_at: datetime) -> GpsFix | None:
    """Build a GpsFix from a GGA or RMC sentence.

    Args:
        sentence: A parsed sentence.
        captured_at: Local time the line was read.

    Returns:
        A GpsFix for GGA and RMC sentences, None for every other type
        (GLL, GSA, GSV, VTG and unrecognised sentences are echo-only,
        even though VTG carries speed and course).

    Raises:
        IncompleteFieldSet: If a GGA sentence has fewer than 15 fields or an
            RMC sentence fewer than 12.
    """
    builder = _FIX_BUILDERS.get(sentence.sentence_type)
    if builder is None:
        return None
    return builder(sentence, captured_at)
