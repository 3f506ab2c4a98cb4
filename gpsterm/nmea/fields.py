"""NMEA field parsing utilities.

NMEA fields are comma-separated and may be empty (consecutive commas indicate
missing data). The terminal passes most fields through untouched; the
coordinate fields are the exception and are converted to signed decimal
degrees here.
"""

# Shortest coordinate the converter accepts: "DDMM.MM"
_MINIMUM_COORDINATE_LENGTH = 7

# Output precision of converted coordinates
_DECIMAL_PLACES = 6

_NEGATIVE_HEMISPHERES = ("S", "W")


def _parse_coordinate_parts(value: str) -> tuple[int, float] | None:
    """Parse NMEA coordinate into degrees and minutes components.

    NMEA coordinates use DDDMM.MMMM format where:
    - DDD (or DD for latitude) = degrees
    - MM.MMMM = decimal minutes

    The decimal point position determines the split between degrees and minutes:
    the 2 digits before the decimal point are always minutes.
    This handles both 2-digit latitude and 3-digit longitude degrees.

    Args:
        value: Coordinate string in DDDMM.MMMM format

    Returns:
        Tuple of (degrees, minutes) or None if parsing fails

    Example:
        >>> _parse_coordinate_parts("4807.038")  # 48° 07.038'
        (48, 7.038)
        >>> _parse_coordinate_parts("01131.000")  # 11° 31.000'
        (11, 31.0)
    """
    dot_position = value.find(".")
    if dot_position <= 2:
        return None
    try:
        degrees = int(value[: dot_position - 2])
        minutes = float(value[dot_position - 2 :])
    except ValueError:
        return None
    if degrees < 0 or minutes < 0:
        return None
    return degrees, minutes


def convert_to_decimal_degrees(value: str, hemisphere: str) -> str:
    """Convert NMEA coordinate (DDDMM.MMMM) to a decimal-degree string.

    The conversion formula is:
        decimal_degrees = degrees + (minutes / 60)

    The result is negated for the southern and western hemispheres and
    formatted with 6 fractional digits.

    Args:
        value: Coordinate in DDDMM.MMMM format (e.g., "4807.038")
        hemisphere: Hemisphere indicator ("N", "S", "E", or "W")

    Returns:
        Decimal degrees as text, or "" if the value is empty, shorter than
        7 characters, or not a well-formed coordinate.

    Example:
        >>> convert_to_decimal_degrees("4807.038", "N")
        '48.117300'
        >>> convert_to_decimal_degrees("01131.000", "W")
        '-11.516667'
    """
    if len(value) < _MINIMUM_COORDINATE_LENGTH:
        return ""

    parts = _parse_coordinate_parts(value)
    if parts is None:
        return ""

    degrees, minutes = parts
    decimal_degrees = degrees + minutes / 60.0

    if hemisphere in _NEGATIVE_HEMISPHERES:
        decimal_degrees = -decimal_degrees

    return f"{decimal_degrees:.{_DECIMAL_PLACES}f}"
