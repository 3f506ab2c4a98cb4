"""NMEA sentence tokenizer.

Every NMEA 0183 sentence starts with '$', a 2-letter talker ID and a
3-letter sentence code, followed by comma-delimited fields:

    $GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47
    ^^ ^^^
    |  +-- sentence code (GGA)
    +-- talker ID (GP = GPS)

The trailing "*47" checksum is kept as part of the last field and is not
verified; receivers that emit a bad checksum still have their fixes logged.
"""

from gpsterm.nmea.types import NmeaSentence, SentenceType, split_identifier


def parse_sentence(line: str) -> NmeaSentence:
    """Tokenize a raw line into talker ID, sentence type and fields.

    Never fails: a line whose first field is shorter than 6 characters, or
    whose code is not in the lookup table, comes back as
    ``SentenceType.UNKNOWN`` and is only echoed.

    Args:
        line: One line read from the channel, line terminator removed.

    Returns:
        The tokenised sentence.

    Example:
        >>> parse_sentence("$GPRMC,123519,A,4807.038,N,...").sentence_type
        <SentenceType.RMC: 'RMC'>
        >>> parse_sentence("$GP,1,2").sentence_type
        <SentenceType.UNKNOWN: 'Unknown'>
    """
    fields = tuple(line.split(","))
    talker_id, code = split_identifier(fields[0])
    sentence_type = SentenceType.from_code(code) if code else SentenceType.UNKNOWN
    return NmeaSentence(
        talker_id=talker_id,
        sentence_type=sentence_type,
        fields=fields,
        raw_text=line,
    )
