"""Tests for NMEA sentence tokenizing."""

import pytest

from gpsterm import SentenceType, parse_sentence

GGA_LINE = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"


class TestParseSentence:
    """Tests for parse_sentence function."""

    def test_gga_tokens(self):
        sentence = parse_sentence(GGA_LINE)
        assert sentence.talker_id == "GP"
        assert sentence.sentence_type is SentenceType.GGA
        assert len(sentence.fields) == 15
        assert sentence.fields[0] == "$GPGGA"
        assert sentence.fields[2] == "4807.038"
        assert sentence.fields[-1] == "*47"
        assert sentence.raw_text == GGA_LINE

    @pytest.mark.parametrize(
        "identifier, expected",
        [
            ("$GPGGA", SentenceType.GGA),
            ("$GNGLL", SentenceType.GLL),
            ("$GPGSA", SentenceType.GSA),
            ("$GLGSV", SentenceType.GSV),
            ("$GNRMC", SentenceType.RMC),
            ("$GPVTG", SentenceType.VTG),
            ("$GPTXT", SentenceType.UNKNOWN),
        ],
    )
    def test_sentence_type_lookup(self, identifier, expected):
        assert parse_sentence(identifier + ",1,2").sentence_type is expected

    def test_talker_id_from_multi_gnss(self):
        assert parse_sentence("$GNRMC,1").talker_id == "GN"

    def test_short_first_field_is_unknown_and_malformed(self):
        sentence = parse_sentence("$GPGG,123519,4807.038")
        assert sentence.sentence_type is SentenceType.UNKNOWN
        assert sentence.malformed is True
        assert sentence.talker_id == ""
        assert sentence.code == ""

    def test_unrecognised_code_is_not_malformed(self):
        sentence = parse_sentence("$PUBX,00,1")
        assert sentence.sentence_type is SentenceType.UNKNOWN
        assert sentence.malformed is True

        sentence = parse_sentence("$PGRMZ,246,f,3*1B")
        assert sentence.sentence_type is SentenceType.UNKNOWN
        assert sentence.malformed is False
        assert sentence.code == "RMZ"

    def test_empty_line(self):
        sentence = parse_sentence("")
        assert sentence.sentence_type is SentenceType.UNKNOWN
        assert sentence.fields == ("",)

    def test_checksum_is_not_validated(self):
        sentence = parse_sentence(GGA_LINE[:-2] + "FF")
        assert sentence.sentence_type is SentenceType.GGA

    def test_carriage_return_kept_in_last_field(self):
        sentence = parse_sentence(GGA_LINE + "\r")
        assert sentence.fields[-1] == "*47\r"
