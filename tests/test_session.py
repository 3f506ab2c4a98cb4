"""Tests for the terminal session poll loop."""

import csv
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from gpsterm import KeyEvent, SessionState, SpecialKey, TerminalSession, TrackLogger
from gpsterm.console import CursesConsole
from gpsterm.errors import PortLost, PortUnavailable, WriteTimeout

CAPTURED_AT = datetime(2024, 5, 6, 7, 8, 9)

GGA_LINE = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47\r"
NOISY_LINE = "$GPGGA,12\x0035,4807.038\r"
SHORT_GGA_LINE = "$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9\r"
GSV_LINE = "$GPGSV,2,1,08,01,40,083,46,02,17,308,41,12,07,344,39,14,22,228,45*75\r"


@pytest.fixture
def track_path(tmp_path):
    return tmp_path / "track.csv"


@pytest.fixture
def make_session(channel, console, track_path):
    def _make(logging_enabled: bool = True) -> TerminalSession:
        track = TrackLogger(track_path) if logging_enabled else None
        return TerminalSession(
            channel,
            console,
            track_logger=track,
            poll_interval=0,
            clock=lambda: CAPTURED_AT,
        )

    return _make


def _rows(path) -> list[list[str]]:
    with path.open(newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestSessionLifecycle:
    def test_starts_in_starting_state(self, make_session):
        assert make_session().state is SessionState.STARTING

    def test_start_opens_channel(self, make_session, channel, console):
        session = make_session()
        session.start()
        assert session.state is SessionState.RUNNING
        assert channel.open_calls == 1
        assert "/dev/ttyFAKE" in console.lines[0]

    def test_start_twice_raises(self, make_session):
        session = make_session()
        session.start()
        with pytest.raises(RuntimeError):
            session.start()

    def test_close_runs_once(self, make_session, channel):
        session = make_session()
        session.start()
        session.close()
        session.close()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1

    def test_open_failure_propagates_and_closes(self, make_session, channel):
        channel.open_error = PortUnavailable("busy")
        session = make_session()
        with pytest.raises(PortUnavailable):
            session.run()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1


# ---------------------------------------------------------------------------
# Serial side
# ---------------------------------------------------------------------------


class TestSessionLines:
    def test_gga_line_is_logged(self, make_session, channel, track_path):
        channel.lines.append(GGA_LINE)
        session = make_session()
        session.start()
        session.poll_once()
        rows = _rows(track_path)
        assert len(rows) == 2
        assert rows[1] == [
            "2024-05-06 07:08:09",
            "GGA",
            "48.117300",
            "11.516667",
            "545.4",
            "",
            "",
            "08",
            "1",
            "0.9",
        ]
        assert session.stats.lines_received == 1
        assert session.stats.fixes_built == 1
        assert session.stats.rows_logged == 1

    def test_every_line_is_echoed(self, make_session, channel, console):
        channel.lines.append(GGA_LINE)
        session = make_session()
        session.start()
        console.lines.clear()
        session.poll_once()
        assert console.lines[0] == "GGA - Global Positioning System Fix Data (GP)"
        assert console.lines[1] == "[0] $GPGGA"
        assert console.lines[-1] == "[14] *47\\R"
        assert len(console.lines) == 16

    def test_short_gga_is_echo_only(self, make_session, channel, console, track_path):
        channel.lines.append(SHORT_GGA_LINE)
        session = make_session()
        session.start()
        session.poll_once()
        assert not track_path.exists()
        assert session.stats.fixes_built == 0
        assert any(line.startswith("GGA - ") for line in console.lines)

    def test_echo_only_sentence(self, make_session, channel, track_path):
        channel.lines.append(GSV_LINE)
        session = make_session()
        session.start()
        session.poll_once()
        assert not track_path.exists()
        assert session.stats.lines_received == 1
        assert session.stats.fixes_built == 0

    def test_logging_disabled(self, make_session, channel, track_path):
        channel.lines.append(GGA_LINE)
        session = make_session(logging_enabled=False)
        session.start()
        session.poll_once()
        assert session.stats.fixes_built == 1
        assert session.stats.rows_logged == 0
        assert not track_path.exists()

    def test_no_line_this_iteration(self, make_session, channel, console):
        session = make_session()
        session.start()
        console.lines.clear()
        session.poll_once()
        assert console.lines == []
        assert session.state is SessionState.RUNNING

    def test_line_noise_keeps_session_running(self, channel, track_path):
        window = MagicMock()
        window.getch.return_value = -1
        window.addstr.side_effect = ValueError("embedded null character")
        session = TerminalSession(
            channel, CursesConsole(window), TrackLogger(track_path), poll_interval=0
        )
        session.start()
        channel.lines.append(NOISY_LINE)
        session.poll_once()
        assert session.state is SessionState.RUNNING
        assert session.stats.lines_received == 1
        assert channel.close_calls == 0

    def test_line_noise_is_echoed_without_nul(self, channel):
        window = MagicMock()
        window.getch.return_value = -1
        session = TerminalSession(channel, CursesConsole(window), poll_interval=0)
        session.start()
        channel.lines.append(NOISY_LINE)
        session.poll_once()
        written = [c.args[0] for c in window.addstr.call_args_list]
        assert "[1] 12\\035\n" in written
        assert not any("\x00" in text for text in written)

    def test_port_lost_closes_session(self, make_session, channel, console):
        channel.read_error = PortLost("unplugged")
        session = make_session()
        session.start()
        session.poll_once()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1
        assert any("Port lost" in line for line in console.lines)

    def test_channel_closure_closes_session(self, make_session, channel):
        session = make_session()
        session.start()
        channel.is_open = False
        session.poll_once()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1


# ---------------------------------------------------------------------------
# Keyboard side
# ---------------------------------------------------------------------------


class TestSessionKeys:
    def test_arrow_key_is_sent_as_csi(self, make_session, channel, console):
        console.keys.append(KeyEvent(special=SpecialKey.UP))
        session = make_session()
        session.start()
        session.poll_once()
        assert channel.written == [b"\x1b[A"]
        assert session.stats.keys_sent == 1

    def test_printable_key_is_sent(self, make_session, channel, console):
        console.keys.append(KeyEvent("a"))
        session = make_session()
        session.start()
        session.poll_once()
        assert channel.written == [b"a"]

    def test_exit_key_closes_within_one_poll(self, make_session, channel, console):
        console.keys.append(KeyEvent.of("!"))
        session = make_session()
        session.start()
        session.poll_once()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1
        assert channel.written == []

    def test_write_timeout_drops_key(self, make_session, channel, console):
        channel.write_error = WriteTimeout("timed out")
        console.keys.append(KeyEvent("a"))
        session = make_session()
        session.start()
        session.poll_once()
        assert session.state is SessionState.RUNNING
        assert session.stats.keys_dropped == 1
        assert session.stats.keys_sent == 0

    def test_write_failure_closes_session(self, make_session, channel, console):
        channel.write_error = PortLost("unplugged")
        console.keys.append(KeyEvent("a"))
        session = make_session()
        session.start()
        session.poll_once()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1


# ---------------------------------------------------------------------------
# Run loop
# ---------------------------------------------------------------------------


class TestSessionRun:
    def test_run_until_exit_key(self, make_session, channel, console, track_path):
        channel.lines.extend([GSV_LINE, GGA_LINE])
        console.keys.extend([KeyEvent("x"), None, KeyEvent.of("!")])
        session = make_session()
        session.run()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1
        assert channel.written == [b"x"]
        assert session.stats.lines_received == 2
        assert len(_rows(track_path)) == 2

    def test_run_until_channel_closes(self, make_session, channel):
        channel.lines.append(GGA_LINE)
        session = make_session()

        original_read = channel.try_read_line

        def read_then_disconnect():
            line = original_read()
            channel.is_open = False
            return line

        channel.try_read_line = read_then_disconnect
        session.run()
        assert session.state is SessionState.CLOSED
        assert channel.close_calls == 1
        assert session.stats.rows_logged == 1
