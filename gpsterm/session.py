"""TerminalSession: the poll loop tying the port, parser, track log and console.

Each iteration makes two bounded, non-blocking probes, one on the serial
channel and one on the keyboard, then sleeps for a fixed poll interval.
Neither source can starve the other, and a silent device only costs one
read timeout per line it fails to complete.

States::

    STARTING --start()--> RUNNING --close()--> CLOSING --> CLOSED

``close`` is reached from the '!' key, from the channel reporting closed, or
from a ``PortLost`` error, and closes the channel exactly once.
"""

import enum
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from gpsterm.console.echo import format_sentence
from gpsterm.console.keys import KeyEvent, translate_key
from gpsterm.errors import IncompleteFieldSet, PortLost, WriteTimeout
from gpsterm.nmea.fix import build_fix
from gpsterm.nmea.sentence import parse_sentence
from gpsterm.port.channel import SerialChannel
from gpsterm.track.logger import TrackLogger

__all__ = ["Console", "SessionState", "SessionStats", "TerminalSession"]

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.01


class Console(Protocol):
    """Key source and echo destination of a session."""

    def poll_key(self) -> KeyEvent | None: ...

    def write_line(self, text: str) -> None: ...


class SessionState(enum.Enum):
    STARTING = "starting"
    RUNNING = "running"
    CLOSING = "closing"
    CLOSED = "closed"


@dataclass
class SessionStats:
    """Counters reported when the session closes."""

    lines_received: int = 0
    fixes_built: int = 0
    rows_logged: int = 0
    keys_sent: int = 0
    keys_dropped: int = 0


class TerminalSession:
    """One interactive terminal session on one serial channel.

    ``CursesConsole`` is the interactive ``Console``.

    Args:
        channel: The channel to open and poll. Owned by the session.
        console: Key source and echo destination.
        track_logger: Where complete fixes go, or None to disable logging.
        poll_interval: Seconds to sleep after each loop iteration.
        clock: Returns the local capture time of a line.
    """

    def __init__(
        self,
        channel: SerialChannel,
        console: Console,
        track_logger: TrackLogger | None = None,
        poll_interval: float = _POLL_INTERVAL,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._channel = channel
        self._console = console
        self._track_logger = track_logger
        self._poll_interval = poll_interval
        self._clock = clock
        self.state = SessionState.STARTING
        self.stats = SessionStats()

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    def start(self) -> None:
        """Open the channel and enter RUNNING.

        Raises:
            PortUnavailable: If the port cannot be opened.
        """
        if self.state is not SessionState.STARTING:
            raise RuntimeError(f"Cannot start a session in state {self.state.name}.")
        self._channel.open()
        self.state = SessionState.RUNNING
        config = self._channel.config
        self._console.write_line(
            f"Connected to {config.port_name} @ {config.baud_rate} baud. "
            "Press '!' to exit."
        )

    def close(self) -> None:
        """Close the channel and enter CLOSED. Does nothing when already closing."""
        if self.state in (SessionState.CLOSING, SessionState.CLOSED):
            return
        self.state = SessionState.CLOSING
        try:
            self._channel.close()
        finally:
            self.state = SessionState.CLOSED
            stats = self.stats
            logger.info(
                "Session closed: %d lines, %d fixes, %d rows logged, "
                "%d keys sent, %d keys dropped",
                stats.lines_received,
                stats.fixes_built,
                stats.rows_logged,
                stats.keys_sent,
                stats.keys_dropped,
            )

    def run(self) -> None:
        """Start the session and poll until it closes."""
        try:
            self.start()
            while self.running:
                self.poll_once()
                if self.running:
                    time.sleep(self._poll_interval)
        finally:
            self.close()

    def poll_once(self) -> None:
        """Run one loop iteration: serial probe, keyboard probe, liveness check."""
        try:
            self._poll_channel()
            if self.running:
                self._poll_keyboard()
        except PortLost as e:
            self._console.write_line(f"Port lost: {e}")
            self.close()
            return
        if self.running and not self._channel.is_open:
            self._console.write_line("Port closed.")
            self.close()

    def _poll_channel(self) -> None:
        if not self._channel.has_data():
            return
        line = self._channel.try_read_line()
        if line is None:
            return
        self.handle_line(line)

    def _poll_keyboard(self) -> None:
        event = self._console.poll_key()
        if event is not None:
            self.handle_key(event)

    def handle_line(self, line: str) -> None:
        """Echo one received line and log its fix, if it yields one."""
        captured_at = self._clock()
        self.stats.lines_received += 1
        sentence = parse_sentence(line)
        for text in format_sentence(sentence):
            self._console.write_line(text)

        try:
            fix = build_fix(sentence, captured_at)
        except IncompleteFieldSet as e:
            logger.debug("No fix from %r: %s", sentence.identifier, e)
            return
        if fix is None:
            return

        self.stats.fixes_built += 1
        if self._track_logger is not None and self._track_logger.log_if_complete(fix):
            self.stats.rows_logged += 1

    def handle_key(self, event: KeyEvent) -> None:
        """Send a key to the device, or close the session on '!'.

        Raises:
            PortLost: If the device failed during the write.
        """
        data = translate_key(event)
        if data is None:
            self._console.write_line("Closing session.")
            self.close()
            return
        try:
            self._channel.write(data)
        except WriteTimeout as e:
            self.stats.keys_dropped += 1
            logger.warning("Key dropped: %s", e)
            return
        self.stats.keys_sent += 1
