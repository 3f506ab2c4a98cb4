"""SerialChannel: exclusive, timeout-bounded access to one serial port.

Reading strategy:
    ``read_until`` blocks for at most the configured read timeout. Bytes that
    arrive without a line delimiter are kept in a pending buffer and joined
    with the next read, so a line split across two timeouts is not lost.
    The buffer is bounded: bytes that reach the maximum line length without
    a delimiter (binary output, wrong framing) are discarded with a warning.
    A timeout is reported as ``ReadTimeout``; ``try_read_line`` turns that
    into ``None`` for callers polling in a loop.

Failure handling:
    An OS-level error on the port (device unplugged, driver gone) marks the
    channel as lost. ``is_open`` then reports False and the owning session
    closes. There is no reconnection.
"""

import logging
from types import TracebackType

import serial

from gpsterm.errors import PortLost, PortUnavailable, ReadTimeout, WriteTimeout
from gpsterm.port.config import PortConfig

__all__ = ["SerialChannel"]

logger = logging.getLogger(__name__)

_LINE_DELIMITER = b"\n"

# NMEA 0183 caps a sentence at 82 characters; anything this long without a
# delimiter is not NMEA
_MAX_LINE_LENGTH = 1024
_ENCODING = "ascii"


class SerialChannel:
    """Context manager owning an open serial port.

    Typical use::

        with SerialChannel(PortConfig("/dev/ttyUSB0")) as channel:
            if channel.has_data():
                line = channel.try_read_line()
            channel.write(b"\\x03")

    ``close`` is idempotent; the ``with`` block guarantees it runs on every
    exit path.

    Args:
        config: Port settings, fixed for the lifetime of the channel.
    """

    def __init__(self, config: PortConfig) -> None:
        """Store the configuration; the port is opened in ``open``."""
        self._config = config
        self._serial: serial.Serial | None = None
        self._pending = b""
        self._lost = False

    @property
    def config(self) -> PortConfig:
        return self._config

    @property
    def is_open(self) -> bool:
        """True while the port is open and has not failed."""
        return (
            self._serial is not None
            and bool(self._serial.is_open)
            and not self._lost
        )

    def open(self) -> None:
        """Open and configure the port for exclusive use.

        Raises:
            PortUnavailable: If the port does not exist, is in use, or
                rejects the configuration.
        """
        if self._serial is not None:
            return
        config = self._config
        logger.info(
            "Opening %s @ %d baud, %d data bits",
            config.port_name,
            config.baud_rate,
            config.data_bits,
        )
        try:
            self._serial = serial.Serial(
                port=config.port_name,
                baudrate=config.baud_rate,
                bytesize=config.data_bits,
                parity=serial.PARITY_NONE,
                stopbits=serial.STOPBITS_ONE,
                timeout=config.read_timeout,
                write_timeout=config.write_timeout,
                exclusive=True,
            )
        except (serial.SerialException, OSError, ValueError) as e:
            raise PortUnavailable(
                f"Cannot open {config.port_name}: {e}"
            ) from e
        self._pending = b""
        self._lost = False
        logger.info("Opened %s", config.port_name)

    def close(self) -> None:
        """Close the port. Safe to call more than once."""
        if self._serial is None:
            return
        serial_port, self._serial = self._serial, None
        self._pending = b""
        try:
            serial_port.close()
        except (serial.SerialException, OSError) as e:
            logger.warning("Error closing %s: %s", self._config.port_name, e)
        logger.info("Closed %s", self._config.port_name)

    def __enter__(self) -> "SerialChannel":
        """Open the port."""
        self.open()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Close the port."""
        self.close()

    def _require_open(self) -> serial.Serial:
        if self._serial is None:
            raise RuntimeError("SerialChannel must be opened before use.")
        return self._serial

    def _mark_lost(self, error: BaseException) -> PortLost:
        self._lost = True
        logger.error("Lost %s: %s", self._config.port_name, error)
        return PortLost(f"{self._config.port_name}: {error}")

    def has_data(self) -> bool:
        """Return True if a line may be read without waiting.

        Never raises; a failing port is marked lost and reports no data.
        """
        if b"\n" in self._pending:
            return True
        if self._serial is None or self._lost:
            return False
        try:
            return self._serial.in_waiting > 0
        except (serial.SerialException, OSError) as e:
            self._mark_lost(e)
            return False

    def read_line(self) -> str:
        """Return the next complete line without its "\\n" terminator.

        A carriage return before the newline is kept.

        Raises:
            RuntimeError: If the channel is not open.
            ReadTimeout: If no complete line arrived within the read timeout.
            PortLost: If the device failed.
        """
        serial_port = self._require_open()
        if _LINE_DELIMITER not in self._pending:
            try:
                self._pending += serial_port.read_until(
                    _LINE_DELIMITER, _MAX_LINE_LENGTH
                )
            except (serial.SerialException, OSError) as e:
                raise self._mark_lost(e) from e

        line, delimiter, rest = self._pending.partition(_LINE_DELIMITER)
        if not delimiter:
            if len(self._pending) >= _MAX_LINE_LENGTH:
                logger.warning(
                    "Discarded %d bytes from %s without a line delimiter",
                    len(self._pending),
                    self._config.port_name,
                )
                self._pending = b""
            raise ReadTimeout(
                f"No complete line within {self._config.read_timeout_ms} ms."
            )
        self._pending = rest
        return line.decode(_ENCODING, errors="replace")

    def try_read_line(self) -> str | None:
        """Like ``read_line`` but returns None on a read timeout."""
        try:
            return self.read_line()
        except ReadTimeout:
            return None

    def write(self, data: bytes) -> int:
        """Write bytes to the device.

        Returns:
            Number of bytes written.

        Raises:
            RuntimeError: If the channel is not open.
            WriteTimeout: If the output buffer did not drain in time.
            PortLost: If the device failed.
        """
        serial_port = self._require_open()
        try:
            written = serial_port.write(data)
        except serial.SerialTimeoutException as e:
            raise WriteTimeout(
                f"Write to {self._config.port_name} timed out after "
                f"{self._config.write_timeout_ms} ms."
            ) from e
        except (serial.SerialException, OSError) as e:
            raise self._mark_lost(e) from e
        return int(written or 0)
