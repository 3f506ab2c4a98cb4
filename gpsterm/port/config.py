"""Serial port configuration."""

from dataclasses import dataclass

DEFAULT_BAUD_RATE = 4800
DEFAULT_DATA_BITS = 8
DEFAULT_TIMEOUT_MS = 500
DATA_BITS_CHOICES = (5, 6, 7, 8)


@dataclass(frozen=True)
class PortConfig:
    """Settings a ``SerialChannel`` opens its port with.

    Parity is always none and stop bits always one; NMEA 0183 devices use
    8N1 framing. The config is fixed for the lifetime of a session.

    Attributes:
        port_name: Device name, e.g. "/dev/ttyUSB0" or "COM3".
        baud_rate: Line speed. NMEA 0183 specifies 4800.
        data_bits: Character size, one of 5, 6, 7 or 8.
        read_timeout_ms: How long a line read may wait for the delimiter.
        write_timeout_ms: How long a write may wait for the buffer to drain.
    """

    port_name: str
    baud_rate: int = DEFAULT_BAUD_RATE
    data_bits: int = DEFAULT_DATA_BITS
    read_timeout_ms: int = DEFAULT_TIMEOUT_MS
    write_timeout_ms: int = DEFAULT_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.data_bits not in DATA_BITS_CHOICES:
            raise ValueError(f"data_bits must be one of {DATA_BITS_CHOICES}.")
        if self.baud_rate <= 0:
            raise ValueError("baud_rate must be positive.")
        if self.read_timeout_ms < 0 or self.write_timeout_ms < 0:
            raise ValueError("Timeouts must not be negative.")

    @property
    def read_timeout(self) -> float:
        return self.read_timeout_ms / 1000.0

    @property
    def write_timeout(self) -> float:
        return self.write_timeout_ms / 1000.0
