"""Exceptions raised by the serial terminal.

Startup failures (``PortUnavailable``, ``NoPortsAvailable``) end the program.
Everything raised inside the poll loop is handled by ``TerminalSession`` at
the smallest scope; only ``PortLost`` ends a running session.
"""

__all__ = [
    "GpstermError",
    "IncompleteFieldSet",
    "NoPortsAvailable",
    "PortLost",
    "PortUnavailable",
    "ReadTimeout",
    "WriteTimeout",
]


class GpstermError(Exception):
    """Base class for terminal errors."""


class PortUnavailable(GpstermError):
    """The named port does not exist or could not be acquired exclusively."""


class NoPortsAvailable(GpstermError):
    """No serial port was given and none could be found."""


class PortLost(GpstermError):
    """The device failed or disappeared while the session was running."""


class ReadTimeout(GpstermError, TimeoutError):
    """No complete line arrived within the read timeout.

    This is the normal "no data yet" signal, not a failure.
    """


class WriteTimeout(GpstermError, TimeoutError):
    """The output buffer did not drain within the write timeout."""


class IncompleteFieldSet(GpstermError):
    """A GGA or RMC sentence has too few fields to build a fix."""
