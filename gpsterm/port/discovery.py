"""Serial port enumeration and selection."""

import logging
from collections.abc import Callable, Sequence

from serial.tools import list_ports

from gpsterm.errors import NoPortsAvailable

__all__ = ["describe_ports", "list_port_names", "prompt_for_port", "select_port"]

logger = logging.getLogger(__name__)


def list_port_names() -> list[str]:
    """Return the device names of all serial ports, sorted."""
    return sorted(p.device for p in list_ports.comports())


def describe_ports() -> list[tuple[str, str]]:
    """Return ``(device, description)`` pairs for all serial ports, sorted."""
    return sorted(
        (p.device, p.description or "") for p in list_ports.comports()
    )


def prompt_for_port(
    names: Sequence[str],
    input_fn: Callable[[str], str] = input,
    output_fn: Callable[[str], None] = print,
) -> str:
    """Ask the operator to pick one port from a numbered list.

    Re-asks until a valid number is entered. ``EOFError`` from the input
    function propagates, so a closed stdin aborts startup.
    """
    output_fn("Available serial ports:")
    for index, name in enumerate(names, start=1):
        output_fn(f"  {index}) {name}")
    while True:
        answer = input_fn(f"Select port [1-{len(names)}]: ").strip()
        if answer in names:
            return answer
        try:
            choice = int(answer)
        except ValueError:
            choice = 0
        if 1 <= choice <= len(names):
            return names[choice - 1]
        output_fn(f"Invalid selection: {answer!r}")


def select_port(
    requested: str | None,
    available: Sequence[str],
    chooser: Callable[[Sequence[str]], str] = prompt_for_port,
) -> str:
    """Resolve the port a session should open.

    An explicitly requested port is used as is, even if it is not in
    *available*; opening it will report whether it exists. Otherwise a single
    available port is selected automatically and several are handed to
    *chooser*.

    Raises:
        NoPortsAvailable: If no port was requested and none are available.
    """
    if requested:
        return requested
    if not available:
        raise NoPortsAvailable("No serial ports found.")
    if len(available) == 1:
        logger.info("Using the only available port %s", available[0])
        return available[0]
    return chooser(available)
