"""Serial port access: configuration, enumeration and the line channel."""

from gpsterm.port.channel import SerialChannel
from gpsterm.port.config import PortConfig
from gpsterm.port.discovery import (
    describe_ports,
    list_port_names,
    prompt_for_port,
    select_port,
)

__all__ = [
    "PortConfig",
    "SerialChannel",
    "describe_ports",
    "list_port_names",
    "prompt_for_port",
    "select_port",
]
