"""Shared fixtures: in-memory stand-ins for the serial channel and console."""

import pytest

from gpsterm.console import KeyEvent
from gpsterm.port import PortConfig


class FakeChannel:
    """Serial channel stand-in that serves queued lines and records writes."""

    def __init__(self) -> None:
        self.config = PortConfig("/dev/ttyFAKE")
        self.lines: list[str] = []
        self.written: list[bytes] = []
        self.open_calls = 0
        self.close_calls = 0
        self.is_open = False
        self.open_error: Exception | None = None
        self.read_error: Exception | None = None
        self.write_error: Exception | None = None

    def open(self) -> None:
        self.open_calls += 1
        if self.open_error is not None:
            raise self.open_error
        self.is_open = True

    def close(self) -> None:
        self.close_calls += 1
        self.is_open = False

    def has_data(self) -> bool:
        return bool(self.lines) or self.read_error is not None

    def try_read_line(self) -> str | None:
        if self.read_error is not None:
            raise self.read_error
        if not self.lines:
            return None
        return self.lines.pop(0)

    def write(self, data: bytes) -> int:
        if self.write_error is not None:
            raise self.write_error
        self.written.append(data)
        return len(data)


class FakeConsole:
    """Console stand-in that serves queued keys and records echoed lines."""

    def __init__(self) -> None:
        self.keys: list[KeyEvent] = []
        self.lines: list[str] = []

    def poll_key(self) -> KeyEvent | None:
        if not self.keys:
            return None
        return self.keys.pop(0)

    def write_line(self, text: str) -> None:
        self.lines.append(text)


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def console() -> FakeConsole:
    return FakeConsole()
