"""Command-line entry point.

Start with::

    gpsterm --port /dev/ttyUSB0 --baud 4800 --log-file track.csv

Without ``--port`` the only available serial port is used, or the operator
picks one from a numbered list when there are several. Inside the session,
keys are sent to the device as typed; press '!' to exit.
"""

import argparse
import curses
import logging
import sys
from pathlib import Path

from gpsterm.console.terminal import ConsoleLogHandler, CursesConsole
from gpsterm.errors import NoPortsAvailable, PortUnavailable
from gpsterm.port.channel import SerialChannel
from gpsterm.port.config import (
    DATA_BITS_CHOICES,
    DEFAULT_BAUD_RATE,
    DEFAULT_DATA_BITS,
    DEFAULT_TIMEOUT_MS,
    PortConfig,
)
from gpsterm.port.discovery import describe_ports, list_port_names, select_port
from gpsterm.session import SessionStats, TerminalSession
from gpsterm.track.logger import TrackLogger

__all__ = ["main", "parse_args"]

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_CONSOLE_LOG_FORMAT = "%(levelname)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="gpsterm",
        description="Interactive NMEA 0183 serial terminal with CSV track logging",
    )
    parser.add_argument(
        "--port",
        help="Serial port name (default: the only available port, or ask)",
    )
    parser.add_argument(
        "--baud", type=int, default=DEFAULT_BAUD_RATE, help="Serial baud rate"
    )
    parser.add_argument(
        "--data-bits",
        dest="data_bits",
        type=int,
        choices=DATA_BITS_CHOICES,
        default=DEFAULT_DATA_BITS,
        help="Data bits (parity none, one stop bit)",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        type=Path,
        help="CSV track log to append fixes to (disabled when omitted)",
    )
    parser.add_argument(
        "--read-timeout-ms",
        dest="read_timeout_ms",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        help="Line read timeout in milliseconds",
    )
    parser.add_argument(
        "--write-timeout-ms",
        dest="write_timeout_ms",
        type=int,
        default=DEFAULT_TIMEOUT_MS,
        help="Write timeout in milliseconds",
    )
    parser.add_argument(
        "--list-ports",
        dest="list_ports",
        action="store_true",
        help="List available serial ports and exit",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=_LOG_LEVELS,
        default="WARNING",
        help="Diagnostic log level; records are shown in the terminal window "
        "(and written to --debug-log when given)",
    )
    parser.add_argument(
        "--debug-log",
        dest="debug_log",
        type=Path,
        help="Write diagnostic log records to this file instead of stderr",
    )
    return parser.parse_args(argv)


def configure_logging(level: str, debug_log: Path | None = None) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format=_LOG_FORMAT,
        filename=str(debug_log) if debug_log else None,
        force=True,
    )


def _is_stream_handler(handler: logging.Handler) -> bool:
    return isinstance(handler, logging.StreamHandler) and not isinstance(
        handler, logging.FileHandler
    )


def _run_session(
    window: "curses.window",
    config: PortConfig,
    track_logger: TrackLogger | None,
    log_level: int = logging.WARNING,
) -> SessionStats:
    """Run one session on a curses window; used through ``curses.wrapper``.

    Log records at *log_level* and above are shown in the window while the
    session runs.
    """
    console = CursesConsole(window)
    console_handler = ConsoleLogHandler(console, log_level)
    console_handler.setFormatter(logging.Formatter(_CONSOLE_LOG_FORMAT))

    # stderr output would be painted over by curses; route it to the window
    root = logging.getLogger()
    stream_handlers = [h for h in root.handlers if _is_stream_handler(h)]
    for handler in stream_handlers:
        root.removeHandler(handler)
    root.addHandler(console_handler)
    try:
        session = TerminalSession(SerialChannel(config), console, track_logger)
        session.run()
        return session.stats
    finally:
        root.removeHandler(console_handler)
        for handler in stream_handlers:
            root.addHandler(handler)


def _print_ports() -> None:
    ports = describe_ports()
    if not ports:
        print("No serial ports found.")
    for device, description in ports:
        print(f"{device}\t{description}")


def main(argv: list[str] | None = None) -> int:
    """Run the terminal; returns the process exit status."""
    args = parse_args(argv)
    configure_logging(args.log_level, args.debug_log)

    if args.list_ports:
        _print_ports()
        return 0

    try:
        port_name = select_port(args.port, list_port_names())
        config = PortConfig(
            port_name=port_name,
            baud_rate=args.baud,
            data_bits=args.data_bits,
            read_timeout_ms=args.read_timeout_ms,
            write_timeout_ms=args.write_timeout_ms,
        )
    except (NoPortsAvailable, ValueError) as e:
        print(f"gpsterm: {e}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("gpsterm: no port selected", file=sys.stderr)
        return 1

    track_logger = TrackLogger(args.log_file) if args.log_file else None

    try:
        stats = curses.wrapper(
            _run_session, config, track_logger, getattr(logging, args.log_level)
        )
    except PortUnavailable as e:
        print(f"gpsterm: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 0

    print(
        f"{stats.lines_received} lines received, {stats.rows_logged} fixes logged."
    )
    return 0
