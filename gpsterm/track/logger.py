"""CSV track log of GPS fixes.

One row is appended per GGA or RMC fix that carries both coordinates. The
header is written only when the file is missing or empty, so restarting the
terminal against an existing log keeps appending to it.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path

from gpsterm.nmea.types import GpsFix

__all__ = ["CSV_HEADER", "LogDestination", "TrackLogger"]

logger = logging.getLogger(__name__)

CSV_HEADER = (
    "Timestamp",
    "MessageType",
    "Latitude",
    "Longitude",
    "Altitude",
    "Speed",
    "Course",
    "Satellites",
    "Quality",
    "HDOP",
)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LogDestination:
    """A track log file and whether its header is already present."""

    path: Path
    header_written: bool = False

    def refresh(self) -> None:
        """Re-read header presence from the file system."""
        try:
            self.header_written = self.path.stat().st_size > 0
        except FileNotFoundError:
            self.header_written = False


def _format_row(fix: GpsFix) -> tuple[str, ...]:
    return (
        fix.timestamp.strftime(_TIMESTAMP_FORMAT),
        fix.sentence_type.value,
        fix.latitude,
        fix.longitude,
        fix.altitude,
        fix.speed_knots,
        fix.course_degrees,
        fix.satellites_in_use,
        fix.fix_quality,
        fix.hdop,
    )


class TrackLogger:
    """Appends complete fixes to a CSV file.

    The file is created lazily on the first fix with a position. Write
    errors are logged and swallowed so a full disk never ends the session.

    Args:
        path: CSV file to append to.
    """

    def __init__(self, path: str | Path) -> None:
        self._destination = LogDestination(Path(path))
        self.rows_written = 0

    @property
    def destination(self) -> LogDestination:
        return self._destination

    def log_if_complete(self, fix: GpsFix) -> bool:
        """Append *fix* if it has both coordinates.

        Returns:
            True if a row was written, False if the fix had no position or
            the write failed.
        """
        if not fix.has_position:
            return False

        destination = self._destination
        try:
            destination.refresh()
            with destination.path.open("a", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                if not destination.header_written:
                    writer.writerow(CSV_HEADER)
                    destination.header_written = True
                writer.writerow(_format_row(fix))
        except OSError as e:
            logger.warning("Track log write to %s failed: %s", destination.path, e)
            return False

        self.rows_written += 1
        return True
