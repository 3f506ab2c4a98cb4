"""CSV track logging of GPS fixes."""

from gpsterm.track.logger import CSV_HEADER, LogDestination, TrackLogger

__all__ = ["CSV_HEADER", "LogDestination", "TrackLogger"]
