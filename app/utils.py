import sys
from datetime import datetime, timezone
from pathlib import Path


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to resource, works for dev and for PyInstaller.

    Args:
        relative_path: Relative path from project root (e.g., "config" or "app/assets")

    Returns:
        Absolute Path object
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = Path(sys._MEIPASS)
    else:
        # This file is in app/utils.py, so project root is up two levels
        base_path = Path(__file__).parent.parent.absolute()

    return base_path / relative_path


def from_epoch_ms(value: int) -> datetime:
    """
    Convert epoch milliseconds to an aware datetime in the local timezone.

    Aware values keep durations correct across DST changes.
    """
    seconds, millis = divmod(int(value), 1000)
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc).replace(microsecond=millis * 1000)
    return dt.astimezone()


def to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime back to epoch milliseconds without losing precision"""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    delta = dt - datetime(1970, 1, 1, tzinfo=timezone.utc)
    return (delta.days * 86400 + delta.seconds) * 1000 + delta.microseconds // 1000
