"""Formatting utilities for backup names and progress output."""

from datetime import datetime, timedelta
from typing import Optional

RUN_TIMESTAMP_FORMAT = '%Y%m%d_%H%M%S'


def format_run_timestamp(dt: datetime) -> str:
    """Format the run start time used to name archives and backup folders.

    Args:
        dt: Run start time.

    Returns:
        Timestamp string such as ``20240131_235959``.
    """
    return dt.strftime(RUN_TIMESTAMP_FORMAT)


def format_file_size(size_bytes: int) -> str:
    """Format file size in human readable format.

    Args:
        size_bytes: Size in bytes.

    Returns:
        Human readable size string.
    """
    if size_bytes < 1024:
        return f"{size_bytes}B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes // 1024}KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes // (1024 * 1024)}MB"
    else:
        return f"{size_bytes // (1024 * 1024 * 1024)}GB"


def format_kilobytes(size_bytes: int) -> str:
    """Format a byte count as thousands of bytes, e.g. ``12,345 KB``."""
    return f"{size_bytes // 1000:,} KB"


def format_duration(duration: Optional[timedelta]) -> str:
    """Format a duration as ``hh:mm:ss.fff``.

    Args:
        duration: Duration to format, or None when it is not known yet.

    Returns:
        Formatted duration, ``--:--:--.---`` for unknown durations.
    """
    if duration is None:
        return "--:--:--.---"

    total_ms = max(int(duration.total_seconds() * 1000), 0)
    hours, rest = divmod(total_ms, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    seconds, milliseconds = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{milliseconds:03d}"


def format_minutes(duration: timedelta) -> str:
    """Format a duration in minutes with two decimals."""
    return f"{duration.total_seconds() / 60:,.2f}"


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate string to maximum length.

    Args:
        text: Text to truncate.
        max_length: Maximum length.
        suffix: Suffix to add when truncating.

    Returns:
        Truncated string.
    """
    if len(text) <= max_length:
        return text

    return text[:max_length - len(suffix)] + suffix
