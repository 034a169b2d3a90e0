"""Utility modules for folder backups."""

from .formatters import (format_run_timestamp, format_file_size, format_kilobytes,
                         format_duration, format_minutes, truncate_string)

__all__ = ["format_run_timestamp", "format_file_size", "format_kilobytes",
           "format_duration", "format_minutes", "truncate_string"]
