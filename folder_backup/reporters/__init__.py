"""Console reporters for backup runs."""

from .progress_reporter import ProgressDisplay, DisplayLogHandler

__all__ = ["ProgressDisplay", "DisplayLogHandler"]
