"""Console progress display for backup runs."""

import sys
import logging
from typing import IO, List, Optional

import click

from ..core.models import ProgressReport
from ..utils.formatters import format_duration, format_kilobytes, truncate_string

# Move to the start of a previous line / clear the whole line
CURSOR_UP = "\x1b[{count}F"
CLEAR_LINE = "\x1b[2K"


class ProgressDisplay:
    """Shows archive progress in a region of the console that is redrawn in place."""

    def __init__(self, file: Optional[IO] = None, interactive: Optional[bool] = None,
                 max_path_length: int = 120):
        """Initialize progress display.

        Args:
            file: Stream to write to, stdout if not provided.
            interactive: Redraw the region in place. Defaults to whether the
                         stream is a terminal. When disabled, a single line is
                         written each time the whole percentage changes.
            max_path_length: Longest file path shown before truncation.
        """
        self.file = file or sys.stdout
        if interactive is None:
            interactive = hasattr(self.file, 'isatty') and self.file.isatty()
        self.interactive = interactive
        self.max_path_length = max_path_length
        self._lines_drawn = 0
        self._last_percent = None

    def __call__(self, report: ProgressReport) -> None:
        self.update(report)

    def render(self, report: ProgressReport) -> List[str]:
        """Build the lines of the progress region.

        Args:
            report: Progress snapshot.

        Returns:
            Lines to display, most important first.
        """
        return [
            f"Compression Progress {report.percentage:.2f}%",
            f"{format_kilobytes(report.processed_bytes)} of {format_kilobytes(report.total_bytes)}",
            f"Elapsed time: {format_duration(report.elapsed)}.",
            f"Remaining time: {format_duration(report.remaining)}.",
            f"Zip added {truncate_string(report.current_file, self.max_path_length)}."
        ]

    def update(self, report: ProgressReport) -> None:
        """Show a new progress snapshot."""
        lines = self.render(report)

        if not self.interactive:
            percent = int(report.percentage)
            if percent != self._last_percent:
                self._last_percent = percent
                click.echo(" | ".join(lines[:4]), file=self.file)
            return

        if self._lines_drawn:
            click.echo(CURSOR_UP.format(count=self._lines_drawn), nl=False, file=self.file, color=True)

        for i, line in enumerate(lines):
            # Counters in yellow, the file name in the default color
            text = click.style(line, fg='yellow') if i < len(lines) - 1 else line
            click.echo(CLEAR_LINE + text, file=self.file, color=True)

        self._lines_drawn = len(lines)

    def message(self, text: str) -> None:
        """Write a line below the progress region and start a new region."""
        click.echo(text, file=self.file)
        self._lines_drawn = 0
        self._last_percent = None


class DisplayLogHandler(logging.Handler):
    """Writes log records through a progress display so redraws stay aligned."""

    def __init__(self, display: ProgressDisplay, level: int = logging.WARNING):
        super().__init__(level)
        self.display = display

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.display.message(self.format(record))
        except Exception:
            self.handleError(record)
