"""Data models for folder backups."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional


@dataclass(frozen=True)
class BackupUnit:
    """One configured backup target."""
    source: str
    temp_folder: str
    destination: str


@dataclass(frozen=True)
class ProgressReport:
    """Snapshot of run progress taken after a file was archived."""
    percentage: float
    processed_bytes: int
    total_bytes: int
    elapsed: timedelta
    remaining: Optional[timedelta]
    current_file: str


@dataclass
class RunProgress:
    """Byte counters shared by every unit of a single run.

    ``processed_bytes`` only ever grows. It is expected to stay below
    ``total_bytes``, but files can change between the estimate and the
    archive pass, so values above 100% are possible.
    """
    total_bytes: int
    start_time: datetime
    processed_bytes: int = 0

    def claim(self, nbytes: int) -> None:
        """Count bytes as processed before they are written."""
        if nbytes < 0:
            raise ValueError(f"Cannot claim a negative byte count: {nbytes}")
        self.processed_bytes += nbytes

    @property
    def percentage(self) -> float:
        if self.total_bytes == 0:
            return 100.0
        return self.processed_bytes * 100 / self.total_bytes

    def elapsed(self, now: Optional[datetime] = None) -> timedelta:
        return (now or datetime.now()) - self.start_time

    def remaining(self, now: Optional[datetime] = None) -> Optional[timedelta]:
        """Linear extrapolation of the time left, None until data has been processed."""
        if self.processed_bytes == 0:
            return None
        left = self.total_bytes - self.processed_bytes
        if left <= 0:
            return timedelta(0)
        return self.elapsed(now) / self.processed_bytes * left

    def snapshot(self, current_file: str, now: Optional[datetime] = None) -> ProgressReport:
        now = now or datetime.now()
        return ProgressReport(
            percentage=self.percentage,
            processed_bytes=self.processed_bytes,
            total_bytes=self.total_bytes,
            elapsed=self.elapsed(now),
            remaining=self.remaining(now),
            current_file=current_file
        )


@dataclass
class DirectoryListing:
    """Contents of one directory level."""
    path: str
    relative_path: str
    files: List[str] = field(default_factory=list)
    directories: List[str] = field(default_factory=list)


@dataclass
class UnitResult:
    """Artifacts produced for one backup unit."""
    unit: BackupUnit
    archive_path: str
    backup_folder: str


@dataclass
class RunSummary:
    """Outcome of a complete backup run."""
    run_timestamp: str
    total_bytes: int
    processed_bytes: int
    elapsed: timedelta
    units: List[UnitResult] = field(default_factory=list)
