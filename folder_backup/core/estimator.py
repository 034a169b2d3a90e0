"""Total size estimation used as the denominator for progress."""

import os
import logging
from typing import Iterable

from .models import BackupUnit
from .scanner import DirectoryScanner


class SizeEstimator:
    """Sums the sizes of every file under the configured sources."""

    def __init__(self):
        # Listing errors propagate: an unreadable source aborts the estimate
        self.scanner = DirectoryScanner()
        self.logger = logging.getLogger(__name__)

    def estimate_total_size(self, units: Iterable[BackupUnit]) -> int:
        """Get the number of bytes a run will have to archive.

        Args:
            units: Backup units to include.

        Returns:
            Total size in bytes of all files under every unit's source.
        """
        total = 0
        for unit in units:
            size = self.estimate_folder_size(unit.source)
            self.logger.debug(f"{unit.source} holds {size} bytes")
            total += size
        return total

    def estimate_folder_size(self, folder: str) -> int:
        """Get the total size in bytes of the files under a single folder."""
        total = 0
        for listing in self.scanner.walk(folder):
            for name in listing.files:
                total += os.path.getsize(os.path.join(listing.path, name))
        return total
