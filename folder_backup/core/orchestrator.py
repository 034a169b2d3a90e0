"""Backup run coordination."""

import os
import time
import shutil
import logging
from datetime import datetime
from typing import Callable, List, Optional

from .models import BackupUnit, RunProgress, RunSummary, UnitResult
from .archiver import TreeArchiver
from .copier import TreeCopier
from .estimator import SizeEstimator
from ..utils.formatters import format_run_timestamp, format_minutes


class BackupOrchestrator:
    """Runs every backup unit through archive, copy and cleanup."""

    def __init__(self, phase_delay: float = 2.0,
                 archiver: Optional[TreeArchiver] = None,
                 copier: Optional[TreeCopier] = None,
                 estimator: Optional[SizeEstimator] = None,
                 on_phase: Optional[Callable[[str], None]] = None,
                 sleep: Callable[[float], None] = time.sleep,
                 clock: Callable[[], datetime] = datetime.now):
        """Initialize backup orchestrator.

        Args:
            phase_delay: Seconds to wait between the phases of a unit so
                         file handles are released. 0 disables the pause.
            archiver: Archiver to use, a default one if not provided.
            copier: Copier to use, a default one if not provided.
            estimator: Size estimator to use, a default one if not provided.
            on_phase: Receives a message when a phase starts and when the run ends.
            sleep: Blocking sleep function.
            clock: Returns the current time.
        """
        if phase_delay < 0:
            raise ValueError(f"Phase delay cannot be negative: {phase_delay}")
        self.phase_delay = phase_delay
        self.archiver = archiver or TreeArchiver()
        self.copier = copier or TreeCopier()
        self.estimator = estimator or SizeEstimator()
        self.on_phase = on_phase
        self.sleep = sleep
        self.clock = clock
        self.logger = logging.getLogger(__name__)

    def run(self, units: List[BackupUnit]) -> RunSummary:
        """Back up every unit, one after the other.

        The run start time names every archive and backup folder of the run.

        Args:
            units: Backup units to process.

        Returns:
            Summary of the run.
        """
        if not units:
            raise ValueError("At least one backup unit is required")

        start_time = self.clock()
        run_timestamp = format_run_timestamp(start_time)
        self.logger.info("Backup started.")

        total_bytes = self.estimator.estimate_total_size(units)
        self._announce(f"Backup {total_bytes} bytes of data ...")

        progress = RunProgress(total_bytes=total_bytes, start_time=start_time)
        results = []

        for unit in units:
            results.append(self._process_unit(unit, run_timestamp, progress))

        elapsed = self.clock() - start_time
        self._announce(f"Backup finished in {format_minutes(elapsed)} minute(s)")

        return RunSummary(
            run_timestamp=run_timestamp,
            total_bytes=total_bytes,
            processed_bytes=progress.processed_bytes,
            elapsed=elapsed,
            units=results
        )

    def _process_unit(self, unit: BackupUnit, run_timestamp: str, progress: RunProgress) -> UnitResult:
        archive_path = os.path.join(unit.temp_folder, f"{run_timestamp}.zip")
        backup_folder = os.path.join(unit.destination, run_timestamp)

        self._announce(f"Copy from {unit.source} to zip file in {unit.temp_folder}")
        self.archiver.archive_folder(unit.source, archive_path, progress)

        self._pause()

        self._announce(f"Backup from {unit.temp_folder} to {unit.destination}")
        self.copier.copy_tree(unit.temp_folder, backup_folder)

        self._pause()

        self._announce(f"Cleaning the Temp folder {unit.temp_folder} ...")
        shutil.rmtree(unit.temp_folder)

        return UnitResult(unit=unit, archive_path=archive_path, backup_folder=backup_folder)

    def _pause(self):
        if self.phase_delay > 0:
            self.sleep(self.phase_delay)

    def _announce(self, message: str):
        self.logger.info(message)
        if self.on_phase:
            self.on_phase(message)
