"""Core backup functionality."""

from .orchestrator import BackupOrchestrator
from .archiver import TreeArchiver, is_transient_access_error
from .copier import TreeCopier
from .estimator import SizeEstimator
from .scanner import DirectoryScanner
from .models import BackupUnit, RunProgress, ProgressReport, RunSummary, UnitResult

__all__ = ["BackupOrchestrator", "TreeArchiver", "is_transient_access_error", "TreeCopier",
           "SizeEstimator", "DirectoryScanner", "BackupUnit", "RunProgress", "ProgressReport",
           "RunSummary", "UnitResult"]
