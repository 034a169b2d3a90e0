"""
Folder Backup - Scheduled folder archiving and copying.

This package archives configured folders into timestamped zip files, copies
them to backup destinations and cleans up the temporary staging folders.
"""

__version__ = "1.0.0"

from .core.orchestrator import BackupOrchestrator
from .core.archiver import TreeArchiver
from .core.copier import TreeCopier
from .core.estimator import SizeEstimator

__all__ = ["BackupOrchestrator", "TreeArchiver", "TreeCopier", "SizeEstimator"]
