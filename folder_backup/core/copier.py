"""Best-effort replication of a directory tree."""

import os
import shutil
import logging
from datetime import datetime

from .scanner import DirectoryScanner


class TreeCopier:
    """Copies a directory tree file by file, logging failures instead of raising."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.scanner = DirectoryScanner(on_error=self._log_listing_error)

    def copy_tree(self, source_dir: str, target_dir: str) -> None:
        """Replicate source_dir into target_dir.

        Missing target directories are created. Existing target files are
        left untouched and reported as errors. No failure stops the walk.

        Args:
            source_dir: Directory to copy.
            target_dir: Directory receiving the copy.
        """
        self.logger.debug(f"Copy started for {source_dir}")
        tree_start = datetime.now()

        for listing in self.scanner.walk(source_dir):
            start = datetime.now()
            target = os.path.join(target_dir, listing.relative_path) if listing.relative_path else target_dir

            try:
                os.makedirs(target, exist_ok=True)
            except OSError as e:
                self.logger.error(f"Could not create directory {target}: {e}")

            for name in listing.files:
                source_file = os.path.join(listing.path, name)
                try:
                    self._copy_file(source_file, os.path.join(target, name))
                except OSError as e:
                    self.logger.error(f"Could not copy {source_file}: {e}")

            self.logger.debug(f"Copy finished for directory {target} in "
                              f"{(datetime.now() - start).total_seconds():.2f} second(s).")

        self.logger.debug(f"Copy finished for tree {target_dir} in "
                          f"{(datetime.now() - tree_start).total_seconds():.2f} second(s).")

    def _copy_file(self, source_file: str, target_file: str) -> None:
        if os.path.lexists(target_file):
            raise FileExistsError(f"Target file already exists: {target_file}")
        shutil.copy2(source_file, target_file)

    def _log_listing_error(self, error: OSError) -> None:
        self.logger.error(f"Could not list directory {error.filename}: {error}")
