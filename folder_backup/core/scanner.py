"""Directory walking shared by the size estimator, archiver and copier."""

import os
import logging
from typing import Callable, Iterator, Optional

from .models import DirectoryListing


class DirectoryScanner:
    """Walks directory trees one level at a time."""

    def __init__(self, on_error: Optional[Callable[[OSError], None]] = None):
        """Initialize directory scanner.

        Args:
            on_error: Called with the error when a directory cannot be
                      listed; the directory is then skipped. When not set
                      the error propagates to the caller.
        """
        self.on_error = on_error
        self.logger = logging.getLogger(__name__)

    def walk(self, base_path: str) -> Iterator[DirectoryListing]:
        """Yield every directory under base_path in pre-order.

        Each directory's files are reported before any of its
        subdirectories are visited. Entries are sorted by name.
        Symbolic links to directories are not descended into.
        """
        # Explicit stack so deep trees cannot exhaust the recursion limit
        stack = [(base_path, "")]

        while stack:
            directory, relative = stack.pop()

            try:
                listing = self.list_directory(directory, relative)
            except OSError as e:
                if self.on_error is None:
                    raise
                self.on_error(e)
                continue

            yield listing

            for name in reversed(listing.directories):
                stack.append((
                    os.path.join(directory, name),
                    os.path.join(relative, name) if relative else name
                ))

    def list_directory(self, directory_path: str, relative_path: str = "") -> DirectoryListing:
        """List the immediate files and subdirectories of a directory."""
        listing = DirectoryListing(path=directory_path, relative_path=relative_path)

        with os.scandir(directory_path) as entries:
            for entry in entries:
                if entry.is_dir(follow_symlinks=False):
                    listing.directories.append(entry.name)
                elif entry.is_file():
                    listing.files.append(entry.name)
                else:
                    self.logger.debug(f"Skipping {entry.path}: not a regular file")

        listing.files.sort()
        listing.directories.sort()
        return listing
