"""Writes directory trees into zip archives with progress reporting."""

import os
import errno
import logging
import zipfile
import tempfile
from datetime import datetime
from typing import BinaryIO, Callable, Optional

from .models import ProgressReport, RunProgress
from .scanner import DirectoryScanner

# Windows ERROR_SHARING_VIOLATION and ERROR_LOCK_VIOLATION
LOCKED_WINERRORS = (32, 33)
LOCKED_ERRNOS = (errno.EBUSY, errno.ETXTBSY)
LOCKED_MESSAGE = "used by another process"


def is_transient_access_error(error: OSError) -> bool:
    """Check whether an error only affects access to a single file.

    Permission problems and files locked by another process are
    transient: the file is skipped and the backup goes on.

    Args:
        error: Error raised while archiving a file.

    Returns:
        True if the file can be skipped.
    """
    if isinstance(error, PermissionError):
        return True
    if getattr(error, 'winerror', None) in LOCKED_WINERRORS:
        return True
    if error.errno in LOCKED_ERRNOS:
        return True
    return str(error).rstrip('.').endswith(LOCKED_MESSAGE)


class TreeArchiver:
    """Stores every file of a directory tree in a zip archive."""

    # Files up to this size are staged in memory, larger ones on disk
    SPOOL_MEMORY_LIMIT = 8 * 1024 * 1024

    def __init__(self, buffer_size: int = 1024,
                 on_progress: Optional[Callable[[ProgressReport], None]] = None):
        """Initialize tree archiver.

        Args:
            buffer_size: Number of bytes copied per read.
            on_progress: Receives a progress report after every file.
        """
        if buffer_size <= 0:
            raise ValueError(f"Buffer size must be positive: {buffer_size}")
        self.buffer_size = buffer_size
        self.on_progress = on_progress
        self.scanner = DirectoryScanner()
        self.logger = logging.getLogger(__name__)

    def archive_folder(self, source_folder: str, archive_path: str, progress: RunProgress) -> str:
        """Archive a folder into a new or existing zip file.

        Args:
            source_folder: Folder to archive; entry names are relative to it.
            archive_path: Zip file to create or append to.
            progress: Progress of the whole run.

        Returns:
            Path of the archive.
        """
        archive_folder = os.path.dirname(archive_path)
        if archive_folder:
            os.makedirs(archive_folder, exist_ok=True)

        with zipfile.ZipFile(archive_path, mode='a', compression=zipfile.ZIP_STORED) as container:
            self.archive(source_folder, source_folder, container, progress)

        return archive_path

    def archive(self, root_folder: str, source_folder: str,
                container: zipfile.ZipFile, progress: RunProgress) -> None:
        """Add all files below source_folder to an open archive.

        Files denied or locked by another process are logged and skipped.
        Any other OSError aborts the archive.

        Args:
            root_folder: Folder entry names are made relative to.
            source_folder: Folder to walk, root_folder or one of its subfolders.
            container: Archive opened for writing.
            progress: Progress of the whole run.
        """
        tree_start = datetime.now()

        for listing in self.scanner.walk(source_folder):
            start = datetime.now()

            for name in listing.files:
                file_path = os.path.join(listing.path, name)
                try:
                    self._append_file(root_folder, file_path, container, progress)
                except OSError as e:
                    if not is_transient_access_error(e):
                        raise
                    self.logger.error(f"Skipped {file_path}: {e}")
                    continue

                if self.on_progress:
                    self.on_progress(progress.snapshot(file_path))

            self.logger.debug(f"Zip finished for directory {listing.path} in "
                              f"{(datetime.now() - start).total_seconds():.2f} second(s).")

        self.logger.debug(f"Zip finished for tree {source_folder} in "
                          f"{(datetime.now() - tree_start).total_seconds():.2f} second(s).")

    def _append_file(self, root_folder: str, file_path: str,
                     container: zipfile.ZipFile, progress: RunProgress) -> None:
        """Copy one file into a stored archive entry.

        The file is read completely into a spool before the entry is
        created, so a file that fails part way never leaves a truncated
        entry behind.
        """
        entry_name = os.path.relpath(file_path, root_folder)
        entry = zipfile.ZipInfo.from_file(file_path, entry_name, strict_timestamps=False)
        entry.compress_type = zipfile.ZIP_STORED

        progress.claim(entry.file_size)

        with tempfile.SpooledTemporaryFile(max_size=self.SPOOL_MEMORY_LIMIT) as spool:
            with self._open_source(file_path) as reader:
                self._copy_chunks(reader, spool)

            spool.seek(0)
            with container.open(entry, mode='w') as writer:
                self._copy_chunks(spool, writer)

        self.logger.debug(f"Zip added {file_path}")

    def _copy_chunks(self, reader: BinaryIO, writer: BinaryIO) -> None:
        while True:
            chunk = reader.read(self.buffer_size)
            if not chunk:
                break
            writer.write(chunk)
            writer.flush()
            if len(chunk) < self.buffer_size:
                break

    def _open_source(self, file_path: str) -> BinaryIO:
        return open(file_path, 'rb')
