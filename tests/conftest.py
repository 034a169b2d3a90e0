"""Shared fixtures for folder backup tests."""

import logging
from datetime import datetime

import pytest

from folder_backup.core.models import BackupUnit, RunProgress


def write_tree(root, files):
    """Create files below root from a mapping of relative path to bytes."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    return root


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo handler changes made by the CLI logging setup."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def source_tree(tmp_path):
    """Source folder holding a.txt (5 bytes) and sub/b.txt (3 bytes)."""
    return write_tree(tmp_path / "source", {
        "a.txt": b"hello",
        "sub/b.txt": b"abc",
    })


@pytest.fixture
def progress():
    return RunProgress(total_bytes=8, start_time=datetime.now())


@pytest.fixture
def backup_unit(tmp_path, source_tree):
    return BackupUnit(
        source=str(source_tree),
        temp_folder=str(tmp_path / "temp"),
        destination=str(tmp_path / "destination")
    )


@pytest.fixture
def make_tree():
    return write_tree
