import logging
import os
import shutil

from folder_backup.core.copier import TreeCopier
from folder_backup.core.scanner import DirectoryScanner


def error_messages(caplog):
    return [record.getMessage() for record in caplog.records if record.levelno == logging.ERROR]


def test_copy_tree_mirrors_structure(source_tree, tmp_path):
    target = tmp_path / "target"

    TreeCopier().copy_tree(str(source_tree), str(target))

    assert (target / "a.txt").read_bytes() == b"hello"
    assert (target / "sub" / "b.txt").read_bytes() == b"abc"
    assert sorted(os.listdir(target)) == ["a.txt", "sub"]


def test_copy_tree_creates_empty_directories(make_tree, tmp_path):
    source = make_tree(tmp_path / "src", {"keep.txt": b"k"})
    (source / "empty" / "nested").mkdir(parents=True)

    TreeCopier().copy_tree(str(source), str(tmp_path / "target"))

    assert (tmp_path / "target" / "empty" / "nested").is_dir()


def test_existing_files_are_not_overwritten(source_tree, tmp_path, caplog):
    target = tmp_path / "target"
    target.mkdir()
    (target / "a.txt").write_bytes(b"older")

    with caplog.at_level(logging.ERROR):
        TreeCopier().copy_tree(str(source_tree), str(target))

    assert (target / "a.txt").read_bytes() == b"older"
    assert (target / "sub" / "b.txt").read_bytes() == b"abc"
    assert len(error_messages(caplog)) == 1


def test_file_copy_failure_is_logged_and_walk_continues(source_tree, tmp_path, monkeypatch, caplog):
    original_copy = shutil.copy2

    def copy2(source, target):
        if source.endswith("a.txt"):
            raise PermissionError(13, "Permission denied", source)
        return original_copy(source, target)

    monkeypatch.setattr(shutil, "copy2", copy2)

    with caplog.at_level(logging.ERROR):
        TreeCopier().copy_tree(str(source_tree), str(tmp_path / "target"))

    assert not (tmp_path / "target" / "a.txt").exists()
    assert (tmp_path / "target" / "sub" / "b.txt").read_bytes() == b"abc"
    assert any("a.txt" in message for message in error_messages(caplog))


def test_directory_create_failure_is_logged(source_tree, tmp_path, caplog):
    blocker = tmp_path / "target"
    blocker.write_bytes(b"not a directory")

    with caplog.at_level(logging.ERROR):
        TreeCopier().copy_tree(str(source_tree), str(blocker))

    messages = error_messages(caplog)
    assert any(message.startswith("Could not create directory") for message in messages)
    assert any(message.startswith("Could not copy") for message in messages)
    assert blocker.read_bytes() == b"not a directory"


def test_unlistable_directory_is_skipped(source_tree, tmp_path, monkeypatch, caplog):
    original_list = DirectoryScanner.list_directory

    def list_directory(self, directory_path, relative_path=""):
        if directory_path.endswith("sub"):
            raise PermissionError(13, "Permission denied", directory_path)
        return original_list(self, directory_path, relative_path)

    monkeypatch.setattr(DirectoryScanner, "list_directory", list_directory)

    with caplog.at_level(logging.ERROR):
        TreeCopier().copy_tree(str(source_tree), str(tmp_path / "target"))

    assert (tmp_path / "target" / "a.txt").read_bytes() == b"hello"
    assert not (tmp_path / "target" / "sub").exists()
    assert len(error_messages(caplog)) == 1


def test_tree_timing_is_logged(source_tree, tmp_path, caplog):
    target = tmp_path / "target"

    with caplog.at_level(logging.DEBUG, logger="folder_backup.core.copier"):
        TreeCopier().copy_tree(str(source_tree), str(target))

    messages = [record.getMessage() for record in caplog.records]
    assert any(message.startswith(f"Copy finished for directory {target / 'sub'}") for message in messages)
    assert messages[-1].startswith(f"Copy finished for tree {target}")
