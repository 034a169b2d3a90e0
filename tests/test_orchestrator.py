import errno
import os
import zipfile
from datetime import datetime

import pytest

from folder_backup.core.archiver import TreeArchiver
from folder_backup.core.models import BackupUnit
from folder_backup.core.orchestrator import BackupOrchestrator

RUN_START = datetime(2024, 1, 31, 23, 59, 58)


def fixed_clock():
    return RUN_START


def test_unit_cycle_archives_copies_and_cleans_up(backup_unit):
    pauses = []
    orchestrator = BackupOrchestrator(phase_delay=2, sleep=pauses.append, clock=fixed_clock)

    summary = orchestrator.run([backup_unit])

    backup_archive = os.path.join(backup_unit.destination, "20240131_235958", "20240131_235958.zip")
    with zipfile.ZipFile(backup_archive) as archive:
        assert sorted(archive.namelist()) == ["a.txt", "sub/b.txt"]
        assert archive.read("sub/b.txt") == b"abc"

    assert not os.path.exists(backup_unit.temp_folder)
    assert pauses == [2, 2]
    assert summary.run_timestamp == "20240131_235958"
    assert summary.total_bytes == summary.processed_bytes == 8
    assert summary.units[0].backup_folder == os.path.join(backup_unit.destination, "20240131_235958")


def test_all_units_share_the_run_timestamp(make_tree, tmp_path):
    units = []
    for name in ("first", "second"):
        source = make_tree(tmp_path / name, {f"{name}.txt": name.encode()})
        units.append(BackupUnit(
            source=str(source),
            temp_folder=str(tmp_path / f"temp-{name}"),
            destination=str(tmp_path / "backups" / name)
        ))

    times = iter([RUN_START, datetime(2024, 2, 1, 0, 5, 0)])
    summary = BackupOrchestrator(phase_delay=0, clock=lambda: next(times)).run(units)

    for name in ("first", "second"):
        assert os.listdir(tmp_path / "backups" / name) == ["20240131_235958"]
    assert summary.processed_bytes == len("first") + len("second")
    assert summary.elapsed.total_seconds() == 302


def test_zero_delay_does_not_sleep(backup_unit):
    pauses = []

    BackupOrchestrator(phase_delay=0, sleep=pauses.append, clock=fixed_clock).run([backup_unit])

    assert pauses == []


def test_phase_messages_follow_unit_sequence(backup_unit):
    messages = []

    BackupOrchestrator(phase_delay=0, on_phase=messages.append, clock=fixed_clock).run([backup_unit])

    assert messages[0] == "Backup 8 bytes of data ..."
    assert messages[1].startswith("Copy from")
    assert messages[2].startswith("Backup from")
    assert messages[3].startswith("Cleaning the Temp folder")
    assert messages[4].startswith("Backup finished in")


def test_progress_spans_units(make_tree, tmp_path):
    units = []
    for name, size in (("one", 6), ("two", 4)):
        source = make_tree(tmp_path / name, {"f.bin": b"x" * size})
        units.append(BackupUnit(str(source), str(tmp_path / f"t-{name}"), str(tmp_path / f"d-{name}")))
    reports = []

    archiver = TreeArchiver(on_progress=reports.append)
    BackupOrchestrator(phase_delay=0, archiver=archiver).run(units)

    assert [report.processed_bytes for report in reports] == [6, 10]
    assert [round(report.percentage, 2) for report in reports] == [60.0, 100.0]


def test_fatal_archive_error_stops_run(backup_unit, monkeypatch):
    def open_source(self, file_path):
        raise OSError(errno.EIO, "Input/output error", file_path)

    monkeypatch.setattr(TreeArchiver, "_open_source", open_source)

    with pytest.raises(OSError):
        BackupOrchestrator(phase_delay=0, clock=fixed_clock).run([backup_unit])

    assert not os.path.exists(backup_unit.destination)


def test_run_requires_units():
    with pytest.raises(ValueError):
        BackupOrchestrator(phase_delay=0).run([])


def test_negative_delay_is_rejected():
    with pytest.raises(ValueError):
        BackupOrchestrator(phase_delay=-1)
