# FILE: tests/test_backups.py
import os
from datetime import datetime

import pytest

from order_core.backups import create_backup, list_backups, prune_backups
from order_core.errors import FileAccessError

def _roster(tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text("Barcode Number\n1\n", encoding="utf-8")
    return str(path)

def test_backup_name_and_content(tmp_path):
    path = _roster(tmp_path)
    backup = create_backup(path, now=datetime(2026, 1, 2, 3, 4, 5))
    assert os.path.basename(backup) == "roster_backup_20260102_030405.csv"
    with open(backup, encoding="utf-8") as f:
        assert f.read() == "Barcode Number\n1\n"

def test_backup_collision_gets_counter(tmp_path):
    path = _roster(tmp_path)
    now = datetime(2026, 1, 2, 3, 4, 5)
    create_backup(path, now=now)
    second = create_backup(path, now=now)
    assert os.path.basename(second) == "roster_backup_20260102_030405_1.csv"

def test_backup_dir_is_created(tmp_path):
    path = _roster(tmp_path)
    backup = create_backup(path, backup_dir=str(tmp_path / "bk"), now=datetime(2026, 1, 1))
    assert os.path.dirname(backup) == str(tmp_path / "bk")

def test_list_and_prune_newest_first(tmp_path):
    path = _roster(tmp_path)
    for day in (1, 3, 2):
        create_backup(path, now=datetime(2026, 1, day))
    names = [os.path.basename(b) for b in list_backups(path)]
    assert names == [
        "roster_backup_20260103_000000.csv",
        "roster_backup_20260102_000000.csv",
        "roster_backup_20260101_000000.csv",
    ]
    assert prune_backups(path, 0) == []
    removed = prune_backups(path, 2)
    assert [os.path.basename(r) for r in removed] == ["roster_backup_20260101_000000.csv"]
    assert len(list_backups(path)) == 2

def test_backup_of_missing_file(tmp_path):
    with pytest.raises(FileAccessError):
        create_backup(str(tmp_path / "missing.csv"))
