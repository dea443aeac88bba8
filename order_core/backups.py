from __future__ import annotations
import os
import shutil
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .constants import BACKUP_TAG, BACKUP_TIME_FORMAT
from .errors import FileAccessError
from .logs import get_logger

log = get_logger("backups")


def _backup_folder(path: Path, backup_dir: Optional[str]) -> Path:
    return Path(backup_dir) if backup_dir else path.parent


def backup_name(path: str, now: Optional[datetime] = None) -> str:
    p = Path(path)
    stamp = (now or datetime.now()).strftime(BACKUP_TIME_FORMAT)
    return f"{p.stem}{BACKUP_TAG}{stamp}{p.suffix}"


def create_backup(path: str, backup_dir: Optional[str] = None, now: Optional[datetime] = None) -> str:
    src = Path(path)
    folder = _backup_folder(src, backup_dir)
    target = folder / backup_name(path, now)
    n = 1
    while target.exists():
        target = folder / f"{Path(backup_name(path, now)).stem}_{n}{src.suffix}"
        n += 1
    try:
        folder.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, target)
    except OSError as exc:
        raise FileAccessError(
            f"Failed to create backup of {path}: {exc}",
            details={"path": path, "backup": str(target)},
            user_message="Could not create a backup before saving. The file was not changed.",
        ) from exc
    log.info("Backup created: %s", target)
    return str(target)


def list_backups(path: str, backup_dir: Optional[str] = None) -> List[str]:
    """Backups of ``path``, newest first."""
    src = Path(path)
    folder = _backup_folder(src, backup_dir)
    if not folder.is_dir():
        return []
    prefix = f"{src.stem}{BACKUP_TAG}"
    found = [
        f for f in folder.iterdir()
        if f.is_file() and f.name.startswith(prefix) and f.suffix == src.suffix
    ]
    # timestamp sorts lexically; mtime breaks same-second ties
    found.sort(key=lambda f: (f.name[len(prefix):len(prefix) + 15], f.stat().st_mtime, f.name), reverse=True)
    return [str(f) for f in found]


def prune_backups(path: str, keep: int, backup_dir: Optional[str] = None) -> List[str]:
    if keep <= 0:
        return []
    removed = []
    for old in list_backups(path, backup_dir)[keep:]:
        try:
            os.remove(old)
            removed.append(old)
        except OSError as exc:
            log.warning("Could not remove old backup %s: %s", old, exc)
    if removed:
        log.info("Pruned %d old backup(s)", len(removed))
    return removed
