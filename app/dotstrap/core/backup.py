"""Timestamped backups of configuration files before they are overwritten.

A backup of ``~/.zshrc`` taken at 14:03:09 on 2026-10-17 is written next
to the original as ``~/.zshrc.backup.20261017_140309``.
"""

import logging
import shutil
from datetime import datetime
from pathlib import Path

from dotstrap.utils.formatting import print_info

logger = logging.getLogger(__name__)

BACKUP_TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"


class BackupError(Exception):
    """Raised when a backup copy cannot be written."""


def backup_path_for(path: Path, now: datetime | None = None) -> Path:
    """Compute a free backup path for ``path``.

    Two backups within the same second get a numeric suffix instead of
    overwriting each other.

    Args:
        path: File or directory to back up.
        now: Timestamp to use. Defaults to the current local time.

    Returns:
        A path that does not exist yet.
    """
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    candidate = path.with_name(f"{path.name}.backup.{stamp}")
    counter = 1
    while candidate.exists() or candidate.is_symlink():
        candidate = path.with_name(f"{path.name}.backup.{stamp}_{counter}")
        counter += 1
    return candidate


def backup_config(path: Path, *, dry_run: bool = False, now: datetime | None = None) -> Path | None:
    """Back up a config file or directory if it exists.

    In dry-run mode the backup is announced but not written.

    Args:
        path: Config path to back up.
        dry_run: If True, report the backup without copying.
        now: Timestamp to use for the backup name.

    Returns:
        The backup path, or None if there was nothing to back up.

    Raises:
        BackupError: If the copy fails.
    """
    if not path.exists() and not path.is_symlink():
        return None

    dest = backup_path_for(path, now)
    print_info(f"Backing up {path} to {dest}")

    if dry_run:
        return dest

    try:
        if path.is_dir() and not path.is_symlink():
            shutil.copytree(str(path), str(dest), symlinks=True)
        else:
            shutil.copy2(str(path), str(dest), follow_symlinks=False)
    except OSError as e:
        msg = f"Backup of {path} failed: {e}"
        raise BackupError(msg) from e

    logger.debug("Backed up %s to %s", path, dest)
    return dest
