"""
Shared utility helpers.

This module contains small, reusable helpers that do not belong
to scrambling, encryption, or pipeline orchestration.
"""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Optional

from .config import BACKUP_SUFFIX, BACKUP_TIMESTAMP_FORMAT


# ---------------------------------------------------------------------------
# Backups
# ---------------------------------------------------------------------------


def backup_path(path: Path, now: Optional[datetime] = None) -> Path:
    """Return ``<path>.<YYYYmmdd_HHMMSS>.bak`` next to ``path``."""
    stamp = (now or datetime.now()).strftime(BACKUP_TIMESTAMP_FORMAT)
    return path.with_name(f"{path.name}.{stamp}{BACKUP_SUFFIX}")


def create_backup(path: Path, now: Optional[datetime] = None) -> Path:
    """Copy ``path`` byte for byte to its timestamped backup."""
    target = backup_path(path, now)
    shutil.copyfile(path, target)
    return target


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def ensure_dir(path: Path) -> Path:
    """Create ``path`` (and parents) if needed."""
    path.mkdir(parents=True, exist_ok=True)
    return path


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory of a file exists."""
    path.parent.mkdir(parents=True, exist_ok=True)
