"""Filesystem queries used by destination placement.

Placement never moves or copies anything; it only asks whether folders exist,
how much space is free on them and whether two paths share a filesystem. Those
questions are answered by :class:`FileSystemProbe`, which placement receives as
a parameter so tests can substitute a fake.
"""

import os
import shutil
from pathlib import Path

from namewright.errors import ProbeError


def _nearest_existing(path: Path) -> Path:
    for candidate in (path, *path.parents):
        if candidate.exists():
            return candidate
    return Path(path.anchor or os.sep)


class FileSystemProbe:
    """Read-only filesystem queries backed by the local OS."""

    def exists(self, path: Path) -> bool:
        """Return True if *path* is an existing directory."""
        return path.is_dir()

    def free_space(self, path: Path) -> int:
        """Bytes available on the filesystem holding *path*.

        Raises:
            ProbeError: If the query fails.
        """
        try:
            return shutil.disk_usage(path).free
        except OSError as e:
            raise ProbeError(f"Unable to query free space for {path}: {e}") from e

    def same_filesystem(self, first: Path, second: Path) -> bool:
        """Return True if both paths live on the same filesystem.

        Compares device ids of the nearest existing ancestors, falling back to
        comparing drive roots when stat fails.
        """
        try:
            return (
                _nearest_existing(first).stat().st_dev
                == _nearest_existing(second).stat().st_dev
            )
        except OSError:
            return first.anchor.lower() == second.anchor.lower()
