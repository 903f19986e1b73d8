"""Mount table reading and detection of newly mounted removable media."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Sequence

MAX_MOUNTS = 100
MOUNTS_FILE = "/proc/mounts"
REMOVABLE_FS_TYPES = frozenset({"vfat", "exfat", "ntfs", "vboxsf"})


@dataclass(frozen=True)
class Mount:
    """One entry of the mount table."""

    device: str
    mount_point: str
    fs_type: str


def read_mounts(
    max_mounts: int = MAX_MOUNTS, path: str | os.PathLike[str] = MOUNTS_FILE
) -> list[Mount]:
    """Read at most ``max_mounts`` entries from a mounts file."""
    mounts: list[Mount] = []
    with open(path, encoding="utf-8", errors="replace") as handle:
        for line in handle:
            if len(mounts) >= max_mounts:
                break
            fields = line.split()
            if len(fields) >= 3:
                mounts.append(Mount(fields[0], fields[1], fields[2]))
    return mounts


def find_new_mount(previous: Iterable[Mount], current: Sequence[Mount]) -> Mount | None:
    """Return the first removable mount in ``current`` absent from ``previous``."""
    known = {mount.mount_point for mount in previous}
    return next(
        (
            mount
            for mount in current
            if mount.mount_point not in known and mount.fs_type in REMOVABLE_FS_TYPES
        ),
        None,
    )


def is_mounted(mount: Mount, current: Iterable[Mount]) -> bool:
    """Tell whether ``mount``'s mount point is still present in ``current``."""
    return any(other.mount_point == mount.mount_point for other in current)