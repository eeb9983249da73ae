from __future__ import annotations

import os
from pathlib import Path

from linksnap.models import SourceEntry


def replicate_metadata(destination: Path, entry: SourceEntry, *, can_chown: bool) -> None:
    """Stamp owner/group, mode and times of ``entry`` onto ``destination``.

    Ownership is only changed when ``can_chown`` is set; without privilege it is
    skipped rather than treated as an error. The times go last since chown and
    chmod both touch the inode.
    """
    if can_chown:
        os.chown(destination, entry.uid, entry.gid)
    os.chmod(destination, entry.permission_bits)
    restamp_times(destination, entry)


def restamp_times(destination: Path, entry: SourceEntry) -> None:
    os.utime(destination, ns=(entry.atime_ns, entry.mtime_ns))
