from __future__ import annotations

import os
from pathlib import Path, PurePosixPath

from linksnap.config import SNAPSHOT_ROOT_MODE, RunContext
from linksnap.metadata import replicate_metadata
from linksnap.models import SourceEntry


def ensure_snapshot_root(today_root: Path, mode: int = SNAPSHOT_ROOT_MODE) -> list[Path]:
    """Create the bare ``YYYYMM/DD`` root of today's snapshot if missing."""
    created: list[Path] = []
    for path in (today_root.parent, today_root):
        if path.is_dir():
            continue
        path.mkdir(mode=mode)
        # mkdir honours the umask, the fixed mode must not.
        os.chmod(path, mode)
        created.append(path)
    return created


def materialize_directory(
    context: RunContext,
    relative_path: str,
) -> list[tuple[Path, SourceEntry]]:
    """Ensure every segment of ``relative_path`` exists under today's snapshot.

    Missing segments are stamped from the matching source segment; segments
    that already exist are left alone.
    """
    created: list[tuple[Path, SourceEntry]] = []
    segments = PurePosixPath(relative_path).parts if relative_path else ()

    for depth in range(1, len(segments) + 1):
        segment = PurePosixPath(*segments[:depth]).as_posix()
        destination = context.today_path(segment)
        if destination.is_dir():
            continue

        entry = SourceEntry.from_stat(segment, os.stat(context.source_path(segment)))
        destination.mkdir()
        replicate_metadata(destination, entry, can_chown=context.can_chown)
        created.append((destination, entry))

    return created
