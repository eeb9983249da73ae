from __future__ import annotations

import os
import shutil
import stat
from pathlib import Path, PurePosixPath
from typing import Callable

from linksnap.config import RunContext
from linksnap.materialize import ensure_snapshot_root, materialize_directory
from linksnap.metadata import replicate_metadata, restamp_times
from linksnap.models import ComparisonKey, EntryKind, SnapshotResult, SourceEntry, comparison_key


EntryCallback = Callable[[SourceEntry], None]


def _join(relative_dir: str, name: str) -> str:
    return PurePosixPath(relative_dir, name).as_posix() if relative_dir else name


def _describe(exc: OSError) -> str:
    return exc.strerror or str(exc)


def _read_entry(path: Path, relative_path: str) -> SourceEntry:
    entry = SourceEntry.from_stat(relative_path, os.lstat(path))
    if entry.kind is EntryKind.SYMLINK:
        entry.link_target = os.readlink(path)
    return entry


def _anchor_key(context: RunContext, relative_path: str) -> ComparisonKey | None:
    anchor_path = context.anchor_path(relative_path)
    parent = PurePosixPath(relative_path).parent.as_posix()
    expected_parent = os.path.realpath(context.anchor_root)
    if parent != ".":
        expected_parent = os.path.join(expected_parent, parent)
    # A symlinked segment would resolve the lookup outside the anchor snapshot.
    if os.path.realpath(anchor_path.parent) != os.path.normpath(expected_parent):
        return None

    try:
        st = os.lstat(anchor_path)
    except (FileNotFoundError, NotADirectoryError):
        return None
    if not stat.S_ISREG(st.st_mode):
        return None
    return comparison_key(st.st_mtime_ns, st.st_size)


def _replicate_symlink(context: RunContext, entry: SourceEntry, result: SnapshotResult) -> None:
    destination = context.today_path(entry.path)
    try:
        os.symlink(entry.link_target or "", destination)
    except OSError as exc:
        result.warn(entry.path, f"could not create symlink: {_describe(exc)}")
        return
    result.symlink_paths.append(entry.path)


def _replicate_file(context: RunContext, entry: SourceEntry, result: SnapshotResult) -> None:
    source = context.source_path(entry.path)
    destination = context.today_path(entry.path)
    anchor = context.anchor_path(entry.path)

    # Existing paths may share an inode with older snapshots; never write through them.
    if os.path.lexists(destination):
        result.warn(entry.path, "already exists in snapshot, skipped")
        return

    try:
        anchor_key = _anchor_key(context, entry.path)
        if anchor_key is not None and anchor_key == entry.key:
            os.link(anchor, destination)
            result.linked_paths.append(entry.path)
            return

        shutil.copyfile(source, destination)
        replicate_metadata(destination, entry, can_chown=context.can_chown)
    except OSError as exc:
        result.warn(entry.path, f"could not link or copy file: {_describe(exc)}")
        return
    result.copied_paths.append(entry.path)


def _visit_directory(
    context: RunContext,
    relative_dir: str,
    result: SnapshotResult,
    on_entry: EntryCallback | None,
) -> None:
    try:
        created = materialize_directory(context, relative_dir)
    except OSError as exc:
        result.warn(relative_dir, f"could not create directory: {_describe(exc)}")
        return
    result.created_directories.extend(entry.path for _, entry in created)

    try:
        children = sorted(context.source_path(relative_dir).iterdir())
    except OSError as exc:
        result.warn(relative_dir, f"could not list directory: {_describe(exc)}")
        return

    subdirectories: list[str] = []
    for child in children:
        relative_path = _join(relative_dir, child.name)
        try:
            entry = _read_entry(child, relative_path)
        except OSError as exc:
            result.warn(relative_path, f"could not stat entry: {_describe(exc)}")
            continue

        is_directory = entry.kind is EntryKind.DIRECTORY
        if not context.path_filter.matches(relative_path, is_directory=is_directory):
            result.excluded_paths.append(relative_path)
            continue

        if on_entry is not None:
            on_entry(entry)

        if is_directory:
            subdirectories.append(relative_path)
        elif entry.kind is EntryKind.SYMLINK:
            _replicate_symlink(context, entry, result)
        elif entry.kind is EntryKind.REGULAR_FILE:
            _replicate_file(context, entry, result)
        else:
            result.warn(relative_path, "unsupported file type, skipped")

    for subdirectory in subdirectories:
        _visit_directory(context, subdirectory, result, on_entry)

    # Children moved the mtime of directories created on this visit.
    for destination, entry in reversed(created):
        try:
            restamp_times(destination, entry)
        except OSError as exc:
            result.warn(entry.path, f"could not restore directory times: {_describe(exc)}")


def build_snapshot(
    context: RunContext,
    *,
    on_entry: EntryCallback | None = None,
) -> SnapshotResult:
    """Mirror ``source_root`` into ``target_root/<today>``.

    Files whose comparison key matches the copy under the anchor snapshot are
    hardlinked to it, everything else is copied with metadata. Per-entry
    failures end up in ``SnapshotResult.warnings``; only seeding the dated root
    can raise.
    """
    result = SnapshotResult(today_label=context.today_label, anchor_label=context.anchor_label)
    ensure_snapshot_root(context.today_root)
    _visit_directory(context, "", result, on_entry)
    return result
