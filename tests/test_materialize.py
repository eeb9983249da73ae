from __future__ import annotations

import os
import stat

from linksnap.materialize import ensure_snapshot_root, materialize_directory


DIR_MTIME_NS = 1_650_000_000 * 1_000_000_000


def test_ensure_snapshot_root_creates_both_segments_with_fixed_mode(roots) -> None:
    _, target = roots
    today_root = target / "202401" / "05"

    created = ensure_snapshot_root(today_root)

    assert created == [target / "202401", today_root]
    assert stat.S_IMODE(os.stat(today_root).st_mode) == 0o700
    assert stat.S_IMODE(os.stat(target / "202401").st_mode) == 0o700


def test_ensure_snapshot_root_is_idempotent(roots) -> None:
    _, target = roots
    today_root = target / "202401" / "05"
    ensure_snapshot_root(today_root)

    assert ensure_snapshot_root(today_root) == []


def test_materialize_directory_copies_source_segment_metadata(roots, make_context) -> None:
    source, _ = roots
    (source / "a" / "b").mkdir(parents=True)
    os.chmod(source / "a", 0o751)
    os.chmod(source / "a" / "b", 0o705)
    os.utime(source / "a" / "b", ns=(DIR_MTIME_NS, DIR_MTIME_NS))
    os.utime(source / "a", ns=(DIR_MTIME_NS, DIR_MTIME_NS))
    context = make_context("202401/05", "202401/04")
    ensure_snapshot_root(context.today_root)

    created = materialize_directory(context, "a/b")

    assert [entry.path for _, entry in created] == ["a", "a/b"]
    a_stat = os.stat(context.today_root / "a")
    b_stat = os.stat(context.today_root / "a" / "b")
    assert stat.S_IMODE(a_stat.st_mode) == 0o751
    assert stat.S_IMODE(b_stat.st_mode) == 0o705
    assert int(b_stat.st_mtime) == DIR_MTIME_NS // 1_000_000_000


def test_materialize_directory_leaves_existing_segments_untouched(roots, make_context) -> None:
    source, _ = roots
    (source / "a").mkdir()
    os.chmod(source / "a", 0o755)
    context = make_context("202401/05", "202401/04")
    ensure_snapshot_root(context.today_root)
    existing = context.today_root / "a"
    existing.mkdir()
    os.chmod(existing, 0o700)

    assert materialize_directory(context, "a") == []
    assert stat.S_IMODE(os.stat(existing).st_mode) == 0o700


def test_materialize_directory_root_is_noop(make_context) -> None:
    context = make_context("202401/05", "202401/04")
    ensure_snapshot_root(context.today_root)

    assert materialize_directory(context, "") == []
