from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass, field


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    REGULAR_FILE = "file"
    SYMLINK = "symlink"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class ComparisonKey:
    """Cheap "unchanged" test: exact nanosecond mtime plus size, no content hash."""

    mtime_ns: int
    size: int


@dataclass(slots=True)
class SourceEntry:
    path: str
    kind: EntryKind
    size: int
    mtime_ns: int
    atime_ns: int
    uid: int
    gid: int
    mode: int
    link_target: str | None = None

    @classmethod
    def from_stat(cls, relative_path: str, st: os.stat_result) -> "SourceEntry":
        # Symlinks first: a link to a directory must not be recursed into.
        if stat.S_ISLNK(st.st_mode):
            kind = EntryKind.SYMLINK
        elif stat.S_ISREG(st.st_mode):
            kind = EntryKind.REGULAR_FILE
        elif stat.S_ISDIR(st.st_mode):
            kind = EntryKind.DIRECTORY
        else:
            kind = EntryKind.UNSUPPORTED

        return cls(
            path=relative_path,
            kind=kind,
            size=st.st_size,
            mtime_ns=st.st_mtime_ns,
            atime_ns=st.st_atime_ns,
            uid=st.st_uid,
            gid=st.st_gid,
            mode=st.st_mode,
        )

    @property
    def permission_bits(self) -> int:
        return stat.S_IMODE(self.mode)

    @property
    def key(self) -> ComparisonKey:
        return comparison_key(self.mtime_ns, self.size)


def comparison_key(mtime_ns: int, size: int) -> ComparisonKey:
    return ComparisonKey(mtime_ns=mtime_ns, size=size)


@dataclass(slots=True)
class SnapshotWarning:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path or '.'}: {self.message}"


@dataclass(slots=True)
class SnapshotResult:
    today_label: str
    anchor_label: str
    linked_paths: list[str] = field(default_factory=list)
    copied_paths: list[str] = field(default_factory=list)
    symlink_paths: list[str] = field(default_factory=list)
    created_directories: list[str] = field(default_factory=list)
    excluded_paths: list[str] = field(default_factory=list)
    warnings: list[SnapshotWarning] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def warn(self, path: str, message: str) -> None:
        self.warnings.append(SnapshotWarning(path=path, message=message))
