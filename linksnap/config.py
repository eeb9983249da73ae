from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from linksnap.filters import PathFilter
from linksnap.labels import validate_label


LOOKBACK_DAYS = 60
SNAPSHOT_ROOT_MODE = 0o700
SOURCE_ENV = "LINKSNAP_SOURCE"
TARGET_ENV = "LINKSNAP_TARGET"


@dataclass(slots=True)
class RunContext:
    source_root: Path
    target_root: Path
    today_label: str
    anchor_label: str
    can_chown: bool = False
    path_filter: PathFilter = field(default_factory=PathFilter)

    def __post_init__(self) -> None:
        self.today_label = validate_label(self.today_label)
        self.anchor_label = validate_label(self.anchor_label)

    @property
    def today_root(self) -> Path:
        return self.target_root / self.today_label

    @property
    def anchor_root(self) -> Path:
        return self.target_root / self.anchor_label

    def source_path(self, relative_path: str) -> Path:
        return self.source_root / relative_path if relative_path else self.source_root

    def today_path(self, relative_path: str) -> Path:
        return self.today_root / relative_path if relative_path else self.today_root

    def anchor_path(self, relative_path: str) -> Path:
        return self.anchor_root / relative_path if relative_path else self.anchor_root


def can_change_ownership() -> bool:
    geteuid = getattr(os, "geteuid", None)
    return bool(geteuid is not None and geteuid() == 0)
