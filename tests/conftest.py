from __future__ import annotations

import os
from pathlib import Path
from typing import Callable

import pytest

from linksnap.config import RunContext


FIXED_MTIME_NS = 1_700_000_000 * 1_000_000_000


def _write_file(path: Path, content: bytes = b"", *, mtime_ns: int = FIXED_MTIME_NS, mode: int = 0o644) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    os.chmod(path, mode)
    os.utime(path, ns=(mtime_ns, mtime_ns))
    return path


@pytest.fixture
def write_file() -> Callable[..., Path]:
    return _write_file


@pytest.fixture
def roots(tmp_path: Path) -> tuple[Path, Path]:
    source = tmp_path / "source"
    target = tmp_path / "target"
    source.mkdir()
    target.mkdir()
    return source, target


@pytest.fixture
def make_context(roots: tuple[Path, Path]) -> Callable[..., RunContext]:
    source, target = roots

    def _factory(today: str, anchor: str, **kwargs) -> RunContext:
        return RunContext(
            source_root=source,
            target_root=target,
            today_label=today,
            anchor_label=anchor,
            **kwargs,
        )

    return _factory
