from __future__ import annotations

import os
from pathlib import Path


def _check_directory(path: Path, role: str) -> None:
    if not path.exists():
        raise FileNotFoundError(f"{role} root does not exist: {path}")
    if not path.is_dir():
        raise NotADirectoryError(f"{role} root is not a directory: {path}")


def validate_roots(source: str | Path, target: str | Path) -> tuple[Path, Path]:
    """Resolve and check both roots, raising on the first problem found."""
    if not str(source).strip():
        raise ValueError("Source root is required")
    if not str(target).strip():
        raise ValueError("Target root is required")

    source_root = Path(source).expanduser().resolve()
    target_root = Path(target).expanduser().resolve()

    _check_directory(source_root, "Source")
    _check_directory(target_root, "Target")

    if not os.access(source_root, os.R_OK | os.X_OK):
        raise PermissionError(f"Source root is not readable: {source_root}")
    if not os.access(target_root, os.W_OK | os.X_OK):
        raise PermissionError(f"Target root is not writable: {target_root}")

    if source_root == target_root:
        raise ValueError(f"Target root must differ from source root: {target_root}")
    if source_root in target_root.parents:
        raise ValueError(
            f"Target root {target_root} lies inside source root {source_root}; "
            "snapshots would be copied into themselves."
        )

    return source_root, target_root
