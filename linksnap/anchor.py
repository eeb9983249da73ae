from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from linksnap.config import LOOKBACK_DAYS
from linksnap.labels import LABEL_PATTERN, label_for, parse_label, validate_label, yesterday_label


def resolve_anchor(
    target_root: Path,
    today_label: str,
    *,
    override: str | None = None,
    lookback_days: int = LOOKBACK_DAYS,
) -> str:
    """Pick the snapshot that today's run hardlinks against.

    An explicit ``override`` wins. Otherwise the most recent existing dated
    directory within ``lookback_days`` before today is used, falling back to
    yesterday's label so every lookup has a defined anchor path.
    """
    if override is not None:
        return validate_label(override)

    today = parse_label(today_label)
    for offset in range(1, lookback_days + 1):
        candidate = label_for(today - timedelta(days=offset))
        if (target_root / candidate).is_dir():
            return candidate

    return yesterday_label(today_label)


def list_snapshots(target_root: Path) -> list[str]:
    labels: list[str] = []
    for day_dir in target_root.glob("*/*"):
        if not day_dir.is_dir():
            continue
        label = f"{day_dir.parent.name}/{day_dir.name}"
        if not LABEL_PATTERN.match(label):
            continue
        try:
            parse_label(label)
        except ValueError:
            continue
        labels.append(label)
    return sorted(labels)
