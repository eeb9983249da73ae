from __future__ import annotations

import re
from datetime import date, datetime, timedelta


LABEL_FORMAT = "%Y%m/%d"
LABEL_PATTERN = re.compile(r"^\d{6}/\d{2}$")


def label_for(day: date) -> str:
    return day.strftime(LABEL_FORMAT)


def validate_label(value: str) -> str:
    label = (value or "").strip()
    if not LABEL_PATTERN.match(label):
        raise ValueError(f"Invalid snapshot label {value!r}: expected YYYYMM/DD")
    return label


def parse_label(value: str) -> date:
    label = validate_label(value)
    try:
        return datetime.strptime(label, LABEL_FORMAT).date()
    except ValueError as exc:
        raise ValueError(f"Snapshot label {label!r} is not a calendar date") from exc


def today_label(now: date | None = None) -> str:
    return label_for(now or date.today())


def yesterday_label(today: str) -> str:
    return label_for(parse_label(today) - timedelta(days=1))
