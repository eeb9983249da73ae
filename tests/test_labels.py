from __future__ import annotations

from datetime import date

import pytest

from linksnap.labels import label_for, parse_label, today_label, validate_label, yesterday_label


def test_label_for_formats_year_month_and_day_segments() -> None:
    assert label_for(date(2024, 1, 5)) == "202401/05"
    assert label_for(date(1999, 12, 31)) == "199912/31"


@pytest.mark.parametrize("value", ["", "2024/01/05", "20240105", "202401-05", "2024001/01", "202401/5", "abcdef/01"])
def test_validate_label_rejects_malformed_labels(value: str) -> None:
    with pytest.raises(ValueError, match="YYYYMM/DD"):
        validate_label(value)


def test_validate_label_strips_whitespace() -> None:
    assert validate_label(" 202401/05\n") == "202401/05"


def test_parse_label_rejects_impossible_dates() -> None:
    assert parse_label("202402/29") == date(2024, 2, 29)
    with pytest.raises(ValueError, match="calendar date"):
        parse_label("202302/29")


def test_yesterday_label_crosses_month_and_year() -> None:
    assert yesterday_label("202403/01") == "202402/29"
    assert yesterday_label("202401/01") == "202312/31"


def test_today_label_uses_given_date() -> None:
    assert today_label(date(2024, 7, 4)) == "202407/04"
