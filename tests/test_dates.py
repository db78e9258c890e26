from __future__ import annotations

from datetime import date, datetime, time

import pytest

from core.dates import (
    coerce_date,
    coerce_time,
    combine_iso_datetime,
    compute_age,
    format_date_label,
    format_time_label,
    parse_iso_date,
    to_iso_date,
)


def test_parse_iso_date_rejects_impossible_dates() -> None:
    assert parse_iso_date("2024-02-29") == date(2024, 2, 29)
    assert parse_iso_date("2023-02-29") is None
    assert parse_iso_date("2024-2-1") is None
    assert parse_iso_date(None) is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (date(2024, 5, 1), date(2024, 5, 1)),
        (datetime(2024, 5, 1, 10, 30), date(2024, 5, 1)),
        ("2024-05-01", date(2024, 5, 1)),
        ("01 / 05 / 2024", date(2024, 5, 1)),
        ("31/02/2024", None),
        ("", None),
        (20240501, None),
    ],
)
def test_coerce_date(value, expected) -> None:
    assert coerce_date(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (time(9, 5), time(9, 5)),
        ("09:05", time(9, 5)),
        ("9:05 PM", time(21, 5)),
        ("12:00 AM", time(0, 0)),
        ("25:00", None),
        ("13:00 PM", None),
    ],
)
def test_coerce_time(value, expected) -> None:
    assert coerce_time(value) == expected


def test_iso_helpers() -> None:
    assert to_iso_date("01 / 05 / 2024") == "2024-05-01"
    assert to_iso_date("nope") is None
    assert combine_iso_datetime(date(2024, 5, 1), "6:30 PM") == "2024-05-01T18:30:00"
    assert combine_iso_datetime(None, "6:30 PM") is None


def test_labels_and_age() -> None:
    assert format_date_label(date(2024, 5, 1)) == "01 / 05 / 2024"
    assert format_time_label(time(0, 7)) == "12:07 AM"
    assert format_time_label(time(13, 45)) == "1:45 PM"
    assert compute_age(date(2000, 6, 15), date(2024, 6, 14)) == 23
    assert compute_age(date(2000, 6, 15), date(2024, 6, 15)) == 24
