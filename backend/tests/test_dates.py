"""Tests for date helpers used by context resolution."""

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from calendar_view.core import dates


@pytest.mark.parametrize(
    "value, expected",
    [
        ("12", 12),
        (" 7 ", 7),
        ("-3", -3),
        (5, 5),
        ("", None),
        ("abc", None),
        ("2.5", None),
        (None, None),
        (True, None),
    ],
)
def test_parse_int(value, expected):
    assert dates.parse_int(value) == expected


def test_days_in_month_handles_leap_years():
    assert dates.days_in_month(2023, 2) == 28
    assert dates.days_in_month(2024, 2) == 29
    assert dates.days_in_month(2024, 4) == 30
    assert dates.days_in_month(2024, 12) == 31


@pytest.mark.parametrize("day", range(-70, 70))
def test_wrap_day_always_lands_in_month(day):
    length = dates.days_in_month(2023, 2)
    wrapped = dates.wrap_day(day, 2023, 2)
    assert 1 <= wrapped <= length
    assert wrapped == ((day - 1) % length) + 1


def test_wrap_day_examples():
    assert dates.wrap_day(30, 2023, 2) == 2
    assert dates.wrap_day(0, 2023, 2) == 28
    assert dates.wrap_day(-1, 2024, 1) == 30
    assert dates.wrap_day(15, 2024, 1) == 15


def test_today_in_uses_the_given_zone():
    now = datetime(2024, 3, 15, 2, 0, tzinfo=timezone.utc)
    assert dates.today_in(ZoneInfo("UTC"), now).day == 15
    assert dates.today_in(ZoneInfo("America/New_York"), now).day == 14


def test_first_of_month_timestamp_bounds():
    utc = ZoneInfo("UTC")
    assert dates.first_of_month_timestamp(1970, 1, utc) == 0
    assert dates.first_of_month_timestamp(1970, 2, utc) > 0
    assert dates.first_of_month_timestamp(1969, 12, utc) < 0
    assert dates.first_of_month_timestamp(0, 1, utc) is None
    assert dates.first_of_month_timestamp(10000, 1, utc) is None


def test_load_zone_falls_back_on_unknown_name():
    assert dates.load_zone("Europe/Berlin", "UTC").key == "Europe/Berlin"
    assert dates.load_zone("Mars/Olympus_Mons", "UTC").key == "UTC"
    assert dates.load_zone(None, "Asia/Tokyo").key == "Asia/Tokyo"


def test_parse_int_reads_literals_past_the_conversion_limit():
    digits = "1" * 5000
    parsed = dates.parse_int(digits)
    assert parsed > 10**4999
    assert parsed % 10**6 == 111111
    assert dates.parse_int("-" + digits) == -parsed
    assert dates.parse_int(" 00042 ") == 42


def test_wrap_day_handles_huge_days():
    day = dates.parse_int("1" * 5000)
    assert 1 <= dates.wrap_day(day, 2024, 1) <= 31
    assert dates.wrap_day(day, 2024, 1) == (day - 1) % 31 + 1
