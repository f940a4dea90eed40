from __future__ import annotations

import warnings
from datetime import date, datetime, time, timedelta, timezone

import pytest

from volunteer_coverage.errors import (
    AmbiguousLocalTimeResolved,
    InvalidTimeZoneId,
    MalformedDateOrTimeString,
)
from volunteer_coverage.wallclock import (
    MIDNIGHT,
    Weekday,
    add_days,
    coerce_local_date,
    day_bounds,
    day_of_week,
    is_future_or_today,
    is_same_local_date,
    resolve_timezone,
    to_instant,
    to_local_date,
    to_local_time,
    week_bounds,
)

UTC = timezone.utc
NY = "America/New_York"

# Includes zones whose DST transitions happen at local midnight (Havana,
# Santiago) and a zone with a 45-minute offset (Chatham).
ROUND_TRIP_ZONES = [
    "America/New_York",
    "Europe/London",
    "Australia/Sydney",
    "America/Santiago",
    "America/Havana",
    "Asia/Kolkata",
    "Pacific/Chatham",
    "UTC",
]


def utc(*args: int) -> datetime:
    return datetime(*args, tzinfo=UTC)


def _dates(start: date, end: date):
    d = start
    while d <= end:
        yield d
        d += timedelta(days=1)


# ---------- to_instant ----------


def test_midnight_uses_offset_in_force_on_that_date() -> None:
    assert to_instant("2025-01-15", MIDNIGHT, NY) == utc(2025, 1, 15, 5)
    assert to_instant(date(2025, 7, 15), "midnight", NY) == utc(2025, 7, 15, 4)


def test_midnight_on_dst_transition_days() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        # midnight precedes both transitions, so no policy is involved
        assert to_instant("2024-03-10", MIDNIGHT, NY) == utc(2024, 3, 10, 5)
        assert to_instant("2024-11-03", MIDNIGHT, NY) == utc(2024, 11, 3, 4)


def test_skipped_local_time_resolves_to_transition_instant() -> None:
    with pytest.warns(AmbiguousLocalTimeResolved):
        resolved = to_instant("2024-03-10", "02:30", NY)
    # 02:00 EST == 07:00 UTC, the moment clocks jump to 03:00 EDT
    assert resolved == utc(2024, 3, 10, 7)
    assert to_local_time(resolved, NY) == time(3, 0)
    assert to_local_date(resolved, NY) == date(2024, 3, 10)


def test_repeated_local_time_resolves_to_earlier_occurrence() -> None:
    with pytest.warns(AmbiguousLocalTimeResolved):
        resolved = to_instant("2024-11-03", "01:30", NY)
    assert resolved == utc(2024, 11, 3, 5, 30)  # 01:30 EDT, not 01:30 EST
    with pytest.warns(AmbiguousLocalTimeResolved):
        assert to_instant("2024-11-03", "01:30", NY) == resolved


def test_dst_policy_in_europe() -> None:
    with pytest.warns(AmbiguousLocalTimeResolved):
        assert to_instant("2024-03-31", "01:30", "Europe/London") == utc(2024, 3, 31, 1)
    with pytest.warns(AmbiguousLocalTimeResolved):
        assert to_instant("2024-10-27", "01:30", "Europe/London") == utc(
            2024, 10, 27, 0, 30
        )


def test_valid_times_do_not_warn() -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert to_instant("2024-03-10", "03:00", NY) == utc(2024, 3, 10, 7)
        assert to_instant("2024-11-03", "02:00", NY) == utc(2024, 11, 3, 7)
        assert to_instant("2025-06-01", time(12, 0), NY) == utc(2025, 6, 1, 16)


@pytest.mark.parametrize("tz_id", ROUND_TRIP_ZONES)
def test_midnight_round_trip_over_multiple_years(tz_id: str) -> None:
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", AmbiguousLocalTimeResolved)
        for d in _dates(date(2019, 1, 1), date(2026, 12, 31)):
            instant = to_instant(d, MIDNIGHT, tz_id)
            assert to_local_date(instant, tz_id) == d
            # midnight is the first instant of the local date
            assert to_local_date(instant - timedelta(seconds=1), tz_id) == d - timedelta(
                days=1
            )


# ---------- instant -> local ----------


def test_to_local_date_and_time() -> None:
    assert to_local_date(utc(2024, 3, 10, 6, 59, 59), NY) == date(2024, 3, 10)
    assert to_local_date("2025-12-15T03:00:00Z", NY) == date(2025, 12, 14)
    assert to_local_time(utc(2024, 11, 3, 5, 30), NY) == time(1, 30)
    assert to_local_time(utc(2024, 11, 3, 6, 30), NY) == time(1, 30)


def test_naive_datetime_is_not_an_instant() -> None:
    with pytest.raises(MalformedDateOrTimeString):
        to_local_date(datetime(2025, 1, 1, 12, 0), NY)


def test_is_same_local_date() -> None:
    assert is_same_local_date(utc(2025, 12, 15, 4, 59), "2025-12-14", NY)
    assert not is_same_local_date(utc(2025, 12, 15, 5, 0), "2025-12-14", NY)


def test_is_future_or_today(fixed_now: datetime) -> None:
    # fixed_now is 2025-12-14 18:30 in New York
    assert is_future_or_today(utc(2025, 12, 14, 5, 0), NY, now=fixed_now)
    assert is_future_or_today(utc(2026, 1, 1), NY, now=fixed_now)
    assert not is_future_or_today(utc(2025, 12, 14, 4, 59), NY, now=fixed_now)


# ---------- boundaries ----------


def test_day_of_week_numbers_sunday_as_zero() -> None:
    assert day_of_week(date(2025, 12, 14)) is Weekday.SUNDAY
    assert day_of_week("2025-12-15") is Weekday.MONDAY
    assert day_of_week("2025-12-20") is Weekday.SATURDAY


def test_weekday_parse() -> None:
    assert Weekday.parse("mon") is Weekday.MONDAY
    assert Weekday.parse("Sunday") is Weekday.SUNDAY
    assert Weekday.parse(6) is Weekday.SATURDAY
    assert Weekday.MONDAY.short_name == "Mon"
    for bad in ("T", "Funday", 7, True):
        with pytest.raises(ValueError):
            Weekday.parse(bad)


def test_day_bounds_cover_a_short_day() -> None:
    start, end = day_bounds("2024-03-10", NY)
    assert start == utc(2024, 3, 10, 5)
    assert end == utc(2024, 3, 11, 4)
    assert end - start == timedelta(hours=23)


def test_add_days_crosses_month_and_year() -> None:
    assert add_days("2025-12-30", 3) == date(2026, 1, 2)
    assert add_days(date(2024, 3, 1), -1) == date(2024, 2, 29)


def test_week_bounds_spanning_spring_forward() -> None:
    bounds = week_bounds("2024-03-13", NY, Weekday.SUNDAY)
    assert bounds.first_date == date(2024, 3, 10)
    assert bounds.start == utc(2024, 3, 10, 5)
    assert bounds.end == utc(2024, 3, 17, 4)
    assert bounds.end - bounds.start == timedelta(hours=167)


def test_week_bounds_spanning_fall_back() -> None:
    bounds = week_bounds(date(2024, 11, 3), NY, Weekday.SUNDAY)
    assert bounds.start == utc(2024, 11, 3, 4)
    assert bounds.end == utc(2024, 11, 10, 5)
    assert bounds.end - bounds.start == timedelta(hours=169)


def test_week_bounds_accepts_an_instant_anchor() -> None:
    # Monday 00:30 UTC is still Sunday evening in New York
    bounds = week_bounds(utc(2025, 12, 15, 0, 30), NY, Weekday.MONDAY)
    assert bounds.first_date == date(2025, 12, 8)


@pytest.mark.parametrize("anchor", list(Weekday))
def test_week_bounds_always_seven_local_days(anchor: Weekday) -> None:
    for d in _dates(date(2024, 1, 1), date(2024, 12, 31)):
        bounds = week_bounds(d, NY, anchor)
        dates = bounds.local_dates
        assert len(dates) == 7
        assert day_of_week(dates[0]) is anchor
        assert dates[0] <= d <= dates[-1]
        assert to_local_date(bounds.start, NY) == dates[0]
        assert to_local_date(bounds.end, NY) == dates[-1] + timedelta(days=1)
        assert to_local_date(bounds.end - timedelta(seconds=1), NY) == dates[-1]


# ---------- parsing and errors ----------


@pytest.mark.parametrize("bad", ["Mars/Olympus_Mons", "", "   ", None, 5, "../etc/passwd"])
def test_unknown_timezone_fails_closed(bad) -> None:
    with pytest.raises(InvalidTimeZoneId):
        resolve_timezone(bad)
    with pytest.raises(InvalidTimeZoneId):
        to_instant("2025-01-01", MIDNIGHT, bad)


def test_invalid_timezone_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        to_local_date(utc(2025, 1, 1), "Not/AZone")


@pytest.mark.parametrize("bad_date", ["2024-02-30", "12/15/2025", "2025-1-5", "", 20250101])
def test_malformed_dates(bad_date) -> None:
    with pytest.raises(MalformedDateOrTimeString):
        to_instant(bad_date, MIDNIGHT, NY)


def test_datetime_is_not_a_local_date() -> None:
    with pytest.raises(MalformedDateOrTimeString):
        to_instant(datetime(2025, 1, 1), MIDNIGHT, NY)


@pytest.mark.parametrize("bad_time", ["24:00", "7pm", "12:60", "noon", ""])
def test_malformed_times(bad_time) -> None:
    with pytest.raises(MalformedDateOrTimeString):
        to_instant("2025-01-01", bad_time, NY)


def test_coerce_local_date_accepts_dates_and_instants() -> None:
    assert coerce_local_date("2025-12-15", NY) == date(2025, 12, 15)
    assert coerce_local_date(date(2025, 12, 15), NY) == date(2025, 12, 15)
    assert coerce_local_date("2025-12-15T03:00:00+00:00", NY) == date(2025, 12, 14)
    assert coerce_local_date(utc(2025, 12, 15, 12), NY) == date(2025, 12, 15)
    with pytest.raises(MalformedDateOrTimeString):
        coerce_local_date("next tuesday", NY)
    with pytest.raises(MalformedDateOrTimeString):
        coerce_local_date("2025-12-15T03:00:00", NY)
