"""
Conversions between organization-local wall-clock values and absolute instants.

Everything here is DST-aware through ``zoneinfo``. Instants are timezone-aware
``datetime`` objects normalized to UTC; local dates and times are plain
``date``/``time`` values that only mean something once paired with a timezone.

Resolution policy for wall-clock values that a DST transition makes invalid:

- a skipped local time (spring-forward gap) resolves to the nearest valid later
  instant, which is the transition instant itself;
- a repeated local time (fall-back overlap) resolves to the earlier occurrence.

Both cases issue an ``AmbiguousLocalTimeResolved`` warning.
"""

from __future__ import annotations

import logging
import re
import warnings
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import IntEnum
from functools import lru_cache
from typing import Literal, Optional, TypeAlias, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from volunteer_coverage.errors import (
    AmbiguousLocalTimeResolved,
    InvalidTimeZoneId,
    MalformedDateOrTimeString,
)

logger = logging.getLogger(__name__)

UTC = timezone.utc
MIDNIGHT: Literal["midnight"] = "midnight"

TimeZoneLike: TypeAlias = Union[str, ZoneInfo]
DateLike: TypeAlias = Union[date, str]
TimeLike: TypeAlias = Union[time, str]
InstantLike: TypeAlias = Union[datetime, str]

_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


class Weekday(IntEnum):
    """Day of week numbered Sunday=0 .. Saturday=6."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def short_name(self) -> str:
        return self.name[:3].title()

    @classmethod
    def parse(cls, value: Union["Weekday", int, str]) -> "Weekday":
        """Accept a Weekday, an int in [0, 6], or a (possibly abbreviated) name."""
        if isinstance(value, Weekday):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            if 0 <= value <= 6:
                return cls(value)
            raise ValueError(f"Weekday number must be within [0, 6], got {value}")
        if isinstance(value, str):
            key = value.strip().upper()
            for member in cls:
                if len(key) >= 3 and member.name.startswith(key):
                    return member
        raise ValueError(f"Unrecognized weekday: {value!r}")


@dataclass(frozen=True)
class WeekBounds:
    """Seven local days as a half-open instant range [start, end)."""

    start: datetime
    end: datetime
    first_date: date

    @property
    def local_dates(self) -> tuple[date, ...]:
        return tuple(self.first_date + timedelta(days=i) for i in range(7))


# ---------- parsing ----------


def resolve_timezone(tz: TimeZoneLike) -> ZoneInfo:
    """Return the ZoneInfo for an IANA key. Unknown keys raise InvalidTimeZoneId."""
    if isinstance(tz, ZoneInfo):
        return tz
    if not isinstance(tz, str) or not tz.strip():
        raise InvalidTimeZoneId(tz)
    return _load_zone(tz)


@lru_cache(maxsize=64)
def _load_zone(key: str) -> ZoneInfo:
    try:
        return ZoneInfo(key)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise InvalidTimeZoneId(key) from exc


def parse_local_date(value: DateLike) -> date:
    """Parse a LocalDate from a ``date`` or a ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        # a datetime is an instant or a naive timestamp, never a calendar date
        raise MalformedDateOrTimeString(value, "a calendar date")
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        m = _DATE_RE.match(value.strip())
        if m:
            try:
                return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
            except ValueError:
                pass
    raise MalformedDateOrTimeString(value, "a date in YYYY-MM-DD form")


def parse_local_time(value: TimeLike) -> time:
    """Parse a LocalTime from a ``time``, an ``HH:MM`` string or ``"midnight"``."""
    if isinstance(value, time):
        return time(value.hour, value.minute)
    if isinstance(value, str):
        raw = value.strip()
        if raw.lower() == MIDNIGHT:
            return time(0, 0)
        m = _TIME_RE.match(raw)
        if m:
            hour, minute = int(m.group(1)), int(m.group(2))
            if 0 <= hour <= 23 and 0 <= minute <= 59:
                return time(hour, minute)
    raise MalformedDateOrTimeString(value, "a 24-hour time in HH:MM form")


def parse_instant(value: InstantLike) -> datetime:
    """Parse an Instant from an aware ``datetime`` or an ISO-8601 string with offset."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError as exc:
            raise MalformedDateOrTimeString(value, "an ISO-8601 instant") from exc
    if not isinstance(value, datetime):
        raise MalformedDateOrTimeString(value, "an instant")
    if value.tzinfo is None or value.utcoffset() is None:
        raise MalformedDateOrTimeString(value, "a timezone-aware instant")
    return value.astimezone(UTC)


def coerce_local_date(value: Union[DateLike, datetime], tz: TimeZoneLike) -> date:
    """
    Read a record's date as a LocalDate in ``tz``.

    Calendar dates pass through; instants (objects or ISO strings with an offset)
    are projected onto the local calendar.
    """
    if isinstance(value, datetime):
        return to_local_date(value, tz)
    if isinstance(value, date):
        return value
    if isinstance(value, str) and _DATE_RE.match(value.strip()):
        return parse_local_date(value)
    if isinstance(value, str):
        return to_local_date(parse_instant(value), tz)
    raise MalformedDateOrTimeString(value, "a date or instant")


# ---------- local -> instant ----------


def to_instant(local_date: DateLike, local_time: TimeLike, tz: TimeZoneLike) -> datetime:
    """Return the UTC instant at which ``local_date local_time`` occurs in ``tz``."""
    zone = resolve_timezone(tz)
    wall = datetime.combine(parse_local_date(local_date), parse_local_time(local_time))
    return _resolve_wall_clock(wall, zone)


def _resolve_wall_clock(wall: datetime, zone: ZoneInfo) -> datetime:
    first = wall.replace(tzinfo=zone, fold=0)
    second = wall.replace(tzinfo=zone, fold=1)
    if first.utcoffset() == second.utcoffset():
        return first.astimezone(UTC)

    a = first.astimezone(UTC)
    b = second.astimezone(UTC)
    lo, hi = min(a, b), max(a, b)
    if a.astimezone(zone).replace(tzinfo=None) == wall:
        _warn_policy(wall, zone, lo, "occurs twice; using the earlier occurrence")
        return lo

    resolved = _first_instant_with_offset(lo, hi, zone)
    _warn_policy(wall, zone, resolved, "does not exist; using the next valid instant")
    return resolved


def _first_instant_with_offset(lo: datetime, hi: datetime, zone: ZoneInfo) -> datetime:
    """Bisect (lo, hi] for the transition instant; ``hi`` already carries the new offset."""
    target = hi.astimezone(zone).utcoffset()
    lo_s, hi_s = int(lo.timestamp()), int(hi.timestamp())
    while hi_s - lo_s > 1:
        mid = (lo_s + hi_s) // 2
        if datetime.fromtimestamp(mid, zone).utcoffset() == target:
            hi_s = mid
        else:
            lo_s = mid
    return datetime.fromtimestamp(hi_s, UTC)


def _warn_policy(wall: datetime, zone: ZoneInfo, instant: datetime, what: str) -> None:
    msg = f"Local time {wall:%Y-%m-%d %H:%M} in {zone.key} {what} ({instant.isoformat()})"
    logger.debug(msg)
    warnings.warn(AmbiguousLocalTimeResolved(msg), stacklevel=4)


# ---------- instant -> local ----------


def to_local_date(instant: InstantLike, tz: TimeZoneLike) -> date:
    return parse_instant(instant).astimezone(resolve_timezone(tz)).date()


def to_local_time(instant: InstantLike, tz: TimeZoneLike) -> time:
    local = parse_instant(instant).astimezone(resolve_timezone(tz))
    return time(local.hour, local.minute)


# ---------- date boundaries ----------


def day_of_week(local_date: DateLike) -> Weekday:
    return Weekday(parse_local_date(local_date).isoweekday() % 7)


def add_days(local_date: DateLike, days: int) -> date:
    return parse_local_date(local_date) + timedelta(days=days)


def today(tz: TimeZoneLike, now: Optional[datetime] = None) -> date:
    """Local calendar date of ``now`` (default: the current time) in ``tz``."""
    return to_local_date(now if now is not None else datetime.now(UTC), tz)


def day_bounds(local_date: DateLike, tz: TimeZoneLike) -> tuple[datetime, datetime]:
    """Instants of local midnight on ``local_date`` and on the following day."""
    zone = resolve_timezone(tz)
    d = parse_local_date(local_date)
    return to_instant(d, MIDNIGHT, zone), to_instant(d + timedelta(days=1), MIDNIGHT, zone)


def week_bounds(
    anchor_date: Union[DateLike, datetime],
    tz: TimeZoneLike,
    anchor_weekday: Union[Weekday, int, str] = Weekday.MONDAY,
) -> WeekBounds:
    """
    Seven local days starting on the latest ``anchor_weekday`` on or before
    ``anchor_date``.

    ``start`` is local midnight of the first day and ``end`` local midnight of
    the day after the seventh, so the span is 7 local days even when it
    contains a DST transition (and is then 167 or 169 hours long).
    """
    zone = resolve_timezone(tz)
    d = coerce_local_date(anchor_date, zone)
    first = d - timedelta(days=(day_of_week(d) - Weekday.parse(anchor_weekday)) % 7)
    return WeekBounds(
        start=to_instant(first, MIDNIGHT, zone),
        end=to_instant(first + timedelta(days=7), MIDNIGHT, zone),
        first_date=first,
    )


def is_same_local_date(instant: InstantLike, local_date: DateLike, tz: TimeZoneLike) -> bool:
    return to_local_date(instant, tz) == parse_local_date(local_date)


def is_future_or_today(
    instant: InstantLike, tz: TimeZoneLike, now: Optional[datetime] = None
) -> bool:
    """True when ``instant`` falls on or after the start of today in ``tz``."""
    return to_local_date(instant, tz) >= today(tz, now)
