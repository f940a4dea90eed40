from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Union

from volunteer_coverage.config import Config
from volunteer_coverage.wallclock import (
    TimeZoneLike,
    UTC,
    Weekday,
    day_of_week,
    parse_instant,
    resolve_timezone,
    today,
)


def upcoming_week_anchor(
    now: datetime,
    tz: TimeZoneLike,
    anchor_weekday: Union[Weekday, int, str] = Weekday.MONDAY,
) -> date:
    """
    First day of the next coverage week: the next ``anchor_weekday`` strictly
    after today's local date. With a Monday anchor a Sunday digest covers the
    following day onwards and a Monday digest covers the Monday a week later.
    """
    local_today = today(tz, now)
    days_ahead = (Weekday.parse(anchor_weekday) - day_of_week(local_today)) % 7 or 7
    return local_today + timedelta(days=days_ahead)


def is_digest_hour(now: datetime, config: Config) -> bool:
    """True when the digest is enabled and ``now`` falls in the configured local hour."""
    if not config.DIGEST_ENABLED:
        return False
    local = parse_instant(now).astimezone(resolve_timezone(config.TIMEZONE))
    return local.hour == config.DIGEST_SEND_HOUR


def current_time(now: Optional[datetime] = None) -> datetime:
    return parse_instant(now) if now is not None else datetime.now(UTC)
