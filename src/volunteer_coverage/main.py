from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from volunteer_coverage.config import Config
from volunteer_coverage.digest import current_time, upcoming_week_anchor
from volunteer_coverage.models import CoverageSnapshot
from volunteer_coverage.reporting import Reporter
from volunteer_coverage.reporting.aggregator import build_weekly_report
from volunteer_coverage.reporting.data_models import WeeklyCoverageReport
from volunteer_coverage.wallclock import DateLike

logger = logging.getLogger(__name__)


def build_digest(
    snapshot: CoverageSnapshot,
    config: Config,
    now: Optional[datetime] = None,
    anchor_date: Optional[DateLike] = None,
    reporter: Reporter | None = None,
    validate_config: bool = True,
    enable_reporting: bool = False,
) -> WeeklyCoverageReport:
    """
    Build the weekly coverage report a digest is sent from.

    Parameters
    ----------
    snapshot:
        Counties, zones, shifts and assignments supplied by the caller.
    config:
        Organization configuration (timezone, week anchor, output settings).
    now:
        The moment the digest is built; only used to pick the upcoming week
        when ``anchor_date`` is omitted. Defaults to the current time.
    anchor_date:
        Any local date in the week to report on. Overrides the upcoming-week
        default.
    reporter:
        Custom reporter instance. When `enable_reporting` is True and no reporter is
        provided, the default `Reporter` is used.
    validate_config:
        Toggle to run `Config.validate()` first.
    enable_reporting:
        When False (the default), no text/CSV/plot output is produced.

    Returns
    -------
    WeeklyCoverageReport
    """
    if validate_config:
        config.validate()

    if anchor_date is not None:
        anchor = anchor_date
    else:
        anchor = upcoming_week_anchor(
            current_time(now), config.TIMEZONE, config.anchor_weekday
        )

    report = build_weekly_report(
        anchor, config.TIMEZONE, snapshot, anchor_weekday=config.anchor_weekday
    )

    active_reporter = reporter if enable_reporting else None
    if active_reporter is None and enable_reporting:
        active_reporter = Reporter(config)
    if active_reporter is not None:
        active_reporter.post_build(report)

    return report
