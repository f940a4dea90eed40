from __future__ import annotations

import logging
from collections import Counter, defaultdict
from datetime import date, datetime
from typing import Optional, Union

from volunteer_coverage.errors import MalformedDateOrTimeString
from volunteer_coverage.models import (
    ConfirmedAssignment,
    CoverageSnapshot,
    DispatcherAssignment,
    RecordDate,
    RegionalLeadAssignment,
)
from volunteer_coverage.wallclock import (
    DateLike,
    TimeZoneLike,
    Weekday,
    coerce_local_date,
    resolve_timezone,
    week_bounds,
)

from .data_models import DayCoverage, RecordIssue, WeeklyCoverageReport

logger = logging.getLogger(__name__)


def _record_date(
    value: RecordDate,
    tz: TimeZoneLike,
    kind: str,
    index: int,
    issues: list[RecordIssue],
) -> Optional[date]:
    """Local date of a record, or None (plus an issue) when it cannot be read."""
    try:
        return coerce_local_date(value, tz)
    except MalformedDateOrTimeString as exc:
        logger.warning("Skipping %s record #%d: %s", kind, index, exc)
        issues.append(RecordIssue(kind=kind, index=index, reason=str(exc)))
        return None


def _pick_regional_lead(
    candidates: list[RegionalLeadAssignment],
) -> Optional[RegionalLeadAssignment]:
    if not candidates:
        return None
    return next((c for c in candidates if c.is_primary), candidates[0])


def build_weekly_report(
    anchor_date: Union[DateLike, datetime],
    tz: TimeZoneLike,
    snapshot: CoverageSnapshot,
    anchor_weekday: Union[Weekday, int, str] = Weekday.MONDAY,
) -> WeeklyCoverageReport:
    """
    Build the per-day, per-scope coverage report for the week containing
    ``anchor_date``.

    For each of the 7 local dates:
      - regional lead: the assignment on that date, preferring a primary;
      - per county: the first non-backup dispatcher assignment;
      - per zone: the first lead confirmed on a shift in that zone;
      - shift count: every shift on that date.

    ``positions_needed`` counts every slot left empty. Records whose date
    cannot be parsed are skipped and reported in ``issues``; their slot simply
    stays empty. Records for counties or zones outside the snapshot's known
    sets are ignored. The result depends only on the snapshot and the anchor.
    """
    zone_info = resolve_timezone(tz)
    bounds = week_bounds(anchor_date, zone_info, anchor_weekday)
    issues: list[RecordIssue] = []

    known_counties = set(snapshot.counties)
    known_zones = set(snapshot.zones)

    leads_by_date: dict[date, list[RegionalLeadAssignment]] = defaultdict(list)
    for i, rl in enumerate(snapshot.regional_lead_assignments):
        d = _record_date(rl.date, zone_info, "regional_lead", i, issues)
        if d is not None:
            leads_by_date[d].append(rl)

    dispatchers: dict[tuple[str, date], DispatcherAssignment] = {}
    for i, da in enumerate(snapshot.dispatcher_assignments):
        d = _record_date(da.date, zone_info, "dispatcher", i, issues)
        if d is None or da.is_backup or da.county not in known_counties:
            continue
        dispatchers.setdefault((da.county, d), da)

    shift_counts: Counter[date] = Counter()
    zone_leads: dict[tuple[str, date], ConfirmedAssignment] = {}
    for i, shift in enumerate(snapshot.shifts):
        d = _record_date(shift.date, zone_info, "shift", i, issues)
        if d is None:
            continue
        shift_counts[d] += 1
        if shift.zone not in known_zones:
            continue
        lead = next((a for a in shift.assignments if a.is_lead), None)
        if lead is not None:
            zone_leads.setdefault((shift.zone, d), lead)

    days: list[DayCoverage] = []
    for d in bounds.local_dates:
        days.append(
            DayCoverage(
                local_date=d,
                regional_lead=_pick_regional_lead(leads_by_date.get(d, [])),
                dispatchers_by_county={
                    county: dispatchers.get((county, d)) for county in snapshot.counties
                },
                zone_leads_by_zone={z: zone_leads.get((z, d)) for z in snapshot.zones},
                shift_count=shift_counts.get(d, 0),
            )
        )

    report = WeeklyCoverageReport(
        week_start=bounds.start,
        week_end=bounds.end,
        days=tuple(days),
        total_shifts=sum(day.shift_count for day in days),
        positions_needed=sum(day.open_positions for day in days),
        issues=tuple(issues),
    )
    logger.info(
        "Coverage for week of %s: %d shifts, %d positions needed, %d skipped records",
        bounds.first_date.isoformat(),
        report.total_shifts,
        report.positions_needed,
        len(report.issues),
    )
    return report
