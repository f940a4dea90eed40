from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from volunteer_coverage.models import (
    ConfirmedAssignment,
    DispatcherAssignment,
    RegionalLeadAssignment,
)


@dataclass(frozen=True)
class RecordIssue:
    """A snapshot record the aggregator could not place and skipped."""

    kind: str  # "shift" | "dispatcher" | "regional_lead"
    index: int  # position of the record in its snapshot sequence
    reason: str


@dataclass(frozen=True)
class DayCoverage:
    """Coverage of every scheduling slot on one local date."""

    local_date: date
    regional_lead: Optional[RegionalLeadAssignment]
    dispatchers_by_county: dict[str, Optional[DispatcherAssignment]]
    zone_leads_by_zone: dict[str, Optional[ConfirmedAssignment]]
    shift_count: int

    @property
    def open_positions(self) -> int:
        """Regional-lead, dispatcher and zone-lead slots without an assignment."""
        missing = 1 if self.regional_lead is None else 0
        missing += sum(1 for a in self.dispatchers_by_county.values() if a is None)
        missing += sum(1 for a in self.zone_leads_by_zone.values() if a is None)
        return missing

    @property
    def covered_zones(self) -> int:
        return sum(1 for a in self.zone_leads_by_zone.values() if a is not None)


@dataclass(frozen=True)
class WeeklyCoverageReport:
    """Seven days of coverage, rebuilt from a snapshot on every request."""

    week_start: datetime
    week_end: datetime  # exclusive
    days: tuple[DayCoverage, ...]
    total_shifts: int
    positions_needed: int
    issues: tuple[RecordIssue, ...] = ()

    @property
    def has_gaps(self) -> bool:
        return self.positions_needed > 0

    @property
    def days_with_gaps(self) -> tuple[DayCoverage, ...]:
        return tuple(d for d in self.days if d.open_positions)
