from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence, TypeAlias, Union

# Record dates stay unparsed until aggregation so that one malformed value
# only fails its own record.
RecordDate: TypeAlias = Union[date, datetime, str]


def _dedupe(values: Sequence[str]) -> tuple[str, ...]:
    seen: set[str] = set()
    out: list[str] = []
    for val in values:
        if val not in seen:
            seen.add(val)
            out.append(val)
    return tuple(out)


@dataclass(frozen=True, slots=True)
class RoleRequirement:
    """Per shift-type staffing requirement for one qualified role."""

    role: str
    min_required: int = 0
    max_allowed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.min_required < 0:
            raise ValueError(f"min_required for {self.role!r} must be >= 0.")
        if self.max_allowed is not None and self.max_allowed < 0:
            raise ValueError(f"max_allowed for {self.role!r} must be >= 0 or None.")


@dataclass(frozen=True, slots=True)
class ConfirmedAssignment:
    """A single volunteer's confirmed participation in a shift."""

    person_ref: str
    role: Optional[str] = None
    is_lead: bool = False


@dataclass(frozen=True, slots=True)
class DispatcherAssignment:
    person_ref: str
    county: str
    date: RecordDate
    time_block: Optional[str] = None
    is_backup: bool = False


@dataclass(frozen=True, slots=True)
class RegionalLeadAssignment:
    person_ref: str
    date: RecordDate
    is_primary: bool = True


@dataclass(frozen=True, slots=True)
class ShiftSnapshot:
    """
    A shift as seen by the coverage engine: where and when it runs, who is
    confirmed on it, and what its shift type requires.
    """

    shift_id: str
    zone: str
    date: RecordDate
    assignments: tuple[ConfirmedAssignment, ...] = ()
    requirements: tuple[RoleRequirement, ...] = ()
    min_volunteers: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "assignments", tuple(self.assignments))
        object.__setattr__(self, "requirements", tuple(self.requirements))
        if self.min_volunteers < 0:
            raise ValueError(f"min_volunteers for shift {self.shift_id!r} must be >= 0.")

    @property
    def leads(self) -> tuple[ConfirmedAssignment, ...]:
        return tuple(a for a in self.assignments if a.is_lead)


@dataclass(frozen=True, slots=True)
class CoverageSnapshot:
    """Immutable inputs for one weekly coverage computation."""

    counties: tuple[str, ...] = ()
    zones: tuple[str, ...] = ()
    shifts: tuple[ShiftSnapshot, ...] = ()
    dispatcher_assignments: tuple[DispatcherAssignment, ...] = ()
    regional_lead_assignments: tuple[RegionalLeadAssignment, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "counties", _dedupe(self.counties))
        object.__setattr__(self, "zones", _dedupe(self.zones))
        object.__setattr__(self, "shifts", tuple(self.shifts))
        object.__setattr__(
            self, "dispatcher_assignments", tuple(self.dispatcher_assignments)
        )
        object.__setattr__(
            self, "regional_lead_assignments", tuple(self.regional_lead_assignments)
        )
