from __future__ import annotations

from typing import Any, Optional, Protocol

import pandas as pd

from volunteer_coverage.wallclock import day_of_week

from .data_models import DayCoverage, WeeklyCoverageReport

SLOT_COLUMNS = ["date", "weekday", "scope", "key", "person_ref", "covered"]
DAY_COLUMNS = [
    "date",
    "weekday",
    "shifts",
    "regional_lead",
    "dispatchers_covered",
    "dispatchers_total",
    "zones_covered",
    "zones_total",
    "open_positions",
]

REGION_KEY = "region"


class ReportAdapter(Protocol):
    """Minimal interface the Reporter needs to tabulate a coverage report."""

    def df_slots(self, report: WeeklyCoverageReport) -> pd.DataFrame: ...
    def df_days(self, report: WeeklyCoverageReport) -> pd.DataFrame: ...


def _person(assignment: Optional[Any]) -> Optional[str]:
    return None if assignment is None else getattr(assignment, "person_ref", None)


def _day_slot_rows(day: DayCoverage) -> list[dict[str, Any]]:
    ts = pd.Timestamp(day.local_date)
    weekday = day_of_week(day.local_date).short_name
    slots: list[tuple[str, str, Optional[Any]]] = [
        ("regional_lead", REGION_KEY, day.regional_lead)
    ]
    slots += [("dispatcher", c, a) for c, a in day.dispatchers_by_county.items()]
    slots += [("zone_lead", z, a) for z, a in day.zone_leads_by_zone.items()]
    return [
        {
            "date": ts,
            "weekday": weekday,
            "scope": scope,
            "key": key,
            "person_ref": _person(assignment),
            "covered": assignment is not None,
        }
        for scope, key, assignment in slots
    ]


def report_to_frame(report: WeeklyCoverageReport) -> pd.DataFrame:
    """One row per (date, scope, key) slot, in report order."""
    rows: list[dict[str, Any]] = []
    for day in report.days:
        rows.extend(_day_slot_rows(day))
    df = pd.DataFrame(rows, columns=SLOT_COLUMNS)
    return df.astype({"covered": bool})


def open_slots(report: WeeklyCoverageReport) -> pd.DataFrame:
    df = report_to_frame(report)
    return df[~df["covered"]].reset_index(drop=True)


def daily_summary(report: WeeklyCoverageReport) -> pd.DataFrame:
    """Per-day counts of covered and total slots."""
    rows = []
    for day in report.days:
        dispatchers = list(day.dispatchers_by_county.values())
        rows.append(
            {
                "date": pd.Timestamp(day.local_date),
                "weekday": day_of_week(day.local_date).short_name,
                "shifts": day.shift_count,
                "regional_lead": _person(day.regional_lead),
                "dispatchers_covered": sum(1 for a in dispatchers if a is not None),
                "dispatchers_total": len(dispatchers),
                "zones_covered": day.covered_zones,
                "zones_total": len(day.zone_leads_by_zone),
                "open_positions": day.open_positions,
            }
        )
    return pd.DataFrame(rows, columns=DAY_COLUMNS)


class PandasReportAdapter:
    """Default adapter for the shipped WeeklyCoverageReport dataclass."""

    def df_slots(self, report: WeeklyCoverageReport) -> pd.DataFrame:
        return report_to_frame(report)

    def df_days(self, report: WeeklyCoverageReport) -> pd.DataFrame:
        return daily_summary(report)
