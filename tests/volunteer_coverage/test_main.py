from __future__ import annotations

from datetime import date

import pytest

from volunteer_coverage.config import Config
from volunteer_coverage.errors import InvalidTimeZoneId
from volunteer_coverage.main import build_digest
from volunteer_coverage.models import (
    ConfirmedAssignment,
    CoverageSnapshot,
    RegionalLeadAssignment,
    ShiftSnapshot,
)


def make_snapshot() -> CoverageSnapshot:
    return CoverageSnapshot(
        counties=("Durham",),
        zones=("North",),
        shifts=(
            ShiftSnapshot(
                "s1", "North", "2025-12-16", (ConfirmedAssignment("v1", is_lead=True),)
            ),
        ),
        regional_lead_assignments=(RegionalLeadAssignment("rl", "2025-12-16"),),
    )


def test_build_digest_defaults_to_upcoming_week(cfg, fixed_now):
    report = build_digest(make_snapshot(), cfg, now=fixed_now)
    assert report.days[0].local_date == date(2025, 12, 15)
    assert report.total_shifts == 1
    assert report.positions_needed == 7 * 3 - 2


def test_anchor_date_overrides_now(cfg, fixed_now):
    report = build_digest(make_snapshot(), cfg, now=fixed_now, anchor_date="2025-12-03")
    assert report.days[0].local_date == date(2025, 12, 1)
    assert report.total_shifts == 0


def test_invalid_timezone_fails_before_building(fixed_now):
    with pytest.raises(InvalidTimeZoneId):
        build_digest(make_snapshot(), Config(TIMEZONE="Nowhere/Land"), now=fixed_now)


def test_reporting_is_opt_in(cfg, fixed_now, capsys):
    build_digest(make_snapshot(), cfg, now=fixed_now)
    assert capsys.readouterr().out == ""
    assert not cfg.OUTPUT_DIR.exists()


def test_custom_reporter_receives_report(cfg, fixed_now):
    seen = []

    class Recorder:
        def post_build(self, report):
            seen.append(report)

    report = build_digest(
        make_snapshot(), cfg, now=fixed_now, reporter=Recorder(), enable_reporting=True
    )
    assert seen == [report]


def test_default_reporter_writes_outputs(cfg, fixed_now, capsys):
    build_digest(make_snapshot(), cfg, now=fixed_now, enable_reporting=True)
    assert "Weekly coverage: Mon, Dec 15 - Sun, Dec 21" in capsys.readouterr().out
    assert (cfg.OUTPUT_DIR / "coverage_digest.pdf").exists()
    assert (cfg.OUTPUT_DIR / "coverage_days.csv").exists()
