"""
Module with example code for building a weekly coverage digest.

There are three ways to run the code:

1. Build the digest for a small snapshot defined via code.
2. Build the digest from a snapshot pre-defined in a JSON file.
3. Show the review lifecycle of a single under-staffed shift.

Usage via cli:
    python3 -m src.example --option 2
"""

from __future__ import annotations

import argparse
import logging
from datetime import date, datetime, timezone
from pathlib import Path

from volunteer_coverage import (
    Config,
    ConfirmedAssignment,
    CoverageSnapshot,
    RegionalLeadAssignment,
    RoleRequirement,
    ShiftSnapshot,
    build_digest,
    dismiss,
    evaluate,
    recompute,
)
from volunteer_coverage.reporting import Reporter
from volunteer_coverage.snapshot_io import snapshot_from_json

cfg = Config.from_settings(
    {
        "timezone": "America/New_York",
        "weekAnchorWeekday": "Monday",
        "weeklyDigestSendHour": 18,
    }
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run volunteer coverage examples.")
    parser.add_argument(
        "--option",
        type=int,
        default=2,
        choices=(1, 2, 3),
        help="Example scenario to run (default: 2).",
    )
    parser.add_argument(
        "--plots",
        action="store_true",
        help="Also render coverage plots into the output directory.",
    )
    return parser.parse_args()


def run_option(option: int, plots: bool = False) -> None:
    print(f"Running example code with option {option}")

    # Build the digest for a snapshot defined via code.
    if option == 1:

        snapshot = CoverageSnapshot(
            counties=("Durham", "Wake"),
            zones=("North", "South"),
            shifts=(
                ShiftSnapshot(
                    "s-1",
                    zone="North",
                    date=date(2025, 12, 15),
                    assignments=(ConfirmedAssignment("vol-1", is_lead=True),),
                ),
            ),
            regional_lead_assignments=(
                RegionalLeadAssignment("vol-2", date(2025, 12, 15)),
            ),
        )
        build_digest(
            snapshot,
            cfg,
            anchor_date=date(2025, 12, 15),
            reporter=Reporter(cfg, enable_plots=plots),
            enable_reporting=True,
        )

    # Build the digest from a JSON snapshot. Typical production use.
    elif option == 2:

        snapshot = snapshot_from_json(Path("src/example_snapshot.json"))
        # a Sunday evening digest covers the following Monday onwards
        now = datetime(2025, 12, 14, 23, 0, tzinfo=timezone.utc)
        build_digest(
            snapshot,
            cfg,
            now=now,
            reporter=Reporter(cfg, enable_plots=plots),
            enable_reporting=True,
        )

    # Walk one shift through the review lifecycle.
    elif option == 3:

        requirements = [RoleRequirement("Dispatcher", min_required=2, max_allowed=4)]
        assigned = [ConfirmedAssignment("vol-1", role="Dispatcher")]
        state = recompute(evaluate(requirements, assigned, shift_min_volunteers=3))
        print(f"After evaluation: {state.review_state}")

        state = dismiss(state, reviewer="coordinator-1", now=datetime.now(timezone.utc))
        print(f"After dismissal: {state.review_state}")

        assigned.append(ConfirmedAssignment("vol-2", role="Dispatcher"))
        state = recompute(evaluate(requirements, assigned, 3), state)
        print(f"After a second dispatcher confirmed: {state.review_state}")
        print(state.to_record())
    else:
        raise SystemExit(f"Unknown option {option}")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args()
    run_option(args.option, plots=args.plots)


if __name__ == "__main__":
    main()
