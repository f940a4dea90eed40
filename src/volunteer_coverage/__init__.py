from .config import Config
from .errors import (
    AmbiguousLocalTimeResolved,
    InvalidTimeZoneId,
    MalformedDateOrTimeString,
    NothingToReviewError,
)
from .evaluator import EvaluationResult, evaluate
from .main import build_digest
from .models import (
    ConfirmedAssignment,
    CoverageSnapshot,
    DispatcherAssignment,
    RegionalLeadAssignment,
    RoleRequirement,
    ShiftSnapshot,
)
from .reporting import WeeklyCoverageReport, build_weekly_report
from .review import ShiftCoverageState, dismiss, recompute, undismiss
from .snapshot_io import snapshot_from_json
from .wallclock import Weekday, to_instant, to_local_date, week_bounds

__all__ = [
    "Config",
    "AmbiguousLocalTimeResolved",
    "InvalidTimeZoneId",
    "MalformedDateOrTimeString",
    "NothingToReviewError",
    "EvaluationResult",
    "evaluate",
    "build_digest",
    "ConfirmedAssignment",
    "CoverageSnapshot",
    "DispatcherAssignment",
    "RegionalLeadAssignment",
    "RoleRequirement",
    "ShiftSnapshot",
    "WeeklyCoverageReport",
    "build_weekly_report",
    "ShiftCoverageState",
    "dismiss",
    "recompute",
    "undismiss",
    "snapshot_from_json",
    "Weekday",
    "to_instant",
    "to_local_date",
    "week_bounds",
]
