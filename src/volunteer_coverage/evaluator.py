from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from volunteer_coverage.models import ConfirmedAssignment, RoleRequirement, ShiftSnapshot
from volunteer_coverage.rules.base import ShiftContext
from volunteer_coverage.rules.registry import CheckLike, build_checks


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of evaluating one shift against its requirements."""

    has_exception: bool
    notes: tuple[str, ...]


def evaluate(
    requirements: Iterable[RoleRequirement],
    assignments: Iterable[ConfirmedAssignment],
    shift_min_volunteers: int,
    checks: Sequence[CheckLike] | None = None,
) -> EvaluationResult:
    """
    Evaluate a shift's confirmed assignments against role requirements and the
    overall minimum headcount.

    With the default checks, notes come out per requirement in configured
    order (shortfall, then surplus) followed by the headcount note, e.g.::

        ["Need 1 more Dispatcher", "Need 2 more volunteers (1/3 minimum)"]

    Pure: the caller persists the result (see ``review.recompute``).
    """
    if shift_min_volunteers < 0:
        raise ValueError("shift_min_volunteers must be >= 0.")
    ctx = ShiftContext(
        requirements=tuple(requirements),
        assignments=tuple(assignments),
        min_volunteers=shift_min_volunteers,
    )
    notes: list[str] = []
    for check in build_checks(checks):
        notes.extend(check.notes(ctx))
    return EvaluationResult(has_exception=bool(notes), notes=tuple(notes))


def evaluate_shift(
    shift: ShiftSnapshot,
    checks: Sequence[CheckLike] | None = None,
) -> EvaluationResult:
    return evaluate(shift.requirements, shift.assignments, shift.min_volunteers, checks)
