"""
Reviewable exception state for under/over-staffed shifts.

The state is a single tagged value, ``NoException | Unreviewed | Reviewed``, so
combinations such as "reviewed but no exception" cannot be represented.
``recompute`` runs whenever a shift's confirmed assignments change and drops a
``Reviewed`` state as soon as the underlying notes differ: an operator must
never see a stale "reviewed" badge.

Recompute-then-persist is not atomic. Callers serialize it per shift.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional, Sequence, TypeAlias, Union

from volunteer_coverage.errors import NothingToReviewError
from volunteer_coverage.evaluator import EvaluationResult, evaluate
from volunteer_coverage.models import ConfirmedAssignment, RoleRequirement, ShiftSnapshot
from volunteer_coverage.rules.registry import CheckLike
from volunteer_coverage.wallclock import InstantLike, parse_instant

logger = logging.getLogger(__name__)

NOTES_SEPARATOR = "; "


def _require_notes(notes: tuple[str, ...]) -> None:
    if not notes:
        raise ValueError("An exception state needs at least one note.")


@dataclass(frozen=True)
class NoException:
    pass


@dataclass(frozen=True)
class Unreviewed:
    notes: tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "notes", tuple(self.notes))
        _require_notes(self.notes)


@dataclass(frozen=True)
class Reviewed:
    notes: tuple[str, ...]
    reviewer: str
    reviewed_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "notes", tuple(self.notes))
        object.__setattr__(self, "reviewed_at", parse_instant(self.reviewed_at))
        _require_notes(self.notes)


ReviewState: TypeAlias = Union[NoException, Unreviewed, Reviewed]


@dataclass(frozen=True)
class ShiftCoverageState:
    review_state: ReviewState = field(default_factory=NoException)

    @property
    def has_exception(self) -> bool:
        return not isinstance(self.review_state, NoException)

    @property
    def notes(self) -> tuple[str, ...]:
        if isinstance(self.review_state, NoException):
            return ()
        return self.review_state.notes

    @property
    def is_reviewed(self) -> bool:
        return isinstance(self.review_state, Reviewed)

    def to_record(self) -> dict[str, Any]:
        """Flatten into the persisted shift columns."""
        state = self.review_state
        return {
            "has_role_exception": self.has_exception,
            "exception_notes": NOTES_SEPARATOR.join(self.notes) or None,
            "exception_reviewed_by": (
                state.reviewer if isinstance(state, Reviewed) else None
            ),
            "exception_reviewed_at": (
                state.reviewed_at if isinstance(state, Reviewed) else None
            ),
        }

    @classmethod
    def from_record(
        cls,
        has_role_exception: bool,
        exception_notes: Optional[str],
        exception_reviewed_by: Optional[str] = None,
        exception_reviewed_at: Optional[InstantLike] = None,
    ) -> "ShiftCoverageState":
        """
        Rebuild the state from persisted columns. Combinations the tagged
        state cannot express raise ValueError.
        """
        reviewed = exception_reviewed_by is not None or exception_reviewed_at is not None
        if not has_role_exception:
            if reviewed:
                raise ValueError("Review fields are set on a shift without an exception.")
            return cls(NoException())

        notes = tuple(
            n for n in (exception_notes or "").split(NOTES_SEPARATOR) if n.strip()
        )
        if not reviewed:
            return cls(Unreviewed(notes))
        if exception_reviewed_by is None or exception_reviewed_at is None:
            raise ValueError("Review requires both a reviewer and a timestamp.")
        return cls(Reviewed(notes, exception_reviewed_by, parse_instant(exception_reviewed_at)))


NO_EXCEPTION = ShiftCoverageState(NoException())


def recompute(
    eval_result: EvaluationResult, prior: Optional[ShiftCoverageState] = None
) -> ShiftCoverageState:
    """Derive the new state after the shift's assignments changed."""
    prior = prior or NO_EXCEPTION
    if not eval_result.has_exception:
        return NO_EXCEPTION
    notes = tuple(eval_result.notes)
    if not prior.has_exception or prior.notes != notes:
        if prior.is_reviewed:
            logger.debug("Coverage notes changed; dropping prior review")
        return ShiftCoverageState(Unreviewed(notes))
    return prior


def dismiss(prior: ShiftCoverageState, reviewer: str, now: datetime) -> ShiftCoverageState:
    """Mark an unreviewed exception as reviewed by ``reviewer`` at ``now``."""
    state = prior.review_state
    if not isinstance(state, Unreviewed):
        raise NothingToReviewError(
            "Shift does not have an unreviewed exception to dismiss."
        )
    return ShiftCoverageState(Reviewed(state.notes, reviewer, now))


def undismiss(prior: ShiftCoverageState) -> ShiftCoverageState:
    """Clear a review, returning the exception to the unreviewed state."""
    state = prior.review_state
    if not isinstance(state, Reviewed):
        raise NothingToReviewError("Shift does not have a reviewed exception to clear.")
    return ShiftCoverageState(Unreviewed(state.notes))


def refresh(
    requirements: Iterable[RoleRequirement],
    assignments: Iterable[ConfirmedAssignment],
    min_volunteers: int,
    prior: Optional[ShiftCoverageState] = None,
    checks: Sequence[CheckLike] | None = None,
) -> ShiftCoverageState:
    """Evaluate a shift and fold the result into its prior state."""
    return recompute(evaluate(requirements, assignments, min_volunteers, checks), prior)


def refresh_shift(
    shift: ShiftSnapshot, prior: Optional[ShiftCoverageState] = None
) -> ShiftCoverageState:
    return refresh(shift.requirements, shift.assignments, shift.min_volunteers, prior)
