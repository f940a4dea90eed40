from __future__ import annotations

from volunteer_coverage.models import ConfirmedAssignment, RoleRequirement
from volunteer_coverage.rules.base import ShiftContext, pluralize
from volunteer_coverage.rules.headcount import HeadcountCheck
from volunteer_coverage.rules.role_requirements import RoleRequirementCheck


def ctx(assignments, min_volunteers=0, requirements=()):
    return ShiftContext(
        requirements=tuple(requirements),
        assignments=tuple(assignments),
        min_volunteers=min_volunteers,
    )


def test_pluralize():
    assert pluralize("Dispatcher", 1) == "Dispatcher"
    assert pluralize("Dispatcher", 2) == "Dispatchers"


def test_headcount_met_exactly():
    assigned = [ConfirmedAssignment("a"), ConfirmedAssignment("b")]
    assert HeadcountCheck().notes(ctx(assigned, 2)) == []


def test_headcount_noun_setting():
    check = HeadcountCheck(noun="walker")
    assert check.notes(ctx([], 2)) == ["Need 2 more walkers (0/2 minimum)"]


def test_role_check_matches_role_exactly():
    assigned = [ConfirmedAssignment("a", role="dispatcher")]
    notes = RoleRequirementCheck().notes(
        ctx(assigned, requirements=[RoleRequirement("Dispatcher", 1)])
    )
    assert notes == ["Need 1 more Dispatcher"]


def test_context_counts_roles():
    c = ctx(
        [ConfirmedAssignment("a", role="X"), ConfirmedAssignment("b", role="X")],
    )
    assert c.count_role("X") == 2
    assert c.count_role("Y") == 0
