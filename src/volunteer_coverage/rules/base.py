# src/volunteer_coverage/rules/base.py
from __future__ import annotations

from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Type

if TYPE_CHECKING:
    from volunteer_coverage.models import ConfirmedAssignment, RoleRequirement


@dataclass(frozen=True)
class ShiftContext:
    """What a check sees: one shift's requirements and confirmed assignments."""

    requirements: tuple[RoleRequirement, ...]
    assignments: tuple[ConfirmedAssignment, ...]
    min_volunteers: int

    def count_role(self, role: str) -> int:
        return sum(1 for a in self.assignments if a.role == role)


@dataclass
class CheckSpec:
    cls: Type["CoverageCheck"]
    order: int | None = None
    enabled: bool = True
    settings: dict[str, Any] = field(default_factory=dict)


class CoverageCheck(ABC):
    order: int = 100
    enabled: bool = True
    name: str = "Check"

    def __init__(self, **settings: Any) -> None:
        self._settings: dict[str, Any] = settings

    def notes(self, ctx: ShiftContext) -> list[str]:
        """Return the deficiency/surplus notes this check finds, in output order."""
        return []

    # Helper for subclasses to read optional settings
    def setting(self, key: str, default: Any) -> Any:
        return self._settings.get(key, default)


def pluralize(word: str, n: int) -> str:
    return f"{word}s" if n > 1 else word
