from .base import CheckSpec, CoverageCheck, ShiftContext
from .headcount import HeadcountCheck
from .registry import (
    CHECKS_BY_NAME,
    CheckLike,
    build_checks,
    default_check_specs,
    normalize_check_specs,
)
from .role_requirements import RoleRequirementCheck

__all__ = [
    "CheckSpec",
    "CoverageCheck",
    "ShiftContext",
    "HeadcountCheck",
    "RoleRequirementCheck",
    "CHECKS_BY_NAME",
    "CheckLike",
    "build_checks",
    "default_check_specs",
    "normalize_check_specs",
]
