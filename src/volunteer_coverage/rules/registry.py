from __future__ import annotations

import logging
from typing import Sequence, Tuple, Type, Union

from volunteer_coverage.rules.base import CheckSpec, CoverageCheck
from volunteer_coverage.rules.headcount import HeadcountCheck
from volunteer_coverage.rules.role_requirements import RoleRequirementCheck

logger = logging.getLogger(__name__)

CheckTemplate = Tuple[Type[CoverageCheck], int, dict[str, str]]

ROLE_REQUIREMENT_CHECK_TEMPLATE: CheckTemplate = (RoleRequirementCheck, 10, {})
HEADCOUNT_CHECK_TEMPLATE: CheckTemplate = (
    HeadcountCheck,
    20,
    {"noun": "volunteer"},
)
_DEFAULT_CHECK_TEMPLATES: list[CheckTemplate] = [
    ROLE_REQUIREMENT_CHECK_TEMPLATE,
    HEADCOUNT_CHECK_TEMPLATE,
]


def default_check_specs() -> list[CheckSpec]:
    """Return fresh copies of the default check specifications."""
    specs: list[CheckSpec] = []
    for cls, order, settings in _DEFAULT_CHECK_TEMPLATES:
        specs.append(CheckSpec(cls=cls, order=order, settings=dict(settings)))
    return specs


CheckLike = Union[CheckSpec, Type[CoverageCheck], str]

CHECKS_BY_NAME: dict[str, CheckTemplate] = {
    template[0].name: template for template in _DEFAULT_CHECK_TEMPLATES
}


def _spec_for_name(name: str) -> CheckSpec:
    try:
        cls, order, settings = CHECKS_BY_NAME[name]
    except KeyError:
        known = ", ".join(sorted(CHECKS_BY_NAME))
        raise ValueError(f"Unknown coverage check {name!r}; known checks: {known}") from None
    return CheckSpec(cls=cls, order=order, settings=dict(settings))


def normalize_check_specs(checks: Sequence[CheckLike] | None) -> list[CheckSpec]:
    """
    Turn caller-provided checks into CheckSpec objects.

    A check may be given as a CheckSpec, a CoverageCheck subclass, or the
    ``name`` of a shipped check (e.g. ``"Headcount"``), which picks up that
    check's default order and settings. None means the default set.
    """
    if checks is None:
        return default_check_specs()
    if isinstance(checks, str):
        raise TypeError("Checks must be a sequence, not a single string.")

    normalized: list[CheckSpec] = []
    for item in checks:
        if isinstance(item, CheckSpec):
            normalized.append(item)
        elif isinstance(item, str):
            normalized.append(_spec_for_name(item))
        elif isinstance(item, type) and issubclass(item, CoverageCheck):
            normalized.append(CheckSpec(cls=item))
        else:
            raise TypeError(
                "Checks must be CheckSpec instances, CoverageCheck subclasses "
                f"or check names; got {type(item)!r}"
            )
    return normalized


def build_checks(checks: Sequence[CheckLike] | None = None) -> list[CoverageCheck]:
    """Instantiate enabled checks sorted by order; ties keep their given order."""
    instances: list[tuple[int, CoverageCheck]] = []
    for spec in normalize_check_specs(checks):
        if not (spec.enabled and spec.cls.enabled):
            logger.debug("Skipping disabled check %s", spec.cls.name)
            continue
        order = spec.order if spec.order is not None else spec.cls.order
        instances.append((order, spec.cls(**spec.settings)))
    instances.sort(key=lambda pair: pair[0])
    return [check for _, check in instances]
