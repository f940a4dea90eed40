from volunteer_coverage.rules.base import CoverageCheck, ShiftContext, pluralize


class RoleRequirementCheck(CoverageCheck):
    """Per-role minimum and maximum, one requirement at a time in configured order."""

    order = 10
    name = "RoleRequirements"

    def notes(self, ctx: ShiftContext) -> list[str]:
        out: list[str] = []
        for req in ctx.requirements:
            count = ctx.count_role(req.role)
            if count < req.min_required:
                needed = req.min_required - count
                out.append(f"Need {needed} more {pluralize(req.role, needed)}")
            if req.max_allowed is not None and count > req.max_allowed:
                out.append(f"Exceeded max {req.role}s ({count}/{req.max_allowed})")
        return out
