from volunteer_coverage.rules.base import CoverageCheck, ShiftContext, pluralize


class HeadcountCheck(CoverageCheck):
    """Overall confirmed headcount against the shift's minimum, regardless of role."""

    order = 20
    name = "Headcount"

    def notes(self, ctx: ShiftContext) -> list[str]:
        noun = self.setting("noun", "volunteer")
        total = len(ctx.assignments)
        if total >= ctx.min_volunteers:
            return []
        needed = ctx.min_volunteers - total
        return [
            f"Need {needed} more {pluralize(noun, needed)} "
            f"({total}/{ctx.min_volunteers} minimum)"
        ]
