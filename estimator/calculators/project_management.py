"""Project management — scales with overall project size and PM involvement."""

from ..enums import Stage
from .base import BaseStageCalculator
from .tables import COMPLEXITY_MULTIPLIERS, PLATFORM_MULTIPLIERS, lookup

HOURS_PER_SCREEN = 8


class ProjectManagementCalculator(BaseStageCalculator):
    stage = Stage.PM

    def base_hours(self, config):
        complexity = lookup("complexity", COMPLEXITY_MULTIPLIERS, config.complexity)
        platform = lookup("platform", PLATFORM_MULTIPLIERS, config.platform)
        project_hours = config.unique_screens * HOURS_PER_SCREEN * complexity
        return project_hours * (config.pm_involvement / 100) * platform

    def describe(self, config):
        return (
            f"{config.pm_involvement}% PM involvement across "
            f"{config.unique_screens} screens of {config.complexity.value} complexity."
        )

    def rationale_clauses(self, config):
        clauses = []
        if config.pm_involvement >= 30:
            clauses.append("High involvement covers daily stand-ups and close stakeholder reporting.")
        if lookup("platform", PLATFORM_MULTIPLIERS, config.platform) > 1.0:
            clauses.append(
                f"{config.platform.value} delivery adds coordination overhead for releases."
            )
        return clauses
