"""UX/UI design — per-screen effort, doubled for custom branding."""

from ..enums import Complexity, Stage
from .base import BaseStageCalculator
from .tables import COMPLEXITY_MULTIPLIERS, lookup

HOURS_PER_SCREEN = 6
BRANDED_HOURS_PER_SCREEN = 12


class DesignCalculator(BaseStageCalculator):
    stage = Stage.DESIGN

    def base_hours(self, config):
        per_screen = BRANDED_HOURS_PER_SCREEN if config.custom_branding else HOURS_PER_SCREEN
        complexity = lookup("complexity", COMPLEXITY_MULTIPLIERS, config.complexity)
        return config.unique_screens * per_screen * complexity

    def describe(self, config):
        per_screen = BRANDED_HOURS_PER_SCREEN if config.custom_branding else HOURS_PER_SCREEN
        return f"{config.unique_screens} unique screens at {per_screen} design hours each."

    def rationale_clauses(self, config):
        clauses = []
        if config.custom_branding:
            clauses.append("Custom branding requires a bespoke design system and brand assets.")
        if config.complexity == Complexity.COMPLEX:
            clauses.append("Complex flows need extra wireframing and usability iterations.")
        return clauses
