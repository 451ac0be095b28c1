"""Frontend development — screens and API wiring, scaled by animation and platform."""

from ..enums import AnimationLevel, Stage
from .base import BaseStageCalculator
from .tables import (
    ANIMATION_MULTIPLIERS,
    COMPLEXITY_MULTIPLIERS,
    MOBILE_FRONTEND_TOOLS,
    NATIVE_UI_PLATFORMS,
    PLATFORM_MULTIPLIERS,
    lookup,
)

HOURS_PER_SCREEN = 16
HOURS_PER_INTEGRATION = 8


class FrontendCalculator(BaseStageCalculator):
    stage = Stage.FRONTEND

    def base_hours(self, config):
        units = config.unique_screens * HOURS_PER_SCREEN + config.api_integrations * HOURS_PER_INTEGRATION
        return (
            units
            * lookup("complexity", COMPLEXITY_MULTIPLIERS, config.complexity)
            * lookup("animation", ANIMATION_MULTIPLIERS, config.animation_level)
            * lookup("platform", PLATFORM_MULTIPLIERS, config.platform)
        )

    def describe(self, config):
        return (
            f"{config.unique_screens} screens and {config.api_integrations} API integrations "
            f"to build on {config.platform.value}."
        )

    def rationale_clauses(self, config):
        clauses = []
        if config.animation_level == AnimationLevel.ADVANCED:
            clauses.append("Advanced animations add motion design implementation and tuning.")
        if config.platform in NATIVE_UI_PLATFORMS:
            clauses.append("Mobile UI needs device-specific layouts and gesture handling.")
        return clauses

    def tools(self, config):
        if config.platform in NATIVE_UI_PLATFORMS:
            return list(MOBILE_FRONTEND_TOOLS)
        return super().tools(config)
