"""
Estimation engine — sums the six stage calculators into a ProjectEstimate.

Pure math, no I/O. Totals are always the sums of the already-rounded stage
values, never recomputed from raw hours.

Experience level and multi-platform delivery are applied afterwards by
apply_adjustments(), as a separate pass over the finished estimate.
"""

import math

from .calculators.base import round_half_away
from .calculators.registry import CALCULATOR_REGISTRY
from .calculators.tables import (
    EXPERIENCE_MULTIPLIERS,
    EXTRA_PLATFORM_OVERHEAD,
    HOURS_PER_WEEK,
    lookup,
)
from .schemas import AdjustedEstimate, EstimateAdjustments, ProjectConfiguration, ProjectEstimate


def calculate_estimate(config: ProjectConfiguration) -> ProjectEstimate:
    """Calculate per-stage hours and cost for a fully resolved configuration."""
    stages = tuple(
        calculator_cls().calculate(config)
        for calculator_cls in CALCULATOR_REGISTRY.values()
    )
    total_hours = sum(s.hours for s in stages)
    total_cost = sum(s.cost for s in stages)

    return ProjectEstimate(
        project_name=config.project_name or "Untitled Project",
        project_type=config.project_type,
        platform=config.platform,
        complexity=config.complexity,
        stages=stages,
        total_hours=total_hours,
        total_weeks=round_half_away(total_hours / HOURS_PER_WEEK, 1),
        total_cost=total_cost,
        custom_items=config.custom_items,
    )


def platform_multiplier(platform_count: int) -> float:
    """Each platform beyond the first adds 20% effort."""
    return 1 + (max(platform_count, 1) - 1) * EXTRA_PLATFORM_OVERHEAD


def apply_adjustments(estimate: ProjectEstimate, adjustments: EstimateAdjustments) -> AdjustedEstimate:
    """
    Scale an estimate's totals by team experience and platform count.

    The base estimate is carried unchanged inside the result; only the
    adjusted totals differ.
    """
    experience_mult = lookup("experience", EXPERIENCE_MULTIPLIERS, adjustments.team_experience)
    platforms = list(dict.fromkeys(adjustments.platforms)) or [estimate.platform]
    platform_mult = platform_multiplier(len(platforms))
    factor = experience_mult * platform_mult

    return AdjustedEstimate(
        base=estimate,
        team_experience=adjustments.team_experience,
        platforms=platforms,
        technologies=list(adjustments.technologies),
        experience_multiplier=experience_mult,
        platform_multiplier=round(platform_mult, 2),
        total_hours=round_half_away(estimate.total_hours * factor),
        total_weeks=round_half_away(estimate.total_weeks * factor, 1),
        total_cost=round_half_away(estimate.total_cost * factor),
    )


# --- Display helpers ---

def format_currency(amount) -> str:
    """Whole-dollar currency, e.g. $12,345."""
    return f"${round_half_away(float(amount)):,.0f}"


def format_duration(weeks: float) -> str:
    """Human duration: days under a week, then weeks, then months + weeks (4-week months)."""
    if weeks < 1:
        days = int(round_half_away(weeks * 5))
        return f"{days} day{'s' if days != 1 else ''}"

    months = math.floor(weeks / 4)
    remaining = int(round_half_away(weeks % 4))

    if months == 0:
        whole = int(round_half_away(weeks))
        return f"{whole} week{'s' if whole != 1 else ''}"
    month_str = f"{months} month{'s' if months != 1 else ''}"
    if remaining == 0:
        return month_str
    return f"{month_str}, {remaining} week{'s' if remaining != 1 else ''}"
