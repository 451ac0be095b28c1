"""
What-if scenarios — named variations compared against a base configuration.

A scenario is a merge-patch over the base configuration, run through the
same draft reducer as any user edit, plus optional adjustments of its own.
Scenarios without adjustments inherit the base's.
"""

from typing import List, Optional

from . import draft as drafts
from .calculators.base import round_half_away
from .estimation_engine import apply_adjustments, calculate_estimate
from .schemas import (
    EstimateAdjustments,
    ProjectConfiguration,
    ScenarioComparison,
    ScenarioInput,
    ScenarioResult,
    ScenarioTotals,
)


def scenario_totals(config: ProjectConfiguration,
                    adjustments: Optional[EstimateAdjustments] = None) -> ScenarioTotals:
    """Quoted totals: adjusted when adjustments are given, otherwise the base estimate's."""
    estimate = calculate_estimate(config)
    result = apply_adjustments(estimate, adjustments) if adjustments else estimate
    return ScenarioTotals(
        total_hours=result.total_hours,
        total_weeks=result.total_weeks,
        total_cost=result.total_cost,
    )


def percent_diff(base: float, compare: float) -> float:
    if not base:
        return 0.0
    return round_half_away((compare - base) / base * 100, 1)


def compare_scenarios(config: ProjectConfiguration, scenarios: List[ScenarioInput],
                      adjustments: Optional[EstimateAdjustments] = None) -> ScenarioComparison:
    """
    Price each scenario and compare it to the base.

    Raises ValueError for a malformed patch and IncompleteConfigurationError
    when a patch clears a required field.
    """
    base = scenario_totals(config, adjustments)
    base_draft = drafts.from_configuration(config)

    results = []
    for index, scenario in enumerate(scenarios):
        scenario_config = drafts.resolve(drafts.apply_patch(base_draft, scenario.patch))
        totals = scenario_totals(scenario_config, scenario.adjustments or adjustments)
        results.append(ScenarioResult(
            name=scenario.name.strip() or f"Scenario {index + 1}",
            configuration=scenario_config,
            totals=totals,
            hours_diff_pct=percent_diff(base.total_hours, totals.total_hours),
            weeks_diff_pct=percent_diff(base.total_weeks, totals.total_weeks),
            cost_diff_pct=percent_diff(base.total_cost, totals.total_cost),
        ))

    return ScenarioComparison(base=base, scenarios=results)
