"""
Abstract base class for the six stage calculators.

Input: ProjectConfiguration (validated, immutable)
Output: StageEstimate

Every stage has the same shape: formula hours from the configuration, plus
any custom line items tagged with the stage, converted to cost at the
stage's hourly rate. Rounding happens once, here, on the raw float.
"""

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal

from ..enums import Stage
from ..schemas import ProjectConfiguration, StageEstimate
from .tables import HOURLY_RATES, HOURS_PER_WEEK, STAGE_LABELS, STAGE_PERSONNEL


def round_half_away(value: float, ndigits: int = 0) -> float:
    """Round half away from zero (2.5 -> 3.0, -2.5 -> -3.0), unlike built-in round()."""
    quantum = Decimal(1).scaleb(-ndigits)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


class BaseStageCalculator(ABC):
    """All stage calculators inherit from this."""

    stage: Stage

    @abstractmethod
    def base_hours(self, config: ProjectConfiguration) -> float:
        """Formula hours for this stage, before custom line items. Never rounded."""

    @abstractmethod
    def describe(self, config: ProjectConfiguration) -> str:
        """Base rationale sentence."""

    def rationale_clauses(self, config: ProjectConfiguration) -> list[str]:
        """Conditional sentences appended to the base rationale."""
        return []

    def tools(self, config: ProjectConfiguration) -> list[str]:
        return list(STAGE_PERSONNEL[self.stage]["tools"])

    # --- Shared behaviour ---

    @property
    def rate(self) -> float:
        return HOURLY_RATES[self.stage]

    @property
    def label(self) -> str:
        return STAGE_LABELS[self.stage]

    def custom_items(self, config: ProjectConfiguration) -> list:
        return [item for item in config.custom_items if item.stage == self.stage]

    def custom_item_hours(self, config: ProjectConfiguration) -> float:
        return sum(item.hours for item in self.custom_items(config))

    def raw_hours(self, config: ProjectConfiguration) -> float:
        return self.base_hours(config) + self.custom_item_hours(config)

    def rationale(self, config: ProjectConfiguration) -> str:
        sentences = [self.describe(config)] + self.rationale_clauses(config)
        items = self.custom_items(config)
        if items:
            hours = self.custom_item_hours(config)
            sentences.append(
                f"Includes {len(items)} custom item{'s' if len(items) != 1 else ''} "
                f"adding {hours:g} hours."
            )
        return " ".join(sentences)

    def calculate(self, config: ProjectConfiguration) -> StageEstimate:
        raw = self.raw_hours(config)
        personnel = STAGE_PERSONNEL[self.stage]
        return StageEstimate(
            stage=self.stage,
            label=self.label,
            hours=round_half_away(raw),
            weeks=round_half_away(raw / HOURS_PER_WEEK, 1),
            cost=round_half_away(raw * self.rate),
            rate=self.rate,
            personnel=personnel["count"],
            experience=personnel["experience"],
            tools=self.tools(config),
            rationale=self.rationale(config),
        )
