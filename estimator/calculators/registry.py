"""
Calculator registry — maps each Stage to its calculator class.

Order matters: reports and totals list stages in this order.
"""

from ..enums import Stage
from .backend import BackendCalculator
from .base import BaseStageCalculator
from .deployment import DeploymentCalculator
from .design import DesignCalculator
from .frontend import FrontendCalculator
from .project_management import ProjectManagementCalculator
from .quality_assurance import QualityAssuranceCalculator

CALCULATOR_REGISTRY: dict[Stage, type] = {
    Stage.PM: ProjectManagementCalculator,
    Stage.DESIGN: DesignCalculator,
    Stage.FRONTEND: FrontendCalculator,
    Stage.BACKEND: BackendCalculator,
    Stage.QA: QualityAssuranceCalculator,
    Stage.DEPLOY: DeploymentCalculator,
}


def get_calculator(stage) -> BaseStageCalculator:
    """Returns an instance of the calculator for a stage, or raises ValueError."""
    try:
        stage = Stage(stage)
    except ValueError:
        raise ValueError(
            f"No calculator registered for stage: {stage}. "
            f"Available: {list_calculators()}"
        )
    return CALCULATOR_REGISTRY[stage]()


def list_calculators() -> list[str]:
    """List all registered stages in report order."""
    return [stage.value for stage in CALCULATOR_REGISTRY]
