"""Quality assurance — a share of build effort plus user acceptance testing.

QA is sized from the frontend and backend *formula* hours. Custom items on
those stages do not feed into QA.
"""

from ..enums import Stage, TestCoverage
from .backend import BackendCalculator
from .base import BaseStageCalculator
from .frontend import FrontendCalculator
from .tables import TEST_COVERAGE_MULTIPLIERS, lookup

BUILD_SHARE = 0.25
HOURS_PER_UAT_DAY = 8


class QualityAssuranceCalculator(BaseStageCalculator):
    stage = Stage.QA

    def base_hours(self, config):
        build_hours = FrontendCalculator().base_hours(config) + BackendCalculator().base_hours(config)
        coverage = lookup("test coverage", TEST_COVERAGE_MULTIPLIERS, config.test_coverage)
        return build_hours * BUILD_SHARE * coverage + config.uat_days * HOURS_PER_UAT_DAY

    def describe(self, config):
        return f"{config.test_coverage.value} test coverage over the frontend and backend build."

    def rationale_clauses(self, config):
        clauses = []
        if config.test_coverage == TestCoverage.E2E:
            clauses.append("End-to-end suites cover full user journeys across the stack.")
        if config.uat_days > 0:
            clauses.append(f"{config.uat_days} days of user acceptance testing.")
        return clauses
