"""Deployment & support — fixed setup cost plus a support retainer."""

from ..enums import Stage
from .base import BaseStageCalculator
from .tables import MOBILE_PLATFORMS

CICD_SETUP_HOURS = 24
MANUAL_SETUP_HOURS = 8
HOURS_PER_SUPPORT_DAY = 2
APP_STORE_HOURS = 16


class DeploymentCalculator(BaseStageCalculator):
    stage = Stage.DEPLOY

    def base_hours(self, config):
        hours = CICD_SETUP_HOURS if config.cicd_setup else MANUAL_SETUP_HOURS
        hours += config.support_days * HOURS_PER_SUPPORT_DAY
        if config.platform in MOBILE_PLATFORMS:
            hours += APP_STORE_HOURS
        return hours

    def describe(self, config):
        return f"Release to {config.cloud_provider.value.upper()} infrastructure."

    def rationale_clauses(self, config):
        clauses = []
        if config.cicd_setup:
            clauses.append("Includes an automated CI/CD pipeline.")
        if config.support_days > 0:
            clauses.append(f"{config.support_days} days of post-launch support.")
        if config.platform in MOBILE_PLATFORMS:
            clauses.append("App store submission and review cycles.")
        return clauses

    def tools(self, config):
        return super().tools(config) + [config.cloud_provider.value.upper()]
