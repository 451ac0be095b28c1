"""Backend development — driven by business logic, security and data volume.

Overall project complexity does not apply here; business logic complexity does.
"""

from ..enums import Complexity, DatabaseSize, SecurityLevel, Stage
from .base import BaseStageCalculator
from .tables import COMPLEXITY_MULTIPLIERS, DATABASE_MULTIPLIERS, SECURITY_MULTIPLIERS, lookup

HOURS_PER_SCREEN = 12
HOURS_PER_INTEGRATION = 16


class BackendCalculator(BaseStageCalculator):
    stage = Stage.BACKEND

    def base_hours(self, config):
        units = config.unique_screens * HOURS_PER_SCREEN + config.api_integrations * HOURS_PER_INTEGRATION
        return (
            units
            * lookup("business logic", COMPLEXITY_MULTIPLIERS, config.business_logic_complexity)
            * lookup("security", SECURITY_MULTIPLIERS, config.security_level)
            * lookup("database size", DATABASE_MULTIPLIERS, config.database_size)
        )

    def describe(self, config):
        return (
            f"Services for {config.unique_screens} screens and {config.api_integrations} "
            f"integrations with {config.business_logic_complexity.value} business logic."
        )

    def rationale_clauses(self, config):
        clauses = []
        if config.security_level == SecurityLevel.ENTERPRISE:
            clauses.append("Enterprise security adds audit logging, SSO and hardening reviews.")
        if config.database_size == DatabaseSize.ENTERPRISE:
            clauses.append("Enterprise data volume requires sharding, indexing and migration planning.")
        if config.business_logic_complexity == Complexity.COMPLEX:
            clauses.append("Complex business rules need dedicated domain modelling.")
        return clauses

    def tools(self, config):
        return super().tools(config) + [config.cloud_provider.value.upper()]
