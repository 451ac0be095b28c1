"""
Closed option sets for a project configuration.

Every value a user can pick lives here. Lookup tables in
calculators/tables.py are keyed on these enums, so adding a member without
a table entry fails fast at calculation time instead of silently
under-estimating.
"""

import enum


class Complexity(str, enum.Enum):
    SIMPLE = "simple"
    MEDIUM = "medium"
    COMPLEX = "complex"


class Platform(str, enum.Enum):
    WEB = "web"
    ANDROID = "android"
    IOS = "ios"
    LINUX_SERVER = "linux-server"
    CROSS_PLATFORM = "cross-platform"


class AnimationLevel(str, enum.Enum):
    NONE = "none"
    SIMPLE = "simple"
    ADVANCED = "advanced"


class SecurityLevel(str, enum.Enum):
    BASIC = "basic"
    STANDARD = "standard"
    ENTERPRISE = "enterprise"


class DatabaseSize(str, enum.Enum):
    SMALL = "small"
    MEDIUM = "medium"
    ENTERPRISE = "enterprise"


class TestCoverage(str, enum.Enum):
    __test__ = False  # not a pytest class

    UNIT = "unit"
    INTEGRATION = "integration"
    E2E = "e2e"


class CloudProvider(str, enum.Enum):
    AWS = "aws"
    AZURE = "azure"
    GCP = "gcp"


class ProjectType(str, enum.Enum):
    WEBSITE = "website"
    WEB_APP = "web-app"
    MOBILE_APP = "mobile-app"
    IT_SERVICE = "it-service"


class ProjectStage(str, enum.Enum):
    PRE_IDEA = "pre-idea"
    DOCUMENTED = "documented"


class Stage(str, enum.Enum):
    """The six fixed estimation stages, in report order."""
    PM = "pm"
    DESIGN = "design"
    FRONTEND = "frontend"
    BACKEND = "backend"
    QA = "qa"
    DEPLOY = "deploy"


class ItemComplexity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExperienceLevel(str, enum.Enum):
    JUNIOR = "junior"
    MID = "mid"
    SENIOR = "senior"
    LEAD = "lead"
    ARCHITECT = "architect"


class RiskCategory(str, enum.Enum):
    TECHNICAL = "technical"
    SCHEDULE = "schedule"
    RESOURCE = "resource"
    BUDGET = "budget"
    SCOPE = "scope"


class RiskSeverity(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"
