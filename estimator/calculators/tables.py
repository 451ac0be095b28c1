"""
Fixed lookup tables for the estimation formulas.

These are constants, not settings — changing a multiplier changes every
saved estimate's meaning. Experience and multi-platform adjustments are a
separate second pass (estimation_engine.apply_adjustments) and never touch
these tables.
"""

from ..enums import (
    AnimationLevel,
    Complexity,
    DatabaseSize,
    ExperienceLevel,
    ItemComplexity,
    Platform,
    SecurityLevel,
    Stage,
    TestCoverage,
)
from ..exceptions import UnknownOptionError

HOURS_PER_WEEK = 40

COMPLEXITY_MULTIPLIERS = {
    Complexity.SIMPLE: 0.7,
    Complexity.MEDIUM: 1.0,
    Complexity.COMPLEX: 1.5,
}

PLATFORM_MULTIPLIERS = {
    Platform.WEB: 1.0,
    Platform.ANDROID: 1.2,
    Platform.IOS: 1.3,
    Platform.LINUX_SERVER: 0.9,
    Platform.CROSS_PLATFORM: 1.8,
}

ANIMATION_MULTIPLIERS = {
    AnimationLevel.NONE: 0.8,
    AnimationLevel.SIMPLE: 1.0,
    AnimationLevel.ADVANCED: 1.4,
}

SECURITY_MULTIPLIERS = {
    SecurityLevel.BASIC: 0.8,
    SecurityLevel.STANDARD: 1.0,
    SecurityLevel.ENTERPRISE: 1.5,
}

DATABASE_MULTIPLIERS = {
    DatabaseSize.SMALL: 0.7,
    DatabaseSize.MEDIUM: 1.0,
    DatabaseSize.ENTERPRISE: 1.6,
}

TEST_COVERAGE_MULTIPLIERS = {
    TestCoverage.UNIT: 0.6,
    TestCoverage.INTEGRATION: 1.0,
    TestCoverage.E2E: 1.5,
}

# App-store submission and device testing add a fixed deployment cost
MOBILE_PLATFORMS = (Platform.IOS, Platform.ANDROID)
NATIVE_UI_PLATFORMS = (Platform.IOS, Platform.ANDROID, Platform.CROSS_PLATFORM)

# $/hr per stage role
HOURLY_RATES = {
    Stage.PM: 85,
    Stage.DESIGN: 75,
    Stage.FRONTEND: 90,
    Stage.BACKEND: 100,
    Stage.QA: 70,
    Stage.DEPLOY: 95,
}

STAGE_LABELS = {
    Stage.PM: "Project Management",
    Stage.DESIGN: "UX/UI Design",
    Stage.FRONTEND: "Frontend Development",
    Stage.BACKEND: "Backend Development",
    Stage.QA: "Quality Assurance",
    Stage.DEPLOY: "Deployment & Support",
}

STAGE_PERSONNEL = {
    Stage.PM: {"count": 1, "experience": "5+ years", "tools": ["JIRA", "Confluence", "Slack"]},
    Stage.DESIGN: {"count": 2, "experience": "3+ years", "tools": ["Figma", "Sketch", "Adobe XD"]},
    Stage.FRONTEND: {"count": 3, "experience": "4+ years", "tools": ["React", "TypeScript", "REST/GraphQL"]},
    Stage.BACKEND: {"count": 2, "experience": "5+ years", "tools": ["Node.js", "PostgreSQL", "Docker"]},
    Stage.QA: {"count": 1, "experience": "3+ years", "tools": ["Selenium", "Cypress", "Jest"]},
    Stage.DEPLOY: {"count": 1, "experience": "4+ years", "tools": ["Docker", "Kubernetes", "CI/CD"]},
}

MOBILE_FRONTEND_TOOLS = ["React Native", "TypeScript", "REST/GraphQL"]

# Default hours for a custom line item created from a complexity pick
ITEM_COMPLEXITY_HOURS = {
    ItemComplexity.LOW: 4.0,
    ItemComplexity.MEDIUM: 8.0,
    ItemComplexity.HIGH: 16.0,
}

# Second-pass multipliers (see estimation_engine.apply_adjustments)
EXPERIENCE_MULTIPLIERS = {
    ExperienceLevel.JUNIOR: 1.4,
    ExperienceLevel.MID: 1.1,
    ExperienceLevel.SENIOR: 1.0,
    ExperienceLevel.LEAD: 0.9,
    ExperienceLevel.ARCHITECT: 0.85,
}
EXTRA_PLATFORM_OVERHEAD = 0.2


def lookup(table_name: str, table: dict, value) -> float:
    """Look up a multiplier, raising UnknownOptionError instead of defaulting."""
    try:
        return table[value]
    except KeyError:
        raise UnknownOptionError(table_name, value) from None
