"""
Risk Assessment — rule-based delivery risks for a project configuration.

Each rule checks the configuration (plus team and platform adjustments,
when given) against a fixed threshold and raises a catalogued risk.
A risk's score is probability x impact / 100. The overall score is the
mean of the raised risks' scores, banded Low / Medium / High / Critical.

Pure function of its inputs, no AI and no I/O.
"""

from typing import List, Optional

from .calculators.base import round_half_away
from .enums import Complexity, ExperienceLevel, Platform, ProjectStage, RiskCategory, RiskSeverity, SecurityLevel
from .schemas import EstimateAdjustments, ProjectConfiguration, Risk, RiskAssessment

LARGE_PROJECT_HOURS = 2000
LARGE_BUDGET = 500_000
MAX_TECHNOLOGIES = 5
MAX_PLATFORMS = 2
MAX_INTEGRATIONS = 5

# Upper bound (inclusive) of each overall band
OVERALL_LEVELS = (
    (25, "Low"),
    (45, "Medium"),
    (65, "High"),
)

RISK_CATALOGUE = {
    "tech-complexity": {
        "category": RiskCategory.TECHNICAL,
        "name": "High Technical Complexity",
        "description": "Complex projects have higher chance of technical challenges and unforeseen issues.",
        "severity": RiskSeverity.HIGH,
        "probability": 70,
        "impact": 80,
        "mitigations": [
            "Conduct thorough technical discovery phase",
            "Implement proof-of-concept for critical features",
            "Allocate additional buffer time for R&D",
            "Consider engaging technical consultants",
        ],
    },
    "tech-stack": {
        "category": RiskCategory.TECHNICAL,
        "name": "Large Technology Stack",
        "description": "Using {count} technologies increases integration complexity.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 60,
        "impact": 50,
        "mitigations": [
            "Ensure team expertise covers all technologies",
            "Create detailed integration test plans",
            "Document inter-service communication patterns",
            "Consider reducing tech stack if possible",
        ],
    },
    "tech-security": {
        "category": RiskCategory.TECHNICAL,
        "name": "Enterprise Security Requirements",
        "description": "Enterprise-grade security requires specialized expertise and thorough auditing.",
        "severity": RiskSeverity.HIGH,
        "probability": 50,
        "impact": 90,
        "mitigations": [
            "Engage security specialists for architecture review",
            "Plan for penetration testing and security audits",
            "Implement security best practices from day one",
            "Document compliance requirements clearly",
        ],
    },
    "schedule-large": {
        "category": RiskCategory.SCHEDULE,
        "name": "Large Project Duration",
        "description": "Projects over 2000 hours face increased schedule uncertainty.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 65,
        "impact": 60,
        "mitigations": [
            "Break project into smaller phases with milestones",
            "Implement agile methodology with regular check-ins",
            "Build in buffer time at phase boundaries",
            "Consider MVP approach for initial release",
        ],
    },
    "schedule-multiplatform": {
        "category": RiskCategory.SCHEDULE,
        "name": "Multi-Platform Development",
        "description": "Developing for {count} platforms increases coordination overhead.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 55,
        "impact": 55,
        "mitigations": [
            "Consider cross-platform frameworks where appropriate",
            "Stagger platform releases to reduce parallel workstreams",
            "Ensure dedicated resources for each platform",
            "Implement shared code/component libraries",
        ],
    },
    "resource-experience": {
        "category": RiskCategory.RESOURCE,
        "name": "Junior Team Experience",
        "description": "Less experienced teams may face steeper learning curves and require more guidance.",
        "severity": RiskSeverity.HIGH,
        "probability": 70,
        "impact": 60,
        "mitigations": [
            "Pair junior developers with senior mentors",
            "Allocate time for training and skill development",
            "Implement thorough code review processes",
            "Create detailed technical documentation",
        ],
    },
    "budget-large": {
        "category": RiskCategory.BUDGET,
        "name": "Large Budget Exposure",
        "description": "High-value projects require careful financial management.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 40,
        "impact": 85,
        "mitigations": [
            "Implement strict change management process",
            "Set up regular budget reviews and forecasting",
            "Establish contingency reserve (15-20%)",
            "Consider phased funding approval",
        ],
    },
    "scope-unclear": {
        "category": RiskCategory.SCOPE,
        "name": "Pre-Idea Stage Uncertainty",
        "description": "Requirements may evolve significantly as ideas mature.",
        "severity": RiskSeverity.HIGH,
        "probability": 80,
        "impact": 70,
        "mitigations": [
            "Plan for requirements discovery phase",
            "Use iterative development approach",
            "Document assumptions clearly",
            "Build flexibility into contracts and timelines",
        ],
    },
    "scope-integrations": {
        "category": RiskCategory.SCOPE,
        "name": "Multiple External Integrations",
        "description": "{count} API integrations introduce third-party dependencies.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 60,
        "impact": 50,
        "mitigations": [
            "Document API dependencies and SLAs",
            "Create fallback mechanisms for critical integrations",
            "Build abstraction layers for easier switching",
            "Monitor API changes and deprecations",
        ],
    },
    "tech-ios": {
        "category": RiskCategory.TECHNICAL,
        "name": "App Store Submission",
        "description": "iOS apps require Apple review which can cause unpredictable delays.",
        "severity": RiskSeverity.MEDIUM,
        "probability": 50,
        "impact": 40,
        "mitigations": [
            "Plan for 1-2 week review buffer",
            "Study Apple guidelines thoroughly",
            "Prepare detailed app review documentation",
            "Consider TestFlight for beta testing",
        ],
    },
}


def make_risk(risk_id: str, **details) -> Risk:
    """Build a catalogued risk. `details` fill the description placeholders."""
    entry = RISK_CATALOGUE[risk_id]
    return Risk(
        id=risk_id,
        category=entry["category"],
        name=entry["name"],
        description=entry["description"].format(**details),
        severity=entry["severity"],
        probability=entry["probability"],
        impact=entry["impact"],
        score=int(round_half_away(entry["probability"] * entry["impact"] / 100)),
        mitigations=list(entry["mitigations"]),
    )


def overall_level(score: int) -> str:
    for upper, level in OVERALL_LEVELS:
        if score <= upper:
            return level
    return "Critical"


class RiskAssessor:
    """
    Raises the catalogued risks that apply to a configuration.

    Team experience, platforms and technologies come from the adjustments.
    Without them, the configuration's single platform is used and no team
    or technology risks are raised. total_hours and total_cost are the
    totals the caller quotes (adjusted, when adjustments apply).
    """

    def identify(self, config: ProjectConfiguration, total_hours: float, total_cost: float,
                 adjustments: Optional[EstimateAdjustments] = None) -> List[Risk]:
        platforms = list(dict.fromkeys(adjustments.platforms)) if adjustments else []
        platforms = platforms or [config.platform]
        technologies = adjustments.technologies if adjustments else []

        risks = []

        # Technical
        if config.complexity == Complexity.COMPLEX:
            risks.append(make_risk("tech-complexity"))
        if len(technologies) > MAX_TECHNOLOGIES:
            risks.append(make_risk("tech-stack", count=len(technologies)))
        if config.security_level == SecurityLevel.ENTERPRISE:
            risks.append(make_risk("tech-security"))

        # Schedule
        if total_hours > LARGE_PROJECT_HOURS:
            risks.append(make_risk("schedule-large"))
        if len(platforms) > MAX_PLATFORMS:
            risks.append(make_risk("schedule-multiplatform", count=len(platforms)))

        # Resource
        if adjustments and adjustments.team_experience == ExperienceLevel.JUNIOR:
            risks.append(make_risk("resource-experience"))

        # Budget
        if total_cost > LARGE_BUDGET:
            risks.append(make_risk("budget-large"))

        # Scope
        if config.project_stage == ProjectStage.PRE_IDEA:
            risks.append(make_risk("scope-unclear"))
        if config.api_integrations > MAX_INTEGRATIONS:
            risks.append(make_risk("scope-integrations", count=config.api_integrations))

        if Platform.IOS in platforms:
            risks.append(make_risk("tech-ios"))

        # Highest score first; ties keep rule order
        return sorted(risks, key=lambda r: r.score, reverse=True)

    def assess(self, config: ProjectConfiguration, total_hours: float, total_cost: float,
               adjustments: Optional[EstimateAdjustments] = None) -> RiskAssessment:
        risks = self.identify(config, total_hours, total_cost, adjustments)
        score = 0
        if risks:
            score = int(round_half_away(sum(r.score for r in risks) / len(risks)))
        return RiskAssessment(risks=risks, overall_score=score, overall_level=overall_level(score))
