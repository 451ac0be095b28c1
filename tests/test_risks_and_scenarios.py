"""
Risk assessment and what-if scenario tests.
"""

import pytest

from estimator.enums import ExperienceLevel, Platform
from estimator.exceptions import IncompleteConfigurationError
from estimator.risk_assessment import RISK_CATALOGUE, RiskAssessor, overall_level
from estimator.scenarios import compare_scenarios, percent_diff
from estimator.schemas import EstimateAdjustments, ProjectConfiguration, ScenarioInput

from conftest import baseline_config_data


def _config(**overrides) -> ProjectConfiguration:
    return ProjectConfiguration(**baseline_config_data(**overrides))


def _ids(assessment):
    return [r.id for r in assessment.risks]


# ============================================================
# Risk rules
# ============================================================

def test_documented_baseline_has_no_risks():
    assessment = RiskAssessor().assess(_config(project_stage="documented"), total_hours=708, total_cost=62320)
    assert assessment.risks == []
    assert assessment.overall_score == 0
    assert assessment.overall_level == "Low"


def test_pre_idea_stage_is_a_scope_risk():
    assessment = RiskAssessor().assess(_config(), total_hours=708, total_cost=62320)
    assert _ids(assessment) == ["scope-unclear"]
    risk = assessment.risks[0]
    assert risk.category == "scope"
    assert risk.score == 56
    assert len(risk.mitigations) == 4
    assert assessment.overall_level == "High"


def test_score_is_probability_times_impact():
    # 55 x 55 / 100 = 30.25
    config = _config(project_stage="documented")
    adjustments = EstimateAdjustments(platforms=["web", "ios", "android"])
    risks = RiskAssessor().identify(config, 708, 62320, adjustments)
    by_id = {r.id: r for r in risks}
    assert by_id["schedule-multiplatform"].score == 30
    assert by_id["tech-ios"].score == 20


def test_risks_sorted_by_score_ties_keep_rule_order():
    config = _config(complexity="complex", security_level="enterprise", api_integrations=8)
    adjustments = EstimateAdjustments(
        team_experience=ExperienceLevel.JUNIOR,
        platforms=[Platform.WEB, Platform.IOS, Platform.ANDROID],
        technologies=["React", "Node.js", "PostgreSQL", "Redis", "Kafka", "Terraform"],
    )
    risks = RiskAssessor().identify(config, 1000, 90000, adjustments)
    ids = [r.id for r in risks]

    assert ids[:2] == ["tech-complexity", "scope-unclear"]
    assert [r.score for r in risks] == sorted((r.score for r in risks), reverse=True)
    assert {"tech-security", "resource-experience", "tech-stack", "scope-integrations", "tech-ios"} <= set(ids)

    descriptions = {r.id: r.description for r in risks}
    assert descriptions["tech-stack"] == "Using 6 technologies increases integration complexity."
    assert descriptions["schedule-multiplatform"].startswith("Developing for 3 platforms")
    assert descriptions["scope-integrations"].startswith("8 API integrations")


def test_thresholds_are_strict():
    config = _config(project_stage="documented", api_integrations=5)
    adjustments = EstimateAdjustments(platforms=["web", "android"], technologies=["a", "b", "c", "d", "e"])
    assert RiskAssessor().identify(config, 2000, 500_000, adjustments) == []


def test_large_totals_average_into_overall():
    assessment = RiskAssessor().assess(_config(project_stage="documented"), total_hours=2500, total_cost=600_000)
    assert _ids(assessment) == ["schedule-large", "budget-large"]
    # (39 + 34) / 2 = 36.5
    assert assessment.overall_score == 37
    assert assessment.overall_level == "Medium"


def test_team_risks_need_adjustments():
    """Without adjustments there is no team experience or technology list to judge."""
    risks = RiskAssessor().identify(_config(project_stage="documented", platform="ios"), 708, 62320)
    assert [r.id for r in risks] == ["tech-ios"]


@pytest.mark.parametrize("score, level", [
    (0, "Low"), (25, "Low"), (26, "Medium"), (45, "Medium"),
    (46, "High"), (65, "High"), (66, "Critical"),
])
def test_overall_bands(score, level):
    assert overall_level(score) == level


def test_catalogue_has_ten_rules():
    assert len(RISK_CATALOGUE) == 10


def test_risks_endpoint(client):
    response = client.post("/api/estimates/risks", json={
        "configuration": baseline_config_data(),
        "adjustments": {"team_experience": "junior", "platforms": ["ios"]},
    })
    assert response.status_code == 200
    data = response.json()

    assert [r["id"] for r in data["risks"]] == ["scope-unclear", "resource-experience", "tech-ios"]
    # (56 + 42 + 20) / 3
    assert data["overall_score"] == 39
    assert data["overall_level"] == "Medium"


def test_risks_endpoint_rejects_bad_configuration(client):
    response = client.post("/api/estimates/risks", json={
        "configuration": baseline_config_data(complexity="extreme"),
    })
    assert response.status_code == 422


# ============================================================
# What-if scenarios
# ============================================================

def test_percent_diff():
    assert percent_diff(708, 875) == 23.6
    assert percent_diff(708, 708) == 0.0
    assert percent_diff(0, 100) == 0.0


def test_scenarios_against_base():
    comparison = compare_scenarios(_config(), [
        ScenarioInput(name="Complex", patch={"complexity": "complex"}),
        ScenarioInput(patch={"custom_items": [{"name": "Kickoff", "stage": "pm", "hours": 12}]}),
        ScenarioInput(name="  "),
    ])

    assert comparison.base.total_hours == 708
    assert comparison.base.total_weeks == 17.7
    assert comparison.base.total_cost == 62320

    complex_, kickoff, unchanged = comparison.scenarios
    assert complex_.name == "Complex"
    assert complex_.totals.total_hours == 875
    assert complex_.hours_diff_pct == 23.6
    assert complex_.configuration.complexity == "complex"

    assert kickoff.name == "Scenario 2"
    assert kickoff.totals.total_hours == 720
    assert kickoff.hours_diff_pct == 1.7

    # Each scenario starts from the base, not from the previous scenario
    assert unchanged.name == "Scenario 3"
    assert unchanged.totals == comparison.base
    assert unchanged.cost_diff_pct == 0.0


def test_scenarios_inherit_base_adjustments():
    base_adjustments = EstimateAdjustments(team_experience=ExperienceLevel.SENIOR, platforms=["web"])
    comparison = compare_scenarios(_config(), [
        ScenarioInput(name="Same team"),
        ScenarioInput(name="Junior team", adjustments={"team_experience": "junior"}),
    ], adjustments=base_adjustments)

    same, junior = comparison.scenarios
    assert comparison.base.total_hours == 708
    assert same.totals.total_hours == 708
    # 708 x 1.4 = 991.2
    assert junior.totals.total_hours == 991
    assert junior.hours_diff_pct == 40.0


def test_scenario_clearing_a_field_is_incomplete():
    with pytest.raises(IncompleteConfigurationError) as exc_info:
        compare_scenarios(_config(), [ScenarioInput(patch={"platform": ""})])
    assert exc_info.value.missing == ["platform"]


def test_scenarios_endpoint(client):
    response = client.post("/api/estimates/scenarios", json={
        "configuration": baseline_config_data(),
        "scenarios": [{"name": "Fewer screens", "patch": {"unique_screens": 5}}],
    })
    assert response.status_code == 200
    data = response.json()
    assert data["base"]["total_hours"] == 708
    scenario = data["scenarios"][0]
    assert scenario["name"] == "Fewer screens"
    assert scenario["totals"]["total_hours"] < 708
    assert scenario["hours_diff_pct"] < 0


@pytest.mark.parametrize("patch", [{"platform": ""}, {"platform": "toaster"}, {"budget": 1}, {"custom_items": 5}])
def test_scenarios_endpoint_rejects_bad_patch(client, patch):
    response = client.post("/api/estimates/scenarios", json={
        "configuration": baseline_config_data(),
        "scenarios": [{"name": "Broken", "patch": patch}],
    })
    assert response.status_code == 422
