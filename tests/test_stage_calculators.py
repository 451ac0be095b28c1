"""
Stage calculator tests — registry, per-stage formulas, staffing and rationale.
"""

import pytest

from estimator.calculators.base import round_half_away
from estimator.calculators.registry import CALCULATOR_REGISTRY, get_calculator, list_calculators
from estimator.enums import Stage
from estimator.schemas import CustomItem, ProjectConfiguration

from conftest import baseline_config_data


def _config(**overrides) -> ProjectConfiguration:
    return ProjectConfiguration(**baseline_config_data(**overrides))


# ============================================================
# Registry
# ============================================================

def test_registry_covers_every_stage_in_order():
    assert list(CALCULATOR_REGISTRY) == list(Stage)
    assert list_calculators() == ["pm", "design", "frontend", "backend", "qa", "deploy"]


def test_get_calculator_unknown_stage():
    with pytest.raises(ValueError, match="No calculator registered"):
        get_calculator("marketing")


def test_get_calculator_accepts_string():
    assert get_calculator("qa").stage == Stage.QA


# ============================================================
# Rounding
# ============================================================

@pytest.mark.parametrize("value,expected", [
    (0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (-2.5, -3), (0.0, 0),
])
def test_round_half_away_from_zero(value, expected):
    assert round_half_away(value) == expected


def test_round_half_away_one_decimal():
    assert round_half_away(0.25, 1) == 0.3
    assert round_half_away(17.7, 1) == 17.7


# ============================================================
# Formulas
# ============================================================

def test_design_doubles_with_branding():
    plain = get_calculator("design").calculate(_config())
    branded = get_calculator("design").calculate(_config(custom_branding=True))
    assert plain.hours == 60
    assert branded.hours == 120
    assert "branding" in branded.rationale


def test_frontend_platform_and_animation():
    # (160 + 40) x 1.0 x 1.4 x 1.3
    estimate = get_calculator("frontend").calculate(_config(platform="ios", animation_level="advanced"))
    assert estimate.hours == 364


def test_backend_multipliers():
    # 200 x 1.5 (complex logic) x 1.5 (enterprise security) x 1.6 (enterprise db)
    estimate = get_calculator("backend").calculate(_config(
        business_logic_complexity="complex", security_level="enterprise", database_size="enterprise",
    ))
    assert estimate.hours == 720
    assert "Enterprise security" in estimate.rationale
    assert "sharding" in estimate.rationale


def test_qa_ignores_build_custom_items():
    """Frontend/backend custom items add to their own stage but not to QA's share."""
    base = get_calculator("qa").calculate(_config())
    with_items = get_calculator("qa").calculate(_config(custom_items=[
        {"name": "Charts", "stage": "frontend", "hours": 40},
        {"name": "Webhooks", "stage": "backend", "hours": 40},
    ]))
    assert with_items.hours == base.hours == 140


def test_qa_coverage_multiplier():
    assert get_calculator("qa").calculate(_config(test_coverage="unit")).hours == 100  # 400 x .25 x .6 + 40
    assert get_calculator("qa").calculate(_config(test_coverage="e2e")).hours == 190


@pytest.mark.parametrize("platform,expected", [
    ("web", 84), ("linux-server", 84), ("cross-platform", 84), ("ios", 100), ("android", 100),
])
def test_deploy_app_store_hours(platform, expected):
    assert get_calculator("deploy").calculate(_config(platform=platform)).hours == expected


def test_deploy_without_cicd():
    estimate = get_calculator("deploy").calculate(_config(cicd_setup=False, support_days=0))
    assert estimate.hours == 8
    assert "CI/CD pipeline" not in estimate.rationale


def test_pm_platform_overhead():
    # 10 x 8 x 1.0 x 0.30 x 1.8
    estimate = get_calculator("pm").calculate(_config(platform="cross-platform"))
    assert estimate.hours == 43
    assert estimate.cost == 3672


# ============================================================
# Staffing and tools
# ============================================================

def test_stage_staffing():
    frontend = get_calculator("frontend").calculate(_config())
    assert frontend.personnel == 3
    assert frontend.experience == "4+ years"
    assert frontend.rate == 90
    assert frontend.label == "Frontend Development"


def test_mobile_frontend_tools():
    web = get_calculator("frontend").calculate(_config())
    mobile = get_calculator("frontend").calculate(_config(platform="android"))
    assert web.tools[0] == "React"
    assert mobile.tools == ["React Native", "TypeScript", "REST/GraphQL"]


def test_cloud_provider_in_tools():
    backend = get_calculator("backend").calculate(_config(cloud_provider="gcp"))
    deploy = get_calculator("deploy").calculate(_config(cloud_provider="azure"))
    assert backend.tools[-1] == "GCP"
    assert deploy.tools[-1] == "AZURE"


# ============================================================
# Custom items
# ============================================================

def test_custom_item_hours_from_complexity():
    assert CustomItem(name="A", stage="pm", complexity="low").hours == 4
    assert CustomItem(name="B", stage="pm").hours == 8
    assert CustomItem(name="C", stage="pm", complexity="high").hours == 16
    assert CustomItem(name="D", stage="pm", complexity="high", hours=3).hours == 3


def test_custom_item_default_reason():
    item = CustomItem(name="Pen test", stage="qa", complexity="high")
    assert item.reason == "Custom Quality Assurance task with high complexity."


def test_custom_item_rejects_unknown_stage():
    with pytest.raises(ValueError):
        CustomItem(name="Launch party", stage="marketing", hours=4)
