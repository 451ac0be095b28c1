"""
Second-pass adjustments (experience, platform count) and display helpers.
"""

import pytest

from estimator.enums import ExperienceLevel, Platform
from estimator.estimation_engine import (
    apply_adjustments,
    calculate_estimate,
    format_currency,
    format_duration,
    platform_multiplier,
)
from estimator.schemas import EstimateAdjustments, ProjectConfiguration

from conftest import baseline_config_data


@pytest.fixture
def estimate():
    return calculate_estimate(ProjectConfiguration(**baseline_config_data()))


# ============================================================
# Adjustments
# ============================================================

def test_senior_single_platform_is_identity(estimate):
    adjusted = apply_adjustments(estimate, EstimateAdjustments(team_experience="senior", platforms=["web"]))
    assert adjusted.total_hours == estimate.total_hours
    assert adjusted.total_weeks == estimate.total_weeks
    assert adjusted.total_cost == estimate.total_cost


def test_two_platforms_add_twenty_percent(estimate):
    adjusted = apply_adjustments(estimate, EstimateAdjustments(
        team_experience="senior", platforms=["web", "ios"],
    ))
    assert adjusted.platform_multiplier == 1.2
    assert adjusted.total_hours == 850  # 708 x 1.2 = 849.6
    assert adjusted.total_cost == 74784


def test_junior_team(estimate):
    adjusted = apply_adjustments(estimate, EstimateAdjustments(team_experience="junior"))
    assert adjusted.experience_multiplier == 1.4
    assert adjusted.total_hours == 991  # 708 x 1.4 = 991.2
    assert adjusted.total_weeks == 24.8  # 17.7 x 1.4 = 24.78


def test_default_experience_is_mid(estimate):
    adjusted = apply_adjustments(estimate, EstimateAdjustments())
    assert adjusted.team_experience == ExperienceLevel.MID
    assert adjusted.platforms == [Platform.WEB]
    assert adjusted.total_hours == 779  # 708 x 1.1 = 778.8


def test_duplicate_platforms_counted_once(estimate):
    adjusted = apply_adjustments(estimate, EstimateAdjustments(
        team_experience="senior", platforms=["ios", "ios", "android"],
    ))
    assert adjusted.platforms == [Platform.IOS, Platform.ANDROID]
    assert adjusted.platform_multiplier == 1.2


def test_adjustment_leaves_base_untouched(estimate):
    before = estimate.model_dump()
    adjusted = apply_adjustments(estimate, EstimateAdjustments(team_experience="junior", platforms=["web", "ios", "android"]))
    assert adjusted.base == estimate
    assert estimate.model_dump() == before


@pytest.mark.parametrize("count,expected", [(0, 1.0), (1, 1.0), (2, 1.2), (3, 1.4), (5, 1.8)])
def test_platform_multiplier(count, expected):
    assert platform_multiplier(count) == pytest.approx(expected)


# ============================================================
# Formatting
# ============================================================

@pytest.mark.parametrize("amount,expected", [
    (0, "$0"), (999.5, "$1,000"), (12345, "$12,345"), (62320, "$62,320"), (1234567.49, "$1,234,567"),
])
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


@pytest.mark.parametrize("weeks,expected", [
    (0.2, "1 day"),
    (0.6, "3 days"),
    (1, "1 week"),
    (3.4, "3 weeks"),
    (4, "1 month"),
    (5, "1 month, 1 week"),
    (17.7, "4 months, 2 weeks"),
    (8, "2 months"),
])
def test_format_duration(weeks, expected):
    assert format_duration(weeks) == expected
