"""
Configuration draft tests — merge-patch reducer, completeness and resolve.
"""

import pytest

from estimator import draft as drafts
from estimator.draft import UNSELECTED, ConfigurationDraft, Selected
from estimator.exceptions import IncompleteConfigurationError
from estimator.schemas import ProjectConfiguration

from conftest import baseline_config_data


def test_empty_draft_is_unselected():
    draft = ConfigurationDraft()
    assert draft.platform is UNSELECTED
    assert not drafts.is_complete(draft)
    assert drafts.missing_fields(draft) == list(drafts.REQUIRED_FIELDS)


def test_apply_patch_returns_new_draft():
    original = ConfigurationDraft()
    updated = drafts.apply_patch(original, {"platform": "web", "unique_screens": 4})

    assert original.platform is UNSELECTED
    assert updated.platform == Selected("web")
    assert updated.unique_screens == Selected(4)
    assert updated is not original


def test_blank_values_unselect():
    draft = drafts.apply_patch(ConfigurationDraft(), {"platform": "web", "complexity": "medium"})
    draft = drafts.apply_patch(draft, {"platform": "", "complexity": None})
    assert draft.platform is UNSELECTED
    assert draft.complexity is UNSELECTED


def test_falsy_selections_stay_selected():
    """0 and False are real choices, not blanks."""
    draft = drafts.apply_patch(ConfigurationDraft(), {"unique_screens": 0, "cicd_setup": False})
    assert draft.unique_screens == Selected(0)
    assert draft.cicd_setup == Selected(False)


def test_unknown_field_rejected():
    with pytest.raises(ValueError, match="Unknown configuration field"):
        drafts.apply_patch(ConfigurationDraft(), {"favourite_colour": "blue"})


def test_resolve_incomplete_lists_missing():
    data = baseline_config_data()
    draft = drafts.from_dict(data)
    draft = drafts.apply_patch(draft, {"security_level": "", "uat_days": None})

    with pytest.raises(IncompleteConfigurationError) as exc_info:
        drafts.resolve(draft)
    assert exc_info.value.missing == ["security_level", "uat_days"]


def test_resolve_never_defaults_blanks():
    """The default draft is complete; clearing one field makes it unresolvable."""
    draft = drafts.default_draft()
    assert drafts.is_complete(draft)
    draft = drafts.apply_patch(draft, {"cloud_provider": ""})
    with pytest.raises(IncompleteConfigurationError, match="cloud_provider"):
        drafts.resolve(draft)


def test_resolve_complete_draft():
    config = drafts.resolve(drafts.from_dict(baseline_config_data()))
    assert isinstance(config, ProjectConfiguration)
    assert config.unique_screens == 10
    assert config.project_name == "Baseline Web App"


def test_optional_fields_not_required():
    data = baseline_config_data()
    del data["project_name"]
    config = drafts.resolve(drafts.from_dict(data))
    assert config.project_name == "Untitled Project"


def test_round_trip_through_configuration():
    config = ProjectConfiguration(**baseline_config_data(custom_items=[
        {"id": "item-1", "name": "SSO", "stage": "backend", "hours": 24},
    ]))
    draft = drafts.from_configuration(config)
    assert drafts.resolve(draft) == config

    as_dict = drafts.to_dict(draft)
    assert as_dict["platform"] == "web"
    assert as_dict["custom_items"][0]["name"] == "SSO"


@pytest.mark.parametrize("value", [["oops"], 5, "items", [{"name": "x", "stage": "qa", "hours": -1}]])
def test_malformed_custom_items_rejected_on_patch(value):
    with pytest.raises(ValueError):
        drafts.apply_patch(ConfigurationDraft(), {"custom_items": value})


def test_custom_items_validated_on_patch():
    draft = drafts.apply_patch(ConfigurationDraft(), {
        "custom_items": [{"name": "SSO", "stage": "backend", "complexity": "low"}],
    })
    (item,) = draft.custom_items.value
    assert item.hours == 4
    assert item.reason == "Custom Backend Development task with low complexity."
