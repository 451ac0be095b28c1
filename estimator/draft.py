"""
Configuration drafts — the form state before every choice has been made.

A draft holds one state per configuration field: UNSELECTED, or
Selected(value). Drafts are immutable; apply_patch() returns a new draft
from a merge-patch and never touches the original. resolve() turns a draft
into a ProjectConfiguration only when every required field is selected —
blanks are never coerced to defaults.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Union

from pydantic import ValidationError

from .exceptions import IncompleteConfigurationError
from .schemas import CustomItem, ProjectConfiguration


class _Unselected:
    """Sentinel for a field the user has not chosen yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "UNSELECTED"

    def __bool__(self):
        return False


UNSELECTED = _Unselected()


@dataclass(frozen=True)
class Selected:
    value: Any


FieldState = Union[_Unselected, Selected]

# Fields the calculator reads; all must be selected before resolve()
REQUIRED_FIELDS = (
    "complexity",
    "platform",
    "unique_screens",
    "pm_involvement",
    "custom_branding",
    "animation_level",
    "api_integrations",
    "business_logic_complexity",
    "security_level",
    "database_size",
    "test_coverage",
    "uat_days",
    "support_days",
    "cicd_setup",
    "cloud_provider",
)

# Descriptive fields, left to the configuration's own defaults when unselected
OPTIONAL_FIELDS = ("project_name", "project_type", "project_stage", "custom_items")


@dataclass(frozen=True)
class ConfigurationDraft:
    complexity: FieldState = UNSELECTED
    platform: FieldState = UNSELECTED
    unique_screens: FieldState = UNSELECTED
    pm_involvement: FieldState = UNSELECTED
    custom_branding: FieldState = UNSELECTED
    animation_level: FieldState = UNSELECTED
    api_integrations: FieldState = UNSELECTED
    business_logic_complexity: FieldState = UNSELECTED
    security_level: FieldState = UNSELECTED
    database_size: FieldState = UNSELECTED
    test_coverage: FieldState = UNSELECTED
    uat_days: FieldState = UNSELECTED
    support_days: FieldState = UNSELECTED
    cicd_setup: FieldState = UNSELECTED
    cloud_provider: FieldState = UNSELECTED
    project_name: FieldState = UNSELECTED
    project_type: FieldState = UNSELECTED
    project_stage: FieldState = UNSELECTED
    custom_items: FieldState = Selected(())


def _custom_items(value) -> tuple:
    """Validate custom items as they enter the draft, not at resolve time."""
    if not isinstance(value, (list, tuple)):
        raise ValueError("custom_items must be a list of items")
    items = []
    for position, entry in enumerate(value):
        try:
            items.append(CustomItem.model_validate(entry))
        except ValidationError as e:
            error = e.errors(include_url=False)[0]
            raise ValueError(f"Invalid custom item at position {position}: {error['msg']}") from e
    return tuple(items)


def _to_state(name: str, value) -> FieldState:
    # None and the empty string both mean "nothing picked"
    if isinstance(value, (_Unselected, Selected)):
        return value
    if value is None or value == "":
        return UNSELECTED
    if name == "custom_items":
        return Selected(_custom_items(value))
    if isinstance(value, list):
        value = tuple(value)
    return Selected(value)


def apply_patch(draft: ConfigurationDraft, patch: Mapping[str, Any]) -> ConfigurationDraft:
    """Return a new draft with the patch merged in. Unknown keys and malformed custom items raise ValueError."""
    known = {f.name for f in fields(ConfigurationDraft)}
    unknown = [key for key in patch if key not in known]
    if unknown:
        raise ValueError(f"Unknown configuration field(s): {', '.join(sorted(unknown))}")
    return replace(draft, **{key: _to_state(key, value) for key, value in patch.items()})


def missing_fields(draft: ConfigurationDraft) -> list[str]:
    return [name for name in REQUIRED_FIELDS if not isinstance(getattr(draft, name), Selected)]


def is_complete(draft: ConfigurationDraft) -> bool:
    return not missing_fields(draft)


def resolve(draft: ConfigurationDraft) -> ProjectConfiguration:
    """Build the immutable configuration. Raises IncompleteConfigurationError if any field is unselected."""
    missing = missing_fields(draft)
    if missing:
        raise IncompleteConfigurationError(missing)
    return ProjectConfiguration(**selected_values(draft))


def selected_values(draft: ConfigurationDraft) -> dict:
    return {
        f.name: getattr(draft, f.name).value
        for f in fields(draft)
        if isinstance(getattr(draft, f.name), Selected)
    }


def to_dict(draft: ConfigurationDraft) -> dict:
    """JSON-friendly view — only selected fields appear."""
    result = {}
    for name, value in selected_values(draft).items():
        if hasattr(value, "value"):
            value = value.value
        elif name == "custom_items":
            value = [item.model_dump(mode="json") for item in value]
        result[name] = value
    return result


def from_dict(data: Mapping[str, Any]) -> ConfigurationDraft:
    return apply_patch(ConfigurationDraft(), data)


def from_configuration(config: ProjectConfiguration) -> ConfigurationDraft:
    data = config.model_dump()
    data["custom_items"] = list(config.custom_items)
    return from_dict(data)


# Starting point for a new estimate
DEFAULT_SELECTIONS = {
    "project_type": "web-app",
    "project_stage": "pre-idea",
    "platform": "web",
    "complexity": "medium",
    "pm_involvement": 20,
    "unique_screens": 10,
    "custom_branding": False,
    "animation_level": "simple",
    "api_integrations": 3,
    "business_logic_complexity": "medium",
    "security_level": "standard",
    "database_size": "medium",
    "test_coverage": "integration",
    "uat_days": 5,
    "cloud_provider": "aws",
    "cicd_setup": True,
    "support_days": 30,
}


def default_draft() -> ConfigurationDraft:
    return from_dict(DEFAULT_SELECTIONS)
