import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from .calculators.tables import ITEM_COMPLEXITY_HOURS, STAGE_LABELS
from .enums import (
    AnimationLevel,
    CloudProvider,
    Complexity,
    DatabaseSize,
    ExperienceLevel,
    ItemComplexity,
    Platform,
    ProjectStage,
    ProjectType,
    RiskCategory,
    RiskSeverity,
    SecurityLevel,
    Stage,
    TestCoverage,
)


# --- Estimation input ---

class CustomItem(BaseModel):
    """Supplemental hours attached to exactly one stage."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    stage: Stage
    complexity: ItemComplexity = ItemComplexity.MEDIUM
    hours: float = Field(ge=0)
    reason: str = ""

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _fill_defaults(cls, data):
        # Hours default from the complexity pick, reason from the stage
        if not isinstance(data, dict):
            return data
        data = dict(data)
        complexity = ItemComplexity(data.get("complexity") or ItemComplexity.MEDIUM)
        data["complexity"] = complexity
        if data.get("hours") is None:
            data["hours"] = ITEM_COMPLEXITY_HOURS[complexity]
        if not data.get("reason") and data.get("stage"):
            label = STAGE_LABELS[Stage(data["stage"])]
            data["reason"] = f"Custom {label} task with {complexity.value} complexity."
        return data


class ProjectConfiguration(BaseModel):
    """Fully resolved, immutable input to the estimation engine."""
    complexity: Complexity
    platform: Platform
    unique_screens: int = Field(ge=0)
    pm_involvement: int = Field(ge=0, le=100)
    custom_branding: bool
    animation_level: AnimationLevel
    api_integrations: int = Field(ge=0)
    business_logic_complexity: Complexity
    security_level: SecurityLevel
    database_size: DatabaseSize
    test_coverage: TestCoverage
    uat_days: int = Field(ge=0)
    support_days: int = Field(ge=0)
    cicd_setup: bool
    cloud_provider: CloudProvider
    custom_items: Tuple[CustomItem, ...] = ()

    # Descriptive only, no formula reads these
    project_name: str = "Untitled Project"
    project_type: ProjectType = ProjectType.WEB_APP
    project_stage: ProjectStage = ProjectStage.PRE_IDEA

    class Config:
        frozen = True


class EstimateAdjustments(BaseModel):
    """Second-pass scaling applied after the core calculation."""
    team_experience: ExperienceLevel = ExperienceLevel.MID
    platforms: List[Platform] = []
    technologies: List[str] = []


# --- Estimation output ---

class StageEstimate(BaseModel):
    stage: Stage
    label: str
    hours: float
    weeks: float
    cost: float
    rate: float
    personnel: int
    experience: str
    tools: List[str]
    rationale: str

    class Config:
        frozen = True


class ProjectEstimate(BaseModel):
    project_name: str
    project_type: ProjectType
    platform: Platform
    complexity: Complexity
    stages: Tuple[StageEstimate, ...]
    total_hours: float
    total_weeks: float
    total_cost: float
    custom_items: Tuple[CustomItem, ...] = ()

    class Config:
        frozen = True

    def stage(self, stage) -> StageEstimate:
        """Return the estimate for one stage."""
        stage = Stage(stage)
        for estimate in self.stages:
            if estimate.stage == stage:
                return estimate
        raise KeyError(stage)


class AdjustedEstimate(BaseModel):
    base: ProjectEstimate
    team_experience: ExperienceLevel
    platforms: List[Platform]
    technologies: List[str]
    experience_multiplier: float
    platform_multiplier: float
    total_hours: float
    total_weeks: float
    total_cost: float


# --- API request/response ---

class CalculateRequest(BaseModel):
    configuration: ProjectConfiguration
    adjustments: Optional[EstimateAdjustments] = None


class CalculateResponse(BaseModel):
    estimate: ProjectEstimate
    adjusted: Optional[AdjustedEstimate] = None


class DraftRequest(BaseModel):
    draft: Dict[str, Any] = {}
    patch: Dict[str, Any] = {}


class DraftResponse(BaseModel):
    draft: Dict[str, Any]
    complete: bool
    missing: List[str]
    estimate: Optional[ProjectEstimate] = None


class SaveEstimateRequest(BaseModel):
    configuration: ProjectConfiguration
    adjustments: Optional[EstimateAdjustments] = None
    notes: Optional[str] = None


class EstimateRecord(BaseModel):
    id: str
    project_name: str
    project_type: str
    project_stage: Optional[str] = None
    platform: str
    complexity: str
    total_hours: float
    total_weeks: float
    total_cost: float
    form_data: Dict[str, Any]
    stage_estimates: List[Dict[str, Any]]
    custom_items: List[Dict[str, Any]] = []
    adjustments: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True


# --- Risk assessment ---

class Risk(BaseModel):
    id: str
    category: RiskCategory
    name: str
    description: str
    severity: RiskSeverity
    probability: int
    impact: int
    score: int
    mitigations: List[str]


class RiskAssessment(BaseModel):
    risks: List[Risk]
    overall_score: int
    overall_level: str


# --- What-if scenarios ---

class ScenarioInput(BaseModel):
    """A named variation: a merge-patch over the base configuration, optionally with its own adjustments."""
    name: str = ""
    patch: Dict[str, Any] = {}
    adjustments: Optional[EstimateAdjustments] = None


class ScenarioRequest(BaseModel):
    configuration: ProjectConfiguration
    adjustments: Optional[EstimateAdjustments] = None
    scenarios: List[ScenarioInput] = []


class ScenarioTotals(BaseModel):
    total_hours: float
    total_weeks: float
    total_cost: float


class ScenarioResult(BaseModel):
    name: str
    configuration: ProjectConfiguration
    totals: ScenarioTotals
    hours_diff_pct: float
    weeks_diff_pct: float
    cost_diff_pct: float


class ScenarioComparison(BaseModel):
    base: ScenarioTotals
    scenarios: List[ScenarioResult]


class HistoricalMatchRequest(BaseModel):
    project_type: ProjectType
    platform: Platform
    complexity: Complexity
    total_hours: float = Field(ge=0)


class HistoricalMatch(BaseModel):
    project_name: str
    accuracy: int
    adjusted_hours: float
    original_hours: float
    suggestion: str


class HistoricalMatchResponse(BaseModel):
    match: Optional[HistoricalMatch] = None
    message: Optional[str] = None


# --- AI suggestions ---

class TechnologySuggestion(BaseModel):
    frontend: List[str] = []
    backend: List[str] = []
    database: List[str] = []
    cloud: List[str] = []


class ProjectAnalysis(BaseModel):
    technologies: TechnologySuggestion = TechnologySuggestion()
    complexity: str = "medium"
    suggested_screens: int = 10
    key_features: List[str] = []
    challenges: List[str] = []
    recommended_experience: str = "mid"
    platforms: List[str] = ["web"]
    estimated_weeks: float = 8
    summary: str = ""
    fallback: bool = False


class StageBreakdown(BaseModel):
    pm: float = 0
    design: float = 0
    frontend: float = 0
    backend: float = 0
    qa: float = 0
    devops: float = 0


class DocumentAnalysis(BaseModel):
    suggested_screens: int
    suggested_complexity: str
    suggested_features: List[str] = []
    summary: str = ""
    confidence_score: float
    confidence_reason: str = ""
    estimated_hours: float
    estimated_weeks: int
    estimated_cost: float
    breakdown: StageBreakdown
    technical_requirements: List[str] = []
    risks: List[str] = []
    assumptions: List[str] = []
    analyzed_at: datetime
    fallback: bool = False


class AnalyzeProjectRequest(BaseModel):
    description: str
    project_type: ProjectType = ProjectType.WEB_APP


class SuggestionResponse(BaseModel):
    analysis: ProjectAnalysis
    patch: Dict[str, Any]


class DocumentAnalysisResponse(BaseModel):
    analysis_id: Optional[str] = None
    filename: str
    page_count: int
    extraction_quality: str
    analysis: DocumentAnalysis
    patch: Dict[str, Any]
    warnings: List[str] = []


class DocumentFailure(BaseModel):
    filename: str
    error: str


class BatchAnalysisResponse(BaseModel):
    results: List[DocumentAnalysisResponse]
    failures: List[DocumentFailure]


# --- Industry templates ---

class IndustryTemplate(BaseModel):
    id: str
    name: str
    category: str
    description: str
    defaults: Dict[str, Any]
    features: List[str]
    tech_stack: List[str]
    time_multiplier: float

    class Config:
        frozen = True


class TemplateApplyRequest(BaseModel):
    draft: Dict[str, Any] = {}
