"""
Estimates API.

POST   /api/estimates/calculate         — configuration in, estimate out
POST   /api/estimates/draft             — merge-patch a partial configuration
POST   /api/estimates/resolve           — draft in, full configuration out
POST   /api/estimates                   — save an estimate snapshot
GET    /api/estimates                   — saved estimates, newest first
GET    /api/estimates/{estimate_id}     — one saved estimate
DELETE /api/estimates/{estimate_id}
POST   /api/estimates/historical-match  — compare against saved estimates
POST   /api/estimates/risks             — rule-based delivery risks for a configuration
POST   /api/estimates/scenarios         — what-if variations compared against the base
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import ValidationError
from sqlalchemy.orm import Session

from .. import draft as drafts
from .. import models
from ..config import settings
from ..database import get_db
from ..estimation_engine import apply_adjustments, calculate_estimate
from ..exceptions import IncompleteConfigurationError, UnknownOptionError
from ..historical_matcher import HistoricalMatcher
from ..risk_assessment import RiskAssessor
from ..scenarios import compare_scenarios
from ..schemas import (
    AdjustedEstimate,
    CalculateRequest,
    CalculateResponse,
    DraftRequest,
    DraftResponse,
    EstimateRecord,
    HistoricalMatchRequest,
    HistoricalMatchResponse,
    ProjectConfiguration,
    ProjectEstimate,
    RiskAssessment,
    SaveEstimateRequest,
    ScenarioComparison,
    ScenarioRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/estimates", tags=["estimates"])

_matcher = HistoricalMatcher()
_risk_assessor = RiskAssessor()


def run_estimate(configuration: ProjectConfiguration, adjustments=None) -> CalculateResponse:
    """Calculate, then apply the optional adjustment pass. Table gaps surface as 500s."""
    try:
        estimate = calculate_estimate(configuration)
        adjusted = apply_adjustments(estimate, adjustments) if adjustments else None
    except UnknownOptionError as e:
        logger.error("Lookup table gap: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
    return CalculateResponse(estimate=estimate, adjusted=adjusted)


def get_record_or_404(db: Session, estimate_id: str) -> models.SavedEstimate:
    record = db.query(models.SavedEstimate).filter(models.SavedEstimate.id == estimate_id).first()
    if not record:
        raise HTTPException(status_code=404, detail="Estimate not found")
    return record


def estimate_from_record(record: models.SavedEstimate) -> ProjectEstimate:
    """Rebuild the stored snapshot exactly as saved, without recalculating."""
    form = record.form_data or {}
    return ProjectEstimate(
        project_name=record.project_name,
        project_type=record.project_type,
        platform=form.get("platform", record.platform.split(",")[0]),
        complexity=record.complexity,
        stages=record.stage_estimates,
        total_hours=record.total_hours,
        total_weeks=record.total_weeks,
        total_cost=record.total_cost,
        custom_items=record.custom_items or [],
    )


def adjusted_from_record(record: models.SavedEstimate, estimate: ProjectEstimate) -> Optional[AdjustedEstimate]:
    if not record.adjustments:
        return None
    return AdjustedEstimate(base=estimate, **record.adjustments)


# --- Calculation ---

@router.post("/calculate", response_model=CalculateResponse)
def calculate(request: CalculateRequest):
    return run_estimate(request.configuration, request.adjustments)


@router.post("/draft", response_model=DraftResponse)
def update_draft(request: DraftRequest):
    """
    Merge a patch into a partial configuration.

    The estimate is only returned once every required field is selected;
    unselected fields are reported, never filled with defaults.
    """
    try:
        draft = drafts.apply_patch(drafts.from_dict(request.draft), request.patch)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    missing = drafts.missing_fields(draft)
    estimate = None
    if not missing:
        try:
            configuration = drafts.resolve(draft)
        except ValidationError as e:
            raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
        estimate = run_estimate(configuration).estimate

    return DraftResponse(
        draft=drafts.to_dict(draft),
        complete=not missing,
        missing=missing,
        estimate=estimate,
    )


@router.post("/resolve", response_model=ProjectConfiguration)
def resolve_draft(request: DraftRequest):
    """Resolve a draft into a full configuration. 422 lists the unselected fields."""
    try:
        draft = drafts.apply_patch(drafts.from_dict(request.draft), request.patch)
        return drafts.resolve(draft)
    except IncompleteConfigurationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "missing": e.missing})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


# --- Saved estimates ---

@router.post("", response_model=EstimateRecord, status_code=201)
def save_estimate(request: SaveEstimateRequest, db: Session = Depends(get_db)):
    """Recalculate server-side and store the configuration with its estimate."""
    result = run_estimate(request.configuration, request.adjustments)
    estimate, adjusted = result.estimate, result.adjusted

    platforms = [p.value for p in adjusted.platforms] if adjusted else [estimate.platform.value]
    adjustments = None
    if adjusted:
        adjustments = adjusted.model_dump(mode="json", exclude={"base"})

    record = models.SavedEstimate(
        project_name=estimate.project_name,
        project_type=estimate.project_type.value,
        project_stage=request.configuration.project_stage.value,
        platform=",".join(platforms),
        complexity=estimate.complexity.value,
        total_hours=estimate.total_hours,
        total_weeks=estimate.total_weeks,
        total_cost=estimate.total_cost,
        form_data=request.configuration.model_dump(mode="json"),
        stage_estimates=[s.model_dump(mode="json") for s in estimate.stages],
        custom_items=[i.model_dump(mode="json") for i in estimate.custom_items],
        adjustments=adjustments,
        notes=request.notes,
    )
    db.add(record)
    db.commit()
    db.refresh(record)

    logger.info("Saved estimate %s (%s, %.0f h)", record.id, record.project_name, record.total_hours)
    return record


@router.get("", response_model=List[EstimateRecord])
def list_estimates(
    limit: Optional[int] = Query(None, ge=1, le=500),
    project_type: Optional[str] = None,
    db: Session = Depends(get_db),
):
    query = db.query(models.SavedEstimate)
    if project_type:
        query = query.filter(models.SavedEstimate.project_type == project_type)
    return query.order_by(models.SavedEstimate.created_at.desc()).limit(limit or settings.HISTORY_LIMIT).all()


@router.get("/{estimate_id}", response_model=EstimateRecord)
def get_estimate(estimate_id: str, db: Session = Depends(get_db)):
    return get_record_or_404(db, estimate_id)


@router.delete("/{estimate_id}")
def delete_estimate(estimate_id: str, db: Session = Depends(get_db)):
    record = get_record_or_404(db, estimate_id)
    db.delete(record)
    db.commit()
    logger.info("Deleted estimate %s", estimate_id)
    return {"message": "Estimate deleted"}


# --- Historical match ---

@router.post("/historical-match", response_model=HistoricalMatchResponse)
def historical_match(request: HistoricalMatchRequest, db: Session = Depends(get_db)):
    return _matcher.find_match(
        db,
        project_type=request.project_type,
        platform=request.platform,
        complexity=request.complexity,
        total_hours=request.total_hours,
    )


# --- Risks and scenarios ---

@router.post("/risks", response_model=RiskAssessment)
def assess_risks(request: CalculateRequest):
    """Risks are judged against the quoted totals: adjusted when adjustments are sent."""
    result = run_estimate(request.configuration, request.adjustments)
    quoted = result.adjusted or result.estimate
    return _risk_assessor.assess(
        request.configuration,
        total_hours=quoted.total_hours,
        total_cost=quoted.total_cost,
        adjustments=request.adjustments,
    )


@router.post("/scenarios", response_model=ScenarioComparison)
def scenarios(request: ScenarioRequest):
    try:
        return compare_scenarios(request.configuration, request.scenarios, request.adjustments)
    except IncompleteConfigurationError as e:
        raise HTTPException(status_code=422, detail={"message": str(e), "missing": e.missing})
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False, include_context=False))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except UnknownOptionError as e:
        logger.error("Lookup table gap: %s", e)
        raise HTTPException(status_code=500, detail=str(e))
