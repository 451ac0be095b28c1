from typing import List, Optional

from fastapi import APIRouter, HTTPException

from .. import draft as drafts
from ..schemas import DraftResponse, IndustryTemplate, TemplateApplyRequest
from ..templates import TEMPLATE_CATEGORIES, apply_template, get_template, list_templates

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=List[IndustryTemplate])
def get_templates(category: Optional[str] = None):
    if category is not None and category not in TEMPLATE_CATEGORIES:
        raise HTTPException(status_code=404, detail=f"Unknown template category: {category}")
    return list_templates(category)


@router.get("/categories")
def get_categories():
    return [{"id": key, "label": label} for key, label in TEMPLATE_CATEGORIES.items()]


@router.post("/{template_id}/apply", response_model=DraftResponse)
def apply(template_id: str, request: TemplateApplyRequest):
    """Merge a template's defaults into the caller's draft."""
    template = get_template(template_id)
    if not template:
        raise HTTPException(status_code=404, detail="Template not found")
    try:
        draft = apply_template(drafts.from_dict(request.draft), template)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return DraftResponse(
        draft=drafts.to_dict(draft),
        complete=drafts.is_complete(draft),
        missing=drafts.missing_fields(draft),
    )
