"""
Export downloads.

GET  /api/estimates/{estimate_id}/pdf|csv|xlsx — saved estimate, as stored
POST /api/estimates/export/{fmt}               — unsaved configuration, calculated on the fly
"""

import re

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..csv_export import generate_estimate_csv, generate_estimate_xlsx
from ..database import get_db
from ..pdf_generator import generate_estimate_pdf
from ..schemas import CalculateRequest
from .estimates import adjusted_from_record, estimate_from_record, get_record_or_404, run_estimate

router = APIRouter(prefix="/estimates", tags=["exports"])

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "csv": "text/csv; charset=utf-8",
    "xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}


def _filename(project_name: str, fmt: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "-", project_name or "").strip("-") or "estimate"
    return f"{slug}-estimate.{fmt}"


def _render(fmt: str, estimate, adjusted=None, created_at=None, notes=None) -> Response:
    if fmt == "pdf":
        content = generate_estimate_pdf(estimate, adjusted, created_at=created_at, notes=notes)
    elif fmt == "csv":
        content = generate_estimate_csv(estimate, adjusted, created_at=created_at)
    elif fmt == "xlsx":
        content = generate_estimate_xlsx(estimate, adjusted, created_at=created_at)
    else:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {fmt}")

    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{_filename(estimate.project_name, fmt)}"'},
    )


@router.get("/{estimate_id}/{fmt}")
def export_saved(estimate_id: str, fmt: str, db: Session = Depends(get_db)):
    if fmt not in MEDIA_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {fmt}")
    record = get_record_or_404(db, estimate_id)
    estimate = estimate_from_record(record)
    adjusted = adjusted_from_record(record, estimate)
    return _render(fmt, estimate, adjusted, created_at=record.created_at, notes=record.notes)


@router.post("/export/{fmt}")
def export_unsaved(fmt: str, request: CalculateRequest):
    if fmt not in MEDIA_TYPES:
        raise HTTPException(status_code=404, detail=f"Unknown export format: {fmt}")
    result = run_estimate(request.configuration, request.adjustments)
    return _render(fmt, result.estimate, result.adjusted)
