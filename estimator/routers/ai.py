"""
AI suggestion API.

POST /api/ai/analyze-project    — free-text description -> suggestion + draft patch
POST /api/ai/analyze-document   — one uploaded document -> stage-hours analysis
POST /api/ai/analyze-documents  — several uploads; per-file failures never abort the batch
"""

import logging
import time
from typing import List

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from .. import models
from ..ai_advisor import AIAdvisor, suggestion_to_patch
from ..config import settings
from ..database import get_db
from ..document_extractor import DocumentExtractor
from ..exceptions import AIServiceError, DocumentTooLargeError, UnsupportedDocumentError
from ..schemas import (
    AnalyzeProjectRequest,
    BatchAnalysisResponse,
    DocumentAnalysisResponse,
    DocumentFailure,
    SuggestionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])

# Singletons
_advisor = AIAdvisor()
_extractor = DocumentExtractor()


def _split_platforms(platforms: str) -> List[str]:
    return [p.strip() for p in (platforms or "").split(",") if p.strip()]


def _analyze_upload(file: UploadFile, db: Session, project_type: str,
                    experience_level: str, platforms: List[str]) -> DocumentAnalysisResponse:
    """Extract, analyze and store one upload. Raises domain errors; callers map them."""
    filename = file.filename or "upload"
    _extractor.check_extension(filename)  # before reading a single byte
    file_bytes = _extractor.read_upload(file.file)
    extraction = _extractor.extract_text_from_bytes(file_bytes, filename=filename)

    warnings = []
    if extraction["extraction_quality"] == "poor":
        warnings.append(
            "Document appears to be scanned images with little selectable text. "
            "OCR would improve results. Consider pasting the text manually."
        )

    analysis = _advisor.analyze_document(
        extraction["text"],
        project_type=project_type,
        experience_level=experience_level,
        platforms=platforms,
    )
    if analysis.fallback:
        warnings.append("AI analysis could not be parsed — showing default estimates. Verify manually.")

    record = models.DocumentAnalysisRecord(
        filename=filename,
        page_count=extraction["page_count"],
        extraction_quality=extraction["extraction_quality"],
        confidence_score=analysis.confidence_score,
        analysis_json=analysis.model_dump(mode="json"),
    )
    db.add(record)
    db.commit()

    return DocumentAnalysisResponse(
        analysis_id=record.id,
        filename=filename,
        page_count=extraction["page_count"],
        extraction_quality=extraction["extraction_quality"],
        analysis=analysis,
        patch=suggestion_to_patch(analysis),
        warnings=warnings,
    )


@router.post("/analyze-project", response_model=SuggestionResponse)
def analyze_project(request: AnalyzeProjectRequest):
    try:
        analysis = _advisor.analyze_project(request.description, request.project_type)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AIServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    return SuggestionResponse(analysis=analysis, patch=suggestion_to_patch(analysis))


@router.post("/analyze-document", response_model=DocumentAnalysisResponse)
def analyze_document(
    file: UploadFile = File(...),
    project_type: str = Form("web-app"),
    experience_level: str = Form("mid"),
    platforms: str = Form("web"),
    db: Session = Depends(get_db),
):
    """Upload a requirements document (.pdf, .txt, .md, .csv) and get an estimate breakdown."""
    try:
        return _analyze_upload(file, db, project_type, experience_level, _split_platforms(platforms))
    except UnsupportedDocumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except DocumentTooLargeError as e:
        raise HTTPException(status_code=413, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except AIServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))


@router.post("/analyze-documents", response_model=BatchAnalysisResponse)
def analyze_documents(
    files: List[UploadFile] = File(...),
    project_type: str = Form("web-app"),
    experience_level: str = Form("mid"),
    platforms: str = Form("web"),
    db: Session = Depends(get_db),
):
    """Analyze several documents in sequence, pausing between AI calls."""
    platform_list = _split_platforms(platforms)
    results, failures = [], []

    for index, file in enumerate(files):
        if index > 0 and settings.AI_REQUEST_DELAY_SECONDS > 0:
            time.sleep(settings.AI_REQUEST_DELAY_SECONDS)
        filename = file.filename or "upload"
        try:
            results.append(_analyze_upload(file, db, project_type, experience_level, platform_list))
        except (ValueError, AIServiceError) as e:
            logger.warning("Batch analysis failed for %s: %s", filename, e)
            failures.append(DocumentFailure(filename=filename, error=str(e)))

    return BatchAnalysisResponse(results=results, failures=failures)
