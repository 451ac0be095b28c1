from sqlalchemy import Column, DateTime, Float, Integer, JSON, String, Text
from datetime import datetime
import uuid

from .database import Base


class SavedEstimate(Base):
    """Snapshot of an estimate and the configuration it was calculated from."""
    __tablename__ = "project_estimates"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    project_name = Column(String, nullable=False)
    project_type = Column(String, nullable=False, index=True)
    project_stage = Column(String, nullable=True)
    # Comma-joined when several platforms were selected for the adjustment pass
    platform = Column(String, nullable=False, index=True)
    complexity = Column(String, nullable=False)
    total_hours = Column(Float, default=0.0)
    total_weeks = Column(Float, default=0.0)
    total_cost = Column(Float, default=0.0)
    form_data = Column(JSON, nullable=False)  # ProjectConfiguration snapshot
    stage_estimates = Column(JSON, nullable=False)  # list of StageEstimate
    custom_items = Column(JSON, default=list)
    adjustments = Column(JSON, nullable=True)  # AdjustedEstimate minus base, when applied
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, index=True)


class DocumentAnalysisRecord(Base):
    """Stored AI document analysis — users may revisit a previous upload's suggestions."""
    __tablename__ = "document_analyses"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    filename = Column(String, nullable=True)
    page_count = Column(Integer, nullable=True)
    extraction_quality = Column(String, nullable=True)
    confidence_score = Column(Float, nullable=True)
    analysis_json = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
