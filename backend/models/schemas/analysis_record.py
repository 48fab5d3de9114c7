"""The persisted analysis record and the pieces it is assembled from."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel

from models.schemas.analysis_config import AnalysisConfig


class SecurityAssessment(BaseModel):
    score: int = 0
    flags: list[str] = []
    flagged: bool = False
    blocked: bool = False


class Improvement(BaseModel):
    priority: Literal["high", "medium", "low"] = "medium"
    title: str
    description: str
    example: str = ""


class RecordCounters(BaseModel):
    """Counters derived from the final merged lists, never taken from the model."""
    skills_count: int = 0
    soft_skills_count: int = 0
    experience_count: int = 0
    education_count: int = 0
    certifications_count: int = 0
    projects_count: int = 0
    strengths_count: int = 0
    weaknesses_count: int = 0
    improvements_count: int = 0


class FileInfo(BaseModel):
    file_name: str = "unknown"
    file_size: int = 0
    mime_type: str = ""


class ProcessingInfo(BaseModel):
    model: str = ""
    attempts: int = 1
    retries: int = 0
    latency_ms: int = 0
    analysis_version: str = "3.0"


class AnalysisRecord(BaseModel):
    request_id: str
    resume_id: str
    content_hash: str

    feedback: str
    score: int
    strengths: list[str]
    weaknesses: list[str]
    improvements: list[Improvement]
    extracted_info: dict[str, Any] = {}
    resume_analytics: dict[str, Any] = {}
    contact_validation: dict[str, Any] = {}

    counters: RecordCounters = RecordCounters()
    experience_level: str = "entry"
    statistics: dict[str, int] = {}
    preferences: AnalysisConfig = AnalysisConfig()
    security: SecurityAssessment = SecurityAssessment()
    file_info: FileInfo | None = None
    processing: ProcessingInfo = ProcessingInfo()

    received_at: datetime
    completed_at: datetime
    expires_at: datetime
    retention_days: int = 90
