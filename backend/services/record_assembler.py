"""Merge sanitized model output with heuristic extraction into an AnalysisRecord."""

import copy
import hashlib
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from config import settings
from models.schemas.analysis_config import AnalysisConfig
from models.schemas.analysis_record import (
    AnalysisRecord,
    FileInfo,
    Improvement,
    ProcessingInfo,
    RecordCounters,
    SecurityAssessment,
)
from models.schemas.heuristic_extraction import HeuristicExtraction
from services.errors import AssemblyInvariantViolation
from services.response_sanitizer import PAYLOAD_SCHEMA, sanitize_extracted_info, sanitize_payload

logger = logging.getLogger(__name__)


def content_hash(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def merge_extracted_info(ai_info: dict[str, Any], heuristics: HeuristicExtraction) -> dict[str, Any]:
    """Fill gaps in the model's extraction with heuristic values.

    Model values win whenever they are present and non-empty. The result is
    sanitized again so heuristic values obey the same bounds.
    """
    info = sanitize_extracted_info(copy.deepcopy(ai_info))
    personal = info["personal_info"]
    social = personal["social_profiles"]

    for key in ("name", "email", "phone"):
        if not personal[key] and getattr(heuristics, key):
            personal[key] = getattr(heuristics, key)
    for key in ("linkedin", "github", "website"):
        if not social[key] and getattr(heuristics, key):
            social[key] = getattr(heuristics, key)

    if not info["skills"]["technical"] and heuristics.skills:
        info["skills"]["technical"] = list(heuristics.skills)
    if not info["experience"] and heuristics.experience:
        info["experience"] = [exp.model_dump() for exp in heuristics.experience]
    if not info["education"] and heuristics.education:
        info["education"] = [edu.model_dump() for edu in heuristics.education]
    if not info["projects"] and heuristics.projects:
        info["projects"] = [proj.model_dump() for proj in heuristics.projects]

    return sanitize_extracted_info(info)


def compute_counters(payload: dict[str, Any], info: dict[str, Any]) -> RecordCounters:
    skills = info["skills"]
    return RecordCounters(
        skills_count=len(skills["technical"]),
        soft_skills_count=len(skills["soft"]),
        experience_count=len(info["experience"]),
        education_count=len(info["education"]),
        certifications_count=len(info["certifications"]),
        projects_count=len(info["projects"]),
        strengths_count=len(payload["strengths"]),
        weaknesses_count=len(payload["weaknesses"]),
        improvements_count=len(payload["improvements"]),
    )


def check_invariants(record: AnalysisRecord) -> None:
    """Re-check every bound on the finished record."""
    problems: list[str] = []
    if not 0 <= record.score <= 100:
        problems.append(f"score {record.score} out of range")
    if not record.feedback:
        problems.append("empty feedback")
    for name in ("strengths", "weaknesses", "improvements"):
        if not getattr(record, name):
            problems.append(f"no {name}")

    bounded = {
        "feedback": record.feedback,
        "score": record.score,
        "strengths": record.strengths,
        "weaknesses": record.weaknesses,
        "improvements": [imp.model_dump() for imp in record.improvements],
        "extracted_info": record.extracted_info,
        "resume_analytics": record.resume_analytics,
        "contact_validation": record.contact_validation,
    }
    # The sanitizer is a fixed point on in-bounds values
    for name, value in sanitize_payload(bounded).items():
        if value != bounded[name]:
            problems.append(f"{name} exceeds declared bounds")

    if problems:
        raise AssemblyInvariantViolation("; ".join(problems))


def assemble_record(
    payload: dict[str, Any],
    heuristics: HeuristicExtraction,
    *,
    text: str,
    config: AnalysisConfig,
    security: SecurityAssessment,
    processing: ProcessingInfo,
    request_id: str,
    received_at: datetime,
    file_info: FileInfo | None = None,
) -> AnalysisRecord:
    """Build the persistence-ready record. Raises AssemblyInvariantViolation on a bound breach."""
    missing = [key for key in PAYLOAD_SCHEMA if key not in payload]
    if missing:
        raise AssemblyInvariantViolation(f"sanitized payload missing {', '.join(missing)}")

    info = merge_extracted_info(payload["extracted_info"], heuristics)
    retention_days = settings.data_retention_days

    record = AnalysisRecord(
        request_id=request_id,
        resume_id=str(uuid.uuid4()),
        content_hash=content_hash(text),
        feedback=payload["feedback"],
        score=payload["score"],
        strengths=list(payload["strengths"]),
        weaknesses=list(payload["weaknesses"]),
        improvements=[Improvement(**imp) for imp in payload["improvements"]],
        extracted_info=info,
        resume_analytics=copy.deepcopy(payload["resume_analytics"]),
        contact_validation=dict(payload["contact_validation"]),
        counters=compute_counters(payload, info),
        experience_level=heuristics.experience_level,
        statistics=heuristics.statistics.model_dump(),
        preferences=config,
        security=security,
        file_info=file_info,
        processing=processing,
        received_at=received_at,
        completed_at=datetime.now(timezone.utc),
        expires_at=received_at + timedelta(days=retention_days),
        retention_days=retention_days,
    )

    check_invariants(record)
    return record
