"""Structural checks on a parsed model payload. No sanitization happens here."""

import logging
from typing import Any

from services.errors import SchemaViolation

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("feedback", "score", "strengths", "weaknesses", "improvements")
IMPROVEMENT_PRIORITIES = ("high", "medium", "low")

# Optional sub-objects: absent or null is fine, anything else must be an object
OPTIONAL_OBJECTS = {
    "extracted_info": "INVALID_EXTRACTED_INFO_STRUCTURE",
    "resume_analytics": "INVALID_ANALYTICS_STRUCTURE",
    "contact_validation": "INVALID_CONTACT_VALIDATION_STRUCTURE",
}


def _fail(code: str, detail: str) -> SchemaViolation:
    logger.error("Model response failed validation: %s (%s)", code, detail)
    return SchemaViolation(code, detail)


def _non_empty_list(value: Any) -> bool:
    return isinstance(value, list) and len(value) > 0


def validate_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Raise ``SchemaViolation`` on the first failed rule, else return the payload."""
    for field in REQUIRED_FIELDS:
        if field not in payload:
            raise _fail(f"MISSING_FIELD_{field.upper()}", f"'{field}' missing")

    score = payload["score"]
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not 0 <= score <= 100:
        raise _fail("INVALID_SCORE", f"score={score!r}")

    if not _non_empty_list(payload["strengths"]):
        raise _fail("INVALID_STRENGTHS", "strengths must be a non-empty list")
    if not _non_empty_list(payload["weaknesses"]):
        raise _fail("INVALID_WEAKNESSES", "weaknesses must be a non-empty list")

    improvements = payload["improvements"]
    if not _non_empty_list(improvements):
        raise _fail("INVALID_IMPROVEMENTS", "improvements must be a non-empty list")
    for i, item in enumerate(improvements):
        if not isinstance(item, dict) or not all(item.get(k) for k in ("priority", "title", "description")):
            raise _fail("INVALID_IMPROVEMENT_STRUCTURE", f"improvement #{i}")
        priority = item["priority"]
        if not isinstance(priority, str) or priority.strip().lower() not in IMPROVEMENT_PRIORITIES:
            raise _fail("INVALID_IMPROVEMENT_PRIORITY", f"improvement #{i} priority={priority!r}")

    feedback = payload["feedback"]
    if not isinstance(feedback, str) or not feedback.strip():
        raise _fail("INVALID_FEEDBACK", "feedback must be a non-empty string")

    for field, code in OPTIONAL_OBJECTS.items():
        value = payload.get(field)
        if value is not None and not isinstance(value, dict):
            raise _fail(code, f"{field} is {type(value).__name__}")

    return payload
