"""Tests for structural validation of model payloads."""

import pytest

from services.errors import SchemaViolation
from services.response_validator import validate_payload


def _violation(payload) -> str:
    with pytest.raises(SchemaViolation) as exc_info:
        validate_payload(payload)
    assert exc_info.value.retryable
    return exc_info.value.code


def test_valid_payload_passes(valid_payload):
    assert validate_payload(valid_payload) is valid_payload


@pytest.mark.parametrize("field", ["feedback", "score", "strengths", "weaknesses", "improvements"])
def test_missing_required_field(valid_payload, field):
    del valid_payload[field]
    assert _violation(valid_payload) == f"MISSING_FIELD_{field.upper()}"


@pytest.mark.parametrize("score", [-1, 101, "80", True, None])
def test_invalid_score(valid_payload, score):
    valid_payload["score"] = score
    assert _violation(valid_payload) == "INVALID_SCORE"


def test_float_score_in_range_passes(valid_payload):
    valid_payload["score"] = 72.5
    validate_payload(valid_payload)


@pytest.mark.parametrize(
    "field, value, code",
    [
        ("strengths", [], "INVALID_STRENGTHS"),
        ("weaknesses", "none", "INVALID_WEAKNESSES"),
        ("improvements", [], "INVALID_IMPROVEMENTS"),
        ("feedback", "   ", "INVALID_FEEDBACK"),
        ("feedback", 42, "INVALID_FEEDBACK"),
    ],
)
def test_invalid_collections_and_feedback(valid_payload, field, value, code):
    valid_payload[field] = value
    assert _violation(valid_payload) == code


def test_improvement_missing_title(valid_payload):
    valid_payload["improvements"][0]["title"] = ""
    assert _violation(valid_payload) == "INVALID_IMPROVEMENT_STRUCTURE"


def test_improvement_not_an_object(valid_payload):
    valid_payload["improvements"] = ["just text"]
    assert _violation(valid_payload) == "INVALID_IMPROVEMENT_STRUCTURE"


def test_improvement_bad_priority(valid_payload):
    valid_payload["improvements"][0]["priority"] = "urgent"
    assert _violation(valid_payload) == "INVALID_IMPROVEMENT_PRIORITY"


@pytest.mark.parametrize(
    "field, code",
    [
        ("extracted_info", "INVALID_EXTRACTED_INFO_STRUCTURE"),
        ("resume_analytics", "INVALID_ANALYTICS_STRUCTURE"),
        ("contact_validation", "INVALID_CONTACT_VALIDATION_STRUCTURE"),
    ],
)
def test_optional_objects_must_be_objects(valid_payload, field, code):
    valid_payload[field] = ["not", "an", "object"]
    assert _violation(valid_payload) == code


def test_optional_objects_may_be_missing_or_null(valid_payload):
    del valid_payload["extracted_info"]
    valid_payload["resume_analytics"] = None
    validate_payload(valid_payload)


def test_missing_fields_checked_before_score(valid_payload):
    valid_payload["score"] = 500
    del valid_payload["weaknesses"]
    assert _violation(valid_payload) == "MISSING_FIELD_WEAKNESSES"
