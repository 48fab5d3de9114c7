"""Orchestrator: resume roast analysis pipeline.

Pipeline:
1. Text normalization and length bounds
2. Preference coercion and security screening (may block before any model call)
3. Heuristic extraction (regex / keyword tables)
4. Prompt construction and the resilient model call
   (parse -> validate -> sanitize -> re-validate, retried per attempt)
5. Record assembly: merge, derived counters, ids, fingerprint, retention
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from config import settings
from models.responses import AnalysisResponse
from models.schemas.analysis_config import AnalysisConfig
from models.schemas.analysis_record import FileInfo, ProcessingInfo
from models.schemas.heuristic_extraction import HeuristicExtraction
from services.errors import (
    GENERIC_UNAVAILABLE,
    AnalysisError,
    AssemblyInvariantViolation,
    InputError,
    SecurityRejected,
)
from services.heuristic_extractor import extract_heuristics
from services.prompt_builder import build_analysis_prompt
from services.record_assembler import assemble_record
from services.request_pipeline import RequestPipeline
from services.response_parser import parse_response
from services.response_sanitizer import sanitize_payload
from services.response_validator import validate_payload
from services.security_screener import screen
from services.text_normalizer import normalize_text

logger = logging.getLogger(__name__)


def process_model_output(raw: str) -> dict[str, Any]:
    """Raw model text to a sanitized payload.

    Validation runs again after sanitizing because dropping empty items can
    empty a required list.
    """
    return validate_payload(sanitize_payload(validate_payload(parse_response(raw))))


def _check_length(text: str) -> None:
    if len(text) < settings.min_text_chars:
        raise InputError(
            f"{len(text)} chars after normalization",
            code="INSUFFICIENT_CONTENT",
            user_message=f"Resume content is too short for analysis (minimum {settings.min_text_chars} characters)",
        )
    if len(text) > settings.max_text_chars:
        raise InputError(
            f"{len(text)} chars after normalization",
            code="CONTENT_TOO_LARGE",
            user_message=f"Resume content is too long (maximum {settings.max_text_chars} characters)",
        )


def _safe_heuristics(text: str, request_id: str) -> HeuristicExtraction:
    try:
        return extract_heuristics(text)
    except Exception:
        logger.exception("[%s] Heuristic extraction failed, continuing without it", request_id)
        return HeuristicExtraction()


def _failure(request_id: str, error: AnalysisError) -> AnalysisResponse:
    return AnalysisResponse(
        success=False,
        error_code=error.code,
        user_message=GENERIC_UNAVAILABLE if error.retryable else error.user_message,
        request_id=request_id,
    )


async def analyze(
    resume_text: Any,
    raw_config: dict[str, Any] | None = None,
    *,
    pipeline: RequestPipeline,
    file_info: FileInfo | None = None,
) -> AnalysisResponse:
    """Run the full analysis and wrap the outcome in the response envelope."""
    request_id = str(uuid.uuid4())
    received_at = datetime.now(timezone.utc)

    try:
        # --- Layer 1: Normalization ---
        if not isinstance(resume_text, str):
            raise InputError("resume text is not a string")
        text = normalize_text(resume_text)
        _check_length(text)

        # --- Layer 2: Preferences + security ---
        config = AnalysisConfig.from_raw(raw_config)
        security = screen(text, raw_config)
        if security.flagged:
            pipeline.metrics.record_suspicious()
        if security.blocked:
            pipeline.metrics.record_blocked()
            logger.warning("[%s] Request blocked: score=%d flags=%s", request_id, security.score, security.flags)
            raise SecurityRejected(security.score, security.flags)

        # --- Layer 3: Heuristic extraction ---
        heuristics = _safe_heuristics(text, request_id)

        # --- Layer 4: Model call ---
        logger.info(
            "[%s] Starting analysis: %d chars, tone=%s language=%s",
            request_id, len(text), config.tone, config.language,
        )
        prompt = build_analysis_prompt(text, config)
        outcome = await pipeline.run(prompt, process_model_output, request_id=request_id)

        # --- Layer 5: Record assembly ---
        record = assemble_record(
            outcome.payload,
            heuristics,
            text=text,
            config=config,
            security=security,
            processing=ProcessingInfo(
                model=pipeline.model_name,
                attempts=outcome.attempts,
                retries=outcome.retries,
                latency_ms=outcome.latency_ms,
            ),
            request_id=request_id,
            received_at=received_at,
            file_info=file_info,
        )

    except AssemblyInvariantViolation as e:
        logger.critical("[%s] Record failed invariant check: %s", request_id, e, exc_info=True)
        return _failure(request_id, e)
    except AnalysisError as e:
        logger.warning("[%s] Analysis failed (%s): %s", request_id, e.code, e)
        return _failure(request_id, e)

    logger.info("[%s] Analysis complete: score=%d resume_id=%s", request_id, record.score, record.resume_id)
    return AnalysisResponse(success=True, record=record, request_id=request_id)
