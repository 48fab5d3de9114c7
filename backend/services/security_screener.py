"""Suspicion scoring for resume text and raw analysis preferences.

Stateless: the request pipeline owns the suspicious/blocked counters.
"""

import logging
import re
from typing import Any

from config import settings
from models.schemas.analysis_config import ALLOWED_VALUES
from models.schemas.analysis_record import SecurityAssessment

logger = logging.getLogger(__name__)

INJECTION_PATTERNS: list[re.Pattern] = [
    re.compile(r"\bignore\s+previous\s+instructions\b", re.IGNORECASE),
    re.compile(r"\bforget\s+your\s+role\b", re.IGNORECASE),
    re.compile(r"\bact\s+as\b", re.IGNORECASE),
    re.compile(r"\bpretend\s+to\s+be\b", re.IGNORECASE),
    re.compile(r"\bsimulate\b", re.IGNORECASE),
    re.compile(r"\broleplay\b", re.IGNORECASE),
]
SCRIPT_RE = re.compile(r"<script|javascript:|eval\(|onclick", re.IGNORECASE)
SPECIAL_CHAR_RE = re.compile(r"[^a-zA-Z0-9\s]")

INJECTION_WEIGHT = 3
SPECIAL_CHARS_WEIGHT = 2
SCRIPT_WEIGHT = 5
INVALID_PREFERENCE_WEIGHT = 2
SPECIAL_CHAR_RATIO_LIMIT = 0.3


def _invalid_preference_count(raw_config: dict[str, Any] | None) -> int:
    count = 0
    for field, value in (raw_config or {}).items():
        if value is None:
            continue
        allowed = ALLOWED_VALUES.get(field)
        if allowed is None:
            continue
        if not isinstance(value, str) or value.strip().lower() not in allowed:
            count += 1
    return count


def screen(text: str, raw_config: dict[str, Any] | None = None) -> SecurityAssessment:
    """Score ``text`` and the untrusted preferences that came with it.

    Flags are an ordered set: each flag appears once, in the order its
    first contribution was found.
    """
    score = 0
    flags: list[str] = []

    def _add(points: int, flag: str) -> None:
        nonlocal score
        score += points
        if flag not in flags:
            flags.append(flag)

    for pattern in INJECTION_PATTERNS:
        if pattern.search(text):
            _add(INJECTION_WEIGHT, "potential_prompt_injection")

    if text:
        ratio = len(SPECIAL_CHAR_RE.findall(text)) / len(text)
        if ratio > SPECIAL_CHAR_RATIO_LIMIT:
            _add(SPECIAL_CHARS_WEIGHT, "excessive_special_chars")

    if SCRIPT_RE.search(text):
        _add(SCRIPT_WEIGHT, "script_content")

    for _ in range(_invalid_preference_count(raw_config)):
        _add(INVALID_PREFERENCE_WEIGHT, "invalid_preferences")

    blocked = score > settings.security_block_threshold
    flagged = score > settings.security_warn_threshold

    if flagged:
        logger.warning(
            "Suspicious content: score=%d flags=%s length=%d blocked=%s",
            score, flags, len(text), blocked,
        )

    return SecurityAssessment(score=score, flags=flags, flagged=flagged, blocked=blocked)
