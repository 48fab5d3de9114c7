"""Recover one JSON object from free-form model output."""

import json
import logging
import re
from typing import Any

from services.errors import MalformedStructure, NoStructureFound

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
_LEADING_JSON_TAG_RE = re.compile(r"^\s*json\s*(?=\{)", re.IGNORECASE)

PREVIEW_CHARS = 200


def strip_fences(text: str) -> str:
    """Drop markdown code fences and a leading bare ``json`` tag."""
    cleaned = _FENCE_RE.sub("", text).strip()
    return _LEADING_JSON_TAG_RE.sub("", cleaned)


def find_object_span(text: str) -> tuple[int, int] | None:
    """Return ``(start, end)`` of the first balanced ``{...}`` in text.

    Braces inside string literals are ignored. Returns None when there is no
    opening brace or the object never closes.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return start, i + 1
    return None


def parse_response(raw: str) -> dict[str, Any]:
    """Extract and decode the JSON object embedded in model output."""
    cleaned = strip_fences(raw or "")
    span = find_object_span(cleaned)
    if span is None:
        logger.error("No JSON object found in model response: %r", cleaned[:PREVIEW_CHARS])
        raise NoStructureFound("No balanced JSON object in response")

    candidate = cleaned[span[0]:span[1]]
    try:
        value = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.error("Malformed JSON in model response (%s): %r", e, candidate[:PREVIEW_CHARS])
        raise MalformedStructure(f"JSON decoding failed: {e}") from e

    if not isinstance(value, dict):
        raise MalformedStructure("Decoded JSON is not an object")
    return value
