"""Table-driven bounding of validated model payloads.

Every field the record may carry is declared in ``PAYLOAD_SCHEMA`` with a
rule. The fold walks the payload against that table: unknown keys are
dropped, missing sub-objects become their empty shapes, strings are cleaned
and HTML-escaped, lists are capped. Running the fold on its own output
returns the same value.
"""

import html
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

# C0/C1 controls except newline
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x09\x0b-\x1f\x7f-\x9f]")


def clean_text(value: Any, max_len: int, lower: bool = False) -> str:
    """Unescape, drop controls, trim, escape, cut at an entity boundary, right-trim.

    Lowercasing happens before the cut since it can lengthen a string.
    """
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return ""
    text = html.unescape(str(value))
    if lower:
        text = text.lower()
    text = _CONTROL_CHARS_RE.sub("", text).strip()
    text = html.escape(text)
    if len(text) > max_len:
        text = text[:max_len]
        amp = text.rfind("&")
        if amp != -1 and ";" not in text[amp:]:
            text = text[:amp]
    return text.rstrip()


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Text:
    max_len: int

    def apply(self, value: Any) -> str:
        return clean_text(value, self.max_len)

    def empty(self) -> str:
        return ""


@dataclass(frozen=True)
class NullableText:
    max_len: int
    lower: bool = False

    def apply(self, value: Any) -> str | None:
        return clean_text(value, self.max_len, lower=self.lower) or None

    def empty(self) -> None:
        return None


@dataclass(frozen=True)
class TextList:
    max_items: int
    item_len: int

    def apply(self, value: Any) -> list[str]:
        if not isinstance(value, list):
            return []
        items = (clean_text(item, self.item_len) for item in value)
        return [item for item in items if item][: self.max_items]

    def empty(self) -> list:
        return []


@dataclass(frozen=True)
class Integer:
    minimum: int = 0
    maximum: int | None = None
    default: int = 0

    def apply(self, value: Any) -> int:
        if isinstance(value, bool):
            return self.default
        if isinstance(value, str):
            try:
                value = float(value.strip())
            except ValueError:
                return self.default
        if not isinstance(value, (int, float)) or not math.isfinite(value):
            return self.default
        number = max(self.minimum, round(value))
        if self.maximum is not None:
            number = min(self.maximum, number)
        return number

    def empty(self) -> int:
        return self.default


@dataclass(frozen=True)
class Choice:
    values: tuple[str, ...]
    default: str

    def apply(self, value: Any) -> str:
        if isinstance(value, str):
            wanted = value.strip().lower()
            for choice in self.values:
                if choice.lower() == wanted:
                    return choice
        return self.default

    def empty(self) -> str:
        return self.default


@dataclass(frozen=True)
class Flag:
    def apply(self, value: Any) -> bool:
        return value if isinstance(value, bool) else False

    def empty(self) -> bool:
        return False


@dataclass(frozen=True)
class Obj:
    schema: dict[str, Any]

    def apply(self, value: Any) -> dict[str, Any]:
        if not isinstance(value, dict):
            return self.empty()
        return {
            key: rule.apply(value[key]) if key in value else rule.empty()
            for key, rule in self.schema.items()
        }

    def empty(self) -> dict[str, Any]:
        return {key: rule.empty() for key, rule in self.schema.items()}


@dataclass(frozen=True)
class ObjList:
    """List of objects; items missing any ``required`` field (or entirely empty) are dropped."""

    max_items: int
    schema: dict[str, Any]
    required: tuple[str, ...] = field(default=())

    def _keep(self, item: dict[str, Any]) -> bool:
        if self.required:
            return all(item.get(key) for key in self.required)
        return any(item.values())

    def apply(self, value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        shape = Obj(self.schema)
        items = [shape.apply(item) for item in value if isinstance(item, dict)]
        return [item for item in items if self._keep(item)][: self.max_items]

    def empty(self) -> list:
        return []


# ---------------------------------------------------------------------------
# Field table
# ---------------------------------------------------------------------------

IMPROVEMENT_SCHEMA = {
    "priority": Choice(("high", "medium", "low"), "medium"),
    "title": Text(100),
    "description": Text(400),
    "example": Text(250),
}

EXPERIENCE_SCHEMA = {
    "title": NullableText(150),
    "company": NullableText(150),
    "location": NullableText(100),
    "start_date": NullableText(50),
    "end_date": NullableText(50),
    "duration": NullableText(50),
    "description": NullableText(1000),
    "achievements": TextList(10, 300),
    "technologies": TextList(20, 50),
}

EDUCATION_SCHEMA = {
    "degree": NullableText(150),
    "field": NullableText(150),
    "institution": NullableText(200),
    "location": NullableText(100),
    "graduation_year": NullableText(10),
    "gpa": NullableText(10),
    "honors": TextList(5, 200),
    "coursework": TextList(10, 150),
}

CERTIFICATION_SCHEMA = {
    "name": NullableText(200),
    "issuer": NullableText(150),
    "date_obtained": NullableText(50),
    "expiration_date": NullableText(50),
    "credential_id": NullableText(100),
    "url": NullableText(300),
}

PROJECT_SCHEMA = {
    "name": NullableText(150),
    "description": NullableText(800),
    "role": NullableText(150),
    "duration": NullableText(50),
    "technologies": TextList(20, 50),
    "achievements": TextList(5, 300),
    "url": NullableText(300),
    "github": NullableText(300),
}

EXTRACTED_INFO_SCHEMA = {
    "personal_info": Obj({
        "name": NullableText(100),
        "email": NullableText(100, lower=True),
        "phone": NullableText(25),
        "address": Obj({
            "full": NullableText(300),
            "city": NullableText(100),
            "state": NullableText(100),
            "country": NullableText(100),
            "zip_code": NullableText(20),
        }),
        "social_profiles": Obj({
            "linkedin": NullableText(200),
            "github": NullableText(200),
            "portfolio": NullableText(200),
            "website": NullableText(200),
            "twitter": NullableText(200),
        }),
    }),
    "professional_summary": NullableText(1000),
    "skills": Obj({
        "technical": TextList(50, 50),
        "soft": TextList(20, 50),
        "languages": TextList(10, 100),
        "tools": TextList(30, 50),
        "frameworks": TextList(30, 50),
    }),
    "experience": ObjList(15, EXPERIENCE_SCHEMA),
    "education": ObjList(10, EDUCATION_SCHEMA),
    "certifications": ObjList(20, CERTIFICATION_SCHEMA),
    "projects": ObjList(15, PROJECT_SCHEMA),
    "awards": ObjList(10, {
        "title": NullableText(200),
        "issuer": NullableText(150),
        "date": NullableText(50),
        "description": NullableText(500),
    }),
    "publications": ObjList(10, {
        "title": NullableText(300),
        "type": NullableText(100),
        "date": NullableText(50),
        "description": NullableText(500),
        "url": NullableText(300),
    }),
    "volunteer_work": ObjList(10, {
        "organization": NullableText(200),
        "role": NullableText(150),
        "duration": NullableText(50),
        "description": NullableText(500),
    }),
    "interests": TextList(20, 100),
    "references": NullableText(200),
}

ANALYTICS_SCHEMA = {
    "word_count": Integer(),
    "page_count": Integer(minimum=1, default=1),
    "section_count": Integer(),
    "bullet_point_count": Integer(),
    "quantifiable_achievements": Integer(),
    "action_verbs_used": Integer(),
    "industry_keywords": TextList(50, 50),
    "readability_score": Integer(0, 100, 0),
    "ats_compatibility": Choice(("High", "Medium", "Low"), "Medium"),
    "missing_elements": TextList(10, 100),
    "strong_elements": TextList(10, 100),
}

CONTACT_VALIDATION_SCHEMA = {
    key: Flag()
    for key in (
        "has_email", "has_phone", "has_linkedin", "has_address",
        "email_valid", "phone_valid", "linkedin_valid",
    )
}

PAYLOAD_SCHEMA = {
    "feedback": Text(5000),
    "score": Integer(0, 100, 0),
    "strengths": TextList(6, 300),
    "weaknesses": TextList(5, 300),
    "improvements": ObjList(6, IMPROVEMENT_SCHEMA, required=("title", "description")),
    "extracted_info": Obj(EXTRACTED_INFO_SCHEMA),
    "resume_analytics": Obj(ANALYTICS_SCHEMA),
    "contact_validation": Obj(CONTACT_VALIDATION_SCHEMA),
}

_PAYLOAD = Obj(PAYLOAD_SCHEMA)
_EXTRACTED_INFO = Obj(EXTRACTED_INFO_SCHEMA)


def sanitize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    """Bound a validated payload to the declared field table."""
    dropped = sorted(set(payload) - set(PAYLOAD_SCHEMA)) if isinstance(payload, dict) else []
    if dropped:
        logger.debug("Dropping unknown payload fields: %s", ", ".join(dropped))
    return _PAYLOAD.apply(payload)


def sanitize_extracted_info(extracted_info: dict[str, Any]) -> dict[str, Any]:
    return _EXTRACTED_INFO.apply(extracted_info)
