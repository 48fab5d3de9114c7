"""User-chosen analysis preferences with default coercion."""

import logging
from typing import Any, Literal, get_args

from pydantic import BaseModel

logger = logging.getLogger(__name__)

Tone = Literal["mild", "balanced", "brutal"]
Language = Literal["english", "hindi", "hinglish"]
Style = Literal["funny", "serious", "sarcastic", "motivational"]
Audience = Literal["male", "female", "other"]

ALLOWED_VALUES: dict[str, tuple[str, ...]] = {
    "tone": get_args(Tone),
    "language": get_args(Language),
    "style": get_args(Style),
    "audience": get_args(Audience),
}

DEFAULTS: dict[str, str] = {
    "tone": "balanced",
    "language": "english",
    "style": "serious",
    "audience": "other",
}


class AnalysisConfig(BaseModel):
    tone: Tone = "balanced"
    language: Language = "english"
    style: Style = "serious"
    audience: Audience = "other"
    # Fields whose requested value was replaced by the default
    coerced_fields: list[str] = []

    @classmethod
    def from_raw(cls, raw: dict[str, Any] | None) -> "AnalysisConfig":
        """Build a config from untrusted input, coercing invalid values to defaults."""
        raw = raw or {}
        values: dict[str, str] = {}
        coerced: list[str] = []
        for field, allowed in ALLOWED_VALUES.items():
            value = raw.get(field)
            if isinstance(value, str) and value.strip().lower() in allowed:
                values[field] = value.strip().lower()
            else:
                values[field] = DEFAULTS[field]
                if value is not None:
                    coerced.append(field)

        if coerced:
            logger.warning("Analysis preferences coerced to defaults: %s", ", ".join(coerced))
        return cls(**values, coerced_fields=coerced)
