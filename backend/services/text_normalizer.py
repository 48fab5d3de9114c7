"""Clean raw extracted resume text before analysis."""

import re

_HORIZONTAL_WS_RE = re.compile(r"[ \t\f\v]+")
_EXCESS_BLANK_LINES_RE = re.compile(r"\n{3,}")
# C0 controls except \n, DEL and C1 controls
_CONTROL_CHARS_RE = re.compile(r"[\x00-\x09\x0b-\x1f\x7f-\x9f]")


def normalize_text(text: str | None) -> str:
    """Normalize line endings and whitespace, drop control characters, trim.

    Best-effort: never raises. Length checks happen downstream.
    """
    if not text:
        return ""

    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_WS_RE.sub(" ", text)
    text = _CONTROL_CHARS_RE.sub("", text)
    text = "\n".join(line.strip() for line in text.split("\n"))
    text = _EXCESS_BLANK_LINES_RE.sub("\n\n", text)
    return text.strip()
