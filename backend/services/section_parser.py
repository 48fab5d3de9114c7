"""Resume section segmentation, contact extraction and date-range parsing."""

import re
from datetime import datetime

# Section header patterns and their canonical names
SECTION_PATTERNS: dict[str, list[str]] = {
    "experience": [
        r"(?:work|professional|employment)\s*(?:experience|history)",
        r"experience",
        r"career\s*(?:history|path)",
        r"(?:positions?\s*held|roles)",
    ],
    "education": [
        r"education(?:al)?\s*(?:background|qualifications|history)?",
        r"academic\s*(?:background|qualifications)",
        r"qualifications",
    ],
    "skills": [
        r"(?:technical|core|key|professional)?\s*skills",
        r"(?:technical|core)?\s*(?:competencies|proficiencies|expertise)",
        r"technologies",
        r"(?:technical\s+)?(?:stack|toolkit)",
    ],
    "summary": [
        r"(?:professional|executive|career)?\s*summary",
        r"(?:career|professional)?\s*objective",
        r"profile",
        r"about\s*me",
    ],
    "projects": [
        r"(?:key|notable|selected|personal|academic)?\s*projects",
        r"portfolio",
    ],
    "certifications": [
        r"certific(?:ations?|ates?)",
        r"licen[sc]es?\s*(?:&|and)?\s*certific(?:ations?|ates?)",
    ],
}

# Compile all patterns into a single regex per section
_COMPILED: dict[str, re.Pattern] = {}
for section, patterns in SECTION_PATTERNS.items():
    combined = "|".join(patterns)
    _COMPILED[section] = re.compile(
        rf"^\s*(?:{combined})\s*:?\s*$", re.IGNORECASE
    )

# A header line must be short; longer lines are content that happens to
# mention a section word.
MAX_HEADER_CHARS = 50

# Contact info patterns
EMAIL_RE = re.compile(r"\b[\w.%+-]+@[\w-]+(?:\.[\w-]+)*\.[A-Za-z]{2,}\b")
PHONE_RE = re.compile(r"(?<![\d-])(?:\+?\d{1,3}[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}(?!\d)")
LINKEDIN_RE = re.compile(r"linkedin\.com/in/([\w-]+)", re.IGNORECASE)
GITHUB_RE = re.compile(r"github\.com/([\w-]+)", re.IGNORECASE)
URL_RE = re.compile(r"(?:https?://|www\.)[^\s,;|()<>]+", re.IGNORECASE)


def match_section_header(line: str) -> str | None:
    """Return the canonical section name if ``line`` is a section header."""
    stripped = line.strip()
    if not stripped or len(stripped) >= MAX_HEADER_CHARS:
        return None
    for section_name, pattern in _COMPILED.items():
        if pattern.match(stripped):
            return section_name
    return None


def split_paragraphs(text: str) -> list[str]:
    return [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]


def parse_sections(text: str) -> dict[str, list[str]]:
    """Group paragraphs under the section whose header precedes them.

    A paragraph opens a section when its first line is a short section
    header; the header's remaining lines and every following paragraph
    belong to that section until the next header. Paragraphs before the
    first header go into 'header'.
    """
    sections: dict[str, list[str]] = {}
    current_section = "header"

    for paragraph in split_paragraphs(text):
        first_line, _, rest = paragraph.partition("\n")
        matched_section = match_section_header(first_line)
        if matched_section:
            current_section = matched_section
            sections.setdefault(current_section, [])
            if rest.strip():
                sections[current_section].append(rest.strip())
        else:
            sections.setdefault(current_section, []).append(paragraph)

    return sections


def extract_contact_info(text: str) -> dict[str, str | None]:
    """Extract contact details using fixed-format patterns."""
    email_match = EMAIL_RE.search(text)
    phone_match = PHONE_RE.search(text)
    linkedin_match = LINKEDIN_RE.search(text)
    github_match = GITHUB_RE.search(text)

    website = None
    for url_match in URL_RE.finditer(text):
        url = url_match.group().rstrip(".")
        lower = url.lower()
        if "linkedin.com" in lower or "github.com" in lower:
            continue
        website = url if lower.startswith("http") else f"https://{url}"
        break

    return {
        "email": email_match.group().lower() if email_match else None,
        "phone": phone_match.group().strip() if phone_match else None,
        "linkedin": f"https://linkedin.com/in/{linkedin_match.group(1)}" if linkedin_match else None,
        "github": f"https://github.com/{github_match.group(1)}" if github_match else None,
        "website": website,
    }


# ---------------------------------------------------------------------------
# Experience duration extraction
# ---------------------------------------------------------------------------

# "5+ years of experience" or "3 years experience in Python"
EXP_YEARS_RE = re.compile(
    r"(\d+)\+?\s*(?:years?|yrs?)\s*(?:of\s+)?(?:experience|exp\b)",
    re.IGNORECASE,
)

# Date ranges: "Jan 2019 - Present", "2020 - 2023", "March 2018 – Nov 2022"
_MONTHS = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|"
    r"Jul(?:y)?|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
DATE_RANGE_RE = re.compile(
    rf"({_MONTHS}\.?\s*\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}})"
    r"\s*(?:[-–—]+|to)\s*"
    rf"({_MONTHS}\.?\s*\d{{4}}|\d{{1,2}}/\d{{4}}|\d{{4}}|[Pp]resent|[Cc]urrent)",
    re.IGNORECASE,
)

_MONTH_MAP = {
    "jan": 1, "january": 1, "feb": 2, "february": 2, "mar": 3, "march": 3,
    "apr": 4, "april": 4, "may": 5, "jun": 6, "june": 6,
    "jul": 7, "july": 7, "aug": 8, "august": 8, "sep": 9, "sept": 9,
    "september": 9, "oct": 10, "october": 10, "nov": 11, "november": 11,
    "dec": 12, "december": 12,
}


def _parse_date(date_str: str) -> tuple[int, int]:
    """Parse a date string into (year, month). Returns (year, 1) if month not found."""
    date_str = date_str.strip().rstrip(".")
    if date_str.lower() in ("present", "current"):
        now = datetime.now()
        return now.year, now.month

    # "MM/YYYY"
    if "/" in date_str:
        month_part, _, year_part = date_str.partition("/")
        if month_part.isdigit() and year_part.isdigit() and 1 <= int(month_part) <= 12:
            return int(year_part), int(month_part)
        return 0, 0

    # "Month Year"
    parts = date_str.split()
    if len(parts) == 2:
        month_str = parts[0].lower().rstrip(".")
        if month_str in _MONTH_MAP and parts[1].isdigit():
            return int(parts[1]), _MONTH_MAP[month_str]

    # Bare year
    if date_str.isdigit():
        year = int(date_str)
        if 1970 <= year <= 2100:
            return year, 1

    return 0, 0


def extract_experience_years(text: str, date_text: str | None = None) -> float:
    """Estimate total years of experience.

    Uses explicit claims ("5+ years of experience") found in ``text`` and the
    sum of role date ranges found in ``date_text`` (defaults to ``text``).
    Returns the higher estimate.
    """
    explicit_years = 0.0
    for match in EXP_YEARS_RE.finditer(text):
        years = int(match.group(1))
        if years > explicit_years and years < 60:
            explicit_years = float(years)

    total_months = 0
    for match in DATE_RANGE_RE.finditer(text if date_text is None else date_text):
        start_year, start_month = _parse_date(match.group(1))
        end_year, end_month = _parse_date(match.group(2))
        if start_year > 0 and end_year > 0:
            months = (end_year - start_year) * 12 + (end_month - start_month)
            if 0 < months < 600:  # Sanity: < 50 years
                total_months += months

    date_years = round(total_months / 12, 1) if total_months > 0 else 0.0
    return max(explicit_years, date_years)
