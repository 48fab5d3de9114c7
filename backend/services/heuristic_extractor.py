"""Pattern-based entity extraction used to fill gaps in the model's output.

Everything here is best-effort: a field is populated only from a direct text
match and is otherwise left empty. Nothing in this module raises on odd input.
"""

import logging
import math
import re

from models.schemas.heuristic_extraction import (
    DocumentStatistics,
    HeuristicEducation,
    HeuristicExperience,
    HeuristicExtraction,
    HeuristicProject,
)
from services.section_parser import (
    DATE_RANGE_RE,
    extract_contact_info,
    extract_experience_years,
    parse_sections,
    split_paragraphs,
)
from services.skill_extractor import extract_soft_skills, extract_technical_skills

logger = logging.getLogger(__name__)

MAX_SKILLS = 50
MAX_EXPERIENCE = 15
MAX_EDUCATION = 10
MAX_PROJECTS = 15

WORDS_PER_PAGE = 250

BULLET_MARKERS = ("•", "◦", "▪", "▸", "►", "‣", "⁃", "-", "*", "–", "—", "○")

# Case-sensitive on purpose: role titles are capitalized, prose mentions are not
TITLE_RE = re.compile(
    r"\b(?:Engineer|Developer|Manager|Analyst|Designer|Consultant|Intern|Lead|"
    r"Director|Architect|Scientist|Administrator|Specialist|Officer|Coordinator|"
    r"Associate|Programmer|Executive|President|Founder|CEO|CTO|CFO|COO)\b"
)
ORG_RE = re.compile(
    r"\b(?:Inc|LLC|Ltd|Corp|Corporation|Company|Co|Limited|Technologies|Solutions|"
    r"Systems|Services|Labs|Group|Pvt|GmbH|Software|Consulting)\b\.?"
)
DEGREE_RE = re.compile(
    r"\b(?:Bachelor(?:'s)?|Master(?:'s)?|Ph\.?D\.?|Doctorate|Associate(?:'s)? Degree|Diploma|"
    r"B\.?S\.?c?|M\.?S\.?c?|B\.?A\.?|M\.?A\.?|MBA|B\.?Tech|M\.?Tech|B\.?E\.?|M\.?E\.?)(?=[\s,.(]|$)"
)
INSTITUTION_RE = re.compile(r"\b(?:University|College|Institute|School|Academy|Polytechnic)\b")
YEAR_RE = re.compile(r"\b(?:19|20)\d{2}\b")

_SEGMENT_SPLIT_RE = re.compile(r"\s*(?:\||,|;|\s[–—-]\s|\s+at\s+|\s+@\s+)\s*")
_NAME_WORD_RE = re.compile(r"^[A-Z][A-Za-z.'-]*$")
_NAME_STOPWORDS = {"resume", "curriculum", "vitae", "cv", "profile"}

# Sections whose text is scanned for skill vocabulary
_SKILL_SECTIONS = ("skills", "experience", "projects", "summary", "certifications")


def _is_bullet(line: str) -> bool:
    return line.lstrip().startswith(BULLET_MARKERS)


def _strip_bullet(line: str) -> str:
    stripped = line.strip()
    while stripped.startswith(BULLET_MARKERS):
        stripped = stripped[1:].lstrip()
    return stripped


def _segments(line: str) -> list[str]:
    return [s.strip() for s in _SEGMENT_SPLIT_RE.split(line) if s and s.strip()]


def _section_lines(sections: dict[str, list[str]], name: str) -> list[str]:
    lines: list[str] = []
    for paragraph in sections.get(name, []):
        lines.extend(line.strip() for line in paragraph.split("\n") if line.strip())
    return lines


def extract_name(text: str) -> str | None:
    """Title-case line of two to four words among the first five lines."""
    lines = [line.strip() for line in text.split("\n") if line.strip()][:5]
    for line in lines:
        if "@" in line or "http" in line.lower() or "www." in line.lower():
            continue
        if len(line) > 50 or any(ch.isdigit() for ch in line):
            continue
        words = line.split()
        if not 2 <= len(words) <= 4:
            continue
        if any(w.lower().strip(".") in _NAME_STOPWORDS for w in words):
            continue
        if all(_NAME_WORD_RE.match(w) for w in words):
            return line
    return None


def extract_experience(lines: list[str]) -> list[HeuristicExperience]:
    """Title lines, with a company and date range from the same or next two lines."""
    entries: list[HeuristicExperience] = []
    for idx, line in enumerate(lines):
        if _is_bullet(line) or len(line) >= 100:
            continue
        segments = _segments(line)
        title = next((s for s in segments if TITLE_RE.search(s)), None)
        if title is None:
            continue

        window = [line]
        for following in lines[idx + 1 : idx + 3]:
            if not _is_bullet(following) and TITLE_RE.search(following):
                break
            window.append(following)

        company = None
        for window_line in window:
            company = next(
                (s for s in _segments(window_line) if s != title and ORG_RE.search(s)),
                None,
            )
            if company:
                break

        duration = None
        for window_line in window:
            date_match = DATE_RANGE_RE.search(window_line)
            if date_match:
                duration = date_match.group()
                break

        # Keep the title clean when the date range sits on the same segment
        if duration and duration in title:
            title = title.replace(duration, "").strip(" ,|-–—(")
        if not title:
            continue

        entries.append(HeuristicExperience(title=title, company=company, duration=duration))
        if len(entries) >= MAX_EXPERIENCE:
            break
    return entries


def extract_education(lines: list[str]) -> list[HeuristicEducation]:
    """Degree lines, with an institution and year from the same or next two lines."""
    entries: list[HeuristicEducation] = []
    for idx, line in enumerate(lines):
        if len(line) >= 200:
            continue
        segments = _segments(line)
        degree = next((s for s in segments if DEGREE_RE.search(s)), None)
        if degree is None:
            continue

        window = [line]
        for following in lines[idx + 1 : idx + 3]:
            if DEGREE_RE.search(following):
                break
            window.append(following)

        institution = None
        year = None
        for window_line in window:
            if institution is None:
                institution = next(
                    (s for s in _segments(window_line) if s != degree and INSTITUTION_RE.search(s)),
                    None,
                )
            if year is None:
                years = YEAR_RE.findall(window_line)
                if years:
                    year = years[-1]

        if institution is None and INSTITUTION_RE.search(degree):
            institution = degree

        entries.append(
            HeuristicEducation(degree=_strip_bullet(degree), institution=institution, graduation_year=year)
        )
        if len(entries) >= MAX_EDUCATION:
            break
    return entries


def extract_projects(paragraphs: list[str]) -> list[HeuristicProject]:
    """One project per paragraph: the first line names it, the rest describes it."""
    projects: list[HeuristicProject] = []
    for paragraph in paragraphs:
        lines = [line.strip() for line in paragraph.split("\n") if line.strip()]
        if not lines:
            continue
        name = _strip_bullet(lines[0])
        if not name or len(name) >= 100:
            continue
        description = " ".join(_strip_bullet(line) for line in lines[1:]) or None
        projects.append(
            HeuristicProject(
                name=name,
                description=description,
                technologies=extract_technical_skills(paragraph)[:20],
            )
        )
        if len(projects) >= MAX_PROJECTS:
            break
    return projects


def experience_level_for(years: float) -> str:
    if years <= 0:
        return "entry"
    if years <= 2:
        return "junior"
    if years <= 5:
        return "mid"
    if years <= 10:
        return "senior"
    return "executive"


def compute_statistics(text: str) -> DocumentStatistics:
    word_count = len(text.split())
    lines = [line for line in text.split("\n") if line.strip()]
    return DocumentStatistics(
        word_count=word_count,
        page_count=max(1, math.ceil(word_count / WORDS_PER_PAGE)),
        paragraph_count=len(split_paragraphs(text)),
        bullet_point_count=sum(1 for line in lines if _is_bullet(line)),
    )


def extract_heuristics(text: str) -> HeuristicExtraction:
    """Run every heuristic over normalized resume text."""
    if not text or not text.strip():
        return HeuristicExtraction()

    sections = parse_sections(text)
    contact = extract_contact_info(text)

    skill_text = "\n".join(
        paragraph for name in _SKILL_SECTIONS for paragraph in sections.get(name, [])
    )
    skills = extract_technical_skills(skill_text)[:MAX_SKILLS] if skill_text else []
    soft_skills = extract_soft_skills(skill_text)[:MAX_SKILLS] if skill_text else []

    experience_text = "\n".join(sections.get("experience", []))
    total_years = extract_experience_years(text, experience_text)

    result = HeuristicExtraction(
        name=extract_name(text),
        email=contact["email"],
        phone=contact["phone"],
        linkedin=contact["linkedin"],
        github=contact["github"],
        website=contact["website"],
        skills=skills,
        soft_skills=soft_skills,
        experience=extract_experience(_section_lines(sections, "experience")),
        education=extract_education(_section_lines(sections, "education")),
        projects=extract_projects(sections.get("projects", [])),
        total_years_experience=total_years,
        experience_level=experience_level_for(total_years),
        sections_found=[name for name in sections if name != "header"],
        statistics=compute_statistics(text),
    )

    logger.debug(
        "Heuristics: %d skills, %d experience, %d education, %d projects, level=%s",
        len(result.skills), len(result.experience), len(result.education),
        len(result.projects), result.experience_level,
    )
    return result
