"""Output of the heuristic extractor: best-effort entities found by pattern matching."""

from pydantic import BaseModel


class HeuristicExperience(BaseModel):
    """A single work experience entry."""
    title: str | None = None
    company: str | None = None
    duration: str | None = None


class HeuristicEducation(BaseModel):
    """A single education entry."""
    degree: str | None = None
    institution: str | None = None
    graduation_year: str | None = None


class HeuristicProject(BaseModel):
    name: str | None = None
    description: str | None = None
    technologies: list[str] = []


class DocumentStatistics(BaseModel):
    word_count: int = 0
    page_count: int = 1
    paragraph_count: int = 0
    bullet_point_count: int = 0


class HeuristicExtraction(BaseModel):
    """Structured output of the heuristic extractor.

    Every field is either derived from a direct text match or left empty.
    """
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    linkedin: str | None = None
    github: str | None = None
    website: str | None = None
    skills: list[str] = []
    soft_skills: list[str] = []
    experience: list[HeuristicExperience] = []
    education: list[HeuristicEducation] = []
    projects: list[HeuristicProject] = []
    total_years_experience: float = 0.0
    experience_level: str = "entry"  # entry, junior, mid, senior, executive
    sections_found: list[str] = []
    statistics: DocumentStatistics = DocumentStatistics()
