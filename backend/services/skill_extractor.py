"""Keyword-table skill extraction.

Matches known skill vocabulary against resume text with word-boundary
regexes, returning display names ordered by first appearance.
"""

import re

PROGRAMMING_LANGUAGES: tuple[str, ...] = (
    "Python", "JavaScript", "TypeScript", "Java", "C++", "C#", "Golang",
    "Rust", "Ruby", "PHP", "Swift", "Kotlin", "Scala", "MATLAB", "SQL",
    "Perl", "Haskell", "Lua", "Dart", "Elixir", "Clojure", "Objective-C",
    "Bash", "PowerShell", "HTML", "CSS",
)

FRAMEWORKS: tuple[str, ...] = (
    "React", "React Native", "Angular", "Vue", "Vue.js", "Svelte", "Next.js",
    "Nuxt", "Node.js", "Express", "FastAPI", "Django", "Flask", "Spring",
    "Spring Boot", "Rails", "Ruby on Rails", ".NET", "ASP.NET", "Laravel",
    "Symfony", "Tailwind", "Bootstrap", "jQuery", "Flutter", "TensorFlow",
    "PyTorch", "Keras", "scikit-learn", "Pandas", "NumPy", "Spark",
    "GraphQL", "gRPC",
)

TOOLS: tuple[str, ...] = (
    "Git", "GitHub", "GitLab", "Bitbucket", "Docker", "Kubernetes",
    "Terraform", "Ansible", "Jenkins", "GitHub Actions", "CircleCI", "AWS",
    "Azure", "GCP", "Google Cloud", "Heroku", "Linux", "Nginx", "PostgreSQL",
    "MySQL", "MongoDB", "Redis", "Elasticsearch", "Kafka", "RabbitMQ",
    "SQLite", "Oracle", "DynamoDB", "Snowflake", "BigQuery", "Firebase",
    "Jira", "Confluence", "Postman", "Figma", "VS Code", "IntelliJ",
    "Eclipse", "Tableau", "Power BI", "Airflow", "Prometheus", "Grafana",
)

SOFT_SKILLS: tuple[str, ...] = (
    "Leadership", "Communication", "Teamwork", "Team Work", "Problem Solving",
    "Analytical", "Critical Thinking", "Creativity", "Adaptability",
    "Attention to Detail", "Detail Oriented", "Time Management",
    "Project Management", "Collaboration", "Mentoring", "Negotiation",
    "Public Speaking", "Stakeholder Management",
)

TECHNICAL_SKILLS: tuple[str, ...] = PROGRAMMING_LANGUAGES + FRAMEWORKS + TOOLS


def _skill_pattern(skill: str) -> re.Pattern:
    escaped = r"[\s-]+".join(re.escape(part) for part in skill.lower().split())
    # "java" must not match inside "javascript"
    return re.compile(rf"(?<![a-z0-9.#+]){escaped}(?![a-z0-9#+])")


_COMPILED: dict[str, re.Pattern] = {
    skill: _skill_pattern(skill) for skill in TECHNICAL_SKILLS + SOFT_SKILLS
}


def _match_vocabulary(text: str, vocabulary: tuple[str, ...]) -> list[str]:
    text_lower = text.lower()
    hits: list[tuple[int, str]] = []
    seen: set[str] = set()
    for skill in vocabulary:
        key = skill.lower()
        if key in seen:
            continue
        match = _COMPILED[skill].search(text_lower)
        if match:
            seen.add(key)
            hits.append((match.start(), skill))
    hits.sort(key=lambda h: h[0])
    return [skill for _, skill in hits]


def extract_technical_skills(text: str) -> list[str]:
    """Technical skills found in text, ordered by first appearance."""
    return _match_vocabulary(text, TECHNICAL_SKILLS)


def extract_soft_skills(text: str) -> list[str]:
    return _match_vocabulary(text, SOFT_SKILLS)
