"""Shared fixtures: sample resume, model payloads and a scripted fake model client."""

import asyncio
import copy
import json

import pytest

from services.request_pipeline import PipelinePolicy, RequestPipeline

SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567
linkedin.com/in/johndoe | github.com/johndoe

Summary
Experienced software engineer with 5+ years building web applications.

Experience
Senior Software Engineer | Acme Technologies Inc | 2021 - Present
• Built REST APIs in Python and FastAPI serving 1M requests/day
• Led team of 5 engineers

Software Engineer | Globex Solutions | 2019 - 2021
• Developed React frontend components
• Implemented CI/CD pipelines with Docker and Jenkins

Education
B.S. Computer Science | State University | 2019

Projects
Resume Analyzer
Built an AI tool with Python and PostgreSQL to review resumes.

Skills
Python, JavaScript, React, Docker, AWS, PostgreSQL, Git, Leadership
"""

VALID_PAYLOAD = {
    "feedback": "Solid resume with clear impact. Quantify more of your achievements.",
    "score": 78,
    "strengths": ["Clear impact statements", "Modern tech stack"],
    "weaknesses": ["Few metrics in older roles"],
    "improvements": [
        {
            "priority": "high",
            "title": "Quantify achievements",
            "description": "Add numbers to every bullet where possible.",
            "example": "Cut deploy time by 40% with CI/CD",
        }
    ],
    "extracted_info": {
        "personal_info": {"name": "John Doe", "email": None, "phone": None},
        "skills": {"technical": ["Python", "React"], "soft": ["Leadership"]},
        "experience": [],
        "education": [],
        "projects": [],
    },
    "resume_analytics": {"word_count": 120, "page_count": 1, "ats_compatibility": "High"},
    "contact_validation": {"has_email": True, "has_phone": True},
}

# Scripted item that makes the fake client stall past any test timeout
HANG = object()


class FakeLLMClient:
    """Replays scripted responses: strings are returned, exceptions raised."""

    model_name = "fake-model"
    configured = True

    def __init__(self, responses=None, default=None):
        self.responses = list(responses or [])
        self.default = default if default is not None else json.dumps(VALID_PAYLOAD)
        self.prompts: list[str] = []

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        item = self.responses.pop(0) if self.responses else self.default
        if item is HANG:
            await asyncio.sleep(10)
            return self.default
        if isinstance(item, BaseException):
            raise item
        return item


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def valid_payload() -> dict:
    return copy.deepcopy(VALID_PAYLOAD)


@pytest.fixture
def tight_policy() -> PipelinePolicy:
    """Fast timings so retry and timeout paths run in milliseconds."""
    return PipelinePolicy(
        timeout_s=0.05,
        max_attempts=3,
        retry_base_delay_s=0.0,
        min_interval_s=0.0,
        hourly_limit=100,
        max_response_chars=50000,
    )


@pytest.fixture
def make_pipeline(tight_policy):
    """Build a pipeline around a FakeLLMClient scripted with ``responses``."""

    def _make(responses=None, policy: PipelinePolicy | None = None, default=None):
        client = FakeLLMClient(responses, default=default)
        return RequestPipeline(client, policy=policy or tight_policy), client

    return _make


@pytest.fixture
def hang():
    return HANG
