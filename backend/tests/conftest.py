"""Shared test configuration, markers and fixtures."""

import pytest

from services import embedding_client
from services.embedding_client import BaseEmbeddingProvider


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: calls a real embedding provider (network or model download)"
    )


class FakeEmbeddingProvider(BaseEmbeddingProvider):
    """Deterministic provider: one dimension per tracked term.

    A text's vector counts occurrences of each term, so texts sharing
    vocabulary point in similar directions.
    """

    provider_name = "fake"
    terms = ("python", "react", "docker", "kubernetes", "university", "cooking", "menu", "aws")

    def __init__(self, fail_on: str | None = None):
        self.calls: list[str] = []
        self.fail_on = fail_on

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if self.fail_on and self.fail_on in text:
            raise ConnectionError("provider unavailable")
        lower = text.lower()
        return [float(lower.count(t)) for t in self.terms]


@pytest.fixture
def fake_provider():
    return FakeEmbeddingProvider()


@pytest.fixture
def failing_provider():
    return FakeEmbeddingProvider(fail_on="Kubernetes")


@pytest.fixture(autouse=True)
def _reset_embedding_provider():
    yield
    embedding_client.clear()


SAMPLE_RESUME = """Jane Doe
jane.doe@example.com, (555) 123-4567, linkedin.com/in/janedoe

Summary
Backend engineer with six years building Python services on AWS and Kubernetes.

Experience
Senior Software Engineer, Acme Corp, Jan 2021 - Present
- Led migration of 12 services to Kubernetes, cutting deploy time by 40%
- Built Python APIs handling 2M requests per day with Docker and PostgreSQL
- Mentored 4 engineers and improved code review turnaround by 30%
Software Engineer, Beta Labs, Jun 2018 - Dec 2020
- Developed React dashboards used by 500 customers
- Automated CI/CD pipelines, reducing release time from 2 days to 3 hours
- Optimized SQL queries, improving report speed by 25%

Education
B.S. Computer Science, State University, Jun 2018

Skills
Python, React, Docker, Kubernetes, AWS, PostgreSQL, Git, Terraform
"""


@pytest.fixture
def sample_resume():
    return SAMPLE_RESUME
