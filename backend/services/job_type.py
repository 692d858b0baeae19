"""Job-type detection and the weight profile each type scores with."""

import logging
from types import MappingProxyType

from models.responses import JobType, WeightProfile

logger = logging.getLogger(__name__)

WEIGHT_PROFILES: MappingProxyType[str, WeightProfile] = MappingProxyType({
    "tech": WeightProfile(keywords=0.45, formatting=0.35, sections=0.20),
    "senior": WeightProfile(keywords=0.50, formatting=0.30, sections=0.20),
    "entry": WeightProfile(keywords=0.35, formatting=0.40, sections=0.25),
    "general": WeightProfile(keywords=0.50, formatting=0.25, sections=0.25),
})

TECH_SIGNALS: tuple[str, ...] = (
    "engineer", "developer", "programming", "software", "backend",
    "frontend", "devops", "data scientist", "machine learning",
    "full stack", "fullstack", "sre", "infrastructure", "platform",
)

SENIOR_SIGNALS: tuple[str, ...] = (
    "senior", "lead", "principal", "staff", "architect", "director",
    "manager", "head of", "vp ", "vice president", "10+ years",
    "8+ years", "7+ years", "extensive experience",
)

ENTRY_SIGNALS: tuple[str, ...] = (
    "junior", "entry level", "entry-level", "intern", "internship", "graduate",
    "new grad", "associate", "0-2 years", "1-3 years", "0-3 years",
    "early career", "no experience required",
)

# Checked in order; senior roles are usually tech roles too
JOB_TYPE_PRECEDENCE: tuple[tuple[JobType, tuple[str, ...]], ...] = (
    ("senior", SENIOR_SIGNALS),
    ("tech", TECH_SIGNALS),
    ("entry", ENTRY_SIGNALS),
)

MIN_SIGNAL_HITS = 2


def detect_job_type(job_description: str) -> JobType:
    """Classify a job description as tech, senior, entry or general.

    A category qualifies when at least two of its signal phrases appear
    (case-insensitive substring match).
    """
    lower = job_description.lower()
    for job_type, signals in JOB_TYPE_PRECEDENCE:
        hits = sum(1 for s in signals if s in lower)
        if hits >= MIN_SIGNAL_HITS:
            logger.debug("Detected job type %s (%d signals)", job_type, hits)
            return job_type
    return "general"
