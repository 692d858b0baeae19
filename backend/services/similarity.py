"""Embedding-based semantic similarity between resume sections and a JD."""

import asyncio
import logging
from types import MappingProxyType

import numpy as np

from models.responses import (
    SectionEmbedding,
    SemanticAnalysisResult,
    SemanticScore,
    SemanticSectionScore,
)
from services.embedding_client import BaseEmbeddingProvider, generate_embedding
from services.numeric import clamp, round_half_up
from services.section_parser import split_into_sections

logger = logging.getLogger(__name__)

MIN_SECTION_CHARS = 20

# Experience and skills carry the most signal for job matching
SECTION_WEIGHTS: MappingProxyType[str, float] = MappingProxyType({
    "experience": 3,
    "skills": 2.5,
    "summary": 2,
    "projects": 1.5,
    "education": 1,
    "certifications": 1,
    "header": 0.5,
    "full": 1,
})
DEFAULT_SECTION_WEIGHT = 1.0


def cosine_similarity(vec_a: list[float], vec_b: list[float]) -> float:
    """Cosine similarity in [-1, 1]; 0.0 when either vector has zero magnitude."""
    if len(vec_a) != len(vec_b):
        raise ValueError(
            f"Vector length mismatch: vec_a has {len(vec_a)} dimensions, vec_b has {len(vec_b)}"
        )
    if len(vec_a) == 0:
        raise ValueError("Cannot compute cosine similarity of empty vectors")

    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    magnitude = np.linalg.norm(a) * np.linalg.norm(b)
    if magnitude == 0:
        return 0.0
    return float(np.dot(a, b) / magnitude)


async def generate_section_embeddings(
    resume_text: str, provider: BaseEmbeddingProvider | None = None
) -> list[SectionEmbedding]:
    """Split a resume into sections and embed each one concurrently.

    Sections shorter than 20 characters are skipped. The first failed
    embedding aborts the whole batch.
    """
    sections = [s for s in split_into_sections(resume_text) if len(s.content) >= MIN_SECTION_CHARS]
    if not sections:
        raise ValueError("No meaningful sections found in resume text for embedding generation")

    vectors = await asyncio.gather(*(generate_embedding(s.content, provider) for s in sections))
    return [
        SectionEmbedding(section=s.name, embedding=vec, content=s.content)
        for s, vec in zip(sections, vectors)
    ]


def compute_semantic_score(
    resume_embeddings: list[SectionEmbedding], jd_embedding: list[float]
) -> SemanticScore:
    """Score each section against the JD (0-100) and take a weighted average."""
    if not resume_embeddings:
        return SemanticScore(overall_score=0, section_scores=[])

    section_scores: list[SemanticSectionScore] = []
    weighted_sum = 0.0
    total_weight = 0.0

    for item in resume_embeddings:
        similarity = cosine_similarity(item.embedding, jd_embedding)
        score = clamp(round_half_up(similarity * 100))
        section_scores.append(SemanticSectionScore(section=item.section, score=score))

        weight = SECTION_WEIGHTS.get(item.section, DEFAULT_SECTION_WEIGHT)
        weighted_sum += score * weight
        total_weight += weight

    overall = round_half_up(weighted_sum / total_weight) if total_weight > 0 else 0
    return SemanticScore(overall_score=overall, section_scores=section_scores)


async def run_semantic_analysis(
    resume_text: str,
    job_description: str,
    provider: BaseEmbeddingProvider | None = None,
) -> SemanticAnalysisResult:
    """Embed resume sections and the JD concurrently, then score them."""
    resume_embeddings, jd_embedding = await asyncio.gather(
        generate_section_embeddings(resume_text, provider),
        generate_embedding(job_description, provider),
    )
    score = compute_semantic_score(resume_embeddings, jd_embedding)

    logger.info(
        "Semantic analysis: overall=%d sections=%s",
        score.overall_score, [s.section for s in score.section_scores],
    )
    return SemanticAnalysisResult(
        score=score,
        resume_embeddings=resume_embeddings,
        jd_embedding=jd_embedding,
    )
