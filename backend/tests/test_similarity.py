import pytest

from models.responses import SectionEmbedding
from services.similarity import (
    compute_semantic_score,
    cosine_similarity,
    generate_section_embeddings,
    run_semantic_analysis,
)


def _embedding(section, vector):
    return SectionEmbedding(section=section, embedding=vector, content=f"{section} content")


class TestCosineSimilarity:
    def test_identical(self):
        assert cosine_similarity([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)

    def test_orthogonal(self):
        assert cosine_similarity([1, 0], [0, 1]) == pytest.approx(0.0)

    def test_opposite(self):
        assert cosine_similarity([1, 1], [-1, -1]) == pytest.approx(-1.0)

    def test_zero_vector(self):
        assert cosine_similarity([0, 0], [1, 1]) == 0.0

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="length mismatch"):
            cosine_similarity([1, 2], [1, 2, 3])

    def test_empty(self):
        with pytest.raises(ValueError):
            cosine_similarity([], [])


class TestComputeSemanticScore:
    def test_weighted_by_section(self):
        score = compute_semantic_score(
            [_embedding("experience", [1, 0]), _embedding("education", [0, 1])], [1, 0]
        )
        assert [s.score for s in score.section_scores] == [100, 0]
        assert score.overall_score == 75

    def test_skills_weight(self):
        score = compute_semantic_score(
            [_embedding("skills", [1, 0]), _embedding("education", [0, 1])], [1, 0]
        )
        assert score.overall_score == 71

    def test_unknown_section_weight_one(self):
        score = compute_semantic_score(
            [_embedding("hobbies", [1, 0]), _embedding("education", [0, 1])], [1, 0]
        )
        assert score.overall_score == 50

    def test_negative_similarity_clamped(self):
        score = compute_semantic_score([_embedding("experience", [-1, 0])], [1, 0])
        assert score.section_scores[0].score == 0
        assert score.overall_score == 0

    def test_empty(self):
        score = compute_semantic_score([], [1, 0])
        assert score.overall_score == 0
        assert score.section_scores == []


class TestSectionEmbeddings:
    @pytest.mark.asyncio
    async def test_embeds_each_section(self, sample_resume, fake_provider):
        embeddings = await generate_section_embeddings(sample_resume, fake_provider)
        assert [e.section for e in embeddings] == ["header", "summary", "experience", "education", "skills"]
        assert len(fake_provider.calls) == 5

    @pytest.mark.asyncio
    async def test_short_sections_skipped(self, fake_provider):
        text = "Summary\nShort\n\nExperience\nBuilt Python services for a decade"
        embeddings = await generate_section_embeddings(text, fake_provider)
        assert [e.section for e in embeddings] == ["experience"]

    @pytest.mark.asyncio
    async def test_no_meaningful_sections(self, fake_provider):
        with pytest.raises(ValueError, match="No meaningful sections"):
            await generate_section_embeddings("Hi", fake_provider)


class TestRunSemanticAnalysis:
    @pytest.mark.asyncio
    async def test_related_job(self, sample_resume, fake_provider):
        result = await run_semantic_analysis(sample_resume, "Python Kubernetes Docker", fake_provider)
        assert result.jd_embedding == [1.0, 0.0, 1.0, 1.0, 0.0, 0.0, 0.0, 0.0]
        assert len(result.resume_embeddings) == 5
        assert 0 < result.score.overall_score <= 100

    @pytest.mark.asyncio
    async def test_unrelated_job(self, sample_resume, fake_provider):
        result = await run_semantic_analysis(sample_resume, "Menu planning and cooking", fake_provider)
        assert result.score.overall_score == 0

    @pytest.mark.asyncio
    async def test_empty_job_description(self, sample_resume, fake_provider):
        with pytest.raises(ValueError, match="empty text"):
            await run_semantic_analysis(sample_resume, "  ", fake_provider)

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, sample_resume, failing_provider):
        with pytest.raises(ConnectionError):
            await run_semantic_analysis(sample_resume, "Python", failing_provider)
