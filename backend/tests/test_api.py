import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_embedding_provider
from api.router import limiter
from main import app

client = TestClient(app)

JD = "Senior Python engineer with Kubernetes, Docker and AWS. Lead platform work."


@pytest.fixture(autouse=True)
def _no_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True
    app.dependency_overrides.clear()


@pytest.fixture
def use_provider():
    def _use(provider):
        app.dependency_overrides[get_embedding_provider] = lambda: provider
    return _use


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert "embedding_provider" in data
    assert "gemini_configured" in data


class TestAtsScore:
    def test_scores_resume(self, sample_resume):
        response = client.post("/ats-score", json={"resume_text": sample_resume, "job_description": JD})
        assert response.status_code == 200
        data = response.json()
        assert data["overall"] == 93
        assert data["passed"] is True
        assert data["job_type"] == "senior"
        assert data["missing_keywords"] == ["platform"]
        assert data["weights"] == {"keywords": 0.5, "formatting": 0.3, "sections": 0.2}

    def test_missing_resume(self):
        response = client.post("/ats-score", json={"job_description": JD})
        assert response.status_code == 422

    def test_resume_too_long(self):
        response = client.post("/ats-score", json={"resume_text": "a" * 50001})
        assert response.status_code == 422

    def test_invalid_page_count(self, sample_resume):
        response = client.post("/ats-score", json={"resume_text": sample_resume, "page_count": 0})
        assert response.status_code == 422


class TestSemanticScore:
    def test_scores_sections(self, sample_resume, fake_provider, use_provider):
        use_provider(fake_provider)
        response = client.post(
            "/semantic-score", json={"resume_text": sample_resume, "job_description": "Python Kubernetes"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["score"]["overall_score"] > 0
        assert [e["section"] for e in data["resume_embeddings"]] == [
            "header", "summary", "experience", "education", "skills",
        ]

    def test_blank_job_description(self, sample_resume, fake_provider, use_provider):
        use_provider(fake_provider)
        response = client.post("/semantic-score", json={"resume_text": sample_resume, "job_description": " "})
        assert response.status_code == 400
        assert "empty text" in response.json()["detail"]

    def test_provider_failure(self, sample_resume, failing_provider, use_provider):
        use_provider(failing_provider)
        response = client.post("/semantic-score", json={"resume_text": sample_resume, "job_description": "Python"})
        assert response.status_code == 502


def test_visa_check():
    response = client.post(
        "/visa-check",
        json={"resume_text": "Currently on F-1 OPT", "user_context": {"visa_status": "h1b"}},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["visa_flagged"] is True
    assert data["signals"][0] == "User selected H-1B visa status"


def test_visa_check_empty():
    response = client.post("/visa-check", json={})
    assert response.status_code == 200
    assert response.json() == {"visa_flagged": False, "signals": []}


class TestPatterns:
    def test_without_reference(self, sample_resume):
        response = client.post("/patterns", json={"resume_text": sample_resume, "jd_keywords": ["python", "rust"]})
        assert response.status_code == 200
        data = response.json()
        assert data["formatting"]["has_summary"] is True
        assert data["content"]["keywords"]["jd_keywords_missing"] == ["rust"]
        assert data["comparisons"] == []

    def test_with_reference(self, sample_resume):
        reference = "Experience\n- Increased revenue by 25% in 6 months\n- Saved $1.2M through vendor consolidation"
        response = client.post("/patterns", json={"resume_text": sample_resume, "reference_text": reference})
        assert response.status_code == 200
        metrics = [c["metric"] for c in response.json()["comparisons"]]
        assert "metrics_per_bullet" in metrics

    def test_response_shape(self, sample_resume):
        response = client.post("/patterns", json={"resume_text": sample_resume})
        data = response.json()
        assert set(data) == {"formatting", "content", "comparisons"}
        assert set(data["content"]) == {"action_verbs", "quantification", "keywords", "achievements", "structure"}
        assert data["content"]["keywords"] is None
        assert "section_order" in data["formatting"]


WEAK_RESUME = "Experience\n- Helped with tasks\n- Worked on reports\n- Assisted the team"


class TestContrastiveAnalysis:
    def test_with_both_groups(self, sample_resume):
        response = client.post("/contrastive-analysis", json={
            "resume_text": WEAK_RESUME,
            "positive_texts": [sample_resume],
            "negative_texts": [WEAK_RESUME, "   "],
        })
        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["has_contrastive_data"] is True
        assert data["analysis"]["positive_count"] == 1
        assert data["analysis"]["negative_count"] == 1
        assert all(s["source"] == "learned" for s in data["suggestions"])
        assert all(s["message"].startswith("[Learned] ") for s in data["suggestions"])

    def test_without_successful_examples(self):
        response = client.post("/contrastive-analysis", json={"resume_text": WEAK_RESUME, "negative_texts": [WEAK_RESUME]})
        assert response.status_code == 200
        data = response.json()
        assert data["analysis"]["has_contrastive_data"] is False
        assert data["analysis"]["summary"] == "No successful examples available for comparison."
        assert data["suggestions"] == []


class TestFormattingAnalysis:
    def test_standalone(self):
        response = client.post("/formatting-analysis", json={"resume_text": "Experience\nWorked at a shop"})
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 58
        assert data["reference_count"] == 0
        assert len(data["feedback"]) == 4

    def test_with_references(self, sample_resume):
        response = client.post(
            "/formatting-analysis",
            json={"resume_text": sample_resume, "reference_texts": [sample_resume, sample_resume, "  "]},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 100
        assert data["reference_count"] == 2


class TestFitOnePage:
    def test_fits(self):
        resume = {
            "contact": {"full_name": "Jane Doe", "email": "jane@example.com"},
            "summary": "Backend engineer.",
            "experience": [{"title": "Engineer", "company": "Acme", "bullets": ["Built APIs"]}],
            "skills": {"technical": ["Python"]},
        }
        response = client.post("/fit-one-page", json={"resume": resume, "template_id": "modern"})
        assert response.status_code == 200
        data = response.json()
        assert data["fit_confidence"] == 95
        assert data["removed_content"] == []
        assert data["adjusted_style"]["body_font_size"] == 10

    def test_invalid_resume(self):
        response = client.post("/fit-one-page", json={"resume": {"experience": "not a list"}})
        assert response.status_code == 422


def test_rate_limit():
    limiter.enabled = True
    limiter.reset()
    statuses = [client.post("/visa-check", json={}).status_code for _ in range(11)]
    assert statuses[:10] == [200] * 10
    assert statuses[10] == 429
    limiter.reset()
