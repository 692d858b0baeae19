import os
from pydantic_settings import BaseSettings


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    gemini_api_key: str = ""
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Embedding provider settings
    embedding_provider: str = "gemini"  # "gemini" | "local"
    embedding_model: str = "gemini-embedding-001"
    local_embedding_model: str = "TechWolf/JobBERT-v2"
    embedding_dimensions: int = 1536
    embedding_max_chars: int = 32764  # ~8191 tokens at 4 chars/token

    # ATS scoring
    ats_pass_threshold: int = 75

    # Request limits for the HTTP layer
    max_resume_chars: int = 50000
    max_job_description_chars: int = 10000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
