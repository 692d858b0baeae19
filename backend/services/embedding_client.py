"""Embedding providers behind a single async interface.

The semantic scorer only depends on ``BaseEmbeddingProvider``; the
concrete backend (Gemini API or a local sentence-transformers model) is
chosen from settings and cached for the life of the process.
"""

import asyncio
import logging
from abc import ABC, abstractmethod

from google import genai
from google.genai import types

from config import settings

logger = logging.getLogger(__name__)


class BaseEmbeddingProvider(ABC):
    """Base class for text embedding backends.

    Subclasses must implement:
        - provider_name: identifier used in logs and settings
        - embed(text): return one embedding vector for the text
    """

    provider_name: str = ""

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Embed already-validated, non-empty text."""


class GeminiEmbeddingProvider(BaseEmbeddingProvider):
    provider_name = "gemini"

    def __init__(self, api_key: str | None = None, model: str | None = None, dimensions: int | None = None):
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.embedding_model
        self.dimensions = dimensions or settings.embedding_dimensions
        self._client: genai.Client | None = None

    def _get_client(self) -> genai.Client:
        if not self.api_key:
            raise RuntimeError("GEMINI_API_KEY is not set; cannot generate embeddings")
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def embed(self, text: str) -> list[float]:
        client = self._get_client()
        response = await client.aio.models.embed_content(
            model=self.model,
            contents=text,
            config=types.EmbedContentConfig(output_dimensionality=self.dimensions),
        )
        return list(response.embeddings[0].values)


class LocalEmbeddingProvider(BaseEmbeddingProvider):
    """sentence-transformers model, loaded on first use (JobBERT-v2 by default)."""

    provider_name = "local"

    def __init__(self, model_name: str | None = None):
        self.model_name = model_name or settings.local_embedding_model
        self._model = None

    def _get_model(self):
        if self._model is None:
            from sentence_transformers import SentenceTransformer

            self._model = SentenceTransformer(self.model_name)
            logger.info("Local embedding model loaded: %s", self.model_name)
        return self._model

    def _encode(self, text: str) -> list[float]:
        vector = self._get_model().encode(text, convert_to_numpy=True)
        return vector.tolist()

    async def embed(self, text: str) -> list[float]:
        # Encoding is CPU-bound, keep it off the event loop
        return await asyncio.to_thread(self._encode, text)


_PROVIDERS: dict[str, type[BaseEmbeddingProvider]] = {
    GeminiEmbeddingProvider.provider_name: GeminiEmbeddingProvider,
    LocalEmbeddingProvider.provider_name: LocalEmbeddingProvider,
}

_provider: BaseEmbeddingProvider | None = None


def get_provider() -> BaseEmbeddingProvider:
    """Return the process-wide provider selected by settings.embedding_provider."""
    global _provider
    if _provider is None:
        name = settings.embedding_provider
        if name not in _PROVIDERS:
            raise RuntimeError(f"Unknown embedding provider: {name!r}")
        _provider = _PROVIDERS[name]()
        logger.info("Embedding provider initialised: %s", name)
    return _provider


def clear() -> None:
    """Drop the cached provider (for testing)."""
    global _provider
    _provider = None


async def generate_embedding(text: str, provider: BaseEmbeddingProvider | None = None) -> list[float]:
    """Embed a single text, truncated to the provider's input limit."""
    if not text or not text.strip():
        raise ValueError("Cannot generate embedding for empty text")

    max_chars = settings.embedding_max_chars
    if len(text) > max_chars:
        logger.debug("Truncating embedding input from %d to %d chars", len(text), max_chars)
        text = text[:max_chars]

    return await (provider or get_provider()).embed(text.strip())
