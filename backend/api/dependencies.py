"""Shared dependencies for API routes."""

from services.embedding_client import BaseEmbeddingProvider, get_provider


def get_embedding_provider() -> BaseEmbeddingProvider:
    return get_provider()
