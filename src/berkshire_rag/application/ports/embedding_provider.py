"""Embedding provider port - OpenAI compatible API."""

from typing import Protocol


class EmbeddingProvider(Protocol):
    """Port for generating text embeddings."""

    async def embed_many(self, texts: list[str]) -> list[list[float]]: ...

    async def embed_one(self, text: str) -> list[float]: ...
