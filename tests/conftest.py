"""Pytest fixtures for Berkshire RAG tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from berkshire_rag.application.dto.chunking_config import ChunkingConfig
from berkshire_rag.application.services.vector_store import VectorStore
from berkshire_rag.domain.entities import DocumentChunk, VectorRecord
from berkshire_rag.domain.exceptions import ProviderError
from berkshire_rag.domain.value_objects import ChunkingStrategy
from berkshire_rag.infrastructure.persistence.json_snapshot import JsonSnapshotStore


# --- Fake adapters ---


class FakeEmbeddingProvider:
    """Deterministic embedding provider recording every call.

    Texts listed in ``vectors`` get that vector, all others get ``default``.
    ``fail_on_batch`` makes the n-th embed_many call (1-based) raise.
    """

    def __init__(
        self,
        vectors: dict[str, list[float]] | None = None,
        default: list[float] | None = None,
        fail_on_batch: int | None = None,
        fail_queries: bool = False,
    ) -> None:
        self.vectors = dict(vectors or {})
        self.default = list(default or [1.0, 0.0, 0.0])
        self.fail_on_batch = fail_on_batch
        self.fail_queries = fail_queries
        self.batches: list[list[str]] = []
        self.queries: list[str] = []

    def vector_for(self, text: str) -> list[float]:
        return list(self.vectors.get(text, self.default))

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        self.batches.append(list(texts))
        if self.fail_on_batch is not None and len(self.batches) == self.fail_on_batch:
            raise ProviderError("rate limited")
        return [self.vector_for(t) for t in texts]

    async def embed_one(self, text: str) -> list[float]:
        self.queries.append(text)
        if self.fail_queries:
            raise ProviderError("connection reset")
        return self.vector_for(text)


class FakeLanguageModel:
    """Language model returning a canned reply and recording prompts."""

    def __init__(self, reply: str = "Buffett says: be fearful when others are greedy.") -> None:
        self.reply = reply
        self.calls: list[tuple[str, str]] = []

    async def complete(self, instructions: str, prompt: str) -> str:
        self.calls.append((instructions, prompt))
        return self.reply


def make_record(content: str, embedding: list[float], **metadata) -> VectorRecord:
    """Vector record with the given metadata."""
    return VectorRecord(
        chunk=DocumentChunk(content=content, metadata=metadata),
        embedding=embedding,
    )


# --- Fixtures ---


@pytest.fixture
def embedding_provider() -> FakeEmbeddingProvider:
    """Fake embedding provider returning [1, 0, 0] for unknown texts."""
    return FakeEmbeddingProvider()


@pytest.fixture
def snapshot_path(tmp_path: Path) -> Path:
    """Snapshot location inside a directory that does not exist yet."""
    return tmp_path / "store" / "vector-store.json"


@pytest.fixture
def snapshot_store(snapshot_path: Path) -> JsonSnapshotStore:
    return JsonSnapshotStore(snapshot_path)


@pytest.fixture
def vector_store(
    embedding_provider: FakeEmbeddingProvider,
    snapshot_store: JsonSnapshotStore,
) -> VectorStore:
    """Fresh, empty store backed by a temporary snapshot file."""
    return VectorStore(embedding_provider, snapshot_store, batch_size=50)


@pytest.fixture
def language_model() -> FakeLanguageModel:
    return FakeLanguageModel()


@pytest.fixture
def chunking_config() -> ChunkingConfig:
    """Small recursive chunking config for chunker tests."""
    return ChunkingConfig(
        chunk_size=100,
        chunk_overlap=20,
        strategy=ChunkingStrategy.RECURSIVE,
    )
