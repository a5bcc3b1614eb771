"""Fixtures for API tests."""

import asyncio
from pathlib import Path

import pytest
from falcon.testing import TestClient

from berkshire_rag.config import Settings
from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.main import Services, build_services, create_berkshire_app

from tests.conftest import FakeEmbeddingProvider, FakeLanguageModel

LETTER_CHUNKS = [
    DocumentChunk(
        content="Insurance float is money we hold but do not own.",
        metadata={"fileName": "2022", "year": 2022, "chunkIndex": 0},
    ),
    DocumentChunk(
        content="We bought back shares when they sold below intrinsic value.",
        metadata={"fileName": "2023", "year": 2023, "chunkIndex": 0},
    ),
]


@pytest.fixture
def api_embedding_provider() -> FakeEmbeddingProvider:
    return FakeEmbeddingProvider(
        vectors={
            LETTER_CHUNKS[0].content: [1.0, 0.0],
            LETTER_CHUNKS[1].content: [0.0, 1.0],
            "insurance float": [1.0, 0.1],
        },
        default=[0.6, 0.8],
    )


@pytest.fixture
def services(
    tmp_path: Path,
    api_embedding_provider: FakeEmbeddingProvider,
    language_model: FakeLanguageModel,
) -> Services:
    """Services graph with fake providers and a temporary snapshot."""
    settings = Settings(_env_file=None, vector_store_path=str(tmp_path / "vector-store.json"))
    services = build_services(
        settings,
        embedding_provider=api_embedding_provider,
        language_model=language_model,
    )
    asyncio.run(services.vector_store.add_documents(LETTER_CHUNKS))
    return services


@pytest.fixture
def client(services: Services) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(create_berkshire_app(services))
