"""Unit tests for the VectorStore facade."""

import pytest

from berkshire_rag.application.services.vector_store import VectorStore
from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.domain.exceptions import ProviderError
from berkshire_rag.infrastructure.persistence.json_snapshot import JsonSnapshotStore

from tests.conftest import FakeEmbeddingProvider, make_record


def _chunks(n: int, **metadata) -> list[DocumentChunk]:
    return [DocumentChunk(content=f"passage {i}", metadata=dict(metadata)) for i in range(n)]


class ShortEmbeddingProvider(FakeEmbeddingProvider):
    """Returns one vector fewer than requested."""

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        vectors = await super().embed_many(texts)
        return vectors[:-1]


@pytest.mark.asyncio
async def test_add_documents_batches_sequentially(
    vector_store: VectorStore, embedding_provider: FakeEmbeddingProvider
) -> None:
    await vector_store.add_documents(_chunks(120))
    assert [len(b) for b in embedding_provider.batches] == [50, 50, 20]
    assert embedding_provider.batches[1][0] == "passage 50"
    assert len(vector_store) == 120


@pytest.mark.asyncio
async def test_add_documents_defaults_chunk_index_to_position(
    vector_store: VectorStore,
) -> None:
    await vector_store.add_documents(_chunks(3, year=2020))
    records = vector_store.index.records
    assert [r.chunk.metadata["chunkIndex"] for r in records] == [0, 1, 2]
    assert all(r.chunk.metadata["year"] == 2020 for r in records)


@pytest.mark.asyncio
async def test_add_documents_keeps_explicit_chunk_index(vector_store: VectorStore) -> None:
    chunks = [
        DocumentChunk(content="a", metadata={"chunkIndex": 7}),
        DocumentChunk(content="b"),
    ]
    await vector_store.add_documents(chunks)
    assert [r.chunk.metadata["chunkIndex"] for r in vector_store.index.records] == [7, 1]
    assert chunks[1].metadata == {}


@pytest.mark.asyncio
async def test_store_does_not_share_chunks_with_callers(vector_store: VectorStore) -> None:
    chunk = DocumentChunk(content="a", metadata={"year": 2020, "chunkIndex": 0})
    await vector_store.add_documents([chunk])
    chunk.metadata["year"] = 1999
    (await vector_store.query("q"))[0].metadata["year"] = 1998
    results = await vector_store.query_by_year("q", 2020)
    assert [c.content for c in results] == ["a"]
    assert results[0].metadata["year"] == 2020


@pytest.mark.asyncio
async def test_add_documents_persists_snapshot(
    vector_store: VectorStore, snapshot_store: JsonSnapshotStore
) -> None:
    await vector_store.add_documents(_chunks(4))
    reloaded = VectorStore(FakeEmbeddingProvider(), snapshot_store)
    assert len(reloaded) == 4
    assert reloaded.index.records == vector_store.index.records


@pytest.mark.asyncio
async def test_add_documents_appends_to_loaded_snapshot(
    snapshot_store: JsonSnapshotStore,
) -> None:
    snapshot_store.save([make_record("old", [0.0, 1.0, 0.0], chunkIndex=0)])
    store = VectorStore(FakeEmbeddingProvider(), snapshot_store)
    await store.add_documents(_chunks(2))
    assert [r.chunk.content for r in snapshot_store.load()] == ["old", "passage 0", "passage 1"]


@pytest.mark.asyncio
async def test_add_empty_list_is_noop(
    vector_store: VectorStore,
    embedding_provider: FakeEmbeddingProvider,
    snapshot_store: JsonSnapshotStore,
) -> None:
    await vector_store.add_documents([])
    assert embedding_provider.batches == []
    assert not snapshot_store.path.exists()


@pytest.mark.asyncio
async def test_failed_batch_keeps_earlier_batches_in_memory_only(
    snapshot_store: JsonSnapshotStore,
) -> None:
    provider = FakeEmbeddingProvider(fail_on_batch=2)
    store = VectorStore(provider, snapshot_store, batch_size=2)
    with pytest.raises(ProviderError):
        await store.add_documents(_chunks(5))
    assert len(store) == 2
    assert len(provider.batches) == 2
    assert not snapshot_store.path.exists()


@pytest.mark.asyncio
async def test_failed_batch_leaves_existing_snapshot_untouched(
    snapshot_store: JsonSnapshotStore,
) -> None:
    snapshot_store.save([make_record("old", [1.0, 0.0, 0.0])])
    store = VectorStore(FakeEmbeddingProvider(fail_on_batch=1), snapshot_store)
    with pytest.raises(ProviderError):
        await store.add_documents(_chunks(3))
    assert [r.chunk.content for r in snapshot_store.load()] == ["old"]


@pytest.mark.asyncio
async def test_wrong_embedding_count_raises(snapshot_store: JsonSnapshotStore) -> None:
    store = VectorStore(ShortEmbeddingProvider(), snapshot_store)
    with pytest.raises(ProviderError, match="returned 2 vectors for 3 texts"):
        await store.add_documents(_chunks(3))
    assert len(store) == 0


def test_batch_size_must_be_positive(snapshot_store: JsonSnapshotStore) -> None:
    with pytest.raises(ValueError):
        VectorStore(FakeEmbeddingProvider(), snapshot_store, batch_size=0)


def test_corrupt_snapshot_starts_empty(snapshot_store: JsonSnapshotStore) -> None:
    snapshot_store.path.parent.mkdir(parents=True)
    snapshot_store.path.write_text("not json", encoding="utf-8")
    store = VectorStore(FakeEmbeddingProvider(), snapshot_store)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_query_defaults_to_top_five(vector_store: VectorStore) -> None:
    await vector_store.add_documents(_chunks(8))
    assert len(await vector_store.query("insurance float")) == 5


@pytest.mark.asyncio
async def test_query_on_empty_store_skips_embedding(
    vector_store: VectorStore, embedding_provider: FakeEmbeddingProvider
) -> None:
    assert await vector_store.query("anything") == []
    assert embedding_provider.queries == []


@pytest.mark.asyncio
async def test_query_propagates_provider_error(snapshot_store: JsonSnapshotStore) -> None:
    store = VectorStore(FakeEmbeddingProvider(fail_queries=True), snapshot_store)
    await store.add_documents(_chunks(1))
    with pytest.raises(ProviderError):
        await store.query("anything")


@pytest.mark.asyncio
async def test_query_by_year_filters_on_year(vector_store: VectorStore) -> None:
    await vector_store.add_documents(_chunks(3, year=2019) + _chunks(2, year=2020))
    results = await vector_store.query_by_year("acquisitions", 2020)
    assert len(results) == 2
    assert all(c.metadata["year"] == 2020 for c in results)
    assert await vector_store.query_by_year("acquisitions", 1965) == []


@pytest.mark.asyncio
async def test_search_returns_scored_hits() -> None:
    provider = FakeEmbeddingProvider(
        vectors={"float": [1.0, 0.0], "passage 0": [0.0, 1.0], "passage 1": [1.0, 0.0]}
    )
    store = VectorStore(provider, _MemorySnapshotStore())
    await store.add_documents(_chunks(2))
    hits = await store.search("float", 2)
    assert [h.chunk.content for h in hits] == ["passage 1", "passage 0"]
    assert hits[0].score == pytest.approx(1.0)


@pytest.mark.asyncio
async def test_clear_index_empties_store_and_deletes_snapshot(
    vector_store: VectorStore, snapshot_store: JsonSnapshotStore
) -> None:
    await vector_store.add_documents(_chunks(3))
    assert snapshot_store.path.exists()
    vector_store.clear_index()
    assert len(vector_store) == 0
    assert not snapshot_store.path.exists()
    assert await vector_store.query("anything") == []
    vector_store.clear_index()


class _MemorySnapshotStore:
    """Snapshot store keeping records in memory."""

    def __init__(self) -> None:
        self.records = None

    def save(self, records) -> None:
        self.records = list(records)

    def load(self):
        return self.records

    def delete(self) -> bool:
        removed = self.records is not None
        self.records = None
        return removed
