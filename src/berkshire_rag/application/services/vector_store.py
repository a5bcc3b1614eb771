"""Vector store facade - batched embedding, indexing and snapshot persistence."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from berkshire_rag.application.ports import EmbeddingProvider, SnapshotStore
from berkshire_rag.application.services.vector_index import VectorIndex
from berkshire_rag.domain.entities import DocumentChunk, SearchHit, VectorRecord
from berkshire_rag.domain.exceptions import ProviderError
from berkshire_rag.domain.value_objects import metadata_keys

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_TOP_K = 5


def _with_default_chunk_index(chunk: DocumentChunk, position: int) -> DocumentChunk:
    if metadata_keys.CHUNK_INDEX in chunk.metadata:
        return chunk
    return DocumentChunk(
        content=chunk.content,
        metadata={**chunk.metadata, metadata_keys.CHUNK_INDEX: position},
    )


class VectorStore:
    """Caller-facing store: add documents, query, clear.

    The index is loaded from the snapshot on construction. Every successful
    add_documents call rewrites the full snapshot once all batches are indexed.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        snapshot_store: SnapshotStore,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self._embedding_provider = embedding_provider
        self._snapshot_store = snapshot_store
        self._batch_size = batch_size

        records = snapshot_store.load()
        self._index = VectorIndex(embedding_provider, records or ())
        if records is None:
            logger.info("No usable snapshot, starting with an empty vector store")
        else:
            logger.info("Loaded %d records from snapshot", len(records))

    def __len__(self) -> int:
        return len(self._index)

    @property
    def index(self) -> VectorIndex:
        return self._index

    async def add_documents(self, chunks: Sequence[DocumentChunk]) -> None:
        """Embed chunks in sequential batches, index them, then save the snapshot.

        A failing batch raises ProviderError. Batches indexed before the failure
        stay in memory; the snapshot on disk is left untouched.
        """
        if not chunks:
            return
        logger.info("Adding %d chunks to vector store", len(chunks))
        prepared = [_with_default_chunk_index(c, i) for i, c in enumerate(chunks)]

        for start in range(0, len(prepared), self._batch_size):
            batch = prepared[start : start + self._batch_size]
            embeddings = await self._embedding_provider.embed_many([c.content for c in batch])
            if len(embeddings) != len(batch):
                raise ProviderError(
                    f"Embedding provider returned {len(embeddings)} vectors for {len(batch)} texts"
                )
            self._index.insert(
                [
                    VectorRecord(chunk=chunk, embedding=list(embedding))
                    for chunk, embedding in zip(batch, embeddings, strict=True)
                ]
            )
            logger.debug("Indexed batch %d-%d", start, start + len(batch) - 1)

        self._snapshot_store.save(self._index.records)
        logger.info("Added %d chunks, index holds %d records", len(prepared), len(self._index))

    async def query(
        self,
        text: str,
        top_k: int = DEFAULT_TOP_K,
        filters: Mapping[str, Any] | None = None,
    ) -> list[DocumentChunk]:
        """Return the top_k chunks most similar to text."""
        logger.info("Querying vector store: %r", text)
        results = await self._index.query(text, top_k, filters)
        logger.info("Found %d relevant chunks", len(results))
        return results

    async def query_by_year(
        self,
        text: str,
        year: int,
        top_k: int = DEFAULT_TOP_K,
    ) -> list[DocumentChunk]:
        """Query restricted to chunks of one letter year."""
        return await self.query(text, top_k, {metadata_keys.YEAR: year})

    async def search(
        self,
        text: str,
        top_k: int = DEFAULT_TOP_K,
        filters: Mapping[str, Any] | None = None,
    ) -> list[SearchHit]:
        """Like query, but keeps the similarity score of every hit."""
        if top_k <= 0 or not len(self._index):
            return []
        query_embedding = await self._embedding_provider.embed_one(text)
        return self._index.search(query_embedding, top_k, filters)

    def clear_index(self) -> None:
        """Empty the index and delete the snapshot file."""
        logger.info("Clearing vector store")
        self._index.clear()
        self._snapshot_store.delete()
