"""In-memory vector index with cosine-similarity ranking.

Linear scan over an append-only list of records. Records keep insertion
order, which is also the tie-break for equal scores. Every record in one
index shares the embedding dimensionality of the first record inserted.
The index keeps its own copies of inserted chunks and hands out copies in
results, so callers never share metadata dicts with stored records.
"""

import copy
import math
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from berkshire_rag.application.ports import EmbeddingProvider
from berkshire_rag.domain.entities import DocumentChunk, SearchHit, VectorRecord
from berkshire_rag.domain.exceptions import DimensionMismatch


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Return dot(a, b) / (|a| * |b|); 0.0 when either vector has zero norm."""
    if len(a) != len(b):
        raise DimensionMismatch(len(a), len(b))
    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for x, y in zip(a, b):
        dot += x * y
        norm_a += x * x
        norm_b += y * y
    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0.0:
        return 0.0
    return dot / denominator


def _owned_chunk(chunk: DocumentChunk) -> DocumentChunk:
    """Copy of chunk whose metadata shares no mutable state with the original."""
    return DocumentChunk(content=chunk.content, metadata=copy.deepcopy(chunk.metadata))


def _strictly_equal(left: Any, right: Any) -> bool:
    # True == 1 in Python; metadata filters must not conflate them
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left is right
    return left == right


def matches_filter(metadata: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
    """True if every filter key is present in metadata with an equal value."""
    if not filters:
        return True
    for key, value in filters.items():
        if key not in metadata or not _strictly_equal(metadata[key], value):
            return False
    return True


class VectorIndex:
    """Ordered sequence of vector records answering top-K similarity queries."""

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        records: Iterable[VectorRecord] = (),
    ) -> None:
        self._embedding_provider = embedding_provider
        self._records: list[VectorRecord] = []
        self._dimension: int | None = None
        self.insert(list(records))

    def __len__(self) -> int:
        return len(self._records)

    @property
    def dimension(self) -> int | None:
        """Embedding length shared by all records, None while empty."""
        return self._dimension

    @property
    def records(self) -> tuple[VectorRecord, ...]:
        """Stored records in insertion order. Read-only for callers."""
        return tuple(self._records)

    def insert(self, records: Sequence[VectorRecord]) -> None:
        """Append copies of records, preserving their relative order."""
        if not records:
            return
        dimension = self._dimension
        for record in records:
            size = len(record.embedding)
            if dimension is None:
                dimension = size
            elif size != dimension:
                raise DimensionMismatch(dimension, size)
        self._records.extend(
            VectorRecord(chunk=_owned_chunk(r.chunk), embedding=list(r.embedding))
            for r in records
        )
        self._dimension = dimension

    async def query(
        self,
        query_text: str,
        k: int,
        filters: Mapping[str, Any] | None = None,
    ) -> list[DocumentChunk]:
        """Embed query_text and return the chunks of the k most similar records."""
        if k <= 0 or not self._records:
            return []
        query_embedding = await self._embedding_provider.embed_one(query_text)
        return [hit.chunk for hit in self.search(query_embedding, k, filters)]

    def search(
        self,
        query_embedding: Sequence[float],
        k: int,
        filters: Mapping[str, Any] | None = None,
    ) -> list[SearchHit]:
        """Score records passing the filter and return the top k, best first."""
        if k <= 0 or not self._records:
            return []
        if self._dimension is not None and len(query_embedding) != self._dimension:
            raise DimensionMismatch(self._dimension, len(query_embedding))

        scored = [
            (cosine_similarity(query_embedding, record.embedding), record)
            for record in self._records
            if matches_filter(record.chunk.metadata, filters)
        ]
        # list.sort is stable, reverse=True included
        scored.sort(key=lambda pair: pair[0], reverse=True)
        return [
            SearchHit(chunk=_owned_chunk(record.chunk), score=score)
            for score, record in scored[:k]
        ]

    def clear(self) -> None:
        """Discard all records."""
        self._records.clear()
        self._dimension = None
