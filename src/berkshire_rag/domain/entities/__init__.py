"""Domain entities."""

from berkshire_rag.domain.entities.document_chunk import DocumentChunk
from berkshire_rag.domain.entities.search_hit import SearchHit
from berkshire_rag.domain.entities.vector_record import VectorRecord

__all__ = [
    "DocumentChunk",
    "SearchHit",
    "VectorRecord",
]
