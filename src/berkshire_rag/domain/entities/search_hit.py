"""Search hit - chunk with its similarity score."""

from dataclasses import dataclass

from berkshire_rag.domain.entities.document_chunk import DocumentChunk


@dataclass
class SearchHit:
    """Single ranked result of a similarity search."""

    chunk: DocumentChunk
    score: float
