"""Vector record entity - chunk bound to its embedding."""

from dataclasses import dataclass

from berkshire_rag.domain.entities.document_chunk import DocumentChunk


@dataclass
class VectorRecord:
    """Document chunk with its embedding vector."""

    chunk: DocumentChunk
    embedding: list[float]
