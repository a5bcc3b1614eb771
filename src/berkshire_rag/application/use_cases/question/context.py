"""Formatting retrieved chunks into prompt context."""

from collections.abc import Sequence

from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.domain.value_objects import metadata_keys


def _year_label(chunk: DocumentChunk, unknown: str) -> str:
    year = chunk.metadata.get(metadata_keys.YEAR)
    return str(year) if year else unknown


def format_context(chunks: Sequence[DocumentChunk]) -> str:
    """Join chunks into "[Source i - year]" blocks."""
    return "\n---\n\n".join(
        f"[Source {i} - {_year_label(chunk, 'Unknown')}]:\n{chunk.content}\n"
        for i, chunk in enumerate(chunks, start=1)
    )


def format_passages(chunks: Sequence[DocumentChunk]) -> str:
    """Join chunks into "[year Letter, Passage i]" blocks for the advisor prompt."""
    return "\n\n---\n\n".join(
        f"[{_year_label(chunk, 'Unknown year')} Letter, Passage {i}]:\n{chunk.content}"
        for i, chunk in enumerate(chunks, start=1)
    )
