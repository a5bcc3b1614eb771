"""Chunking configuration DTO."""

from dataclasses import dataclass

from berkshire_rag.domain.value_objects import ChunkingStrategy

DEFAULT_SEPARATORS = ("\n\n", "\n", ". ", " ", "")


@dataclass
class ChunkingConfig:
    """Configuration for text chunking."""

    chunk_size: int = 1000
    chunk_overlap: int = 200
    strategy: ChunkingStrategy = ChunkingStrategy.RECURSIVE
    separators: tuple[str, ...] = DEFAULT_SEPARATORS
