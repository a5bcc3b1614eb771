"""Domain value objects."""

from berkshire_rag.domain.value_objects import metadata_keys
from berkshire_rag.domain.value_objects.chunking_strategy import ChunkingStrategy

__all__ = [
    "ChunkingStrategy",
    "metadata_keys",
]
