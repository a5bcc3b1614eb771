"""Chunker port - splits letter text into passages."""

from typing import Protocol

from berkshire_rag.application.dto.chunking_config import ChunkingConfig


class Chunker(Protocol):
    """Port for turning one document's text into embeddable passages."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Return stripped, non-empty passages in document order."""
        ...
