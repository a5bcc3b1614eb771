"""Application ports - interfaces for external adapters."""

from berkshire_rag.application.ports.chunker import Chunker
from berkshire_rag.application.ports.embedding_provider import EmbeddingProvider
from berkshire_rag.application.ports.language_model import LanguageModel
from berkshire_rag.application.ports.snapshot_store import SnapshotStore

__all__ = [
    "Chunker",
    "EmbeddingProvider",
    "LanguageModel",
    "SnapshotStore",
]
