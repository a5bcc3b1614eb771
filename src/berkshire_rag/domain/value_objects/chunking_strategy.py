"""How letter text is cut into passages before embedding."""

from enum import StrEnum


class ChunkingStrategy(StrEnum):
    """Passage splitting strategies, selectable via CHUNKING_STRATEGY."""

    RECURSIVE = "recursive"  # paragraph, line, sentence, word, character
    FIXED = "fixed"  # plain character windows
