"""Recursive text chunker implementation."""

from berkshire_rag.application.dto.chunking_config import ChunkingConfig
from berkshire_rag.domain.value_objects import ChunkingStrategy


class RecursiveChunker:
    """Chunker using recursive separator splitting or fixed character windows."""

    def chunk(self, text: str, config: ChunkingConfig) -> list[str]:
        """Split text into chunks with overlap."""
        text = text.strip()
        if config.strategy == ChunkingStrategy.FIXED:
            return self._fixed(text, config) if text else []
        if config.strategy != ChunkingStrategy.RECURSIVE:
            raise ValueError(f"Unsupported strategy: {config.strategy}")
        if config.chunk_overlap >= config.chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")

        if not text:
            return []
        if len(text) <= config.chunk_size:
            return [text]
        return self._split(text, list(config.separators), config)

    def _fixed(self, text: str, config: ChunkingConfig) -> list[str]:
        step = max(1, config.chunk_size - config.chunk_overlap)
        chunks: list[str] = []
        start = 0
        while start < len(text):
            chunk = text[start : start + config.chunk_size]
            if chunk.strip():
                chunks.append(chunk.strip())
            start += step
        return chunks

    def _split(self, text: str, separators: list[str], config: ChunkingConfig) -> list[str]:
        separator = ""
        remaining: list[str] = []
        for i, candidate in enumerate(separators):
            if candidate == "" or candidate in text:
                separator = candidate
                remaining = separators[i + 1 :]
                break

        if separator:
            parts = text.split(separator)
            # Separator stays attached to the piece it terminates
            pieces = [p + separator for p in parts[:-1]] + [parts[-1]]
        else:
            pieces = list(text)

        chunks: list[str] = []
        fitting: list[str] = []
        for piece in pieces:
            if not piece:
                continue
            if len(piece) <= config.chunk_size:
                fitting.append(piece)
                continue
            if fitting:
                chunks.extend(self._merge(fitting, config))
                fitting = []
            if remaining:
                chunks.extend(self._split(piece, remaining, config))
            else:
                chunks.extend(self._fixed(piece, config))
        if fitting:
            chunks.extend(self._merge(fitting, config))
        return chunks

    def _merge(self, pieces: list[str], config: ChunkingConfig) -> list[str]:
        """Greedily join pieces up to chunk_size, carrying overlap forward."""
        chunks: list[str] = []
        window: list[str] = []
        total = 0
        for piece in pieces:
            if window and total + len(piece) > config.chunk_size:
                joined = "".join(window).strip()
                if joined:
                    chunks.append(joined)
                while window and (
                    total > config.chunk_overlap or total + len(piece) > config.chunk_size
                ):
                    total -= len(window.pop(0))
            window.append(piece)
            total += len(piece)
        joined = "".join(window).strip()
        if joined:
            chunks.append(joined)
        return chunks
