"""Domain exceptions."""


class BerkshireRAGError(Exception):
    """Base exception for Berkshire RAG."""

    pass


class ProviderError(BerkshireRAGError):
    """Embedding or language-model call failed (network, auth, rate limit)."""

    pass


class PersistenceReadError(BerkshireRAGError):
    """Vector store snapshot exists but cannot be parsed."""

    pass


class PersistenceWriteError(BerkshireRAGError):
    """Vector store snapshot cannot be written."""

    pass


class NotFound(BerkshireRAGError):
    """Requested resource was not found."""

    pass


class ValidationError(BerkshireRAGError):
    """Validation failed for input data."""

    pass


class DimensionMismatch(ValidationError):
    """Embedding length differs from the dimensionality of the index."""

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Embedding dimension mismatch: index holds {expected}-d vectors, got {actual}"
        )
        self.expected = expected
        self.actual = actual
