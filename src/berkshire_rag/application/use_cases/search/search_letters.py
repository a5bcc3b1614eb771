"""Search letters use case - ranked passages for a query."""

from dataclasses import dataclass
from typing import Any

from berkshire_rag.application.services.vector_store import DEFAULT_TOP_K, VectorStore
from berkshire_rag.domain.entities import SearchHit
from berkshire_rag.domain.exceptions import ValidationError
from berkshire_rag.domain.value_objects import metadata_keys

MAX_TOP_K = 50


@dataclass
class SearchLettersInput:
    """Input for letter search."""

    query: str
    top_k: int = DEFAULT_TOP_K
    year: int | None = None
    filters: dict[str, Any] | None = None  # metadata key -> exact value


class SearchLettersUseCase:
    """Vector search over indexed letters with exact-match metadata filters."""

    def __init__(self, vector_store: VectorStore) -> None:
        self._vector_store = vector_store

    async def execute(self, input_data: SearchLettersInput) -> list[SearchHit]:
        """Execute search."""
        if not input_data.query.strip():
            raise ValidationError("Query must not be empty")
        if not 1 <= input_data.top_k <= MAX_TOP_K:
            raise ValidationError(f"top_k must be between 1 and {MAX_TOP_K}")

        filters = dict(input_data.filters or {})
        if input_data.year is not None:
            filters[metadata_keys.YEAR] = input_data.year
        return await self._vector_store.search(
            input_data.query,
            input_data.top_k,
            filters or None,
        )
