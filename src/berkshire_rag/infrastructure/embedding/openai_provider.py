"""OpenAI-compatible embedding provider."""

from openai import AsyncOpenAI, OpenAIError

from berkshire_rag.domain.exceptions import ProviderError


class OpenAIEmbeddingProvider:
    """Embedding provider using OpenAI-compatible API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model

    async def embed_many(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for texts, in input order."""
        if not texts:
            return []
        try:
            response = await self._client.embeddings.create(
                model=self._model,
                input=texts,
            )
        except OpenAIError as e:
            raise ProviderError(f"Embedding request failed: {e}") from e
        data = sorted(response.data, key=lambda d: d.index)
        return [d.embedding for d in data]

    async def embed_one(self, text: str) -> list[float]:
        """Generate the embedding of a single text."""
        embeddings = await self.embed_many([text])
        if not embeddings:
            raise ProviderError("Embedding provider returned no vector")
        return embeddings[0]
