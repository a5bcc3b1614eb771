"""OpenAI-compatible chat completion model."""

from openai import AsyncOpenAI, OpenAIError

from berkshire_rag.domain.exceptions import ProviderError


class OpenAIChatModel:
    """Language model using the chat completions API."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
    ) -> None:
        self._client = AsyncOpenAI(base_url=base_url, api_key=api_key)
        self._model = model

    async def complete(self, instructions: str, prompt: str) -> str:
        """Answer prompt under the given system instructions."""
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": instructions},
                    {"role": "user", "content": prompt},
                ],
            )
        except OpenAIError as e:
            raise ProviderError(f"Chat completion failed: {e}") from e
        if not response.choices:
            raise ProviderError("Chat completion returned no choices")
        return response.choices[0].message.content or ""
