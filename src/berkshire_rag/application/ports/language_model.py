"""Language model port - chat completion."""

from typing import Protocol


class LanguageModel(Protocol):
    """Port for generating an answer from instructions and a prompt."""

    async def complete(self, instructions: str, prompt: str) -> str: ...
