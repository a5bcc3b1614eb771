"""Answer question use case - retrieval plus a language-model call."""

import logging
from dataclasses import dataclass, field

from berkshire_rag.application.ports import LanguageModel
from berkshire_rag.application.services.vector_store import DEFAULT_TOP_K, VectorStore
from berkshire_rag.application.use_cases.question.context import format_passages
from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.domain.exceptions import ProviderError, ValidationError

logger = logging.getLogger(__name__)

ADVISOR_INSTRUCTIONS = """You are an expert on Warren Buffett's investment philosophy and Berkshire Hathaway.

Your role is to provide accurate, insightful answers based on Warren Buffett's shareholder letters.

When answering questions:
1. Use the provided context from shareholder letters
2. Quote specific passages when relevant
3. Cite the year of the letter when possible
4. Provide clear, educational explanations
5. Be honest if information is not in the provided context

Remember: You're helping people understand Buffett's wisdom, not giving personal financial advice."""

NO_CONTEXT = (
    "No relevant information found in shareholder letters. "
    "The database may not be initialized yet."
)
RETRIEVAL_ERROR_CONTEXT = "Error retrieving information from shareholder letters."


@dataclass
class Answer:
    """Model answer with the passages it was grounded on."""

    question: str
    text: str
    sources: list[DocumentChunk] = field(default_factory=list)


def build_prompt(question: str, context: str) -> str:
    return f"{context}\n\nQuestion: {question}"


class AnswerQuestionUseCase:
    """Retrieve letter passages for a question and ask the model."""

    def __init__(
        self,
        vector_store: VectorStore,
        language_model: LanguageModel,
        top_k: int = DEFAULT_TOP_K,
    ) -> None:
        self._vector_store = vector_store
        self._language_model = language_model
        self._top_k = top_k

    async def _retrieve(self, question: str, year: int | None) -> tuple[list[DocumentChunk], str]:
        try:
            if year is None:
                sources = await self._vector_store.query(question, self._top_k)
            else:
                sources = await self._vector_store.query_by_year(question, year, self._top_k)
        except ProviderError:
            logger.exception("Error retrieving context")
            return [], RETRIEVAL_ERROR_CONTEXT
        if not sources:
            return [], NO_CONTEXT
        context = (
            "Here are relevant passages from Berkshire Hathaway shareholder letters:\n\n"
            f"{format_passages(sources)}\n\n"
            "Please answer the question based on this context."
        )
        logger.info("Found %d relevant passages", len(sources))
        return sources, context

    async def execute(self, question: str, year: int | None = None) -> Answer:
        """Answer question, optionally restricted to one letter year."""
        if not question.strip():
            raise ValidationError("Question must not be empty")
        sources, context = await self._retrieve(question, year)
        text = await self._language_model.complete(
            ADVISOR_INSTRUCTIONS, build_prompt(question, context)
        )
        return Answer(question=question, text=text, sources=sources)
