"""Application entry point and composition root."""

import sys
from dataclasses import dataclass

from falcon.asgi import App

from berkshire_rag.application.dto.chunking_config import ChunkingConfig
from berkshire_rag.application.ports import EmbeddingProvider, LanguageModel
from berkshire_rag.application.services.vector_store import VectorStore
from berkshire_rag.application.use_cases.ingestion.ingest_letters import IngestLettersUseCase
from berkshire_rag.application.use_cases.question.answer_question import AnswerQuestionUseCase
from berkshire_rag.application.use_cases.search.search_letters import SearchLettersUseCase
from berkshire_rag.config import Settings, get_settings
from berkshire_rag.infrastructure.chunking.recursive_chunker import RecursiveChunker
from berkshire_rag.infrastructure.document_parsers import parse_pdf
from berkshire_rag.infrastructure.embedding.openai_provider import OpenAIEmbeddingProvider
from berkshire_rag.infrastructure.llm.openai_chat import OpenAIChatModel
from berkshire_rag.infrastructure.persistence.json_snapshot import JsonSnapshotStore
from berkshire_rag.interfaces.api.app import create_app
from berkshire_rag.interfaces.api.resources.health import HealthResource
from berkshire_rag.interfaces.api.resources.query import QueryResource
from berkshire_rag.interfaces.api.resources.search import SearchResource


@dataclass
class Services:
    """Explicitly owned application graph shared by the CLI and the API."""

    settings: Settings
    vector_store: VectorStore
    ingest_letters: IngestLettersUseCase
    search_letters: SearchLettersUseCase
    answer_question: AnswerQuestionUseCase


def build_services(
    settings: Settings | None = None,
    *,
    embedding_provider: EmbeddingProvider | None = None,
    language_model: LanguageModel | None = None,
) -> Services:
    """Composition root - wire adapters into the store and use cases."""
    settings = settings or get_settings()
    if embedding_provider is None:
        embedding_provider = OpenAIEmbeddingProvider(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            model=settings.embedding_model,
        )
    if language_model is None:
        language_model = OpenAIChatModel(
            base_url=settings.openai_base_url,
            api_key=settings.openai_api_key,
            model=settings.chat_model,
        )

    vector_store = VectorStore(
        embedding_provider=embedding_provider,
        snapshot_store=JsonSnapshotStore(settings.vector_store_path),
        batch_size=settings.embedding_batch_size,
    )
    ingest_letters = IngestLettersUseCase(
        vector_store=vector_store,
        chunker=RecursiveChunker(),
        chunking_config=ChunkingConfig(
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            strategy=settings.chunking_strategy,
        ),
        parser=parse_pdf,
    )
    search_letters = SearchLettersUseCase(vector_store)
    answer_question = AnswerQuestionUseCase(
        vector_store=vector_store,
        language_model=language_model,
        top_k=settings.default_top_k,
    )
    return Services(
        settings=settings,
        vector_store=vector_store,
        ingest_letters=ingest_letters,
        search_letters=search_letters,
        answer_question=answer_question,
    )


def create_berkshire_app(services: Services | None = None) -> App:
    """Build Falcon app with all dependencies."""
    services = services or build_services()
    return create_app(
        query_resource=QueryResource(services.answer_question),
        search_resource=SearchResource(services.search_letters),
        health_resource=HealthResource(services.vector_store),
    )


def run_server(services: Services, host: str | None = None, port: int | None = None) -> None:
    """Run uvicorn server."""
    import uvicorn

    app = create_berkshire_app(services)
    uvicorn.run(
        app,
        host=host or services.settings.host,
        port=port or services.settings.port,
        log_level=services.settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    from berkshire_rag.interfaces.cli.commands import run

    return run(argv)


if __name__ == "__main__":
    sys.exit(main())
