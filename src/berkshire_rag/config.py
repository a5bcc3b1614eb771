"""Application configuration from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from berkshire_rag.domain.value_objects import ChunkingStrategy


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI compatible API
    openai_api_key: str = Field(default="", description="API key for embeddings and chat")
    openai_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="OpenAI-compatible API URL",
    )
    embedding_model: str = Field(
        default="text-embedding-3-small",
        description="Embedding model name",
    )
    embedding_batch_size: int = Field(
        default=50,
        ge=1,
        description="Texts per embedding request during ingestion",
    )
    chat_model: str = Field(default="gpt-4o-mini", description="Chat model for answers")

    # Corpus and vector store
    pdf_directory: str = Field(default="data/pdfs", description="Shareholder letter PDFs")
    vector_store_path: str = Field(
        default="data/vector-store.json",
        description="Vector index snapshot file",
    )
    chunk_size: int = Field(default=1000, ge=1, description="Chunk size in characters")
    chunk_overlap: int = Field(default=200, ge=0, description="Chunk overlap in characters")
    chunking_strategy: ChunkingStrategy = Field(
        default=ChunkingStrategy.RECURSIVE,
        description="Chunking strategy",
    )
    default_top_k: int = Field(default=5, ge=1, description="Passages retrieved per question")

    # HTTP server
    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, description="Bind port")

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
