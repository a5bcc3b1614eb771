"""Ingest shareholder letters use case."""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from berkshire_rag.application.dto.chunking_config import ChunkingConfig
from berkshire_rag.application.ports import Chunker
from berkshire_rag.application.services.vector_store import VectorStore
from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.domain.exceptions import NotFound
from berkshire_rag.domain.value_objects import metadata_keys as keys
from berkshire_rag.infrastructure.document_parsers import DocumentParser, parse_pdf

logger = logging.getLogger(__name__)

_YEAR_PATTERN = re.compile(r"(\d{4})")

# Parser property -> chunk metadata key
_PDF_PROPERTY_KEYS = {
    "page_count": keys.PAGE_COUNT,
    "title": keys.TITLE,
    "author": keys.AUTHOR,
    "created_date": keys.CREATED_DATE,
    "modified_date": keys.MODIFIED_DATE,
}


def extract_year(file_name: str) -> int | None:
    """Year from the first four-digit run in a file name ("letter_2023.pdf" -> 2023)."""
    match = _YEAR_PATTERN.search(file_name)
    return int(match.group(1)) if match else None


def list_pdf_files(directory: Path) -> list[Path]:
    """PDF files directly inside directory, sorted by name."""
    if not directory.is_dir():
        raise NotFound(f"PDF directory not found: {directory}")
    return sorted(
        p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".pdf"
    )


@dataclass
class PdfFileInfo:
    """PDF found in the corpus directory."""

    name: str
    size_bytes: int
    year: int | None


def inspect_pdf_directory(directory: str | Path) -> list[PdfFileInfo]:
    """Describe the PDFs that ingestion would pick up."""
    return [
        PdfFileInfo(name=p.name, size_bytes=p.stat().st_size, year=extract_year(p.name))
        for p in list_pdf_files(Path(directory))
    ]


@dataclass
class IngestionSummary:
    """Outcome of one ingestion run."""

    files_found: int = 0
    files_processed: int = 0
    failed_files: list[str] = field(default_factory=list)
    chunks_added: int = 0


class IngestLettersUseCase:
    """Parse letter PDFs, chunk them and add the chunks to the vector store."""

    def __init__(
        self,
        vector_store: VectorStore,
        chunker: Chunker,
        chunking_config: ChunkingConfig,
        parser: DocumentParser = parse_pdf,
    ) -> None:
        self._vector_store = vector_store
        self._chunker = chunker
        self._chunking_config = chunking_config
        self._parser = parser

    def process_pdf(self, path: Path) -> list[DocumentChunk]:
        """Chunk one letter into documents with letter metadata."""
        parsed = self._parser(path.read_bytes(), filename=path.name)
        texts = self._chunker.chunk(parsed.text, self._chunking_config)
        year = extract_year(path.name)

        base_metadata = {
            keys.SOURCE: str(path),
            keys.FILE_NAME: path.stem,
            keys.TYPE: "pdf",
            keys.TOTAL_CHUNKS: len(texts),
            keys.COMPANY: keys.LETTER_COMPANY,
            keys.DOCUMENT_TYPE: keys.LETTER_DOCUMENT_TYPE,
        }
        for prop, key in _PDF_PROPERTY_KEYS.items():
            if prop in parsed.properties:
                base_metadata[key] = parsed.properties[prop]
        if year is not None:
            base_metadata[keys.YEAR] = year
        return [
            DocumentChunk(content=text, metadata={**base_metadata, keys.CHUNK_INDEX: i})
            for i, text in enumerate(texts)
        ]

    async def execute(self, directory: str | Path) -> IngestionSummary:
        """Ingest every PDF in directory. Unreadable PDFs are logged and skipped."""
        pdf_files = list_pdf_files(Path(directory))
        summary = IngestionSummary(files_found=len(pdf_files))
        logger.info("Found %d PDF files in %s", len(pdf_files), directory)

        chunks: list[DocumentChunk] = []
        for path in pdf_files:
            try:
                documents = self.process_pdf(path)
            except (OSError, ValueError):
                logger.exception("Failed to process %s", path.name)
                summary.failed_files.append(path.name)
                continue
            chunks.extend(documents)
            summary.files_processed += 1
            logger.info("Processed %s -> %d chunks", path.name, len(documents))

        if chunks:
            await self._vector_store.add_documents(chunks)
        summary.chunks_added = len(chunks)
        return summary
