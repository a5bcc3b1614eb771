"""Command line interface: ingest, query and maintain the letter index."""

import argparse
import asyncio
import logging
from pathlib import Path

from berkshire_rag import __version__
from berkshire_rag.application.use_cases.ingestion.ingest_letters import (
    inspect_pdf_directory,
)
from berkshire_rag.application.use_cases.question.context import format_context
from berkshire_rag.application.use_cases.search.search_letters import SearchLettersInput
from berkshire_rag.config import get_settings
from berkshire_rag.domain.entities import DocumentChunk
from berkshire_rag.domain.exceptions import BerkshireRAGError, NotFound
from berkshire_rag.domain.value_objects import metadata_keys
from berkshire_rag.logging_config import configure_logging
from berkshire_rag.main import Services, build_services, run_server

logger = logging.getLogger(__name__)

EXAMPLE_QUERIES = [
    ("Insurance Business Insights", "What does Warren Buffett say about insurance business?"),
    (
        "Investment Philosophy",
        "What is Buffett's investment philosophy and approach to value investing?",
    ),
    ("Financial Performance", "How has Berkshire Hathaway performed financially?"),
]
EXAMPLE_YEAR_QUERY = ("What were the key highlights?", 2023)


def _count_pdfs(pdf_dir: Path) -> int:
    try:
        return len(inspect_pdf_directory(pdf_dir))
    except NotFound:
        return 0


def _print_passages(chunks: list[DocumentChunk], preview: int) -> None:
    for i, chunk in enumerate(chunks, start=1):
        meta = chunk.metadata
        year = meta.get(metadata_keys.YEAR) or "Unknown year"
        file_name = meta.get(metadata_keys.FILE_NAME) or "Unknown file"
        chunk_index = meta.get(metadata_keys.CHUNK_INDEX, "?")
        print(f"{i}. Source: {file_name} ({year}) - Chunk {chunk_index}")
        print(f"   {chunk.content[:preview]}...")
        print()


async def _ingest(services: Services, pdf_dir: Path) -> int:
    summary = await services.ingest_letters.execute(pdf_dir)
    if summary.chunks_added == 0:
        print("No documents were created.")
        print(f"Place shareholder letter PDFs in {pdf_dir} named with years (e.g. 2023.pdf).")
        return 1
    print("Ingestion complete.")
    print(f"  PDFs processed: {summary.files_processed}/{summary.files_found}")
    print(f"  Chunks embedded: {summary.chunks_added}")
    print(f"  Index size: {len(services.vector_store)}")
    for name in summary.failed_files:
        print(f"  Failed: {name}")
    return 0


async def _examples(services: Services) -> int:
    for title, question in EXAMPLE_QUERIES:
        print(f"\n{title}")
        print("-" * 60)
        print(f'Query: "{question}"\n')
        results = await services.vector_store.query(question, 3)
        if not results:
            print("No results found. Run ingestion first.")
            continue
        print(f"Found {len(results)} relevant passages:\n")
        _print_passages(results, preview=250)

    question, year = EXAMPLE_YEAR_QUERY
    print(f"\nQuerying the {year} letter: {question}\n")
    results = await services.vector_store.query_by_year(question, year, 3)
    if not results:
        print(f"No documents found for {year} (ingest the {year} letter first).")
    else:
        _print_passages(results, preview=300)
    return 0


async def _ask(
    services: Services, question: str, year: int | None, show_context: bool = False
) -> int:
    answer = await services.answer_question.execute(question, year=year)
    if show_context and answer.sources:
        print("Context:\n")
        print(format_context(answer.sources))
    print(answer.text)
    if answer.sources:
        print("\nSources:")
        for i, source in enumerate(answer.sources, start=1):
            meta = source.metadata
            print(
                f"  {i}. {meta.get(metadata_keys.FILE_NAME, 'Unknown file')}"
                f" (chunk {meta.get(metadata_keys.CHUNK_INDEX, '?')})"
            )
    return 0


async def _search(services: Services, query: str, top_k: int, year: int | None) -> int:
    hits = await services.search_letters.execute(
        SearchLettersInput(query=query, top_k=top_k, year=year)
    )
    if not hits:
        print("No results found.")
        return 0
    for i, hit in enumerate(hits, start=1):
        meta = hit.chunk.metadata
        print(
            f"{i}. [{hit.score:.4f}] {meta.get(metadata_keys.FILE_NAME, 'Unknown file')}"
            f" - Chunk {meta.get(metadata_keys.CHUNK_INDEX, '?')}"
        )
        print(f"   {hit.chunk.content[:200]}...")
    return 0


def _verify(pdf_dir: Path) -> int:
    try:
        files = inspect_pdf_directory(pdf_dir)
    except NotFound:
        print(f"PDF directory not found: {pdf_dir}")
        return 1
    if not files:
        print(f"No PDF files found. Place them in: {pdf_dir}")
        return 1

    print(f"Found {len(files)} PDF file(s):\n")
    for info in files:
        print(f"  {info.name}")
        print(f"     Size: {info.size_bytes / 1024:.2f} KB")
        print(f"     Year: {info.year if info.year is not None else '?'}")
    if any(info.year is None for info in files):
        print("\nSome files don't have years in their names.")
        print('Rename them to include the year (e.g. "2023.pdf", "letter_2022.pdf").')
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="berkshire-rag",
        description="Retrieval-augmented Q&A over Berkshire Hathaway shareholder letters",
    )
    sub = parser.add_subparsers(dest="command")

    ingest = sub.add_parser("ingest", help="Process and embed all PDFs")
    ingest.add_argument("--pdf-dir", type=Path, default=None, help="Directory of letter PDFs")

    sub.add_parser("examples", help="Run example queries")

    ask = sub.add_parser("ask", help="Answer a question from the letters")
    ask.add_argument("question")
    ask.add_argument("--year", type=int, default=None, help="Restrict to one letter year")
    ask.add_argument(
        "--show-context", action="store_true", help="Print the retrieved passages first"
    )

    search = sub.add_parser("search", help="Show the passages closest to a query")
    search.add_argument("query")
    search.add_argument("--top-k", type=int, default=5)
    search.add_argument("--year", type=int, default=None)

    verify = sub.add_parser("verify", help="Check PDFs are ready for ingestion")
    verify.add_argument("--pdf-dir", type=Path, default=None)

    sub.add_parser("clear", help="Delete the vector index and its snapshot")

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None)
    serve.add_argument("--port", type=int, default=None)
    return parser


def run(argv: list[str] | None = None, services: Services | None = None) -> int:
    """Parse argv and dispatch; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command is None:
        parser.print_help()
        return 0

    pdf_dir = getattr(args, "pdf_dir", None) or Path(settings.pdf_directory)
    print(f"Berkshire RAG v{__version__}")
    pdf_count = _count_pdfs(pdf_dir)
    if pdf_count:
        print(f"Found {pdf_count} PDF file(s) in {pdf_dir}\n")
    else:
        print(f"No PDF files found in {pdf_dir}\n")

    if args.command == "verify":
        return _verify(pdf_dir)

    services = services or build_services(settings)
    try:
        if args.command == "ingest":
            return asyncio.run(_ingest(services, pdf_dir))
        if args.command == "examples":
            return asyncio.run(_examples(services))
        if args.command == "ask":
            return asyncio.run(_ask(services, args.question, args.year, args.show_context))
        if args.command == "search":
            return asyncio.run(_search(services, args.query, args.top_k, args.year))
        if args.command == "clear":
            services.vector_store.clear_index()
            print("Vector store cleared.")
            return 0
        if args.command == "serve":
            run_server(services, host=args.host, port=args.port)
            return 0
    except BerkshireRAGError as e:
        logger.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {e}")
        return 1
    parser.error(f"Unknown command: {args.command}")
    return 2
