"""Document parsers: extract text and metadata from files."""

from berkshire_rag.infrastructure.document_parsers.base import DocumentParser, ParseResult
from berkshire_rag.infrastructure.document_parsers.pdf_parser import parse_pdf

__all__ = ["DocumentParser", "ParseResult", "parse_pdf"]
