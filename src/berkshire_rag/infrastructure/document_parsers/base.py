"""Base protocol for document parsers."""

from typing import Any, Protocol


class ParseResult:
    """Result of parsing a file: extracted text and document properties."""

    __slots__ = ("text", "properties")

    def __init__(
        self,
        text: str,
        properties: dict[str, Any],
    ) -> None:
        self.text = text
        self.properties = properties


class DocumentParser(Protocol):
    """Parser that extracts text and metadata from file bytes."""

    def __call__(self, data: bytes, filename: str | None = None) -> ParseResult:
        """Extract text and metadata. Raises ValueError on parse error."""
        ...
