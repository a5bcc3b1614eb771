"""Document chunk entity - the unit of embedding and retrieval."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DocumentChunk:
    """Span of a source document's text with open metadata."""

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
