"""Parser for PDF."""

import io
from pathlib import Path
from typing import Any

from pypdf import PdfReader

from berkshire_rag.infrastructure.document_parsers.base import ParseResult

# PDF info dictionary key -> property name
_INFO_KEYS = {
    "/Title": "title",
    "/Author": "author",
    "/CreationDate": "created_date",
    "/ModDate": "modified_date",
}


def _parse_pdf_date(value: str | None) -> str:
    """Convert PDF date string (D:YYYYMMDD...) to ISO-like string."""
    if not value:
        return ""
    if not value.startswith("D:"):
        return value
    s = value[2:].strip()
    if len(s) >= 8:
        y, m, d = s[:4], s[4:6], s[6:8]
        return f"{y}-{m}-{d}"
    return value


def _map_metadata(reader: PdfReader) -> dict[str, Any]:
    """Map the PDF info dictionary to property names."""
    result: dict[str, Any] = {}
    meta = reader.metadata
    if not meta:
        return result
    for pdf_key, name in _INFO_KEYS.items():
        raw = meta.get(pdf_key)
        if raw is None:
            continue
        value = str(raw).strip()
        if not value:
            continue
        result[name] = _parse_pdf_date(value) if name.endswith("_date") else value
    return result


def parse_pdf(data: bytes, filename: str | None = None) -> ParseResult:
    """Extract text and metadata from PDF bytes."""
    try:
        reader = PdfReader(io.BytesIO(data))
        parts: list[str] = []
        for page in reader.pages:
            t = page.extract_text()
            if t:
                parts.append(t)
    except Exception as e:
        raise ValueError(f"Invalid or corrupted PDF: {e}") from e
    properties = _map_metadata(reader)
    properties["page_count"] = len(reader.pages)
    if filename:
        properties["source_file_name"] = Path(filename).name
    return ParseResult(text="\n\n".join(parts), properties=properties)
