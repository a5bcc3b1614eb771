"""JSON file snapshot of the vector index."""

import contextlib
import json
import logging
import os
from collections.abc import Sequence
from numbers import Real
from pathlib import Path
from typing import Any

from berkshire_rag.domain.entities import DocumentChunk, VectorRecord
from berkshire_rag.domain.exceptions import PersistenceReadError, PersistenceWriteError

logger = logging.getLogger(__name__)


def _record_to_dict(record: VectorRecord) -> dict[str, Any]:
    return {
        "content": record.chunk.content,
        "metadata": record.chunk.metadata,
        "embedding": record.embedding,
    }


def _record_from_dict(item: Any, position: int) -> VectorRecord:
    """Validate one serialized record. Raises PersistenceReadError."""
    if not isinstance(item, dict):
        raise PersistenceReadError(f"Record {position} is not an object")
    content = item.get("content")
    metadata = item.get("metadata", {})
    embedding = item.get("embedding")
    if not isinstance(content, str):
        raise PersistenceReadError(f"Record {position} has no string content")
    if not isinstance(metadata, dict):
        raise PersistenceReadError(f"Record {position} metadata is not an object")
    if not isinstance(embedding, list) or not all(
        isinstance(x, Real) and not isinstance(x, bool) for x in embedding
    ):
        raise PersistenceReadError(f"Record {position} embedding is not a list of numbers")
    return VectorRecord(
        chunk=DocumentChunk(content=content, metadata=metadata),
        embedding=[float(x) for x in embedding],
    )


def decode_snapshot(raw: str) -> list[VectorRecord]:
    """Parse snapshot text into records. Raises PersistenceReadError."""
    try:
        items = json.loads(raw)
    except ValueError as e:
        raise PersistenceReadError(f"Invalid JSON: {e}") from e
    if not isinstance(items, list):
        raise PersistenceReadError("Snapshot root is not an array")
    records = [_record_from_dict(item, i) for i, item in enumerate(items)]
    dimensions = {len(r.embedding) for r in records}
    if len(dimensions) > 1:
        raise PersistenceReadError(f"Mixed embedding dimensions: {sorted(dimensions)}")
    return records


class JsonSnapshotStore:
    """Snapshot store writing the whole record sequence to one JSON file."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def save(self, records: Sequence[VectorRecord]) -> None:
        """Overwrite the snapshot with all records. Raises PersistenceWriteError."""
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            payload = json.dumps([_record_to_dict(r) for r in records])
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except (OSError, TypeError, ValueError) as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            raise PersistenceWriteError(f"Cannot write snapshot {self._path}: {e}") from e
        logger.debug("Saved %d records to %s", len(records), self._path)

    def load(self) -> list[VectorRecord] | None:
        """Return saved records, or None when the file is absent or unreadable."""
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Cannot read snapshot %s, starting empty: %s", self._path, e)
            return None
        try:
            return decode_snapshot(raw)
        except PersistenceReadError as e:
            logger.warning("Corrupt snapshot %s, starting empty: %s", self._path, e)
            return None

    def delete(self) -> bool:
        """Remove the snapshot file. Returns True if a file was removed."""
        try:
            self._path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise PersistenceWriteError(f"Cannot delete snapshot {self._path}: {e}") from e
        logger.info("Deleted snapshot %s", self._path)
        return True
