"""Snapshot store port - flat-file persistence of the vector index."""

from collections.abc import Sequence
from typing import Protocol

from berkshire_rag.domain.entities import VectorRecord


class SnapshotStore(Protocol):
    """Port for saving and loading the full record sequence of an index."""

    def save(self, records: Sequence[VectorRecord]) -> None: ...

    def load(self) -> list[VectorRecord] | None: ...

    def delete(self) -> bool: ...
