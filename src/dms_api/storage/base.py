"""Base interfaces for DMS blob storage adapters."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import BinaryIO


class StorageError(Exception):
    """Raised when a storage adapter encounters an unrecoverable error."""


class StorageLimitError(StorageError):
    """Raised when a storage write exceeds configured limits."""

    def __init__(self, *, limit: int, received: int) -> None:
        super().__init__(
            f"Object exceeds maximum size of {limit} bytes (received {received} bytes).",
        )
        self.limit = limit
        self.received = received


@dataclass(slots=True)
class StoredObject:
    """Metadata describing an object persisted by a storage adapter."""

    uri: str
    sha256: str
    byte_size: int


class StorageAdapter(ABC):
    """Contract implemented by blob storage adapters."""

    @abstractmethod
    async def put(
        self,
        stream: BinaryIO,
        *,
        suffix: str = "",
        max_bytes: int | None = None,
    ) -> StoredObject:
        """Persist ``stream`` under a fresh URI."""

    @abstractmethod
    async def get(self, uri: str) -> bytes:
        """Return the bytes at ``uri``; raise ``FileNotFoundError`` when absent."""

    @abstractmethod
    async def exists(self, uri: str) -> bool: ...

    @abstractmethod
    def stream(self, uri: str, *, chunk_size: int = 1024 * 1024) -> AsyncIterator[bytes]:
        """Yield the bytes stored at ``uri``."""

    @abstractmethod
    async def delete(self, uri: str) -> None:
        """Remove ``uri`` if it exists."""


__all__ = ["StorageAdapter", "StorageError", "StorageLimitError", "StoredObject"]
