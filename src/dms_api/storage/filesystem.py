"""Local filesystem-backed storage adapter."""

from __future__ import annotations

from collections.abc import AsyncIterator
from hashlib import sha256
from pathlib import Path
from typing import BinaryIO
from uuid import uuid4

from fastapi.concurrency import run_in_threadpool

from .base import StorageAdapter, StorageError, StorageLimitError, StoredObject

_DEFAULT_CHUNK_SIZE = 1024 * 1024  # 1 MiB


class FilesystemStorage(StorageAdapter):
    """Store objects on the local filesystem within a configured base directory."""

    def __init__(self, base_dir: Path, *, upload_prefix: str = "documents") -> None:
        self._base_dir = Path(base_dir).expanduser().resolve()
        self._upload_prefix = upload_prefix.strip("/") or "documents"
        self._base_dir.mkdir(parents=True, exist_ok=True)

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def make_uri(self, *, suffix: str = "") -> str:
        """Return a fresh storage URI, keeping ``suffix`` as the file extension."""

        extension = suffix.strip().lstrip(".").lower()
        name = uuid4().hex
        if extension:
            name = f"{name}.{extension}"
        return f"{self._upload_prefix}/{name}"

    def path_for(self, uri: str) -> Path:
        """Return the absolute filesystem path for ``uri``."""

        candidate = (self._base_dir / uri.lstrip("/")).resolve()
        try:
            candidate.relative_to(self._base_dir)
        except ValueError as exc:
            raise StorageError("Storage URI escapes the configured base directory.") from exc
        return candidate

    async def put(
        self,
        stream: BinaryIO,
        *,
        suffix: str = "",
        max_bytes: int | None = None,
    ) -> StoredObject:
        uri = self.make_uri(suffix=suffix)
        destination = self.path_for(uri)

        def _write() -> StoredObject:
            rewind = getattr(stream, "seek", None)
            if callable(rewind):
                try:
                    rewind(0)
                except (OSError, ValueError):
                    pass

            size = 0
            digest = sha256()
            destination.parent.mkdir(parents=True, exist_ok=True)

            success = False
            try:
                with destination.open("wb") as target:
                    while True:
                        chunk = stream.read(_DEFAULT_CHUNK_SIZE)
                        if not chunk:
                            break
                        size += len(chunk)
                        if max_bytes is not None and size > max_bytes:
                            raise StorageLimitError(limit=max_bytes, received=size)
                        target.write(chunk)
                        digest.update(chunk)
                success = True
            finally:
                if not success:
                    destination.unlink(missing_ok=True)

            return StoredObject(uri=uri, sha256=digest.hexdigest(), byte_size=size)

        return await run_in_threadpool(_write)

    async def get(self, uri: str) -> bytes:
        path = self.path_for(uri)
        return await run_in_threadpool(path.read_bytes)

    async def exists(self, uri: str) -> bool:
        path = self.path_for(uri)
        return await run_in_threadpool(path.is_file)

    async def stream(
        self,
        uri: str,
        *,
        chunk_size: int = _DEFAULT_CHUNK_SIZE,
    ) -> AsyncIterator[bytes]:
        path = self.path_for(uri)
        if not await run_in_threadpool(path.is_file):
            raise FileNotFoundError(uri)

        source = await run_in_threadpool(path.open, "rb")
        try:
            while True:
                chunk = await run_in_threadpool(source.read, chunk_size)
                if not chunk:
                    break
                yield chunk
        finally:
            await run_in_threadpool(source.close)

    async def delete(self, uri: str) -> None:
        path = self.path_for(uri)

        def _remove() -> None:
            try:
                path.unlink()
            except FileNotFoundError:
                return

        await run_in_threadpool(_remove)


__all__ = ["FilesystemStorage"]
