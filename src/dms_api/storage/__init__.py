"""Blob storage adapters and FastAPI lifecycle helpers."""

from __future__ import annotations

from fastapi import FastAPI, Request

from dms_api.settings import Settings

from .base import StorageAdapter, StorageError, StorageLimitError, StoredObject
from .filesystem import FilesystemStorage


def build_storage_adapter(settings: Settings) -> StorageAdapter:
    return FilesystemStorage(settings.documents_dir, upload_prefix="documents")


def init_storage(app: FastAPI, settings: Settings) -> None:
    app.state.blob_storage = build_storage_adapter(settings)


def get_storage(request: Request) -> StorageAdapter:
    """FastAPI dependency returning the adapter bound at startup."""

    adapter = getattr(request.app.state, "blob_storage", None)
    if adapter is None:
        raise RuntimeError("Blob storage is not initialised")
    return adapter


__all__ = [
    "FilesystemStorage",
    "StorageAdapter",
    "StorageError",
    "StorageLimitError",
    "StoredObject",
    "build_storage_adapter",
    "get_storage",
    "init_storage",
]
