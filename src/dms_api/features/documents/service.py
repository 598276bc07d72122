"""Document listing, upload, metadata updates, deletion and download."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any

from fastapi import UploadFile
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.attributes import set_committed_value

from dms_api.common.exceptions import FieldValidationError
from dms_api.common.listing import Page, clamp_page, clamp_per_page
from dms_api.common.logging import log_context
from dms_api.core.access import AccessLevel, Caller, visibility_predicate
from dms_api.core.auth import PermissionDeniedError
from dms_api.features.categories.service import CategoriesService, CategoryNotFoundError
from dms_api.features.departments.service import DepartmentNotFoundError, DepartmentsService
from dms_api.models import Document
from dms_api.settings import Settings
from dms_api.storage import StorageAdapter, StorageLimitError

from . import gate
from .exceptions import (
    DocumentFileMissingError,
    DocumentNotFoundError,
    DocumentTooLargeError,
    UnsupportedDocumentTypeError,
)
from .filters import DocumentFilters
from .repository import DocumentsRepository
from .schemas import DocumentUpdateRequest, DocumentUploadForm
from .sorting import order_by_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListParams:
    filters: DocumentFilters
    sort_by: str | None = None
    sort_order: str | None = None
    page: int | None = None
    per_page: int | None = None


@dataclass(frozen=True)
class DocumentDownload:
    document: Document
    stream: AsyncIterator[bytes]


def _pydantic_errors(exc: ValidationError, *, location: str) -> list[dict[str, Any]]:
    errors: list[dict[str, Any]] = []
    for error in exc.errors():
        loc = [location, *(str(part) for part in error["loc"])]
        errors.append({"loc": loc, "msg": error["msg"], "type": error["type"]})
    return errors


def _field_error(field: str, message: str, *, location: str = "body") -> dict[str, Any]:
    return {"loc": [location, field], "msg": message, "type": "value_error"}


class DocumentsService:
    """Manage document metadata and backing file storage."""

    def __init__(
        self,
        *,
        session: AsyncSession,
        settings: Settings,
        storage: StorageAdapter,
    ) -> None:
        self._session = session
        self._settings = settings
        self._storage = storage
        self._repository = DocumentsRepository(session)
        self._categories = CategoriesService(session=session)
        self._departments = DepartmentsService(session=session)

    # ---- Queries -----------------------------------------------------------

    async def list_documents(self, caller: Caller, params: ListParams) -> Page[Document]:
        """Return one page of the documents ``caller`` may see."""

        filters = params.filters
        if filters.category_id is not None:
            try:
                await self._categories.get_category(filters.category_id)
            except CategoryNotFoundError as exc:
                raise FieldValidationError(
                    "category_id",
                    "The selected category id is invalid.",
                    location="query",
                ) from exc

        return await self._repository.list_page(
            predicate=visibility_predicate(caller),
            filters=filters,
            page=clamp_page(params.page),
            per_page=clamp_per_page(params.per_page),
            order_by=order_by_for(params.sort_by, params.sort_order),
        )

    async def get_document(self, caller: Caller, document_id: int) -> Document:
        document = await self._require_document(document_id)
        gate.authorize_view(caller, document)
        return document

    # ---- Mutations ---------------------------------------------------------

    async def create_document(
        self,
        caller: Caller,
        *,
        form: dict[str, Any],
        upload: UploadFile | None,
    ) -> Document:
        """Authorize, validate, store the bytes, then insert the row.

        Role is checked before anything about the request body; the manager
        department rule only after the body is known to be valid.
        """

        gate.authorize_upload(caller)

        errors: list[dict[str, Any]] = []
        metadata: DocumentUploadForm | None = None
        try:
            metadata = DocumentUploadForm.model_validate(form)
        except ValidationError as exc:
            errors.extend(_pydantic_errors(exc, location="body"))

        if metadata is not None:
            errors.extend(await self._reference_errors(metadata.category_id, metadata.department_id))

        extension = ""
        if upload is None or not upload.filename:
            errors.append(_field_error("file", "The file field is required."))
        else:
            try:
                extension = self._check_upload(upload)
            except (UnsupportedDocumentTypeError, DocumentTooLargeError) as exc:
                errors.append(_field_error("file", str(exc)))

        if errors or metadata is None:
            raise FieldValidationError.from_errors(errors)

        gate.authorize_upload_department(caller, metadata.department_id)

        try:
            stored = await self._storage.put(
                upload.file,
                suffix=extension,
                max_bytes=self._settings.storage_upload_max_bytes,
            )
        except StorageLimitError as exc:
            too_large = DocumentTooLargeError(limit=exc.limit, received=exc.received)
            raise FieldValidationError("file", str(too_large)) from exc

        document = Document(
            title=metadata.title,
            description=metadata.description,
            file_name=PurePath(upload.filename).name,
            file_path=stored.uri,
            file_type=extension,
            file_size=stored.byte_size,
            category_id=metadata.category_id,
            department_id=metadata.department_id,
            uploaded_by=caller.id,
            access_level=AccessLevel(metadata.access_level),
            download_count=0,
        )
        self._session.add(document)
        try:
            await self._session.flush()
        except Exception:
            await self._storage.delete(stored.uri)
            raise

        logger.info(
            "document.create.success",
            extra=log_context(
                document_id=document.id,
                user_id=caller.id,
                department_id=document.department_id,
                category_id=document.category_id,
                file_size=document.file_size,
            ),
        )
        return await self._reload(document.id)

    async def update_document(
        self,
        caller: Caller,
        document_id: int,
        payload: dict[str, Any],
    ) -> Document:
        document = await self._require_document(document_id)
        gate.authorize_update(caller, document)

        try:
            update = DocumentUpdateRequest.model_validate(payload)
        except ValidationError as exc:
            raise FieldValidationError.from_errors(_pydantic_errors(exc, location="body")) from exc

        changes = update.changes()
        errors = await self._reference_errors(
            changes.get("category_id"),
            changes.get("department_id"),
        )
        if errors:
            raise FieldValidationError.from_errors(errors)

        gate.authorize_update_department(caller, changes.get("department_id"))

        if "access_level" in changes:
            changes["access_level"] = AccessLevel(changes["access_level"])
        for field, value in changes.items():
            setattr(document, field, value)
        await self._session.flush()

        logger.info(
            "document.update.success",
            extra=log_context(
                document_id=document.id,
                user_id=caller.id,
                fields=",".join(sorted(changes)),
            ),
        )
        return await self._reload(document.id)

    async def delete_document(self, caller: Caller, document_id: int) -> None:
        """Remove the row, then release the stored file.

        The row removal is committed first; a file that cannot be removed
        afterwards is logged and left behind rather than failing the request.
        """

        document = await self._require_document(document_id)
        gate.authorize_delete(caller, document)

        stored_uri = document.file_path
        await self._session.delete(document)
        await self._session.commit()

        try:
            await self._storage.delete(stored_uri)
        except OSError:
            logger.warning(
                "document.delete.file_orphaned",
                extra=log_context(document_id=document_id, stored_uri=stored_uri),
                exc_info=True,
            )

        logger.info(
            "document.delete.success",
            extra=log_context(document_id=document_id, user_id=caller.id),
        )

    async def download_document(self, caller: Caller, document_id: int) -> DocumentDownload:
        """Authorize, count the download once, and open the stored bytes.

        The increment is committed before streaming starts.
        """

        document = await self._require_document(document_id)
        try:
            gate.authorize_download(caller, document)
        except PermissionDeniedError:
            logger.info(
                "document.download.denied",
                extra=log_context(document_id=document_id, user_id=caller.id),
            )
            raise

        if not await self._storage.exists(document.file_path):
            logger.warning(
                "document.download.file_missing",
                extra=log_context(document_id=document_id, stored_uri=document.file_path),
            )
            raise DocumentFileMissingError(document_id=document_id, stored_uri=document.file_path)

        count = await self._repository.increment_download_count(document_id)
        await self._session.commit()
        if count is not None:
            set_committed_value(document, "download_count", count)

        logger.info(
            "document.download.success",
            extra=log_context(document_id=document_id, user_id=caller.id, download_count=count),
        )
        return DocumentDownload(
            document=document,
            stream=self._storage.stream(document.file_path),
        )

    # ---- Helpers -----------------------------------------------------------

    async def _require_document(self, document_id: int) -> Document:
        document = await self._repository.get_document(document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def _reload(self, document_id: int) -> Document:
        return await self._require_document(document_id)

    async def _reference_errors(
        self,
        category_id: int | None,
        department_id: int | None,
    ) -> list[dict[str, Any]]:
        errors: list[dict[str, Any]] = []
        if category_id is not None:
            try:
                await self._categories.get_category(category_id)
            except CategoryNotFoundError:
                errors.append(_field_error("category_id", "The selected category id is invalid."))
        if department_id is not None:
            try:
                await self._departments.get_department(department_id)
            except DepartmentNotFoundError:
                errors.append(
                    _field_error("department_id", "The selected department id is invalid.")
                )
        return errors

    def _check_upload(self, upload: UploadFile) -> str:
        """Return the lower-case extension after the allow-list and size checks."""

        extension = PurePath(upload.filename or "").suffix.lstrip(".").lower()
        allowed = list(self._settings.storage_allowed_extensions)
        if extension not in allowed:
            raise UnsupportedDocumentTypeError(extension=extension, allowed=allowed)

        limit = self._settings.storage_upload_max_bytes
        size = getattr(upload, "size", None)
        if size is not None and size > limit:
            raise DocumentTooLargeError(limit=limit, received=size)
        return extension


__all__ = ["DocumentDownload", "DocumentsService", "ListParams"]
