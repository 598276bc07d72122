"""HTTP interface for document listing, upload and lifecycle operations."""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import (
    APIRouter,
    Body,
    Depends,
    File,
    Form,
    HTTPException,
    Path,
    Query,
    Security,
    UploadFile,
    status,
)
from fastapi.responses import StreamingResponse

from dms_api.api.deps import get_documents_service
from dms_api.common.downloads import build_content_disposition, media_type_for
from dms_api.common.schema import MessageResponse
from dms_api.core.access import AccessLevel
from dms_api.core.http import CallerDep, require_authenticated
from dms_api.settings import MAX_RECORD_ID

from .exceptions import DocumentFileMissingError, DocumentNotFoundError
from .filters import DocumentFilters
from .schemas import DocumentEnvelope, DocumentMutationResponse, DocumentOut, DocumentPage
from .service import DocumentsService, ListParams

router = APIRouter(
    tags=["documents"],
    dependencies=[Security(require_authenticated)],
)

DocumentsServiceDep = Annotated[DocumentsService, Depends(get_documents_service)]
DocumentPath = Annotated[int, Path(description="Document identifier", ge=1, le=MAX_RECORD_ID)]

DOCUMENT_NOT_FOUND = "Document not found."
FILE_NOT_FOUND = "File not found."


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=DOCUMENT_NOT_FOUND)


def get_list_params(
    search: Annotated[str | None, Query()] = None,
    category_id: Annotated[int | None, Query(ge=1, le=MAX_RECORD_ID)] = None,
    department_id: Annotated[int | None, Query(ge=1, le=MAX_RECORD_ID)] = None,
    access_level: Annotated[AccessLevel | None, Query()] = None,
    sort_by: Annotated[str | None, Query()] = None,
    sort_order: Annotated[str | None, Query()] = None,
    page: Annotated[int | None, Query()] = None,
    per_page: Annotated[int | None, Query()] = None,
) -> ListParams:
    filters = DocumentFilters(
        search=search,
        category_id=category_id,
        department_id=department_id,
        access_level=access_level,
    )
    return ListParams(
        filters=filters,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        per_page=per_page,
    )


ListParamsDep = Annotated[ListParams, Depends(get_list_params)]


@router.get(
    "/documents",
    response_model=DocumentPage,
    summary="List documents visible to the caller",
)
async def list_documents(
    caller: CallerDep,
    params: ListParamsDep,
    service: DocumentsServiceDep,
) -> DocumentPage:
    page = await service.list_documents(caller, params)
    return DocumentPage(
        data=[DocumentOut.from_model(document, caller) for document in page.items],
        meta=page.meta,
    )


@router.post(
    "/documents",
    response_model=DocumentMutationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload a document",
    responses={
        status.HTTP_403_FORBIDDEN: {"description": "Caller may not upload here."},
        status.HTTP_422_UNPROCESSABLE_ENTITY: {"description": "Invalid metadata or file."},
    },
)
async def upload_document(
    caller: CallerDep,
    service: DocumentsServiceDep,
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    category_id: Annotated[str | None, Form()] = None,
    department_id: Annotated[str | None, Form()] = None,
    access_level: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> DocumentMutationResponse:
    # Fields are optional at the HTTP layer so the role check runs first.
    submitted: dict[str, Any] = {
        "title": title,
        "description": description,
        "category_id": category_id,
        "department_id": department_id,
        "access_level": access_level,
    }
    form = {key: value for key, value in submitted.items() if value is not None}
    document = await service.create_document(caller, form=form, upload=file)
    return DocumentMutationResponse(
        message="Document uploaded successfully",
        data=DocumentOut.from_model(document, caller),
    )


@router.get(
    "/documents/{document_id}",
    response_model=DocumentEnvelope,
    summary="Show one document",
)
async def read_document(
    document_id: DocumentPath,
    caller: CallerDep,
    service: DocumentsServiceDep,
) -> DocumentEnvelope:
    try:
        document = await service.get_document(caller, document_id)
    except DocumentNotFoundError as exc:
        raise _not_found() from exc
    return DocumentEnvelope(data=DocumentOut.from_model(document, caller))


@router.patch(
    "/documents/{document_id}",
    response_model=DocumentMutationResponse,
    summary="Update document metadata",
)
async def update_document(
    document_id: DocumentPath,
    caller: CallerDep,
    service: DocumentsServiceDep,
    payload: Annotated[dict[str, Any] | None, Body()] = None,
) -> DocumentMutationResponse:
    try:
        document = await service.update_document(caller, document_id, payload or {})
    except DocumentNotFoundError as exc:
        raise _not_found() from exc
    return DocumentMutationResponse(
        message="Document updated successfully",
        data=DocumentOut.from_model(document, caller),
    )


@router.delete(
    "/documents/{document_id}",
    response_model=MessageResponse,
    summary="Delete a document and its stored file",
)
async def delete_document(
    document_id: DocumentPath,
    caller: CallerDep,
    service: DocumentsServiceDep,
) -> MessageResponse:
    try:
        await service.delete_document(caller, document_id)
    except DocumentNotFoundError as exc:
        raise _not_found() from exc
    return MessageResponse(message="Document deleted successfully")


@router.get(
    "/documents/{document_id}/download",
    response_class=StreamingResponse,
    summary="Download the stored file",
    responses={
        status.HTTP_200_OK: {"content": {"application/octet-stream": {}}},
        status.HTTP_404_NOT_FOUND: {"description": "Document or stored file missing."},
    },
)
async def download_document(
    document_id: DocumentPath,
    caller: CallerDep,
    service: DocumentsServiceDep,
) -> StreamingResponse:
    try:
        download = await service.download_document(caller, document_id)
    except DocumentNotFoundError as exc:
        raise _not_found() from exc
    except DocumentFileMissingError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=FILE_NOT_FOUND) from exc

    document = download.document
    return StreamingResponse(
        download.stream,
        media_type=media_type_for(document.file_name),
        headers={"Content-Disposition": build_content_disposition(document.file_name)},
    )


__all__ = ["router"]
