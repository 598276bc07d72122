"""Authorization checks run before any document side effect.

Each check raises :class:`PermissionDeniedError` with the message the caller
sees; none of them reveal why the policy said no.
"""

from __future__ import annotations

from dms_api.core.access import (
    Caller,
    DocumentFacts,
    Role,
    can_delete,
    can_edit,
    can_upload,
    can_view,
)
from dms_api.core.auth import PermissionDeniedError

UPLOAD_DENIED = "Unauthorized. Only admins and managers can upload documents."
UPLOAD_DEPARTMENT_DENIED = "Managers can only upload to their own department."
VIEW_DENIED = "Unauthorized to view this document."
EDIT_DENIED = "Unauthorized to edit this document."
EDIT_DEPARTMENT_DENIED = "Managers can only assign documents to their own department."
DELETE_DENIED = "Unauthorized to delete this document."
DOWNLOAD_DENIED = "Unauthorized to download this document."


def _restricted_to_own_department(caller: Caller) -> bool:
    return caller.role is Role.MANAGER


def authorize_upload(caller: Caller) -> None:
    if not can_upload(caller):
        raise PermissionDeniedError(UPLOAD_DENIED)


def authorize_upload_department(caller: Caller, department_id: int) -> None:
    """Managers upload only into their own department; admins anywhere."""

    if _restricted_to_own_department(caller) and department_id != caller.department_id:
        raise PermissionDeniedError(UPLOAD_DEPARTMENT_DENIED)


def authorize_view(caller: Caller, document: DocumentFacts) -> None:
    if not can_view(caller, document):
        raise PermissionDeniedError(VIEW_DENIED)


def authorize_update(caller: Caller, document: DocumentFacts) -> None:
    if not can_edit(caller, document):
        raise PermissionDeniedError(EDIT_DENIED)


def authorize_update_department(caller: Caller, department_id: int | None) -> None:
    if department_id is None:
        return
    if _restricted_to_own_department(caller) and department_id != caller.department_id:
        raise PermissionDeniedError(EDIT_DEPARTMENT_DENIED)


def authorize_delete(caller: Caller, document: DocumentFacts) -> None:
    if not can_delete(caller, document):
        raise PermissionDeniedError(DELETE_DENIED)


def authorize_download(caller: Caller, document: DocumentFacts) -> None:
    if not can_view(caller, document):
        raise PermissionDeniedError(DOWNLOAD_DENIED)


__all__ = [
    "DELETE_DENIED",
    "DOWNLOAD_DENIED",
    "EDIT_DENIED",
    "EDIT_DEPARTMENT_DENIED",
    "UPLOAD_DENIED",
    "UPLOAD_DEPARTMENT_DENIED",
    "VIEW_DENIED",
    "authorize_delete",
    "authorize_download",
    "authorize_update",
    "authorize_update_department",
    "authorize_upload",
    "authorize_upload_department",
    "authorize_view",
]
