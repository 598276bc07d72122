"""Document feature exceptions."""

from __future__ import annotations


class DocumentNotFoundError(Exception):
    """Raised when a document lookup does not yield a result."""

    def __init__(self, document_id: int) -> None:
        super().__init__(f"Document {document_id} not found")
        self.document_id = document_id


class DocumentFileMissingError(Exception):
    """Raised when a document's stored file cannot be located."""

    def __init__(self, *, document_id: int, stored_uri: str) -> None:
        super().__init__(f"Stored file for document {document_id} was not found at {stored_uri!r}.")
        self.document_id = document_id
        self.stored_uri = stored_uri


class DocumentTooLargeError(Exception):
    """Raised when an uploaded document exceeds the configured size limit."""

    def __init__(self, *, limit: int, received: int) -> None:
        super().__init__(
            f"The file may not be greater than {limit // 1024} kilobytes "
            f"(received {received:,} bytes)."
        )
        self.limit = limit
        self.received = received


class UnsupportedDocumentTypeError(Exception):
    def __init__(self, *, extension: str, allowed: list[str]) -> None:
        super().__init__(f"The file must be a file of type: {', '.join(allowed)}.")
        self.extension = extension
        self.allowed = allowed


__all__ = [
    "DocumentFileMissingError",
    "DocumentNotFoundError",
    "DocumentTooLargeError",
    "UnsupportedDocumentTypeError",
]
