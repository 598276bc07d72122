"""Download response helpers (attachment headers, media types)."""

from __future__ import annotations

import mimetypes
import unicodedata
from urllib.parse import quote

__all__ = ["build_content_disposition", "media_type_for"]

_FALLBACK_MEDIA_TYPE = "application/octet-stream"


def build_content_disposition(filename: str, *, default: str = "download") -> str:
    """Return an ``attachment`` header value naming ``filename``.

    Non-ASCII names get an ASCII ``filename`` plus a UTF-8 ``filename*``.
    """
    cleaned = "".join(ch for ch in filename.strip() if unicodedata.category(ch)[0] != "C")
    candidate = cleaned.strip() or default

    fallback = "".join(
        char if 32 <= ord(char) < 127 and char not in {'"', "\\", ";"} else "_"
        for char in candidate
    )
    fallback = fallback.strip("_ ")[:255] or default

    if fallback == candidate:
        return f'attachment; filename="{fallback}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(candidate, safe='')}"


def media_type_for(filename: str) -> str:
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or _FALLBACK_MEDIA_TYPE
