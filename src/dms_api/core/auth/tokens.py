"""Opaque bearer token generation and hashing."""

from __future__ import annotations

import base64
import hashlib
import secrets


def generate_access_token(length: int = 40) -> str:
    """Return a URL-safe random bearer token."""

    if length <= 0:
        raise ValueError("Token length must be positive")
    return secrets.token_urlsafe(length)


def hash_access_token(token: str) -> str:
    """Return the deterministic digest stored in place of the token."""

    digest = hashlib.sha256(token.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii").rstrip("=")


def parse_bearer(header: str | None) -> str | None:
    scheme, _, token = (header or "").partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


__all__ = ["generate_access_token", "hash_access_token", "parse_bearer"]
