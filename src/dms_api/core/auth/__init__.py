"""Auth contracts and helpers shared across the API surface."""

from .errors import AuthenticationError, InvalidCredentialsError, PermissionDeniedError
from .hashing import hash_password, verify_password
from .tokens import generate_access_token, hash_access_token, parse_bearer

__all__ = [
    "AuthenticationError",
    "InvalidCredentialsError",
    "PermissionDeniedError",
    "generate_access_token",
    "hash_access_token",
    "hash_password",
    "parse_bearer",
    "verify_password",
]
