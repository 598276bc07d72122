"""Shared auth/permission error types."""


class AuthenticationError(Exception):
    """Raised when a request cannot be authenticated."""


class InvalidCredentialsError(AuthenticationError):
    """Raised on login failure; same error for unknown email and bad password."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class PermissionDeniedError(Exception):
    """Raised when the access policy denies an action.

    The message is shown to the caller as-is and never says why.
    """

    def __init__(self, message: str = "This action is unauthorized.") -> None:
        self.message = message
        super().__init__(message)
