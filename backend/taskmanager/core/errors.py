# taskmanager/core/errors.py
"""
Application error taxonomy.

Services raise these exceptions; the handlers registered in main.py render
them as the standard error envelope:
    {"success": False, "error": {"code": ..., "message": ...}}
"""
from fastapi import status


class AppError(Exception):
    """Base class for errors that map onto an HTTP status class."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "UNEXPECTED_ERROR"
    default_message: str = "Something went wrong"

    def __init__(self, message: str | None = None, code: str | None = None):
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"success": False, "error": {"code": self.code, "message": self.message}}


class ValidationError(AppError):
    """Bad input shape or content (400)."""

    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class AuthenticationError(AppError):
    """Missing, invalid or revoked token (401). Message stays generic."""

    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    default_message = "Please authenticate."


class InvalidToken(AuthenticationError):
    """Token signature is invalid or its payload is malformed."""

    code = "AUTH_INVALID_TOKEN"


class NotFound(AppError):
    """Resource absent or not owned by the requester (404)."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    default_message = "Not found"


class UnexpectedError(AppError):
    """Downstream or store failure (500)."""
