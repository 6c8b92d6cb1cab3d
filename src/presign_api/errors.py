"""Exceptions and FastAPI error handlers for the Presign API."""

import logging
from typing import List, Optional

from fastapi import Request, status
from fastapi.responses import PlainTextResponse

logger = logging.getLogger(__name__)


class PresignApiError(Exception):
    """Base exception for all Presign API errors."""

    def __init__(self, message: str, hint: Optional[str] = None):
        self.message = message
        self.hint = hint
        super().__init__(message)

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\nHint: {self.hint}"
        return self.message


class ConfigurationError(PresignApiError):
    """Raised when the service cannot be configured at startup."""

    def __init__(
        self,
        message: Optional[str] = None,
        missing_fields: Optional[List[str]] = None,
    ):
        """
        :param message: Custom error message.
        :param missing_fields: Environment variables that are unset or empty.
        """
        self.missing_fields = missing_fields or []

        if self.missing_fields:
            fields_str = " and ".join(self.missing_fields)
            if len(self.missing_fields) == 1:
                message = message or f"{fields_str} environment variable is required"
            else:
                message = message or f"{fields_str} environment variables are required"
            hint = "Set these as environment variables or in your .env file."
        else:
            hint = None

        super().__init__(message or "Invalid Presign API configuration", hint)


class SigningError(PresignApiError):
    """Raised when the storage client fails to presign a request."""

    def __init__(self, key: str, original_error: Exception):
        self.key = key
        self.original_error = original_error
        super().__init__(f"Failed to generate pre-signed URL: {original_error}")


async def handle_signing_errors(request: Request, exc: SigningError) -> PlainTextResponse:
    """Surface signing failures as plain-text 500s carrying the underlying error."""
    logger.error("Signing failed for key %s: %s", exc.key, exc.original_error)
    return PlainTextResponse(
        content=exc.message,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


async def handle_broad_exceptions(request: Request, call_next):
    """Handle any exception that propagates out of a route."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error while serving %s", request.url.path)
        return PlainTextResponse(
            content="Internal server error",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
