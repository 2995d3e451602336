"""Translate adapter errors into user-facing UseCaseError instances."""

from __future__ import annotations


from typing import Optional

from procflow.adapters.api_errors import (
    CONNECTION_FAILED_MESSAGE,
    ApiClientError,
    ApiConnectionError,
    ApiError,
    ApiServerError,
)
from procflow.domain.ports import UseCaseError


def map_api_error(
    exc: Exception,
    *,
    default_code: str,
    default_message: Optional[str] = None,
) -> UseCaseError:
    """Map adapter exceptions to stable UseCaseError codes.

    The message is always the one the transport built (server message or
    ``Error: <status> <reason>``); 4xx and 5xx only differ by code.

    Args:
        exc: Exception raised by an adapter or a use case.
        default_code: Code used for exceptions that are not API errors.
        default_message: Message used when ``exc`` carries no text.

    Returns:
        UseCaseError: ``exc`` itself when it already is one.
    """
    if isinstance(exc, UseCaseError):
        return exc
    if isinstance(exc, ApiConnectionError):
        return UseCaseError("CONNECTION_FAILED", exc.message or CONNECTION_FAILED_MESSAGE)
    if isinstance(exc, ApiClientError):
        return UseCaseError("REQUEST_FAILED", exc.message)
    if isinstance(exc, ApiServerError):
        return UseCaseError("SERVER_ERROR", exc.message)
    if isinstance(exc, ApiError):
        return UseCaseError("API_ERROR", str(exc))

    message = default_message or str(exc) or "Unexpected error."
    return UseCaseError(default_code, message)


__all__ = ["map_api_error"]
