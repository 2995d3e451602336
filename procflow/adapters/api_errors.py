from __future__ import annotations

from typing import Any, Optional

CONNECTION_FAILED_MESSAGE = "Failed to connect to API server"

_MESSAGE_KEYS = ("message", "detail", "title")


class ApiError(RuntimeError):
    """Base class for REST adapter failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiServerError(ApiError):
    """HTTP 5xx (or any other non-2xx status) from the API."""

    def __init__(
        self,
        message: str,
        *,
        status: int,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, status=status, payload=payload, context=context)


class ApiConnectionError(ApiError):
    """The request never produced a response (DNS, refused, TLS, timeout)."""

    def __init__(
        self,
        message: str = CONNECTION_FAILED_MESSAGE,
        *,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message, context=context)


def parse_error_payload(resp: Any) -> Any:
    """Best-effort extraction of error payload without raising."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "")
        if not snippet:
            return None
        return snippet[:400]


def extract_error_message(payload: Any) -> Optional[str]:
    """Return the first non-empty message field of an error body."""
    if isinstance(payload, dict):
        for key in _MESSAGE_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return None


def build_error_message(status: int, reason: Optional[str], payload: Any) -> str:
    detail = extract_error_message(payload)
    if detail:
        return detail
    reason_text = (reason or "").strip()
    if reason_text:
        return f"Error: {status} {reason_text}"
    return f"Error: {status}"


def error_for_status(status: int, message: str, *, payload: Any, context: str) -> ApiError:
    if 400 <= status < 500:
        return ApiClientError(message, status=status, payload=payload, context=context)
    return ApiServerError(message, status=status, payload=payload, context=context)


__all__ = [
    "CONNECTION_FAILED_MESSAGE",
    "ApiClientError",
    "ApiConnectionError",
    "ApiError",
    "ApiServerError",
    "build_error_message",
    "error_for_status",
    "extract_error_message",
    "parse_error_payload",
]
