"""Shared HTTP transport for the REST resource adapters.

This module provides a thin wrapper around ``requests.Session`` so the
department, process and subprocess adapters share one base URL, timeout
policy, header construction and error mapping.

Dependencies:
    - ``requests`` for network I/O.
    - ``procflow.adapters.api_errors`` for typed transport failures.

Call context:
    - Constructed by ``procflow.web_ui.runtime.WebRuntime`` from ``ApiSettings``.
    - Used only inside adapter methods; use cases interact through ports.
    - Never shows notifications. Failures travel back as ``ApiResult`` values
      and callers decide how to present them.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

import requests
from requests import exceptions as req_exc

from procflow.adapters.api_errors import (
    ApiConnectionError,
    ApiError,
    build_error_message,
    error_for_status,
    parse_error_payload,
)

DEFAULT_API_BASE_URL = "https://localhost:7115/api"

_BODY_METHODS = frozenset({"POST", "PUT"})

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class HttpConfig:
    """Connection settings for adapter HTTP calls.

    Attributes:
        base_url: API origin plus path prefix, without trailing slash.
        request_timeout_s: Timeout in seconds for one request.
        retries: Extra attempts after a connection failure (0 = single attempt).
        verify_tls: Whether to verify server certificates.
    """

    base_url: str = DEFAULT_API_BASE_URL
    request_timeout_s: Optional[float] = 10
    retries: int = 0
    verify_tls: bool = True


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of one transport call: a value or an ``ApiError``, never both."""

    value: Optional[T] = None
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: Optional[T]) -> "ApiResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ApiError) -> "ApiResult[T]":
        return cls(error=error)

    def unwrap(self) -> Optional[T]:
        """Return the value or raise the carried error."""
        if self.error is not None:
            raise self.error
        return self.value


class ApiSession:
    """Generic JSON request helper shared by all resource adapters."""

    def __init__(self, cfg: Optional[HttpConfig] = None, session: Any = None) -> None:
        """Create a transport bound to one API base URL.

        Args:
            cfg: Connection settings; defaults to ``HttpConfig()``.
            session: Optional ``requests.Session``-compatible object. The
                session keeps server cookies between calls.
        """
        self.cfg = cfg or HttpConfig()
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self) -> None:
        """Close the session if this transport opened it; injected ones are left alone."""
        if self._owns_session:
            self.session.close()

    @property
    def base_url(self) -> str:
        return str(self.cfg.base_url).rstrip("/")

    def url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    @staticmethod
    def _headers() -> dict:
        return {"Accept": "application/json", "Content-Type": "application/json"}

    def request(self, path: str, method: str = "GET", body: Any = None) -> ApiResult[Any]:
        """Send one request and map the outcome into an ``ApiResult``.

        Args:
            path: Resource path relative to the base URL (``/departments/3``).
            method: HTTP verb.
            body: JSON-serializable payload, sent for POST and PUT only.

        Returns:
            ``ApiResult`` with ``None`` for DELETE, the parsed JSON (or ``{}``
            for an empty/invalid body) for other verbs, or an ``ApiError``.
        """
        verb = method.upper()
        url = self.url(path)
        context = f"{verb} {url}"
        data = json.dumps(body) if body is not None and verb in _BODY_METHODS else None

        LOGGER.debug("API request %s", context)
        response = None
        last_err: Optional[ApiError] = None
        for _ in range(self.cfg.retries + 1):
            try:
                response = self.session.request(
                    verb,
                    url,
                    data=data,
                    headers=self._headers(),
                    timeout=self.cfg.request_timeout_s,
                    verify=self.cfg.verify_tls,
                )
                break
            except req_exc.RequestException as exc:
                LOGGER.warning("API request failed: %s (%s)", context, exc)
                last_err = ApiConnectionError(context=context)
        if response is None:
            return ApiResult.failure(last_err or ApiConnectionError(context=context))

        status = int(response.status_code)
        if not 200 <= status < 300:
            payload = parse_error_payload(response)
            message = build_error_message(status, getattr(response, "reason", None), payload)
            LOGGER.warning("API request failed: %s -> %s", context, message)
            return ApiResult.failure(
                error_for_status(status, message, payload=payload, context=context)
            )

        if verb == "DELETE":
            return ApiResult.success(None)
        return ApiResult.success(self._parse_json(response))

    @staticmethod
    def _parse_json(response: Any) -> Any:
        if not getattr(response, "content", b""):
            return {}
        try:
            return response.json()
        except ValueError:
            return {}


__all__ = ["DEFAULT_API_BASE_URL", "ApiResult", "ApiSession", "HttpConfig"]
