"""Cooperative cancellation for multi-request workflows."""

from __future__ import annotations

import threading

from procflow.domain.ports import OperationCancelled


class CancelToken:
    """Flag checked by workflows between requests.

    Cancelling does not abort an HTTP call already in flight; the workflow
    stops at its next check and the caller discards any late result.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise OperationCancelled()


def ensure_active(token: "CancelToken | None") -> None:
    """Raise ``OperationCancelled`` when ``token`` is set; ``None`` never cancels."""
    if token is not None:
        token.raise_if_cancelled()


__all__ = ["CancelToken", "ensure_active"]
