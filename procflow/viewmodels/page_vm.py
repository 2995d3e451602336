"""Shared state for page viewmodels: loading flag, cancel token, notices."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from procflow.domain.cancellation import CancelToken
from procflow.domain.ports import UseCaseError
from procflow.viewmodels.notices import NoticeQueue

LOGGER = logging.getLogger(__name__)


@dataclass
class DeleteConfirmationVM:
    """Pending delete shown in the confirmation dialog."""

    title: str
    description: str
    pending_id: Optional[int] = None
    is_deleting: bool = False

    @property
    def is_open(self) -> bool:
        return self.pending_id is not None

    def request(self, entity_id: int) -> None:
        self.pending_id = int(entity_id)

    def close(self) -> None:
        self.pending_id = None


class PageVM:
    """Base class of the management pages.

    A page owns the cancel token of its running load. Starting another load
    or disposing the page cancels it, and a cancelled load never writes
    state.
    """

    def __init__(self) -> None:
        self.notices = NoticeQueue()
        self.is_loading = True
        self._load_token: Optional[CancelToken] = None
        self.disposed = False
        self._dispose_hooks: List[Callable[[], None]] = []

    def on_dispose(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once when the page is disposed (releases its HTTP session)."""
        self._dispose_hooks.append(callback)

    def _begin_load(self) -> CancelToken:
        if self._load_token is not None:
            self._load_token.cancel()
        token = CancelToken()
        self._load_token = token
        self.is_loading = True
        return token

    def _finish_load(self, token: CancelToken) -> None:
        if self._load_token is token:
            self._load_token = None
            self.is_loading = False

    def dispose(self) -> None:
        """Cancel any running load; called when the browser page goes away.

        The loading flag is cleared here because the cancelled load no longer
        owns the token and will not clear it itself.
        """
        self.disposed = True
        if self._load_token is not None:
            self._load_token.cancel()
            self._load_token = None
        self.is_loading = False
        hooks, self._dispose_hooks = self._dispose_hooks, []
        for hook in hooks:
            hook()

    def _report(self, context: str, exc: UseCaseError) -> None:
        LOGGER.error("%s (%s): %s", context, exc.code, exc.message)
        self.notices.error(f"{context}: {exc.message}")


__all__ = ["DeleteConfirmationVM", "PageVM"]
