"""User-facing notices emitted by viewmodels and rendered as toasts by pages."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Literal

NoticeLevel = Literal["positive", "negative", "warning", "info"]


@dataclass(frozen=True)
class Notice:
    message: str
    level: NoticeLevel = "info"


class NoticeQueue:
    """FIFO of pending notices; the page drains it after each command."""

    def __init__(self) -> None:
        self._items: List[Notice] = []

    def success(self, message: str) -> None:
        self._items.append(Notice(message, "positive"))

    def error(self, message: str) -> None:
        self._items.append(Notice(message, "negative"))

    def warning(self, message: str) -> None:
        self._items.append(Notice(message, "warning"))

    def drain(self) -> List[Notice]:
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["Notice", "NoticeLevel", "NoticeQueue"]
