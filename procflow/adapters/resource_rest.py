"""Shared plumbing for the per-resource REST adapters.

Each concrete adapter names its collection path and entity parser; this base
maps list/get/create/update/delete onto ``ApiSession.request`` and turns the
JSON into typed entities. Failures are raised as ``ApiError`` via
``ApiResult.unwrap``.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, List, Mapping, Optional, TypeVar

from procflow.adapters.http_client import ApiSession

E = TypeVar("E")


def body_payload(body: Any) -> Mapping[str, Any]:
    """Accept a draft (``to_payload``) or a plain mapping as request body."""
    to_payload = getattr(body, "to_payload", None)
    if callable(to_payload):
        return to_payload()
    if isinstance(body, Mapping):
        return dict(body)
    raise TypeError(f"Unsupported request body: {type(body).__name__}")


class ResourceRestAdapter(Generic[E]):
    """CRUD mapping for one REST collection (``/departments`` etc.)."""

    resource_path: str = ""
    parse: Callable[[Mapping[str, Any]], E]

    def __init__(self, api: ApiSession) -> None:
        if not self.resource_path:
            raise ValueError(f"{type(self).__name__} requires a resource_path")
        self.api = api

    def _item_path(self, entity_id: int) -> str:
        return f"{self.resource_path}/{int(entity_id)}"

    def _parse_list(self, data: Any) -> List[E]:
        if not isinstance(data, list):
            return []
        return [self.parse(item) for item in data if isinstance(item, Mapping)]

    def _parse_optional(self, data: Any) -> Optional[E]:
        if isinstance(data, Mapping) and data:
            return self.parse(data)
        return None

    def _get_list(self, path: str) -> List[E]:
        return self._parse_list(self.api.request(path).unwrap())

    # ---- CRUD ----

    def list_all(self) -> List[E]:
        return self._get_list(self.resource_path)

    def get(self, entity_id: int) -> E:
        data = self.api.request(self._item_path(entity_id)).unwrap()
        if not isinstance(data, Mapping) or not data:
            raise ValueError(f"Empty response for {self._item_path(entity_id)}")
        return self.parse(data)

    def create(self, body: Any) -> Optional[E]:
        data = self.api.request(self.resource_path, "POST", body_payload(body)).unwrap()
        return self._parse_optional(data)

    def update(self, entity_id: int, body: Any) -> Optional[E]:
        data = self.api.request(self._item_path(entity_id), "PUT", body_payload(body)).unwrap()
        return self._parse_optional(data)

    def delete(self, entity_id: int) -> None:
        self.api.request(self._item_path(entity_id), "DELETE").unwrap()


__all__ = ["ResourceRestAdapter", "body_payload"]
