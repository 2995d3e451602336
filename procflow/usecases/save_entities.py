"""Create-or-update use cases for the three resources.

Each use case creates when no id is given and updates otherwise. Required
fields are checked before any request so an incomplete draft never reaches
the server.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from procflow.domain.entities import (
    Department,
    DepartmentDraft,
    Process,
    ProcessDraft,
    SubProcess,
    SubProcessDraft,
)
from procflow.domain.ports import (
    DepartmentPort,
    ProcessPort,
    SubProcessPort,
    UseCaseError,
)
from procflow.usecases.error_mapping import map_api_error


def _require(value: Any, label: str) -> None:
    if isinstance(value, str):
        if not value.strip():
            raise UseCaseError("INVALID_DRAFT", f"{label} is required.")
    elif not value:
        raise UseCaseError("INVALID_DRAFT", f"{label} is required.")


def _create_or_update(port: Any, draft: Any, entity_id: Optional[int], code: str) -> Any:
    try:
        if entity_id is None:
            return port.create(draft)
        return port.update(entity_id, draft)
    except Exception as exc:
        raise map_api_error(exc, default_code=code) from exc


@dataclass
class SaveDepartment:
    department_port: DepartmentPort

    def __call__(
        self, draft: DepartmentDraft, department_id: Optional[int] = None
    ) -> Optional[Department]:
        _require(draft.name, "Name")
        return _create_or_update(self.department_port, draft, department_id, "SAVE_DEPARTMENT_FAILED")


@dataclass
class SaveProcess:
    process_port: ProcessPort

    def __call__(self, draft: ProcessDraft, process_id: Optional[int] = None) -> Optional[Process]:
        _require(draft.name, "Name")
        _require(draft.department_id, "Department")
        return _create_or_update(self.process_port, draft, process_id, "SAVE_PROCESS_FAILED")


@dataclass
class SaveSubProcess:
    subprocess_port: SubProcessPort

    def __call__(
        self, draft: SubProcessDraft, subprocess_id: Optional[int] = None
    ) -> Optional[SubProcess]:
        _require(draft.name, "Name")
        _require(draft.process_id, "Process")
        return _create_or_update(self.subprocess_port, draft, subprocess_id, "SAVE_SUBPROCESS_FAILED")


__all__ = ["SaveDepartment", "SaveProcess", "SaveSubProcess"]
