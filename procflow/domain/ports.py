from __future__ import annotations
from typing import Any, List, Mapping, Optional, Protocol, Union

from procflow.domain.entities import (
    Department,
    DepartmentDraft,
    Process,
    ProcessDraft,
    SubProcess,
    SubProcessDraft,
)

DepartmentId = int
ProcessId = int
SubProcessId = int

# Update bodies may be a full draft or a partial wire mapping ({"order": 3}).
DepartmentBody = Union[DepartmentDraft, Mapping[str, Any]]
ProcessBody = Union[ProcessDraft, Mapping[str, Any]]
SubProcessBody = Union[SubProcessDraft, Mapping[str, Any]]


# ---- Error model ----
class UseCaseError(Exception):
    """Base class for use case level errors (user-presentable)."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class OperationCancelled(UseCaseError):
    """Raised when a workflow notices its cancel token was triggered."""

    def __init__(self, message: str = "Operation cancelled."):
        super().__init__("CANCELLED", message)


# ---- Ports (Hexagonal boundaries) ----
class DepartmentPort(Protocol):
    """CRUD access to departments."""

    def list_all(self) -> List[Department]: ...
    def get(self, department_id: DepartmentId) -> Department: ...
    def create(self, body: DepartmentBody) -> Optional[Department]: ...
    def update(self, department_id: DepartmentId, body: DepartmentBody) -> Optional[Department]: ...
    def delete(self, department_id: DepartmentId) -> None: ...


class ProcessPort(Protocol):
    """CRUD access to processes plus the per-department listing."""

    def list_all(self) -> List[Process]: ...
    def get(self, process_id: ProcessId) -> Process: ...
    def list_by_department(self, department_id: DepartmentId) -> List[Process]: ...
    def create(self, body: ProcessBody) -> Optional[Process]: ...
    def update(self, process_id: ProcessId, body: ProcessBody) -> Optional[Process]: ...
    def delete(self, process_id: ProcessId) -> None: ...


class SubProcessPort(Protocol):
    """CRUD access to subprocesses plus the per-process listing."""

    def list_all(self) -> List[SubProcess]: ...
    def get(self, subprocess_id: SubProcessId) -> SubProcess: ...
    def list_by_process(self, process_id: ProcessId) -> List[SubProcess]: ...
    def create(self, body: SubProcessBody) -> Optional[SubProcess]: ...
    def update(self, subprocess_id: SubProcessId, body: SubProcessBody) -> Optional[SubProcess]: ...
    def delete(self, subprocess_id: SubProcessId) -> None: ...
