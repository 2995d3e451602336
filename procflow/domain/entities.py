"""Domain entities and drafts for the department/process/subprocess hierarchy."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional


def _require_int(payload: Mapping[str, Any], key: str) -> int:
    value = payload.get(key)
    if isinstance(value, bool) or value is None:
        raise ValueError(f"Payload field '{key}' must be an integer.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Payload field '{key}' must be an integer.") from exc


def _optional_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _str_list(value: Any) -> List[str]:
    if not isinstance(value, (list, tuple)):
        return []
    return [str(item) for item in value if item is not None]


def _mapping(value: Any) -> Optional[Mapping[str, Any]]:
    return value if isinstance(value, Mapping) else None


@dataclass
class Department:
    """Top-level organizational unit owning zero or more processes."""

    id: int
    name: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Department":
        return cls(
            id=_require_int(payload, "id"),
            name=str(payload.get("name") or ""),
            description=_optional_str(payload.get("description")),
            created_at=_optional_str(payload.get("createdAt")),
            updated_at=_optional_str(payload.get("updatedAt")),
        )


@dataclass
class SubProcess:
    """Step of a process; ``order`` is a display hint, not a unique key."""

    id: int
    name: str
    process_id: int
    description: Optional[str] = None
    order: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @property
    def effective_order(self) -> int:
        """Order used for sorting and reordering; missing counts as 0."""
        return self.order or 0

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SubProcess":
        return cls(
            id=_require_int(payload, "id"),
            name=str(payload.get("name") or ""),
            process_id=_require_int(payload, "processId"),
            description=_optional_str(payload.get("description")),
            order=_optional_int(payload.get("order")),
            created_at=_optional_str(payload.get("createdAt")),
            updated_at=_optional_str(payload.get("updatedAt")),
        )


@dataclass
class Process:
    """Process owned by one department, optionally hydrated with subprocesses.

    ``sub_processes`` stays ``None`` until hydration attaches a list, so an
    empty list means "loaded, none exist" while ``None`` means "not loaded".
    """

    id: int
    name: str
    department_id: int
    description: Optional[str] = None
    department: Optional[Department] = None
    tools: List[str] = field(default_factory=list)
    responsibles: List[str] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)
    sub_processes: Optional[List[SubProcess]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "Process":
        department = _mapping(payload.get("department"))
        subs = payload.get("subProcesses")
        sub_processes: Optional[List[SubProcess]] = None
        if isinstance(subs, list):
            sub_processes = [SubProcess.from_payload(item) for item in subs if isinstance(item, Mapping)]
        return cls(
            id=_require_int(payload, "id"),
            name=str(payload.get("name") or ""),
            department_id=_require_int(payload, "departmentId"),
            description=_optional_str(payload.get("description")),
            department=Department.from_payload(department) if department else None,
            tools=_str_list(payload.get("tools")),
            responsibles=_str_list(payload.get("responsibles")),
            documentation=_str_list(payload.get("documentation")),
            sub_processes=sub_processes,
            created_at=_optional_str(payload.get("createdAt")),
            updated_at=_optional_str(payload.get("updatedAt")),
        )


# ---- Drafts (create/update payload shapes) ----


@dataclass
class DepartmentDraft:
    name: str = ""
    description: str = ""

    @classmethod
    def from_entity(cls, department: Department) -> "DepartmentDraft":
        return cls(name=department.name, description=department.description or "")

    def to_payload(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description}


@dataclass
class ProcessDraft:
    name: str = ""
    description: str = ""
    department_id: int = 0
    tools: List[str] = field(default_factory=list)
    responsibles: List[str] = field(default_factory=list)
    documentation: List[str] = field(default_factory=list)

    @classmethod
    def from_entity(cls, process: Process) -> "ProcessDraft":
        return cls(
            name=process.name,
            description=process.description or "",
            department_id=process.department_id,
            tools=list(process.tools),
            responsibles=list(process.responsibles),
            documentation=list(process.documentation),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "departmentId": self.department_id,
            "tools": list(self.tools),
            "responsibles": list(self.responsibles),
            "documentation": list(self.documentation),
        }


@dataclass
class SubProcessDraft:
    name: str = ""
    description: str = ""
    process_id: int = 0
    order: int = 0

    @classmethod
    def from_entity(cls, subprocess: SubProcess) -> "SubProcessDraft":
        return cls(
            name=subprocess.name,
            description=subprocess.description or "",
            process_id=subprocess.process_id,
            order=subprocess.effective_order,
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "processId": self.process_id,
            "order": self.order,
        }


def first_id(items: Iterable[Any]) -> int:
    """Id of the first entity, or 0 when there is none."""
    for item in items:
        return int(item.id)
    return 0


__all__ = [
    "Department",
    "DepartmentDraft",
    "Process",
    "ProcessDraft",
    "SubProcess",
    "SubProcessDraft",
    "first_id",
]
