from __future__ import annotations

from procflow.adapters.resource_rest import ResourceRestAdapter
from procflow.domain.entities import Department
from procflow.domain.ports import DepartmentPort


class DepartmentRestAdapter(ResourceRestAdapter[Department], DepartmentPort):
    """REST adapter for ``/departments``."""

    resource_path = "/departments"
    parse = staticmethod(Department.from_payload)


__all__ = ["DepartmentRestAdapter"]
