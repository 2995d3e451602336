from __future__ import annotations

from typing import List

from procflow.adapters.resource_rest import ResourceRestAdapter
from procflow.domain.entities import Process
from procflow.domain.ports import DepartmentId, ProcessPort


class ProcessRestAdapter(ResourceRestAdapter[Process], ProcessPort):
    """REST adapter for ``/processes``."""

    resource_path = "/processes"
    parse = staticmethod(Process.from_payload)

    def list_by_department(self, department_id: DepartmentId) -> List[Process]:
        """``GET /processes/department/{id}``; a path segment, not a query parameter."""
        return self._get_list(f"{self.resource_path}/department/{int(department_id)}")


__all__ = ["ProcessRestAdapter"]
