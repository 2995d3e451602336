from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from procflow.domain.cancellation import CancelToken, ensure_active
from procflow.domain.entities import Department
from procflow.domain.ports import DepartmentPort
from procflow.usecases.error_mapping import map_api_error


@dataclass
class LoadDepartments:
    department_port: DepartmentPort

    def __call__(self, *, cancel_token: Optional[CancelToken] = None) -> List[Department]:
        ensure_active(cancel_token)
        try:
            departments = list(self.department_port.list_all())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_DEPARTMENTS_FAILED") from exc
        ensure_active(cancel_token)
        return departments
