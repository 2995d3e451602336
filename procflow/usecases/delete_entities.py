from __future__ import annotations
from dataclasses import dataclass

from procflow.domain.ports import DepartmentPort, ProcessPort, SubProcessPort
from procflow.usecases.error_mapping import map_api_error


# Cascades to dependent processes/subprocesses happen server-side, if at all.
@dataclass
class DeleteDepartment:
    department_port: DepartmentPort

    def __call__(self, department_id: int) -> None:
        try:
            self.department_port.delete(department_id)
        except Exception as e:
            raise map_api_error(e, default_code="DELETE_DEPARTMENT_FAILED") from e


@dataclass
class DeleteProcess:
    process_port: ProcessPort

    def __call__(self, process_id: int) -> None:
        try:
            self.process_port.delete(process_id)
        except Exception as e:
            raise map_api_error(e, default_code="DELETE_PROCESS_FAILED") from e


@dataclass
class DeleteSubProcess:
    subprocess_port: SubProcessPort

    def __call__(self, subprocess_id: int) -> None:
        try:
            self.subprocess_port.delete(subprocess_id)
        except Exception as e:
            raise map_api_error(e, default_code="DELETE_SUBPROCESS_FAILED") from e
