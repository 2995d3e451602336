"""Departments page: listing, create/edit dialog and delete confirmation."""

from __future__ import annotations

from typing import Callable, List, Optional

from procflow.domain.entities import Department, DepartmentDraft
from procflow.domain.ports import OperationCancelled, UseCaseError
from procflow.viewmodels.form_vm import DepartmentFormVM
from procflow.viewmodels.page_vm import DeleteConfirmationVM, PageVM


class DepartmentsVM(PageVM):
    """State and commands of the departments page. No I/O of its own."""

    def __init__(
        self,
        *,
        load_departments: Callable[..., List[Department]],
        save_department: Callable[[DepartmentDraft, Optional[int]], object],
        delete_department: Callable[[int], None],
    ) -> None:
        super().__init__()
        self._load_departments = load_departments
        self._save_department = save_department
        self._delete_department = delete_department

        self.departments: List[Department] = []
        self.dialog = DepartmentFormVM(on_submit=self.submit_department)
        self.delete_confirm = DeleteConfirmationVM(
            title="Delete Department",
            description=(
                "Are you sure you want to delete this department? This action cannot "
                "be undone and may also affect related processes."
            ),
        )

    def load(self) -> None:
        token = self._begin_load()
        try:
            departments = self._load_departments(cancel_token=token)
        except OperationCancelled:
            return
        except UseCaseError as exc:
            if not token.cancelled:
                self._report("Failed to load departments", exc)
            return
        finally:
            self._finish_load(token)
        if token.cancelled:
            return
        self.departments = list(departments)

    # ---- dialog ----
    def open_create(self) -> None:
        self.dialog.open()

    def open_edit(self, department: Department) -> None:
        self.dialog.open(department)

    def submit_department(self, draft: DepartmentDraft) -> None:
        """Dialog handler: save, notify and re-fetch. Raises on failure."""
        editing_id = self.dialog.editing_id
        try:
            self._save_department(draft, editing_id)
        except UseCaseError as exc:
            self._report("Failed to save department", exc)
            raise
        self.notices.success("Department updated." if editing_id is not None else "Department created.")
        self.load()

    # ---- delete ----
    def request_delete(self, department_id: int) -> None:
        self.delete_confirm.request(department_id)

    def cancel_delete(self) -> None:
        self.delete_confirm.close()

    def confirm_delete(self) -> bool:
        target = self.delete_confirm.pending_id
        if target is None:
            return False
        self.delete_confirm.is_deleting = True
        try:
            self._delete_department(target)
        except UseCaseError as exc:
            self._report("Failed to delete department", exc)
            return False
        finally:
            self.delete_confirm.is_deleting = False
        self.delete_confirm.close()
        self.notices.success("Department deleted.")
        self.load()
        return True

    @staticmethod
    def processes_route(department: Department) -> str:
        return f"/processes?departmentId={department.id}"


__all__ = ["DepartmentsVM"]
