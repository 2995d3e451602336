"""Processes page: filtered listing with hydrated subprocesses.

The department filter is a server query: every change re-runs the listing
use case and replaces ``processes`` with its result, never filtering an
already loaded superset.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional

from procflow.domain.entities import Department, Process, ProcessDraft, SubProcessDraft
from procflow.domain.ports import OperationCancelled, UseCaseError
from procflow.usecases.load_process_listing import HydrationFailure, ProcessListing
from procflow.viewmodels.form_vm import ProcessFormVM, SubProcessFormVM
from procflow.viewmodels.page_vm import DeleteConfirmationVM, PageVM

PROCESSES_ROUTE = "/processes"


def parse_department_filter(value: object) -> Optional[int]:
    """Normalize a ``departmentId`` query/select value; blank or invalid -> ``None``."""
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip()
    if not text:
        return None
    try:
        department_id = int(text)
    except ValueError:
        return None
    return department_id if department_id > 0 else None


class ProcessesVM(PageVM):
    def __init__(
        self,
        *,
        load_listing: Callable[..., ProcessListing],
        save_process: Callable[[ProcessDraft, Optional[int]], object],
        save_subprocess: Callable[[SubProcessDraft, Optional[int]], object],
        delete_process: Callable[[int], None],
        department_id: Optional[int] = None,
    ) -> None:
        super().__init__()
        self._load_listing = load_listing
        self._save_process = save_process
        self._save_subprocess = save_subprocess
        self._delete_process = delete_process

        self.selected_department_id: Optional[int] = department_id
        self.departments: List[Department] = []
        self.processes: List[Process] = []
        self.failures: List[HydrationFailure] = []

        self.process_dialog = ProcessFormVM(on_submit=self.submit_process)
        self.subprocess_dialog = SubProcessFormVM(on_submit=self.submit_subprocess)
        self.delete_confirm = DeleteConfirmationVM(
            title="Delete Process",
            description=(
                "Are you sure you want to delete this process? This action cannot be "
                "undone and will also delete all related subprocesses."
            ),
        )

    # ---- loading ----
    def load(self) -> None:
        token = self._begin_load()
        try:
            listing = self._load_listing(self.selected_department_id, cancel_token=token)
        except OperationCancelled:
            return
        except UseCaseError as exc:
            if not token.cancelled:
                self._report("Failed to load processes", exc)
            return
        finally:
            self._finish_load(token)
        if token.cancelled:
            return
        self.departments = list(listing.departments)
        self.processes = list(listing.processes)
        self.failures = list(listing.failures)
        self.process_dialog.set_departments(self.departments)
        self.subprocess_dialog.set_processes(self.processes)
        if self.failures:
            count = len(self.failures)
            self.notices.warning(
                f"Subprocesses could not be loaded for {count} process{'es' if count != 1 else ''}."
            )

    def set_department_filter(self, value: object) -> str:
        """Apply a new filter, re-fetch and return the route to show in the URL."""
        self.selected_department_id = parse_department_filter(value)
        self.load()
        return self.route

    @property
    def route(self) -> str:
        if self.selected_department_id is None:
            return PROCESSES_ROUTE
        return f"{PROCESSES_ROUTE}?departmentId={self.selected_department_id}"

    @property
    def empty_message(self) -> str:
        if self.selected_department_id is not None:
            return "No processes found for this department."
        return "No processes found."

    def department_filter_options(self) -> Dict[int, str]:
        options: Dict[int, str] = {0: "All departments"}
        options.update({department.id: department.name for department in self.departments})
        return options

    def department_name(self, process: Process) -> str:
        if process.department is not None and process.department.name:
            return process.department.name
        for department in self.departments:
            if department.id == process.department_id:
                return department.name
        return ""

    # ---- process dialog ----
    def open_create_process(self) -> None:
        self.process_dialog.open()

    def open_edit_process(self, process: Process) -> None:
        self.process_dialog.open(process)

    def submit_process(self, draft: ProcessDraft) -> None:
        editing_id = self.process_dialog.editing_id
        try:
            self._save_process(draft, editing_id)
        except UseCaseError as exc:
            self._report("Failed to save process", exc)
            raise
        self.notices.success("Process updated." if editing_id is not None else "Process created.")
        self.load()

    # ---- subprocess dialog ----
    def open_add_subprocess(self, process_id: int) -> None:
        self.subprocess_dialog.open(preselected_process_id=process_id)

    def submit_subprocess(self, draft: SubProcessDraft) -> None:
        try:
            self._save_subprocess(draft, None)
        except UseCaseError as exc:
            self._report("Failed to create subprocess", exc)
            raise
        self.notices.success("Subprocess created.")
        self.load()

    # ---- delete ----
    def request_delete(self, process_id: int) -> None:
        self.delete_confirm.request(process_id)

    def cancel_delete(self) -> None:
        self.delete_confirm.close()

    def confirm_delete(self) -> bool:
        target = self.delete_confirm.pending_id
        if target is None:
            return False
        self.delete_confirm.is_deleting = True
        try:
            self._delete_process(target)
        except UseCaseError as exc:
            self._report("Failed to delete process", exc)
            return False
        finally:
            self.delete_confirm.is_deleting = False
        self.delete_confirm.close()
        self.notices.success("Process deleted.")
        self.load()
        return True


__all__ = ["PROCESSES_ROUTE", "ProcessesVM", "parse_department_filter"]
