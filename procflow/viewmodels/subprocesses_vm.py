"""Subprocesses page: listing grouped by process with up/down reordering."""

from __future__ import annotations

from typing import Callable, List, Optional

from procflow.domain.entities import Process, SubProcess, SubProcessDraft
from procflow.domain.ordering import Direction
from procflow.domain.ports import OperationCancelled, UseCaseError
from procflow.usecases.load_subprocess_overview import SubProcessGroup, SubProcessOverview
from procflow.viewmodels.form_vm import SubProcessFormVM
from procflow.viewmodels.page_vm import DeleteConfirmationVM, PageVM
from procflow.viewmodels.processes_vm import PROCESSES_ROUTE


class SubProcessesVM(PageVM):
    def __init__(
        self,
        *,
        load_overview: Callable[..., SubProcessOverview],
        save_subprocess: Callable[[SubProcessDraft, Optional[int]], object],
        delete_subprocess: Callable[[int], None],
        change_order: Callable[[SubProcess, Direction], Optional[int]],
    ) -> None:
        super().__init__()
        self._load_overview = load_overview
        self._save_subprocess = save_subprocess
        self._delete_subprocess = delete_subprocess
        self._change_order = change_order

        self.processes: List[Process] = []
        self.groups: List[SubProcessGroup] = []
        self.dialog = SubProcessFormVM(on_submit=self.submit_subprocess)
        self.delete_confirm = DeleteConfirmationVM(
            title="Delete Subprocess",
            description="Are you sure you want to delete this subprocess? This action cannot be undone.",
        )

    def load(self) -> None:
        token = self._begin_load()
        try:
            overview = self._load_overview(cancel_token=token)
        except OperationCancelled:
            return
        except UseCaseError as exc:
            if not token.cancelled:
                self._report("Failed to load subprocesses", exc)
            return
        finally:
            self._finish_load(token)
        if token.cancelled:
            return
        self.processes = list(overview.processes)
        self.groups = list(overview.groups)
        self.dialog.set_processes(self.processes)

    @property
    def is_empty(self) -> bool:
        return not self.groups

    # ---- reordering ----
    def move(self, subprocess: SubProcess, direction: Direction) -> bool:
        """Shift ``order`` by one; returns ``False`` for no-ops and failures."""
        try:
            new_order = self._change_order(subprocess, direction)
        except UseCaseError as exc:
            self._report("Failed to update order", exc)
            return False
        if new_order is None:
            return False
        self.notices.success("Order updated.")
        self.load()
        return True

    def move_up(self, subprocess: SubProcess) -> bool:
        return self.move(subprocess, "up")

    def move_down(self, subprocess: SubProcess) -> bool:
        return self.move(subprocess, "down")

    @staticmethod
    def display_order(subprocess: SubProcess, index: int) -> int:
        """Badge number: the stored order, or the 1-based position when unset/0."""
        return subprocess.order or index + 1

    @staticmethod
    def process_route(group: SubProcessGroup) -> str:
        if group.department_id is None:
            return PROCESSES_ROUTE
        return f"{PROCESSES_ROUTE}?departmentId={group.department_id}"

    # ---- dialog ----
    def open_create(self) -> None:
        self.dialog.open()

    def open_edit(self, subprocess: SubProcess) -> None:
        self.dialog.open(subprocess)

    def submit_subprocess(self, draft: SubProcessDraft) -> None:
        editing_id = self.dialog.editing_id
        try:
            self._save_subprocess(draft, editing_id)
        except UseCaseError as exc:
            self._report("Failed to save subprocess", exc)
            raise
        self.notices.success("Subprocess updated." if editing_id is not None else "Subprocess created.")
        self.load()

    # ---- delete ----
    def request_delete(self, subprocess_id: int) -> None:
        self.delete_confirm.request(subprocess_id)

    def cancel_delete(self) -> None:
        self.delete_confirm.close()

    def confirm_delete(self) -> bool:
        target = self.delete_confirm.pending_id
        if target is None:
            return False
        self.delete_confirm.is_deleting = True
        try:
            self._delete_subprocess(target)
        except UseCaseError as exc:
            self._report("Failed to delete subprocess", exc)
            return False
        finally:
            self.delete_confirm.is_deleting = False
        self.delete_confirm.close()
        self.notices.success("Subprocess deleted.")
        self.load()
        return True


__all__ = ["SubProcessesVM"]
