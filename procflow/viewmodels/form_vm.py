"""Form dialog viewmodels for departments, processes and subprocesses.

Each dialog owns a draft mirroring the create/update payload of its entity.
Opening with an entity seeds the draft from it; opening without one resets
the draft to defaults. ``submit`` never calls the handler while a required
field is empty or a submission is already running, and closes the dialog
only when the handler returns without raising.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

from procflow.domain.entities import (
    Department,
    DepartmentDraft,
    Process,
    ProcessDraft,
    SubProcess,
    SubProcessDraft,
    first_id,
)

LOGGER = logging.getLogger(__name__)

D = TypeVar("D")
E = TypeVar("E")


class StringListEditor:
    """Add/remove editing of one ordered string list with its own input buffer.

    ``items`` is the list object handed in (the draft's list), so edits land
    in the draft directly.
    """

    def __init__(self, items: Optional[List[str]] = None) -> None:
        self.items: List[str] = items if items is not None else []
        self.buffer = ""

    @property
    def can_add(self) -> bool:
        return bool(self.buffer.strip())

    def add(self) -> bool:
        """Append the trimmed buffer; blank input is rejected and kept as is."""
        text = self.buffer.strip()
        if not text:
            return False
        self.items.append(text)
        self.buffer = ""
        return True

    def remove(self, index: int) -> None:
        if 0 <= index < len(self.items):
            del self.items[index]


class FormDialogVM(Generic[D, E]):
    """Shared open/close/submit state machine of the entity dialogs."""

    create_title = ""
    edit_title = ""

    def __init__(self, on_submit: Optional[Callable[[D], Any]] = None) -> None:
        self.on_submit = on_submit
        self.is_open = False
        self.is_submitting = False
        self.editing_id: Optional[int] = None
        self.draft: D = self._default_draft()

    # ---- hooks ----
    def _default_draft(self) -> D:
        raise NotImplementedError

    def _draft_from(self, entity: E) -> D:
        raise NotImplementedError

    def missing_required(self) -> bool:
        raise NotImplementedError

    # ---- state ----
    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    @property
    def title(self) -> str:
        return self.edit_title if self.is_editing else self.create_title

    @property
    def can_submit(self) -> bool:
        return not self.is_submitting and not self.missing_required()

    def open(self, entity: Optional[E] = None) -> None:
        if entity is None:
            self.editing_id = None
            self.draft = self._default_draft()
        else:
            self.editing_id = int(getattr(entity, "id"))
            self.draft = self._draft_from(entity)
        self._after_reset()
        self.is_open = True

    def _after_reset(self) -> None:
        """Called after the draft was replaced."""

    def close(self) -> None:
        self.is_open = False

    def submit(self) -> bool:
        """Run the submit handler with the draft; return ``True`` on success."""
        if not self.can_submit or self.on_submit is None:
            return False
        self.is_submitting = True
        try:
            self.on_submit(self.draft)
        except Exception:
            LOGGER.exception("Error submitting form")
            return False
        finally:
            self.is_submitting = False
        self.close()
        return True


class DepartmentFormVM(FormDialogVM[DepartmentDraft, Department]):
    create_title = "Add Department"
    edit_title = "Edit Department"

    def _default_draft(self) -> DepartmentDraft:
        return DepartmentDraft()

    def _draft_from(self, entity: Department) -> DepartmentDraft:
        return DepartmentDraft.from_entity(entity)

    def missing_required(self) -> bool:
        return not self.draft.name.strip()


class ProcessFormVM(FormDialogVM[ProcessDraft, Process]):
    create_title = "Add Process"
    edit_title = "Edit Process"

    def __init__(
        self,
        on_submit: Optional[Callable[[ProcessDraft], Any]] = None,
        departments: Sequence[Department] = (),
    ) -> None:
        self.departments: List[Department] = list(departments)
        super().__init__(on_submit)
        self._after_reset()

    def set_departments(self, departments: Sequence[Department]) -> None:
        self.departments = list(departments)

    def _default_draft(self) -> ProcessDraft:
        return ProcessDraft(department_id=first_id(self.departments))

    def _draft_from(self, entity: Process) -> ProcessDraft:
        return ProcessDraft.from_entity(entity)

    def _after_reset(self) -> None:
        self.tools = StringListEditor(self.draft.tools)
        self.responsibles = StringListEditor(self.draft.responsibles)
        self.documentation = StringListEditor(self.draft.documentation)

    def missing_required(self) -> bool:
        return not self.draft.name.strip() or not self.draft.department_id

    def department_options(self) -> dict:
        return {department.id: department.name for department in self.departments}


class SubProcessFormVM(FormDialogVM[SubProcessDraft, SubProcess]):
    create_title = "Add Subprocess"
    edit_title = "Edit Subprocess"

    def __init__(
        self,
        on_submit: Optional[Callable[[SubProcessDraft], Any]] = None,
        processes: Sequence[Process] = (),
    ) -> None:
        self.processes: List[Process] = list(processes)
        self.preselected_process_id: Optional[int] = None
        super().__init__(on_submit)

    def set_processes(self, processes: Sequence[Process]) -> None:
        self.processes = list(processes)

    @property
    def process_locked(self) -> bool:
        """The process selector is fixed when adding from a process card."""
        return bool(self.preselected_process_id) and not self.is_editing

    def open(
        self,
        entity: Optional[SubProcess] = None,
        preselected_process_id: Optional[int] = None,
    ) -> None:
        self.preselected_process_id = preselected_process_id
        super().open(entity)

    def _default_draft(self) -> SubProcessDraft:
        process_id = self.preselected_process_id or first_id(self.processes)
        return SubProcessDraft(process_id=process_id, order=0)

    def _draft_from(self, entity: SubProcess) -> SubProcessDraft:
        return SubProcessDraft.from_entity(entity)

    def missing_required(self) -> bool:
        return not self.draft.name.strip() or not self.draft.process_id

    def process_options(self) -> dict:
        return {process.id: process.name for process in self.processes}


__all__ = [
    "DepartmentFormVM",
    "FormDialogVM",
    "ProcessFormVM",
    "StringListEditor",
    "SubProcessFormVM",
]
