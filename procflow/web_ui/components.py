"""NiceGUI building blocks shared by the console pages.

Components only render viewmodel state and forward user intent to the
callbacks they are given; blocking work is pushed off the event loop with
``run.io_bound`` by the dialogs and pages.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Optional

from nicegui import run, ui

from procflow.domain.entities import Department, Process
from procflow.viewmodels.form_vm import (
    DepartmentFormVM,
    FormDialogVM,
    ProcessFormVM,
    StringListEditor,
    SubProcessFormVM,
)
from procflow.viewmodels.notices import Notice
from procflow.viewmodels.page_vm import DeleteConfirmationVM

NAV_ITEMS = (
    ("Departments", "/departments", "apartment"),
    ("Processes", "/processes", "dashboard"),
    ("Subprocesses", "/subprocesses", "checklist"),
)


def show_notices(notices: Iterable[Notice]) -> None:
    for notice in notices:
        ui.notify(notice.message, type=notice.level)


def navigation_bar(active_path: str) -> None:
    with ui.header().classes("pf-nav items-center justify-between"):
        ui.link("ProcessFlow", "/").classes("pf-brand")
        with ui.row().classes("q-gutter-sm"):
            for title, path, icon in NAV_ITEMS:
                active = active_path.startswith(path)
                ui.button(
                    title,
                    icon=icon,
                    on_click=lambda _, p=path: ui.navigate.to(p),
                ).props("unelevated" if active else "flat").classes(
                    "pf-nav-active" if active else "pf-nav-item"
                )


def page_header(title: str, description: str, *, on_add: Callable[[], Any], add_label: str) -> None:
    with ui.row().classes("w-full items-end justify-between q-mb-md"):
        with ui.column().classes("gap-1"):
            ui.label(title).classes("text-h4")
            ui.label(description).classes("pf-muted")
        ui.button(add_label, icon="add", on_click=on_add, color="primary")


def loading_state(text: str) -> None:
    with ui.column().classes("w-full items-center q-pa-xl"):
        ui.spinner(size="lg")
        ui.label(text).classes("pf-muted")


def empty_state(message: str, *, on_add: Callable[[], Any], add_label: str) -> None:
    with ui.card().classes("pf-card pf-dashed w-full items-center q-pa-xl"):
        ui.label(message).classes("pf-muted q-mb-md")
        ui.button(add_label, on_click=on_add)


def tag_list(title: str, items: Iterable[str]) -> None:
    values = list(items)
    if not values:
        return
    ui.label(title).classes("text-caption pf-muted q-mt-sm")
    with ui.row().classes("q-gutter-xs"):
        for value in values:
            ui.badge(value).props("outline")


def department_card(
    department: Department,
    *,
    on_edit: Callable[[Department], Any],
    on_delete: Callable[[int], Any],
    processes_route: str,
) -> None:
    with ui.card().classes("pf-card w-full"):
        with ui.row().classes("w-full items-start justify-between no-wrap"):
            ui.label(department.name).classes("text-h6")
            with ui.row().classes("gap-1 no-wrap"):
                ui.button(icon="edit", on_click=lambda: on_edit(department)).props("flat dense round")
                ui.button(
                    icon="delete",
                    color="negative",
                    on_click=lambda: on_delete(department.id),
                ).props("flat dense round")
        if department.description:
            ui.label(department.description).classes("pf-muted")
        ui.button(
            "View processes",
            on_click=lambda: ui.navigate.to(processes_route),
        ).props("outline icon-right=arrow_forward").classes("w-full")


def process_card(
    process: Process,
    *,
    department_name: str,
    on_edit: Callable[[Process], Any],
    on_delete: Callable[[int], Any],
    on_add_subprocess: Callable[[int], Any],
) -> None:
    with ui.card().classes("pf-card w-full"):
        with ui.row().classes("w-full items-start justify-between no-wrap"):
            with ui.column().classes("gap-0"):
                ui.label(process.name).classes("text-h6")
                if department_name:
                    ui.label(department_name).classes("pf-chip")
            with ui.row().classes("gap-1 no-wrap"):
                ui.button(icon="edit", on_click=lambda: on_edit(process)).props("flat dense round")
                ui.button(
                    icon="delete",
                    color="negative",
                    on_click=lambda: on_delete(process.id),
                ).props("flat dense round")
        if process.description:
            ui.label(process.description).classes("pf-muted")

        subprocesses = process.sub_processes
        with ui.row().classes("w-full items-center justify-between q-mt-sm"):
            ui.label("Subprocesses").classes("text-subtitle2")
            ui.button("Add", icon="add", on_click=lambda: on_add_subprocess(process.id)).props(
                "flat dense"
            )
        if subprocesses is None:
            ui.label("Subprocesses could not be loaded.").classes("text-negative text-caption")
        elif not subprocesses:
            ui.label("No subprocesses yet.").classes("pf-muted text-caption")
        else:
            with ui.column().classes("w-full gap-1"):
                for index, sub in enumerate(subprocesses):
                    with ui.row().classes("items-center no-wrap gap-2"):
                        ui.badge(str(sub.order or index + 1)).props("rounded")
                        ui.label(sub.name)

        tag_list("Tools", process.tools)
        tag_list("Responsibles", process.responsibles)
        tag_list("Documentation", process.documentation)


# ---------------------------------------------------------------------------
# Dialogs
# ---------------------------------------------------------------------------


class FormDialog:
    """NiceGUI dialog bound to a ``FormDialogVM``.

    ``after_submit`` runs after every submission attempt (notices, page
    refresh); the dialog closes only when the viewmodel reports success.
    """

    def __init__(self, form: FormDialogVM, *, after_submit: Callable[[], Any]) -> None:
        self.form = form
        self.after_submit = after_submit
        self.submit_button: Optional[ui.button] = None
        with ui.dialog() as self.dialog, ui.card().classes("pf-dialog"):
            self.body = ui.column().classes("w-full")
        self.dialog.on("hide", self._on_hide)

    def _render_content(self) -> None:
        ui.label(self.form.title).classes("text-h6")
        self.render_fields()
        with ui.row().classes("w-full justify-end q-mt-md"):
            ui.button("Cancel", on_click=self.dialog.close).props("flat")
            self.submit_button = ui.button("Save", on_click=self._submit, color="primary")
        self.sync_submit()

    def render_fields(self) -> None:
        raise NotImplementedError

    def show(self) -> None:
        """Rebuild the fields from the freshly opened draft and show the dialog."""
        self.body.clear()
        with self.body:
            self._render_content()
        self.dialog.open()

    def sync_submit(self) -> None:
        if self.submit_button is not None:
            self.submit_button.set_enabled(self.form.can_submit)

    def _on_hide(self) -> None:
        self.form.close()

    def _set_field(self, name: str, value: Any) -> None:
        setattr(self.form.draft, name, value)
        self.sync_submit()

    async def _submit(self) -> None:
        if not self.form.can_submit:
            return
        if self.submit_button is not None:
            self.submit_button.disable()
        ok = await run.io_bound(self.form.submit)
        self.sync_submit()
        self.after_submit()
        if ok:
            self.dialog.close()


class DepartmentDialog(FormDialog):
    form: DepartmentFormVM

    def render_fields(self) -> None:
        draft = self.form.draft
        ui.input(
            "Name *",
            value=draft.name,
            on_change=lambda e: self._set_field("name", str(e.value or "")),
        ).classes("w-full")
        ui.textarea(
            "Description",
            value=draft.description,
            on_change=lambda e: self._set_field("description", str(e.value or "")),
        ).classes("w-full")


class ProcessDialog(FormDialog):
    form: ProcessFormVM

    def render_fields(self) -> None:
        draft = self.form.draft
        ui.input(
            "Name *",
            value=draft.name,
            on_change=lambda e: self._set_field("name", str(e.value or "")),
        ).classes("w-full")
        options = self.form.department_options()
        ui.select(
            options,
            value=draft.department_id if draft.department_id in options else None,
            label="Department *",
            on_change=lambda e: self._set_field("department_id", int(e.value or 0)),
        ).classes("w-full")
        ui.textarea(
            "Description",
            value=draft.description,
            on_change=lambda e: self._set_field("description", str(e.value or "")),
        ).classes("w-full")
        self._list_editor("Tools", "Add tool", self.form.tools)
        self._list_editor("Responsibles", "Add responsible", self.form.responsibles)
        self._list_editor("Documentation", "Add document", self.form.documentation)

    def _list_editor(self, title: str, placeholder: str, editor: StringListEditor) -> None:
        ui.label(title).classes("text-subtitle2 q-mt-sm")

        @ui.refreshable
        def render_items() -> None:
            with ui.row().classes("q-gutter-xs"):
                for index, item in enumerate(editor.items):
                    with ui.row().classes("pf-chip items-center no-wrap gap-1"):
                        ui.label(item)
                        ui.button(
                            icon="close",
                            on_click=lambda _, i=index: remove(i),
                        ).props("flat dense round size=xs")

        def add() -> None:
            if editor.add():
                field.value = ""
                render_items.refresh()

        def remove(index: int) -> None:
            editor.remove(index)
            render_items.refresh()

        def on_buffer(value: Any) -> None:
            editor.buffer = str(value or "")
            add_button.set_enabled(editor.can_add)

        with ui.row().classes("w-full items-center no-wrap"):
            field = ui.input(placeholder=placeholder, value=editor.buffer, on_change=lambda e: on_buffer(e.value))
            field.classes("flex-grow").on("keydown.enter", add)
            add_button = ui.button("Add", on_click=add)
            add_button.set_enabled(editor.can_add)
        render_items()


class SubProcessDialog(FormDialog):
    form: SubProcessFormVM

    def render_fields(self) -> None:
        draft = self.form.draft
        ui.input(
            "Name *",
            value=draft.name,
            on_change=lambda e: self._set_field("name", str(e.value or "")),
        ).classes("w-full")
        options = self.form.process_options()
        process_select = ui.select(
            options,
            value=draft.process_id if draft.process_id in options else None,
            label="Process *",
            on_change=lambda e: self._set_field("process_id", int(e.value or 0)),
        ).classes("w-full")
        process_select.set_enabled(not self.form.process_locked)
        ui.textarea(
            "Description",
            value=draft.description,
            on_change=lambda e: self._set_field("description", str(e.value or "")),
        ).classes("w-full")
        ui.number(
            "Order",
            value=draft.order,
            min=0,
            format="%d",
            on_change=lambda e: self._set_field("order", int(e.value or 0)),
        ).classes("w-40")


class DeleteConfirmationDialog:
    """Confirmation dialog driving a ``DeleteConfirmationVM``."""

    def __init__(
        self,
        state: DeleteConfirmationVM,
        *,
        on_confirm: Callable[[], bool],
        after_confirm: Callable[[], Any],
    ) -> None:
        self.state = state
        self.on_confirm = on_confirm
        self.after_confirm = after_confirm
        with ui.dialog() as self.dialog, ui.card().classes("pf-dialog"):
            ui.label(state.title).classes("text-h6")
            ui.label(state.description).classes("pf-muted")
            with ui.row().classes("w-full justify-end q-mt-md"):
                self.cancel_button = ui.button("Cancel", on_click=self.dialog.close).props("flat")
                self.confirm_button = ui.button("Delete", color="negative", on_click=self._confirm)
        self.dialog.on("hide", self._on_hide)

    def show(self) -> None:
        self.dialog.open()

    def _on_hide(self) -> None:
        if not self.state.is_deleting:
            self.state.close()

    async def _confirm(self) -> None:
        self.confirm_button.disable()
        self.cancel_button.disable()
        ok = await run.io_bound(self.on_confirm)
        self.confirm_button.enable()
        self.cancel_button.enable()
        self.after_confirm()
        if ok:
            self.dialog.close()


__all__ = [
    "DeleteConfirmationDialog",
    "DepartmentDialog",
    "ProcessDialog",
    "SubProcessDialog",
    "department_card",
    "empty_state",
    "loading_state",
    "navigation_bar",
    "page_header",
    "process_card",
    "show_notices",
]
