"""NiceGUI entrypoint for the ProcessFlow console."""

from __future__ import annotations

import argparse
import json
import logging
import os
from typing import Any, Callable, Optional
from urllib.parse import urlencode

from fastapi import Request
from fastapi.responses import RedirectResponse
from nicegui import Client, app, run, ui

from procflow.domain.entities import Department, Process, SubProcess
from procflow.utils.logging import configure_root
from procflow.utils.settings import ApiSettings
from procflow.viewmodels.page_vm import PageVM
from procflow.web_ui.components import (
    DeleteConfirmationDialog,
    DepartmentDialog,
    ProcessDialog,
    SubProcessDialog,
    department_card,
    empty_state,
    loading_state,
    navigation_bar,
    page_header,
    process_card,
    show_notices,
)
from procflow.web_ui.runtime import WebRuntime

LOGGER = logging.getLogger(__name__)
NOT_FOUND_ROUTE = "/not-found"


def _install_theme() -> None:
    """Install global CSS/theme tokens for the console pages."""
    ui.add_head_html(
        """
<link rel="preconnect" href="https://fonts.googleapis.com">
<link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
<link href="https://fonts.googleapis.com/css2?family=Space+Grotesk:wght@400;500;700&display=swap" rel="stylesheet">
<style>
:root {
  --pf-bg-a: #eef3fb;
  --pf-bg-b: #f7f4ee;
  --pf-card: rgba(255, 255, 255, 0.9);
  --pf-border: #d3dceb;
  --pf-accent: #1d5d9b;
  --pf-muted: #4b5a70;
}
body {
  font-family: 'Space Grotesk', sans-serif;
  background: radial-gradient(circle at top left, var(--pf-bg-a), var(--pf-bg-b));
}
.pf-nav { background: #ffffff; color: #1b2533; border-bottom: 1px solid var(--pf-border); }
.pf-brand { font-size: 20px; font-weight: 700; color: var(--pf-accent); text-decoration: none; }
.pf-nav-item { color: var(--pf-muted); }
.pf-nav-active { background: var(--pf-accent) !important; color: #ffffff !important; }
.pf-page {
  max-width: 1280px;
  margin: 0 auto;
  padding: 18px;
  animation: slide-in 300ms ease-out;
}
.pf-card {
  background: var(--pf-card);
  border: 1px solid var(--pf-border);
  border-radius: 14px;
}
.pf-dashed { border-style: dashed; }
.pf-dialog { min-width: 440px; max-width: 640px; }
.pf-muted { color: var(--pf-muted); }
.pf-chip {
  border: 1px solid var(--pf-border);
  border-radius: 8px;
  padding: 2px 8px;
  font-size: 12px;
}
@keyframes slide-in {
  from { opacity: 0; transform: translateY(8px); }
  to { opacity: 1; transform: translateY(0px); }
}
</style>
        """
    )


def _bind_lifecycle(client: Client, vm: PageVM, load: Callable[[], Any]) -> None:
    """Load once the page is delivered and drop late results after disconnect."""
    client.on_disconnect(vm.dispose)
    ui.timer(0.1, load, once=True)


def _build_ui(runtime: WebRuntime) -> None:
    """Register the NiceGUI pages for the runtime."""

    @app.exception_handler(404)
    async def not_found_redirect(request: Request, exc: Exception) -> RedirectResponse:
        LOGGER.warning("404: unknown route %s", request.url.path)
        return RedirectResponse(f"{NOT_FOUND_ROUTE}?{urlencode({'path': request.url.path})}")

    @ui.page("/")
    def index() -> None:
        _install_theme()
        navigation_bar("/")
        with ui.column().classes("pf-page w-full items-center q-mt-xl"):
            ui.label("ProcessFlow").classes("text-h3")
            ui.label("Manage departments, their processes and the steps inside them.").classes(
                "pf-muted text-subtitle1 q-mb-lg"
            )
            with ui.row().classes("q-gutter-md justify-center"):
                for title, path, text in (
                    ("Departments", "/departments", "Organisational units that own processes."),
                    ("Processes", "/processes", "Business processes with tools and owners."),
                    ("Subprocesses", "/subprocesses", "Ordered steps of every process."),
                ):
                    with ui.card().classes("pf-card q-pa-md w-72"):
                        ui.label(title).classes("text-h6")
                        ui.label(text).classes("pf-muted")
                        ui.button("Open", on_click=lambda _, p=path: ui.navigate.to(p)).props("flat")

    @ui.page(NOT_FOUND_ROUTE)
    def not_found(path: Optional[str] = None) -> None:
        LOGGER.error("404 Error: user attempted to access non-existent route: %s", path or "?")
        _install_theme()
        with ui.column().classes("pf-page w-full items-center q-mt-xl"):
            ui.label("404").classes("text-h2")
            ui.label("Oops! Page not found").classes("text-h6 pf-muted q-mb-md")
            ui.link("Return to Home", "/")

    @ui.page("/departments")
    def departments_page(client: Client) -> None:
        _install_theme()
        vm = runtime.departments_vm()

        @ui.refreshable
        def render_departments() -> None:
            if vm.is_loading:
                loading_state("Loading departments...")
                return
            if not vm.departments:
                empty_state("No departments found.", on_add=open_create, add_label="Create your first department")
                return
            with ui.grid(columns=3).classes("w-full gap-4"):
                for department in vm.departments:
                    department_card(
                        department,
                        on_edit=open_edit,
                        on_delete=request_delete,
                        processes_route=vm.processes_route(department),
                    )

        def after_change() -> None:
            show_notices(vm.notices.drain())
            render_departments.refresh()

        async def reload() -> None:
            await run.io_bound(vm.load)
            after_change()

        def open_create() -> None:
            vm.open_create()
            dialog.show()

        def open_edit(department: Department) -> None:
            vm.open_edit(department)
            dialog.show()

        def request_delete(department_id: int) -> None:
            vm.request_delete(department_id)
            confirm.show()

        navigation_bar("/departments")
        dialog = DepartmentDialog(vm.dialog, after_submit=after_change)
        confirm = DeleteConfirmationDialog(
            vm.delete_confirm, on_confirm=vm.confirm_delete, after_confirm=after_change
        )
        with ui.column().classes("pf-page w-full"):
            page_header(
                "Departments",
                "Manage your organisation's departments.",
                on_add=open_create,
                add_label="Add Department",
            )
            render_departments()
        _bind_lifecycle(client, vm, reload)

    @ui.page("/processes")
    def processes_page(client: Client, departmentId: Optional[str] = None) -> None:
        _install_theme()
        vm = runtime.processes_vm(departmentId)

        @ui.refreshable
        def render_filter() -> None:
            options = vm.department_filter_options()
            ui.select(
                options,
                value=vm.selected_department_id if vm.selected_department_id in options else 0,
                label="Department",
                on_change=lambda e: change_filter(e.value),
            ).classes("w-64")

        @ui.refreshable
        def render_processes() -> None:
            if vm.is_loading:
                loading_state("Loading processes...")
                return
            if not vm.processes:
                empty_state(vm.empty_message, on_add=open_create, add_label="Create your first process")
                return
            with ui.grid(columns=2).classes("w-full gap-4"):
                for process in vm.processes:
                    process_card(
                        process,
                        department_name=vm.department_name(process),
                        on_edit=open_edit,
                        on_delete=request_delete,
                        on_add_subprocess=open_add_subprocess,
                    )

        def after_change() -> None:
            show_notices(vm.notices.drain())
            render_filter.refresh()
            render_processes.refresh()

        async def reload() -> None:
            await run.io_bound(vm.load)
            after_change()

        async def change_filter(value: Any) -> None:
            vm.is_loading = True
            render_processes.refresh()
            route = await run.io_bound(vm.set_department_filter, value)
            ui.run_javascript(f"history.pushState(null, '', {json.dumps(route)})")
            after_change()

        def open_create() -> None:
            vm.open_create_process()
            process_dialog.show()

        def open_edit(process: Process) -> None:
            vm.open_edit_process(process)
            process_dialog.show()

        def open_add_subprocess(process_id: int) -> None:
            vm.open_add_subprocess(process_id)
            subprocess_dialog.show()

        def request_delete(process_id: int) -> None:
            vm.request_delete(process_id)
            confirm.show()

        navigation_bar("/processes")
        process_dialog = ProcessDialog(vm.process_dialog, after_submit=after_change)
        subprocess_dialog = SubProcessDialog(vm.subprocess_dialog, after_submit=after_change)
        confirm = DeleteConfirmationDialog(
            vm.delete_confirm, on_confirm=vm.confirm_delete, after_confirm=after_change
        )
        with ui.column().classes("pf-page w-full"):
            page_header(
                "Processes",
                "Manage business processes and their subprocesses.",
                on_add=open_create,
                add_label="Add Process",
            )
            render_filter()
            render_processes()
        _bind_lifecycle(client, vm, reload)

    @ui.page("/subprocesses")
    def subprocesses_page(client: Client) -> None:
        _install_theme()
        vm = runtime.subprocesses_vm()

        @ui.refreshable
        def render_groups() -> None:
            if vm.is_loading:
                loading_state("Loading subprocesses...")
                return
            if vm.is_empty:
                empty_state("No subprocesses found.", on_add=open_create, add_label="Create your first subprocess")
                return
            for group in vm.groups:
                with ui.card().classes("pf-card w-full q-mb-md"):
                    with ui.row().classes("w-full items-center justify-between"):
                        with ui.row().classes("items-center gap-2"):
                            ui.label(group.process_name).classes("text-h6")
                            ui.label(group.count_label).classes("pf-chip")
                        ui.button(
                            "View process",
                            on_click=lambda _, r=vm.process_route(group): ui.navigate.to(r),
                        ).props("flat dense")
                    for index, sub in enumerate(group.items):
                        render_row(sub, index)

        def render_row(sub: SubProcess, index: int) -> None:
            with ui.row().classes("w-full items-center no-wrap gap-3 q-py-xs"):
                ui.badge(str(vm.display_order(sub, index))).props("rounded")
                with ui.column().classes("gap-0 flex-grow"):
                    ui.label(sub.name)
                    if sub.description:
                        ui.label(sub.description).classes("pf-muted text-caption")
                up = ui.button(icon="arrow_upward", on_click=lambda _, s=sub: move(s, "up")).props(
                    "flat dense round"
                )
                up.set_enabled(sub.effective_order > 0)
                ui.button(icon="arrow_downward", on_click=lambda _, s=sub: move(s, "down")).props(
                    "flat dense round"
                )
                ui.button(icon="edit", on_click=lambda _, s=sub: open_edit(s)).props("flat dense round")
                ui.button(
                    icon="delete",
                    color="negative",
                    on_click=lambda _, s=sub: request_delete(s.id),
                ).props("flat dense round")

        def after_change() -> None:
            show_notices(vm.notices.drain())
            render_groups.refresh()

        async def reload() -> None:
            await run.io_bound(vm.load)
            after_change()

        async def move(sub: SubProcess, direction: str) -> None:
            await run.io_bound(vm.move, sub, direction)
            after_change()

        def open_create() -> None:
            vm.open_create()
            dialog.show()

        def open_edit(sub: SubProcess) -> None:
            vm.open_edit(sub)
            dialog.show()

        def request_delete(subprocess_id: int) -> None:
            vm.request_delete(subprocess_id)
            confirm.show()

        navigation_bar("/subprocesses")
        dialog = SubProcessDialog(vm.dialog, after_submit=after_change)
        confirm = DeleteConfirmationDialog(
            vm.delete_confirm, on_confirm=vm.confirm_delete, after_confirm=after_change
        )
        with ui.column().classes("pf-page w-full"):
            page_header(
                "Subprocesses",
                "Ordered steps of every process.",
                on_add=open_create,
                add_label="Add Subprocess",
            )
            render_groups()
        _bind_lifecycle(client, vm, reload)


def _parse_args(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse CLI args for web runtime startup."""
    parser = argparse.ArgumentParser(description="Run the ProcessFlow NiceGUI console.")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8080)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--api-base-url", default=None, help="Override PROCFLOW_API_BASE_URL.")
    parser.add_argument("--smoke-test", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[list] = None) -> None:
    """CLI entrypoint for the NiceGUI runtime."""
    args = _parse_args(argv)
    configure_root()
    settings = ApiSettings.from_env().with_overrides(base_url=args.api_base_url)
    runtime = WebRuntime(settings)
    if args.smoke_test:
        print("web-smoke-ok", runtime.base_url)
        return
    _build_ui(runtime)
    ui.run(
        host=args.host,
        port=args.port,
        title="ProcessFlow",
        reload=args.reload,
        show=False,
        storage_secret=os.environ.get("PROCFLOW_WEB_STORAGE_SECRET", "procflow-web-ui-secret"),
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
