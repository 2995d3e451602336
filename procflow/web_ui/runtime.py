"""NiceGUI runtime composition for the ProcessFlow console.

One ``WebRuntime`` is created per server process and holds the settings.
Every browser page gets its own ``PageServices``: a fresh HTTP session, REST
adapters and use cases. Cookies set by the API for one user therefore never
reach another user's requests, and no page state is shared between tabs.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from procflow.adapters.department_rest import DepartmentRestAdapter
from procflow.adapters.http_client import ApiSession
from procflow.adapters.process_rest import ProcessRestAdapter
from procflow.adapters.subprocess_rest import SubProcessRestAdapter
from procflow.usecases.change_subprocess_order import ChangeSubProcessOrder
from procflow.usecases.delete_entities import DeleteDepartment, DeleteProcess, DeleteSubProcess
from procflow.usecases.load_departments import LoadDepartments
from procflow.usecases.load_process_listing import LoadProcessListing
from procflow.usecases.load_subprocess_overview import LoadSubProcessOverview
from procflow.usecases.save_entities import SaveDepartment, SaveProcess, SaveSubProcess
from procflow.utils.settings import ApiSettings
from procflow.viewmodels.departments_vm import DepartmentsVM
from procflow.viewmodels.processes_vm import ProcessesVM, parse_department_filter
from procflow.viewmodels.subprocesses_vm import SubProcessesVM

LOGGER = logging.getLogger(__name__)


class PageServices:
    """Session, adapters and use cases owned by one browser page."""

    def __init__(self, settings: ApiSettings, session: Any = None) -> None:
        self.api = ApiSession(settings.to_http_config(), session=session)

        self.department_port = DepartmentRestAdapter(self.api)
        self.process_port = ProcessRestAdapter(self.api)
        self.subprocess_port = SubProcessRestAdapter(self.api)

        self.uc_load_departments = LoadDepartments(self.department_port)
        self.uc_load_listing = LoadProcessListing(
            self.department_port,
            self.process_port,
            self.subprocess_port,
            max_workers=settings.max_workers,
        )
        self.uc_load_overview = LoadSubProcessOverview(self.process_port, self.subprocess_port)
        self.uc_save_department = SaveDepartment(self.department_port)
        self.uc_save_process = SaveProcess(self.process_port)
        self.uc_save_subprocess = SaveSubProcess(self.subprocess_port)
        self.uc_delete_department = DeleteDepartment(self.department_port)
        self.uc_delete_process = DeleteProcess(self.process_port)
        self.uc_delete_subprocess = DeleteSubProcess(self.subprocess_port)
        self.uc_change_order = ChangeSubProcessOrder(self.subprocess_port)


class WebRuntime:
    """Composition root: settings -> per-page services -> VMs."""

    def __init__(self, settings: Optional[ApiSettings] = None, session: Any = None) -> None:
        """Create the runtime.

        Args:
            settings: Connection settings; read from the environment when omitted.
            session: Optional ``requests.Session``-compatible object shared by
                every page. Tests inject a stub here; in production each page
                opens its own ``requests.Session``.
        """
        self.settings = settings or ApiSettings.from_env()
        self._session = session
        LOGGER.info("API base URL: %s", self.base_url)

    @property
    def base_url(self) -> str:
        return str(self.settings.base_url).rstrip("/")

    def page_services(self) -> PageServices:
        return PageServices(self.settings, session=self._session)

    # ------------------------------------------------------------------
    # Page viewmodel factories
    # ------------------------------------------------------------------
    def departments_vm(self) -> DepartmentsVM:
        services = self.page_services()
        vm = DepartmentsVM(
            load_departments=services.uc_load_departments,
            save_department=services.uc_save_department,
            delete_department=services.uc_delete_department,
        )
        vm.on_dispose(services.api.close)
        return vm

    def processes_vm(self, department_id: Any = None) -> ProcessesVM:
        services = self.page_services()
        vm = ProcessesVM(
            load_listing=services.uc_load_listing,
            save_process=services.uc_save_process,
            save_subprocess=services.uc_save_subprocess,
            delete_process=services.uc_delete_process,
            department_id=parse_department_filter(department_id),
        )
        vm.on_dispose(services.api.close)
        return vm

    def subprocesses_vm(self) -> SubProcessesVM:
        services = self.page_services()
        vm = SubProcessesVM(
            load_overview=services.uc_load_overview,
            save_subprocess=services.uc_save_subprocess,
            delete_subprocess=services.uc_delete_subprocess,
            change_order=services.uc_change_order,
        )
        vm.on_dispose(services.api.close)
        return vm


__all__ = ["PageServices", "WebRuntime"]
