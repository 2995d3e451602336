from __future__ import annotations

from typing import List

from procflow.domain.entities import DepartmentDraft, SubProcessDraft
from procflow.domain.ports import OperationCancelled, UseCaseError
from procflow.tests.stubs import department, process, subprocess
from procflow.usecases.load_process_listing import HydrationFailure, ProcessListing
from procflow.usecases.load_subprocess_overview import SubProcessGroup, SubProcessOverview
from procflow.viewmodels.departments_vm import DepartmentsVM
from procflow.viewmodels.processes_vm import ProcessesVM, parse_department_filter
from procflow.viewmodels.subprocesses_vm import SubProcessesVM


class _Recorder:
    def __init__(self, result=None, error: Exception = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def __call__(self, *args, **kwargs):
        self.calls.append(args)
        if self.error is not None:
            raise self.error
        return self.result


def _departments_vm(**overrides) -> DepartmentsVM:
    deps = {
        "load_departments": _Recorder([department(1, "Finance")]),
        "save_department": _Recorder(),
        "delete_department": _Recorder(),
    }
    deps.update(overrides)
    return DepartmentsVM(**deps)


def test_departments_load_leaves_loading_state() -> None:
    vm = _departments_vm()
    assert vm.is_loading

    vm.load()

    assert not vm.is_loading
    assert [d.name for d in vm.departments] == ["Finance"]
    assert len(vm.notices) == 0


def test_departments_load_failure_notifies_and_keeps_state() -> None:
    vm = _departments_vm(load_departments=_Recorder(error=UseCaseError("CONNECTION_FAILED", "Failed to connect to API server")))

    vm.load()

    assert not vm.is_loading
    assert vm.departments == []
    notice = vm.notices.drain()[0]
    assert notice.level == "negative"
    assert notice.message == "Failed to load departments: Failed to connect to API server"


def test_cancelled_load_is_silent() -> None:
    vm = _departments_vm(load_departments=_Recorder(error=OperationCancelled()))

    vm.load()

    assert len(vm.notices) == 0


def test_department_submit_creates_and_reloads() -> None:
    save = _Recorder()
    load = _Recorder([department(1, "Finance")])
    vm = _departments_vm(save_department=save, load_departments=load)
    vm.open_create()
    vm.dialog.draft.name = "Finance"

    assert vm.dialog.submit()

    assert save.calls == [(DepartmentDraft(name="Finance"), None)]
    assert len(load.calls) == 1
    assert vm.notices.drain()[0].message == "Department created."


def test_department_submit_failure_keeps_dialog_open() -> None:
    vm = _departments_vm(save_department=_Recorder(error=UseCaseError("REQUEST_FAILED", "Name taken")))
    vm.open_edit(department(1, "Finance"))

    assert vm.dialog.submit() is False

    assert vm.dialog.is_open
    assert vm.notices.drain()[0].message == "Failed to save department: Name taken"


def test_delete_confirmation_flow() -> None:
    delete = _Recorder()
    vm = _departments_vm(delete_department=delete)

    assert vm.confirm_delete() is False
    vm.request_delete(4)
    assert vm.delete_confirm.is_open
    assert vm.confirm_delete() is True

    assert delete.calls == [(4,)]
    assert not vm.delete_confirm.is_open
    assert vm.notices.drain()[0].message == "Department deleted."


def test_failed_delete_keeps_pending_target() -> None:
    vm = _departments_vm(delete_department=_Recorder(error=UseCaseError("SERVER_ERROR", "Error: 500")))
    vm.request_delete(4)

    assert vm.confirm_delete() is False

    assert vm.delete_confirm.pending_id == 4
    assert not vm.delete_confirm.is_deleting


def test_processes_route_for_department() -> None:
    assert DepartmentsVM.processes_route(department(3, "HR")) == "/processes?departmentId=3"


# ---- processes page ----


class _ListingStub:
    """Returns a listing containing only the processes of the requested department."""

    def __init__(self) -> None:
        self.departments = [department(1, "Finance"), department(2, "HR")]
        self.processes = [process(10, "Payroll", 1), process(20, "Hiring", 2)]
        self.calls: List[object] = []
        self.failures: List[HydrationFailure] = []

    def __call__(self, department_id=None, *, cancel_token=None) -> ProcessListing:
        self.calls.append(department_id)
        processes = [p for p in self.processes if department_id is None or p.department_id == department_id]
        return ProcessListing(list(self.departments), processes, list(self.failures))


def _processes_vm(listing: _ListingStub, **overrides) -> ProcessesVM:
    deps = {
        "load_listing": listing,
        "save_process": _Recorder(),
        "save_subprocess": _Recorder(),
        "delete_process": _Recorder(),
    }
    deps.update(overrides)
    return ProcessesVM(**deps)


def test_department_filter_change_replaces_collection() -> None:
    listing = _ListingStub()
    vm = _processes_vm(listing)
    vm.load()
    assert [p.id for p in vm.processes] == [10, 20]

    route = vm.set_department_filter("2")

    assert route == "/processes?departmentId=2"
    assert listing.calls == [None, 2]
    assert [p.id for p in vm.processes] == [20]

    assert vm.set_department_filter(0) == "/processes"
    assert [p.id for p in vm.processes] == [10, 20]


def test_parse_department_filter() -> None:
    assert parse_department_filter(None) is None
    assert parse_department_filter("") is None
    assert parse_department_filter("abc") is None
    assert parse_department_filter("0") is None
    assert parse_department_filter(" 7 ") == 7


def test_processes_load_feeds_dialog_options_and_warns_on_failures() -> None:
    listing = _ListingStub()
    listing.failures = [HydrationFailure(process_id=10, message="Boom")]
    vm = _processes_vm(listing, department_id=None)

    vm.load()

    assert vm.process_dialog.department_options() == {1: "Finance", 2: "HR"}
    assert vm.subprocess_dialog.process_options() == {10: "Payroll", 20: "Hiring"}
    notice = vm.notices.drain()[0]
    assert notice.level == "warning"
    assert notice.message == "Subprocesses could not be loaded for 1 process."


def test_empty_message_depends_on_filter() -> None:
    vm = _processes_vm(_ListingStub(), department_id=5)

    assert vm.empty_message == "No processes found for this department."
    assert vm.department_filter_options() == {0: "All departments"}


def test_department_name_prefers_embedded_department() -> None:
    vm = _processes_vm(_ListingStub())
    vm.load()

    assert vm.department_name(process(10, "Payroll", 1)) == "Finance"
    assert vm.department_name(process(11, "X", 99, department=department(99, "Legal"))) == "Legal"
    assert vm.department_name(process(12, "Y", 42)) == ""


def test_add_subprocess_from_process_card() -> None:
    save_subprocess = _Recorder()
    vm = _processes_vm(_ListingStub(), save_subprocess=save_subprocess)
    vm.load()

    vm.open_add_subprocess(20)
    vm.subprocess_dialog.draft.name = "Interview"
    assert vm.subprocess_dialog.submit()

    assert save_subprocess.calls == [(SubProcessDraft(name="Interview", process_id=20, order=0), None)]
    assert vm.notices.drain()[0].message == "Subprocess created."


# ---- subprocesses page ----


def _overview() -> SubProcessOverview:
    items = [subprocess(1, 10, order=0), subprocess(2, 10, order=1)]
    return SubProcessOverview(
        processes=[process(10, "Payroll", 3)],
        groups=[SubProcessGroup(process_id=10, process_name="Payroll", items=items, department_id=3)],
    )


def _subprocesses_vm(**overrides) -> SubProcessesVM:
    deps = {
        "load_overview": _Recorder(_overview()),
        "save_subprocess": _Recorder(),
        "delete_subprocess": _Recorder(),
        "change_order": _Recorder(2),
    }
    deps.update(overrides)
    return SubProcessesVM(**deps)


def test_move_reloads_after_success() -> None:
    load = _Recorder(_overview())
    change = _Recorder(2)
    vm = _subprocesses_vm(load_overview=load, change_order=change)
    sub = subprocess(2, 10, order=1)

    assert vm.move_down(sub) is True

    assert change.calls == [(sub, "down")]
    assert len(load.calls) == 1
    assert vm.notices.drain()[0].message == "Order updated."


def test_move_noop_does_not_reload() -> None:
    load = _Recorder(_overview())
    vm = _subprocesses_vm(load_overview=load, change_order=_Recorder(None))

    assert vm.move_up(subprocess(1, 10, order=0)) is False

    assert load.calls == []
    assert len(vm.notices) == 0


def test_move_failure_notifies() -> None:
    vm = _subprocesses_vm(change_order=_Recorder(error=UseCaseError("REQUEST_FAILED", "Nope")))

    assert vm.move_up(subprocess(2, 10, order=1)) is False
    assert vm.notices.drain()[0].message == "Failed to update order: Nope"


def test_subprocesses_load_and_display_helpers() -> None:
    vm = _subprocesses_vm()
    vm.load()

    assert not vm.is_empty
    assert vm.dialog.process_options() == {10: "Payroll"}
    group = vm.groups[0]
    assert vm.process_route(group) == "/processes?departmentId=3"
    assert vm.process_route(SubProcessGroup(process_id=1, process_name="?", items=[])) == "/processes"
    assert vm.display_order(subprocess(1, 10, order=0), 0) == 1
    assert vm.display_order(subprocess(1, 10, order=5), 0) == 5


def test_stale_load_is_discarded_after_dispose() -> None:
    vm = _subprocesses_vm()

    def load_then_dispose(*, cancel_token=None):
        vm.dispose()
        return _overview()

    vm._load_overview = load_then_dispose
    vm.load()

    assert vm.groups == []
    assert vm.disposed
    assert not vm.is_loading


def test_disconnect_during_load_leaves_loading_state() -> None:
    vm = _departments_vm()

    def load_then_disconnect(*, cancel_token=None):
        vm.dispose()
        return [department(1, "Finance")]

    vm._load_departments = load_then_disconnect
    vm.load()

    assert not vm.is_loading
    assert vm.departments == []

    vm._load_departments = _Recorder([department(1, "Finance")])
    vm.load()
    assert [d.name for d in vm.departments] == ["Finance"]
