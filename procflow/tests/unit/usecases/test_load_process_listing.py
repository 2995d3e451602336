from __future__ import annotations

import pytest

from procflow.adapters.api_errors import ApiConnectionError, ApiServerError
from procflow.domain.cancellation import CancelToken
from procflow.domain.ports import OperationCancelled, UseCaseError
from procflow.tests.stubs import (
    DepartmentPortStub,
    ProcessPortStub,
    SubProcessPortStub,
    department,
    process,
    subprocess,
)
from procflow.usecases.load_process_listing import LoadProcessListing, hydrate_processes


def _use_case(**overrides) -> LoadProcessListing:
    ports = {
        "department_port": DepartmentPortStub([department(1, "Finance"), department(2, "HR")]),
        "process_port": ProcessPortStub(
            [process(10, "Payroll", 1), process(11, "Audit", 1), process(12, "Hiring", 2)]
        ),
        "subprocess_port": SubProcessPortStub(
            [subprocess(100, 10, order=2), subprocess(101, 10, order=1), subprocess(102, 12)]
        ),
    }
    ports.update(overrides)
    return LoadProcessListing(**ports)


def test_listing_hydrates_each_process_sorted_by_order() -> None:
    listing = _use_case()()

    assert [d.name for d in listing.departments] == ["Finance", "HR"]
    assert [p.id for p in listing.processes] == [10, 11, 12]
    assert [s.id for s in listing.processes[0].sub_processes] == [101, 100]
    assert listing.processes[1].sub_processes == []
    assert listing.failures == []


def test_filter_queries_by_department() -> None:
    process_port = ProcessPortStub([process(10, "Payroll", 1), process(12, "Hiring", 2)])

    listing = _use_case(process_port=process_port)(2)

    assert process_port.calls == [("list_by_department", 2)]
    assert [p.id for p in listing.processes] == [12]


def test_one_failing_hydration_keeps_the_others() -> None:
    subprocess_port = SubProcessPortStub(
        [subprocess(100, 10), subprocess(102, 12)],
        failing={11: ApiServerError("Boom", status=500)},
    )

    listing = _use_case(subprocess_port=subprocess_port)()

    by_id = {p.id: p for p in listing.processes}
    assert len(listing.processes) == 3
    assert [s.id for s in by_id[10].sub_processes] == [100]
    assert by_id[11].sub_processes is None
    assert [s.id for s in by_id[12].sub_processes] == [102]
    assert [(f.process_id, f.message) for f in listing.failures] == [(11, "Boom")]


def test_process_load_failure_is_mapped() -> None:
    process_port = ProcessPortStub(error=ApiConnectionError())

    with pytest.raises(UseCaseError) as excinfo:
        _use_case(process_port=process_port)()

    assert excinfo.value.code == "CONNECTION_FAILED"
    assert excinfo.value.message == "Failed to connect to API server"


def test_processes_load_without_departments() -> None:
    listing = _use_case(department_port=DepartmentPortStub([]))()

    assert listing.departments == []
    assert len(listing.processes) == 3


def test_cancelled_token_stops_before_any_request() -> None:
    department_port = DepartmentPortStub([department(1, "Finance")])
    token = CancelToken()
    token.cancel()

    with pytest.raises(OperationCancelled):
        _use_case(department_port=department_port)(cancel_token=token)

    assert department_port.calls == []


def test_cancel_during_hydration_propagates() -> None:
    token = CancelToken()
    subprocess_port = SubProcessPortStub([], on_list=lambda _pid: token.cancel())

    with pytest.raises(OperationCancelled):
        hydrate_processes(
            [process(1, "A"), process(2, "B")],
            subprocess_port,
            max_workers=1,
            cancel_token=token,
        )


def test_hydrate_does_not_mutate_inputs() -> None:
    original = process(1, "A")

    hydrated, failures = hydrate_processes([original], SubProcessPortStub([subprocess(5, 1)]))

    assert original.sub_processes is None
    assert [s.id for s in hydrated[0].sub_processes] == [5]
    assert failures == []


def test_failed_hydration_drops_embedded_subprocesses() -> None:
    embedded = process(1, "A", sub_processes=[subprocess(5, 1)])
    port = SubProcessPortStub(failing={1: ApiServerError("Boom", status=500)})

    hydrated, failures = hydrate_processes([embedded], port)

    assert hydrated[0].sub_processes is None
    assert embedded.sub_processes is not None
    assert [f.process_id for f in failures] == [1]
