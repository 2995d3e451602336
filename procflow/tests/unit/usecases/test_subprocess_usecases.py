from __future__ import annotations

import pytest

from procflow.adapters.api_errors import ApiClientError, ApiServerError
from procflow.domain.ports import UseCaseError
from procflow.tests.stubs import ProcessPortStub, SubProcessPortStub, process, subprocess
from procflow.usecases.change_subprocess_order import ChangeSubProcessOrder
from procflow.usecases.load_subprocess_overview import UNKNOWN_PROCESS_NAME, LoadSubProcessOverview


def test_overview_groups_by_process_with_titles() -> None:
    process_port = ProcessPortStub([process(1, "Payroll", 7), process(2, "Audit", 8)])
    subprocess_port = SubProcessPortStub(
        [subprocess(10, 2, order=1), subprocess(11, 1, order=3), subprocess(12, 1, order=1)]
    )

    overview = LoadSubProcessOverview(process_port, subprocess_port)()

    assert [g.process_name for g in overview.groups] == ["Payroll", "Audit"]
    assert [s.id for s in overview.groups[0].items] == [12, 11]
    assert overview.groups[0].department_id == 7
    assert overview.groups[0].count_label == "2 subprocesses"
    assert overview.groups[1].count_label == "1 subprocess"


def test_overview_survives_process_failure_with_unknown_titles() -> None:
    process_port = ProcessPortStub(error=ApiServerError("down", status=500))
    subprocess_port = SubProcessPortStub([subprocess(10, 5)])

    overview = LoadSubProcessOverview(process_port, subprocess_port)()

    assert overview.processes == []
    assert overview.groups[0].process_name == UNKNOWN_PROCESS_NAME
    assert overview.groups[0].department_id is None


def test_overview_propagates_subprocess_failure() -> None:
    subprocess_port = SubProcessPortStub(error=ApiServerError("down", status=500))

    with pytest.raises(UseCaseError) as excinfo:
        LoadSubProcessOverview(ProcessPortStub([]), subprocess_port)()

    assert excinfo.value.code == "SERVER_ERROR"


def test_empty_overview() -> None:
    overview = LoadSubProcessOverview(ProcessPortStub([]), SubProcessPortStub([]))()

    assert overview.is_empty


def test_move_up_at_zero_issues_no_request() -> None:
    port = SubProcessPortStub()
    change = ChangeSubProcessOrder(port)

    assert change(subprocess(1, 1, order=0), "up") is None
    assert change(subprocess(2, 1, order=None), "up") is None
    assert port.calls == []


def test_move_updates_only_the_order_field() -> None:
    port = SubProcessPortStub()

    new_order = ChangeSubProcessOrder(port)(subprocess(4, 1, order=2), "down")

    assert new_order == 3
    assert port.calls == [("update", 4, {"order": 3})]


def test_move_failure_maps_to_request_failed() -> None:
    port = SubProcessPortStub(error=ApiClientError("Invalid order", status=400))

    with pytest.raises(UseCaseError) as excinfo:
        ChangeSubProcessOrder(port)(subprocess(4, 1, order=2), "up")

    assert excinfo.value.code == "REQUEST_FAILED"
    assert excinfo.value.message == "Invalid order"
