"""Subprocess management listing grouped by owning process."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from procflow.domain.cancellation import CancelToken, ensure_active
from procflow.domain.entities import Process, SubProcess
from procflow.domain.ordering import group_by_process
from procflow.domain.ports import ProcessPort, SubProcessPort
from procflow.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)

UNKNOWN_PROCESS_NAME = "Unknown process"


@dataclass
class SubProcessGroup:
    """One section of the grouped listing."""

    process_id: int
    process_name: str
    items: List[SubProcess]
    department_id: Optional[int] = None

    @property
    def count_label(self) -> str:
        count = len(self.items)
        return f"{count} subprocess" if count == 1 else f"{count} subprocesses"


@dataclass
class SubProcessOverview:
    processes: List[Process] = field(default_factory=list)
    groups: List[SubProcessGroup] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.groups


@dataclass
class LoadSubProcessOverview:
    """Use case: load all subprocesses and group them by process.

    Processes are only needed for section titles, so a failure there is
    logged and the sections fall back to ``UNKNOWN_PROCESS_NAME``. A failure
    loading subprocesses propagates.
    """

    process_port: ProcessPort
    subprocess_port: SubProcessPort

    def __call__(self, *, cancel_token: Optional[CancelToken] = None) -> SubProcessOverview:
        ensure_active(cancel_token)
        try:
            processes = list(self.process_port.list_all())
        except Exception as exc:
            error = map_api_error(exc, default_code="LOAD_PROCESSES_FAILED")
            LOGGER.error("Error fetching processes: %s", error.message)
            processes = []

        ensure_active(cancel_token)
        try:
            subprocesses = list(self.subprocess_port.list_all())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_SUBPROCESSES_FAILED") from exc

        ensure_active(cancel_token)
        by_id: Dict[int, Process] = {process.id: process for process in processes}
        groups: List[SubProcessGroup] = []
        for process_id, items in group_by_process(subprocesses).items():
            owner = by_id.get(process_id)
            groups.append(
                SubProcessGroup(
                    process_id=process_id,
                    process_name=owner.name if owner else UNKNOWN_PROCESS_NAME,
                    items=items,
                    department_id=owner.department_id if owner else None,
                )
            )
        return SubProcessOverview(processes=processes, groups=groups)


__all__ = [
    "LoadSubProcessOverview",
    "SubProcessGroup",
    "SubProcessOverview",
    "UNKNOWN_PROCESS_NAME",
]
