"""Process listing workflow: departments, processes and their subprocesses.

The listing is assembled in three steps (departments for the filter selector,
processes for the active filter, then per-process subprocess hydration) and
handed back as one ``ProcessListing`` so the caller can replace its state in
a single update.

Dependencies:
    - ``concurrent.futures.ThreadPoolExecutor`` for the bounded hydration
      fan-out.
    - Domain ports for I/O; no adapter imports.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from typing import List, Optional, Sequence, Tuple

from procflow.domain.cancellation import CancelToken, ensure_active
from procflow.domain.entities import Department, Process
from procflow.domain.ordering import sort_by_order
from procflow.domain.ports import (
    DepartmentId,
    DepartmentPort,
    OperationCancelled,
    ProcessPort,
    SubProcessPort,
)
from procflow.usecases.error_mapping import map_api_error

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class HydrationFailure:
    """Subprocess fetch that failed for one process."""

    process_id: int
    message: str


@dataclass
class ProcessListing:
    departments: List[Department]
    processes: List[Process]
    failures: List[HydrationFailure] = field(default_factory=list)


def hydrate_processes(
    processes: Sequence[Process],
    subprocess_port: SubProcessPort,
    *,
    max_workers: int = 4,
    cancel_token: Optional[CancelToken] = None,
) -> Tuple[List[Process], List[HydrationFailure]]:
    """Attach each process's subprocesses, sorted by ``order``.

    Fetches run on at most ``max_workers`` threads. A failing fetch is logged
    and collected; that process gets ``sub_processes=None`` (an embedded list
    from the payload is dropped) and the others are unaffected. Output keeps
    the input order. Inputs are not mutated.

    Raises:
        OperationCancelled: When ``cancel_token`` is set before or during the
            fan-out.
    """
    ensure_active(cancel_token)
    if not processes:
        return [], []

    def _fetch(process: Process):
        ensure_active(cancel_token)
        return sort_by_order(subprocess_port.list_by_process(process.id))

    hydrated: List[Process] = []
    failures: List[HydrationFailure] = []
    workers = max(1, min(int(max_workers), len(processes)))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        futures = [(process, pool.submit(_fetch, process)) for process in processes]
        for process, future in futures:
            try:
                subprocesses = future.result()
            except OperationCancelled:
                for _, pending in futures:
                    pending.cancel()
                raise
            except Exception as exc:
                error = map_api_error(exc, default_code="LOAD_SUBPROCESSES_FAILED")
                LOGGER.error(
                    "Error fetching subprocesses for process %s: %s", process.id, error.message
                )
                failures.append(HydrationFailure(process_id=process.id, message=error.message))
                hydrated.append(replace(process, sub_processes=None))
                continue
            hydrated.append(replace(process, sub_processes=subprocesses))
    return hydrated, failures


@dataclass
class LoadProcessListing:
    """Use case: build the process listing, optionally filtered by department."""

    department_port: DepartmentPort
    process_port: ProcessPort
    subprocess_port: SubProcessPort
    max_workers: int = 4

    def __call__(
        self,
        department_id: Optional[DepartmentId] = None,
        *,
        cancel_token: Optional[CancelToken] = None,
    ) -> ProcessListing:
        """Load departments, the (filtered) processes and their subprocesses.

        Args:
            department_id: Active department filter; ``None`` lists all processes.
            cancel_token: Checked between steps.

        Raises:
            UseCaseError: When departments or processes cannot be loaded.
            OperationCancelled: When the token was set meanwhile.
        """
        ensure_active(cancel_token)
        try:
            departments = list(self.department_port.list_all())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_DEPARTMENTS_FAILED") from exc

        ensure_active(cancel_token)
        try:
            if department_id is not None:
                processes = list(self.process_port.list_by_department(department_id))
            else:
                processes = list(self.process_port.list_all())
        except Exception as exc:
            raise map_api_error(exc, default_code="LOAD_PROCESSES_FAILED") from exc

        hydrated, failures = hydrate_processes(
            processes,
            self.subprocess_port,
            max_workers=self.max_workers,
            cancel_token=cancel_token,
        )
        ensure_active(cancel_token)
        return ProcessListing(departments=departments, processes=hydrated, failures=failures)


__all__ = ["HydrationFailure", "LoadProcessListing", "ProcessListing", "hydrate_processes"]
