from __future__ import annotations

from typing import List

from procflow.adapters.resource_rest import ResourceRestAdapter
from procflow.domain.entities import SubProcess
from procflow.domain.ports import ProcessId, SubProcessPort


class SubProcessRestAdapter(ResourceRestAdapter[SubProcess], SubProcessPort):
    """REST adapter for ``/subprocesses``."""

    resource_path = "/subprocesses"
    parse = staticmethod(SubProcess.from_payload)

    def list_by_process(self, process_id: ProcessId) -> List[SubProcess]:
        return self._get_list(f"{self.resource_path}/process/{int(process_id)}")


__all__ = ["SubProcessRestAdapter"]
