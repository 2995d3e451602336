from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from procflow.domain.entities import SubProcess
from procflow.domain.ordering import Direction, shifted_order
from procflow.domain.ports import SubProcessPort
from procflow.usecases.error_mapping import map_api_error


@dataclass
class ChangeSubProcessOrder:
    """Move a subprocess one step up or down by rewriting its ``order`` only.

    Siblings are not renumbered; two subprocesses may end up sharing an order.
    """

    subprocess_port: SubProcessPort

    def __call__(self, subprocess: SubProcess, direction: Direction) -> Optional[int]:
        """Return the new order, or ``None`` when the move was a no-op (below 0)."""
        new_order = shifted_order(subprocess.order, direction)
        if new_order is None:
            return None
        try:
            self.subprocess_port.update(subprocess.id, {"order": new_order})
        except Exception as exc:
            raise map_api_error(exc, default_code="REORDER_FAILED") from exc
        return new_order
