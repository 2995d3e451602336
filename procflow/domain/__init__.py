"""Domain package exports for entities, drafts and ordering helpers."""

from .entities import (
    Department,
    DepartmentDraft,
    Process,
    ProcessDraft,
    SubProcess,
    SubProcessDraft,
)
from .ordering import group_by_process, sort_by_order, sort_by_process_then_order

__all__ = [
    "Department",
    "DepartmentDraft",
    "Process",
    "ProcessDraft",
    "SubProcess",
    "SubProcessDraft",
    "group_by_process",
    "sort_by_order",
    "sort_by_process_then_order",
]
