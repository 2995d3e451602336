"""Adapter package for external I/O implementations.

Purpose:
    Collect the concrete REST implementations of the domain ports
    (departments, processes, subprocesses) and the shared HTTP transport.

Dependencies:
    Submodules depend on ``requests`` and the domain protocol definitions.

Call context:
    Imported by ``procflow.web_ui.runtime`` for runtime wiring and by tests
    for transport-level behavior verification.
"""
