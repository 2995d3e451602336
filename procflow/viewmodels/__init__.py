"""ViewModel package for page state and form dialogs.

Call context:
    ``procflow/web_ui/main.py`` builds one set of page viewmodels per browser
    page through ``WebRuntime`` and binds NiceGUI callbacks to their commands.

Dependencies:
    Modules in this package depend on domain types and use-case callables
    only. HTTP adapters and NiceGUI stay outside.

Responsibilities:
    - Expose mutable page state (lists, loading flags, dialogs, pending delete).
    - Hold form drafts and enforce required fields before submission.
    - Emit ``Notice`` records instead of touching the UI toolkit.
"""
