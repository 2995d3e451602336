"""Use-case callables binding domain ports to console workflows."""
