"""ProcessFlow console: NiceGUI front end for the department/process REST API."""

__version__ = "0.1.0"
