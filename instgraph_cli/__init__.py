"""InstGraph CLI: template instantiation profiles from compiler diagnostics."""

__version__ = "1.0.0"
