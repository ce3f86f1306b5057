"""Asynchronous double-buffered logging with console and file sinks, TCP backup of severe records, and storage helpers."""

__version__ = "0.1.0"