"""Process-wide registry of named loggers."""

from __future__ import annotations

import threading

from .logger import AsyncLogger, LoggerBuilder

DEFAULT_LOGGER_NAME = "default"


class LoggerManager:
    """Keeps loggers by name; always holds a default logger writing to stdout."""

    _instance: "LoggerManager | None" = None
    _instance_lock = threading.Lock()

    def __init__(self, default_logger: AsyncLogger | None = None) -> None:
        self._lock = threading.Lock()
        if default_logger is None:
            default_logger = LoggerBuilder().with_name(DEFAULT_LOGGER_NAME).build()
        self._default = default_logger
        self._loggers: dict[str, AsyncLogger] = {DEFAULT_LOGGER_NAME: default_logger}

    @classmethod
    def instance(cls) -> "LoggerManager":
        """Return the shared manager, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def exists(self, name: str) -> bool:
        with self._lock:
            return name in self._loggers

    def add(self, logger: AsyncLogger) -> None:
        """Register ``logger`` under its name unless that name is taken."""
        with self._lock:
            self._loggers.setdefault(logger.name, logger)

    def get(self, name: str) -> AsyncLogger | None:
        """Return the logger called ``name``, or None if there is none."""
        with self._lock:
            return self._loggers.get(name)

    def default(self) -> AsyncLogger:
        return self._default


def get_logger(name: str) -> AsyncLogger | None:
    """Look up a logger in the shared manager."""
    return LoggerManager.instance().get(name)


def default_logger() -> AsyncLogger:
    """Return the shared manager's default logger."""
    return LoggerManager.instance().default()