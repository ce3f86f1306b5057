"""Asynchronous logger and its builder."""

from __future__ import annotations

import sys
from concurrent.futures import Future
from typing import Any, Callable, Iterable

from .backup_client import send_backup
from .buffer import Buffer
from .config import LogConfig, get_config
from .flush import FileFlush, LogFlush, RollingFileFlush, StdoutFlush, create_flush
from .levels import LogLevel
from .message import LogMessage
from .threadpool import ThreadPool
from .worker import AsyncType, AsyncWorker

BackupFunc = Callable[[str, LogConfig], Any]


class AsyncLogger:
    """Formats records and writes them to its flushes from a background thread.

    ERROR and FATAL records are also sent to ``backup`` (through
    ``thread_pool`` when one is given) before being written locally.
    """

    def __init__(
        self,
        name: str,
        flushes: Iterable[LogFlush],
        async_type: AsyncType = AsyncType.BLOCKING_BOUNDED,
        config: LogConfig | None = None,
        thread_pool: ThreadPool | None = None,
        backup: BackupFunc | None = send_backup,
    ) -> None:
        self.name = name
        self._flushes = list(flushes)
        self._config = config if config is not None else get_config()
        self._thread_pool = thread_pool
        self._backup = backup
        self._worker = AsyncWorker(self._real_flush, async_type, self._config)

    def debug(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.DEBUG, fmt, args)

    def info(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.INFO, fmt, args)

    def warn(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.WARN, fmt, args)

    def error(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.ERROR, fmt, args)

    def fatal(self, fmt: str, *args: Any) -> None:
        self._log(LogLevel.FATAL, fmt, args)

    def log(self, level: LogLevel | int, fmt: str, *args: Any) -> None:
        """Log at ``level``; ``fmt`` is a printf-style format for ``args``."""
        self._log(LogLevel(level), fmt, args)

    def close(self) -> None:
        """Write out pending records, stop the worker and close the flushes."""
        self._worker.stop()
        for flush in self._flushes:
            close = getattr(flush, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> "AsyncLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _log(self, level: LogLevel, fmt: str, args: tuple) -> None:
        caller = sys._getframe(2)
        payload = fmt % args if args else fmt
        message = LogMessage(level, caller.f_code.co_filename, caller.f_lineno, self.name, payload)
        text = message.format()
        if level >= LogLevel.ERROR and self._backup is not None:
            self._send_backup(text)
        self._worker.push(text.encode("utf-8"))

    def _send_backup(self, text: str) -> None:
        assert self._backup is not None
        try:
            if self._thread_pool is None:
                self._backup(text, self._config)
            else:
                future: Future = self._thread_pool.submit(self._backup, text, self._config)
                future.result()
        except Exception as exc:
            print(f"remote backup failed: {exc}", file=sys.stderr)

    def _real_flush(self, buffer: Buffer) -> None:
        if buffer.is_empty():
            return
        data = buffer.peek()
        for flush in self._flushes:
            flush.flush(data)


class LoggerBuilder:
    """Collects the settings of an AsyncLogger and creates it."""

    def __init__(
        self, config: LogConfig | None = None, thread_pool: ThreadPool | None = None
    ) -> None:
        self._config = config
        self._thread_pool = thread_pool
        self._name = ""
        self._async_type = AsyncType.BLOCKING_BOUNDED
        self._flushes: list[LogFlush] = []

    def with_name(self, name: str) -> "LoggerBuilder":
        self._name = name
        return self

    def with_async_type(self, async_type: AsyncType) -> "LoggerBuilder":
        self._async_type = async_type
        return self

    def add_flush(self, flush_type: type, *args: Any, **kwargs: Any) -> "LoggerBuilder":
        """Add a destination created as ``flush_type(*args, **kwargs)``."""
        if (
            self._config is not None
            and isinstance(flush_type, type)
            and issubclass(flush_type, (StdoutFlush, FileFlush, RollingFileFlush))
        ):
            kwargs.setdefault("config", self._config)
        self._flushes.append(create_flush(flush_type, *args, **kwargs))
        return self

    def build(self) -> AsyncLogger:
        """Create the logger; without destinations it writes to standard output.

        Remote backup of ERROR and FATAL records is enabled when a thread pool
        was given.
        """
        if not self._name:
            raise ValueError("logger name cannot be empty")
        config = self._config if self._config is not None else get_config()
        if not self._flushes:
            self._flushes.append(StdoutFlush(config))
        backup = send_backup if self._thread_pool is not None else None
        return AsyncLogger(
            self._name,
            list(self._flushes),
            self._async_type,
            config,
            self._thread_pool,
            backup,
        )