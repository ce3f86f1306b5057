"""Destinations that formatted log data is written to."""

from __future__ import annotations

import io
import os
import sys
import time
from abc import ABC, abstractmethod
from typing import IO, Any

from .config import LogConfig, create_directory, directory_of, get_config


class LogFlush(ABC):
    """A place that log bytes are written to."""

    @abstractmethod
    def flush(self, data: bytes) -> None:
        """Write ``data`` to the destination."""


def _sync(file: IO[bytes], mode: int) -> None:
    if mode == 1:
        file.flush()
    elif mode == 2:
        file.flush()
        os.fsync(file.fileno())


class StdoutFlush(LogFlush):
    """Writes log data to standard output or another given stream."""

    def __init__(self, config: LogConfig | None = None, stream: IO[Any] | None = None) -> None:
        self._config = config if config is not None else get_config()
        self._stream = stream

    def flush(self, data: bytes) -> None:
        if not data:
            raise ValueError("nothing to flush")
        stream = self._stream if self._stream is not None else sys.stdout
        if isinstance(stream, io.TextIOBase):
            stream.write(data.decode("utf-8", errors="replace"))
        else:
            stream.write(data)
        stream.flush()
        if self._config.flush_log == 2:
            try:
                os.fsync(stream.fileno())
            except (OSError, ValueError) as exc:
                print(f"StdoutFlush: cannot sync output stream: {exc}", file=sys.stderr)


class FileFlush(LogFlush):
    """Appends log data to a single file."""

    def __init__(self, filename: str | os.PathLike[str], config: LogConfig | None = None) -> None:
        self._config = config if config is not None else get_config()
        self._filename = os.fspath(filename)
        try:
            create_directory(self._filename)
        except ValueError as exc:
            print(f"FileFlush: empty path: {exc}", file=sys.stderr)
        self._file = open(self._filename, "ab")

    def flush(self, data: bytes) -> None:
        self._file.write(data)
        _sync(self._file, self._config.flush_log)

    def close(self) -> None:
        if not self._file.closed:
            self._file.close()


class RollingFileFlush(LogFlush):
    """Writes log data to a series of files, starting a new one past ``max_size`` bytes.

    Each file is named ``<basename><year><month><day><hour+1><min+1><sec+1>-<n>.log``.
    """

    def __init__(
        self,
        basename: str | os.PathLike[str],
        max_size: int,
        config: LogConfig | None = None,
    ) -> None:
        self._config = config if config is not None else get_config()
        self._basename = os.fspath(basename)
        self._max_size = max_size
        self._current_size = 0
        self._count = 0
        self._filename = self._basename
        self._file: IO[bytes] | None = None
        directory = directory_of(self._basename)
        if directory:
            create_directory(directory)

    def flush(self, data: bytes) -> None:
        self._open_if_needed()
        assert self._file is not None
        self._file.write(data)
        self._current_size += len(data)
        _sync(self._file, self._config.flush_log)
        if self._current_size >= self._max_size:
            self._open_if_needed()

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def _open_if_needed(self) -> None:
        if self._file is not None and self._current_size < self._max_size:
            return
        if self._file is not None:
            self._file.close()
        self._filename = self._next_filename()
        self._file = open(self._filename, "ab")
        self._current_size = (
            os.path.getsize(self._filename) if os.path.exists(self._filename) else 0
        )

    def _next_filename(self) -> str:
        t = time.localtime()
        name = (
            f"{self._basename}{t.tm_year}{t.tm_mon}{t.tm_mday}"
            f"{t.tm_hour + 1}{t.tm_min + 1}{t.tm_sec + 1}-{self._count}.log"
        )
        self._count += 1
        return name


def create_flush(flush_type: type, *args: Any, **kwargs: Any) -> LogFlush:
    """Instantiate a LogFlush subclass with the given arguments."""
    if not (isinstance(flush_type, type) and issubclass(flush_type, LogFlush)):
        raise TypeError(f"{flush_type!r} is not a LogFlush type")
    return flush_type(*args, **kwargs)