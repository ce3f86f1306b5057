"""Logging-system configuration and small file/JSON helpers."""

from __future__ import annotations

import json
import os
import threading
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

DEFAULT_CONFIG_FILE = "./config.conf"


@dataclass
class LogConfig:
    """Settings for buffers, flushing, remote backup and the thread pool."""

    buffer_size: int = 4096
    threshold: int = 1024 * 1024
    linear_growth: int = 1024 * 1024
    flush_log: int = 0
    backup_addr: str = "127.0.0.1"
    backup_port: int = 8080
    thread_count: int = 1

    @classmethod
    def load(cls, path: str | os.PathLike[str] = DEFAULT_CONFIG_FILE) -> "LogConfig":
        """Read a JSON configuration file."""
        return cls.from_json(read_file(path).decode("utf-8"))

    @classmethod
    def from_json(cls, text: str) -> "LogConfig":
        """Build a configuration from JSON text; missing keys keep defaults."""
        root = json_loads(text)
        if not isinstance(root, dict):
            raise ValueError("configuration must be a JSON object")
        values: dict[str, Any] = {}
        for field in fields(cls):
            if field.name not in root:
                continue
            raw = root[field.name]
            values[field.name] = str(raw) if field.name == "backup_addr" else int(raw)
        return cls(**values)

    def to_json(self) -> str:
        return json_dumps(asdict(self))


def file_exists(filename: str | os.PathLike[str]) -> bool:
    """Return True if something exists at ``filename``."""
    return os.path.exists(filename)


def directory_of(filename: str) -> str:
    """Return the directory part of ``filename`` including the trailing separator."""
    pos = max(filename.rfind("/"), filename.rfind("\\"))
    return filename[: pos + 1] if pos >= 0 else ""


def create_directory(pathname: str) -> None:
    """Create the directory of ``pathname`` (or ``pathname`` itself if it names a directory)."""
    if not pathname:
        raise ValueError("path is empty")
    if os.path.isdir(pathname) or pathname.endswith(("/", "\\")):
        directory = pathname
    else:
        directory = os.path.dirname(pathname)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)


def file_size(filename: str | os.PathLike[str]) -> int:
    """Return the size in bytes of ``filename``."""
    return os.stat(filename).st_size


def read_file(filename: str | os.PathLike[str]) -> bytes:
    """Return the whole content of ``filename``."""
    return Path(filename).read_bytes()


def json_dumps(value: Any) -> str:
    """Serialise ``value`` as tab-indented JSON."""
    return json.dumps(value, indent="\t", ensure_ascii=False)


def json_loads(text: str) -> Any:
    """Parse JSON text, raising ValueError on malformed input."""
    return json.loads(text)


_lock = threading.Lock()
_config: LogConfig | None = None


def get_config() -> LogConfig:
    """Return the process-wide configuration, loading it on first use."""
    global _config
    with _lock:
        if _config is None:
            if file_exists(DEFAULT_CONFIG_FILE):
                _config = LogConfig.load(DEFAULT_CONFIG_FILE)
            else:
                _config = LogConfig()
        return _config


def set_config(config: LogConfig) -> None:
    """Replace the process-wide configuration."""
    global _config
    with _lock:
        _config = config