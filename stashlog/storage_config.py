"""Settings of the storage server, read from a JSON file."""

from __future__ import annotations

import os
import threading
from dataclasses import dataclass

from .storage_util import FileUtil, unserialize

CONFIG_FILE = "Storage.conf"


@dataclass(frozen=True)
class StorageConfig:
    """Server address, URL prefix and storage locations."""

    server_port: int = 0
    server_ip: str = ""
    download_prefix: str = ""
    storage_info: str = ""
    deep_storage_dir: str = ""
    low_storage_dir: str = ""
    bundle_format: int = 0

    @classmethod
    def load(cls, path: str | os.PathLike[str] = CONFIG_FILE) -> "StorageConfig":
        """Read the JSON configuration file; missing keys become 0 or ""."""
        root = unserialize(FileUtil(path).read_all().decode("utf-8"))
        if not isinstance(root, dict):
            raise ValueError("storage configuration must be a JSON object")
        return cls(
            server_port=int(root.get("server_port", 0)),
            server_ip=str(root.get("server_ip", "")),
            download_prefix=str(root.get("download_prefix", "")),
            storage_info=str(root.get("storage_info", "")),
            deep_storage_dir=str(root.get("deep_storage_dir", "")),
            low_storage_dir=str(root.get("low_storage_dir", "")),
            bundle_format=int(root.get("bundle_format", 0)),
        )

    @classmethod
    def instance(cls) -> "StorageConfig":
        """Return the shared configuration, loading it on first use."""
        global _instance
        with _lock:
            if _instance is None:
                _instance = cls.load(CONFIG_FILE)
            return _instance


_lock = threading.Lock()
_instance: StorageConfig | None = None