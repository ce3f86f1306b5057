"""File, URL and JSON helpers for the storage server."""

from __future__ import annotations

import os
import re
from pathlib import PurePath
from typing import Any

from .config import json_dumps, json_loads

_ESCAPE = re.compile(rb"\+|%(.)(.)", re.DOTALL)


def from_hex(ch: str) -> int:
    """Return the value of one hex digit; letters past F continue counting."""
    if "A" <= ch <= "Z":
        return ord(ch) - ord("A") + 10
    if "a" <= ch <= "z":
        return ord(ch) - ord("a") + 10
    if "0" <= ch <= "9":
        return ord(ch) - ord("0")
    raise ValueError(f"invalid hex digit: {ch!r}")


def _unescape(match: re.Match) -> bytes:
    if match.group(0) == b"+":
        return b" "
    high = from_hex(chr(match.group(1)[0]))
    low = from_hex(chr(match.group(2)[0]))
    return bytes([(high * 16 + low) & 0xFF])


def url_decode(text: str) -> str:
    """Decode a percent-encoded string; ``+`` becomes a space."""
    return _ESCAPE.sub(_unescape, text.encode("utf-8")).decode("utf-8", errors="replace")


class FileUtil:
    """Operations on a single file or directory path."""

    def __init__(self, filename: str | os.PathLike[str]) -> None:
        self.filename = os.fspath(filename)

    def exists(self) -> bool:
        return os.path.exists(self.filename)

    def size(self) -> int:
        return os.stat(self.filename).st_size

    def last_access_time(self) -> int:
        return int(os.stat(self.filename).st_atime)

    def last_modified_time(self) -> int:
        return int(os.stat(self.filename).st_mtime)

    def name(self) -> str:
        """Return the part after the last ``/``."""
        return self.filename.rpartition("/")[2]

    def read_range(self, pos: int, length: int) -> bytes:
        """Read exactly ``length`` bytes starting at offset ``pos``."""
        if pos < 0 or length <= 0:
            raise ValueError(f"invalid range: pos={pos}, len={length}")
        with open(self.filename, "rb") as file:
            file.seek(pos)
            data = file.read(length)
        if len(data) != length:
            raise OSError(f"{self.filename}: could not read {length} bytes at {pos}")
        return data

    def read_all(self) -> bytes:
        return self.read_range(0, self.size())

    def create_directory(self) -> None:
        if not self.exists():
            os.makedirs(self.filename)

    def scan_directory(self) -> list[str]:
        """Return the paths of the non-directory entries, without a root prefix."""
        with os.scandir(self.filename) as entries:
            paths = [
                PurePath(self.filename, entry.name)
                for entry in entries
                if not entry.is_dir()
            ]
        return sorted(
            str(path.relative_to(path.anchor) if path.anchor else path) for path in paths
        )

    def write(self, data: bytes) -> None:
        """Replace the file's content with ``data``."""
        with open(self.filename, "wb") as file:
            file.write(data)


def serialize(value: Any) -> str:
    return json_dumps(value)


def unserialize(text: str) -> Any:
    return json_loads(text)