"""Growable byte buffer used to hand log data between threads."""

from __future__ import annotations

from .config import LogConfig, get_config


class Buffer:
    """A byte buffer with separate read and write positions.

    Capacity starts at ``config.buffer_size`` and grows by doubling until it
    reaches ``config.threshold``, then by ``config.linear_growth`` steps.
    """

    def __init__(self, config: LogConfig | None = None) -> None:
        self._config = config if config is not None else get_config()
        self._capacity = self._config.buffer_size
        self._data = bytearray(self._capacity)
        self._write_pos = 0
        self._read_pos = 0

    def push(self, data: bytes) -> None:
        """Append ``data``, growing the buffer if needed."""
        size = len(data)
        self._ensure(size)
        end = self._write_pos + size
        self._data[self._write_pos:end] = data
        self._write_pos = end

    def is_empty(self) -> bool:
        return self._write_pos == self._read_pos

    def swap(self, other: "Buffer") -> None:
        """Exchange contents and positions with ``other``."""
        self._data, other._data = other._data, self._data
        self._capacity, other._capacity = other._capacity, self._capacity
        self._write_pos, other._write_pos = other._write_pos, self._write_pos
        self._read_pos, other._read_pos = other._read_pos, self._read_pos

    def writable_size(self) -> int:
        return self._capacity - self._write_pos

    def readable_size(self) -> int:
        return self._write_pos - self._read_pos

    def reset(self) -> None:
        """Discard contents, keeping the current capacity."""
        self._write_pos = 0
        self._read_pos = 0

    def move_write_pos(self, length: int) -> None:
        if length > self.writable_size():
            raise ValueError("cannot move write position past capacity")
        self._write_pos += length

    def move_read_pos(self, length: int) -> None:
        if length > self.readable_size():
            raise ValueError("cannot move read position past written data")
        self._read_pos += length

    def peek(self) -> bytes:
        """Return all readable bytes without consuming them."""
        return bytes(self._data[self._read_pos:self._write_pos])

    def read(self, length: int) -> bytes:
        """Return and consume ``length`` readable bytes."""
        if length > self.readable_size():
            raise ValueError("not enough readable data")
        chunk = bytes(self._data[self._read_pos:self._read_pos + length])
        self._read_pos += length
        return chunk

    def _ensure(self, size: int) -> None:
        need = self._write_pos + size
        cap = self._capacity or self._config.buffer_size
        if cap <= 0:
            cap = need
        while cap < need:
            if cap < self._config.threshold:
                cap *= 2
            elif self._config.linear_growth > 0:
                cap += self._config.linear_growth
            else:
                cap = need
        if cap > self._capacity:
            self._data.extend(bytes(cap - len(self._data)))
            self._capacity = cap