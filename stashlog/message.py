"""A single log record and its text form."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field

from .levels import LogLevel


@dataclass
class LogMessage:
    """A log record: level, origin, logger name, payload, time and thread."""

    level: LogLevel
    file: str
    line: int
    name: str
    payload: str
    ctime: int = field(default_factory=lambda: int(time.time()))
    tid: int = field(default_factory=threading.get_ident)

    def format(self) -> str:
        """Render as ``[HH:MM:SS][tid][LEVEL][name][file:line]\\tpayload\\n``."""
        clock = time.strftime("%H:%M:%S", time.localtime(self.ctime))
        return (
            f"[{clock}][{self.tid}][{self.level}][{self.name}]"
            f"[{self.file}:{self.line}]\t{self.payload}\n"
        )