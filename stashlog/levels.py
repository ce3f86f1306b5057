"""Log severity levels."""

from enum import IntEnum


class LogLevel(IntEnum):
    """Severity of a log record, in increasing order."""

    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4

    def __str__(self) -> str:
        return self.name