"""Small program that writes sample records through an asynchronous logger."""

from __future__ import annotations

from .config import get_config
from .flush import FileFlush, RollingFileFlush
from .logger import AsyncLogger, LoggerBuilder
from .manager import LoggerManager, get_logger
from .threadpool import ThreadPool

LOGGER_NAME = "asynclogger"


def run_demo(logger: AsyncLogger) -> int:
    """Log two rounds of records at every level; return how many were logged."""
    count = 0
    for _ in range(2):
        for log in (logger.info, logger.warn, logger.debug, logger.error, logger.fatal):
            count += 1
            log("test log-%d", count)
    return count


def main(argv: list[str] | None = None) -> int:
    config = get_config()
    with ThreadPool(config.thread_count) as pool:
        built = (
            LoggerBuilder(config, pool)
            .with_name(LOGGER_NAME)
            .add_flush(FileFlush, "./logfile/FileFlush.log")
            .add_flush(RollingFileFlush, "./logfile/RollFile_log", 1024 * 1024)
            .build()
        )
        LoggerManager.instance().add(built)
        logger = get_logger(LOGGER_NAME)
        assert logger is not None
        try:
            run_demo(logger)
        finally:
            logger.close()
            if logger is not built:
                built.close()
    return 0