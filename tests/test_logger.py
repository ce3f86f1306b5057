import inspect
import threading

import pytest

from stashlog.config import LogConfig
from stashlog.flush import FileFlush, LogFlush
from stashlog.levels import LogLevel
from stashlog.logger import AsyncLogger, LoggerBuilder
from stashlog.threadpool import ThreadPool
from stashlog.worker import AsyncType


class Collector(LogFlush):
    def __init__(self):
        self.chunks = []

    def flush(self, data):
        self.chunks.append(data)

    def text(self):
        return b"".join(self.chunks).decode("utf-8")


class Recorder:
    def __init__(self, fail=False):
        self.calls = []
        self.threads = []
        self.fail = fail

    def __call__(self, text, config):
        self.calls.append(text)
        self.threads.append(threading.get_ident())
        if self.fail:
            raise ConnectionError("unreachable")


def _logger(collector, backup=None, thread_pool=None, async_type=AsyncType.BLOCKING_BOUNDED):
    return AsyncLogger(
        "unit", [collector], async_type, LogConfig(buffer_size=32), thread_pool, backup
    )


def test_info_record_content_and_caller_location():
    collector = Collector()
    logger = _logger(collector)
    line = inspect.currentframe().f_lineno + 1
    logger.info("value-%d", 7)
    logger.close()
    text = collector.text()
    assert "[INFO][unit]" in text
    assert f"test_logger.py:{line}]\tvalue-7\n" in text


@pytest.mark.parametrize(
    "method, level",
    [("debug", "DEBUG"), ("info", "INFO"), ("warn", "WARN"), ("error", "ERROR"), ("fatal", "FATAL")],
)
def test_level_methods(method, level):
    collector = Collector()
    logger = _logger(collector, backup=Recorder())
    getattr(logger, method)("msg %s", "x")
    logger.close()
    assert f"[{level}][unit]" in collector.text()
    assert collector.text().endswith("\tmsg x\n")


def test_log_with_level_argument():
    collector = Collector()
    logger = _logger(collector)
    logger.log(LogLevel.WARN, "plain")
    logger.close()
    assert "[WARN][unit]" in collector.text()


@pytest.mark.parametrize("async_type", list(AsyncType))
def test_records_keep_order(async_type):
    collector = Collector()
    logger = _logger(collector, async_type=async_type)
    for i in range(100):
        logger.debug("entry-%d", i)
    logger.close()
    payloads = [line.split("\t", 1)[1] for line in collector.text().splitlines()]
    assert payloads == [f"entry-{i}" for i in range(100)]


def test_only_error_and_fatal_are_backed_up():
    collector = Collector()
    recorder = Recorder()
    logger = _logger(collector, backup=recorder)
    logger.info("a")
    logger.warn("b")
    logger.error("c")
    logger.fatal("d")
    logger.close()
    assert len(recorder.calls) == 2
    assert "[ERROR]" in recorder.calls[0] and recorder.calls[0].endswith("\tc\n")
    assert "[FATAL]" in recorder.calls[1]


def test_backup_runs_on_thread_pool():
    collector = Collector()
    recorder = Recorder()
    with ThreadPool(1) as pool:
        logger = _logger(collector, backup=recorder, thread_pool=pool)
        logger.error("boom")
        logger.close()
    assert len(recorder.calls) == 1
    assert recorder.threads[0] != threading.get_ident()


def test_failed_backup_still_logs_locally():
    collector = Collector()
    logger = _logger(collector, backup=Recorder(fail=True))
    logger.error("still here")
    logger.close()
    assert collector.text().endswith("\tstill here\n")


def test_logging_after_close_raises():
    logger = _logger(Collector())
    logger.close()
    with pytest.raises(RuntimeError):
        logger.info("late")


def test_builder_requires_name():
    with pytest.raises(ValueError):
        LoggerBuilder(LogConfig()).build()


def test_builder_defaults_to_stdout(capsys):
    logger = LoggerBuilder(LogConfig()).with_name("console").build()
    logger.info("to console")
    logger.close()
    out = capsys.readouterr().out
    assert "[INFO][console]" in out
    assert out.endswith("\tto console\n")


def test_builder_with_file_flush(tmp_path):
    target = tmp_path / "logs" / "file.log"
    builder = LoggerBuilder(LogConfig(flush_log=1))
    returned = builder.with_name("filer").with_async_type(AsyncType.NONBLOCKING_GROW)
    assert returned is builder
    builder.add_flush(FileFlush, target)
    logger = builder.build()
    assert logger.name == "filer"
    logger.warn("written %d", 3)
    logger.close()
    content = target.read_text(encoding="utf-8")
    assert "[WARN][filer]" in content
    assert content.endswith("\twritten 3\n")


def test_builder_with_custom_flush():
    collector_holder = []

    class Holder(Collector):
        def __init__(self):
            super().__init__()
            collector_holder.append(self)

    logger = LoggerBuilder(LogConfig()).with_name("custom").add_flush(Holder).build()
    assert logger.name == "custom"
    logger.info("hi")
    logger.close()
    assert len(collector_holder) == 1
    assert "[INFO][custom]" in collector_holder[0].text()
    assert collector_holder[0].text().endswith("\thi\n")