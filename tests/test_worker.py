import threading

import pytest

from stashlog.config import LogConfig
from stashlog.worker import AsyncType, AsyncWorker


def _collector():
    chunks = []
    lock = threading.Lock()

    def callback(buffer):
        with lock:
            chunks.append(buffer.peek())

    return chunks, callback


@pytest.mark.parametrize("async_type", list(AsyncType))
def test_all_pushed_data_reaches_callback_in_order(async_type):
    chunks, callback = _collector()
    worker = AsyncWorker(callback, async_type, LogConfig(buffer_size=16))
    pieces = [f"line-{i}\n".encode() for i in range(200)]
    for piece in pieces:
        worker.push(piece)
    worker.stop()
    assert b"".join(chunks) == b"".join(pieces)
    with pytest.raises(RuntimeError):
        worker.push(b"after stop")


def test_data_larger_than_buffer_is_accepted_in_blocking_mode():
    chunks, callback = _collector()
    worker = AsyncWorker(callback, AsyncType.BLOCKING_BOUNDED, LogConfig(buffer_size=4))
    big = bytes(range(100))
    worker.push(big)
    worker.stop()
    assert b"".join(chunks) == big


def test_push_after_stop_raises():
    _, callback = _collector()
    worker = AsyncWorker(callback, AsyncType.NONBLOCKING_GROW, LogConfig(buffer_size=8))
    worker.stop()
    with pytest.raises(RuntimeError):
        worker.push(b"late")


def test_stop_twice_keeps_data():
    chunks, callback = _collector()
    worker = AsyncWorker(callback, AsyncType.BLOCKING_BOUNDED, LogConfig(buffer_size=8))
    worker.push(b"abc")
    worker.stop()
    worker.stop()
    assert b"".join(chunks) == b"abc"
    with pytest.raises(RuntimeError):
        worker.push(b"def")
    assert b"".join(chunks) == b"abc"


def test_callback_error_does_not_hang_stop():
    calls = []

    def callback(buffer):
        calls.append(buffer.readable_size())
        raise OSError("disk gone")

    worker = AsyncWorker(callback, AsyncType.BLOCKING_BOUNDED, LogConfig(buffer_size=8))
    worker.push(b"payload")
    worker.stop()
    assert sum(calls) == len(b"payload")
    with pytest.raises(RuntimeError):
        worker.push(b"more")


def test_many_producers():
    chunks, callback = _collector()
    worker = AsyncWorker(callback, AsyncType.BLOCKING_BOUNDED, LogConfig(buffer_size=32))

    def produce(tag):
        for _ in range(50):
            worker.push(tag)

    threads = [threading.Thread(target=produce, args=(bytes([65 + i]),)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    worker.stop()
    joined = b"".join(chunks)
    assert len(joined) == 200
    assert all(joined.count(bytes([65 + i])) == 50 for i in range(4))
    with pytest.raises(RuntimeError):
        worker.push(b"Z")