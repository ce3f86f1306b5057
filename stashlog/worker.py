"""Background thread that drains a double buffer into a callback."""

from __future__ import annotations

import threading
import traceback
from enum import Enum
from typing import Callable

from .buffer import Buffer
from .config import LogConfig


class AsyncType(Enum):
    """How producers behave when the pending buffer is full."""

    BLOCKING_BOUNDED = "blocking_bounded"
    NONBLOCKING_GROW = "nonblocking_grow"


class AsyncWorker:
    """Collects pushed bytes and hands them to ``callback`` on its own thread.

    Producers write into one buffer while the worker thread processes the
    other; the two are swapped whenever the worker is ready for more data.
    """

    def __init__(
        self,
        callback: Callable[[Buffer], None],
        async_type: AsyncType = AsyncType.BLOCKING_BOUNDED,
        config: LogConfig | None = None,
    ) -> None:
        self._callback = callback
        self._async_type = async_type
        self._lock = threading.Lock()
        self._producer_ready = threading.Condition(self._lock)
        self._consumer_ready = threading.Condition(self._lock)
        self._producer = Buffer(config)
        self._consumer = Buffer(config)
        self._stopped = False
        self._thread = threading.Thread(
            target=self._run, name="async-log-worker", daemon=True
        )
        self._thread.start()

    def push(self, data: bytes) -> None:
        """Queue ``data`` for the worker thread.

        Raises RuntimeError once the worker has been stopped.
        """
        data = bytes(data)
        size = len(data)
        with self._lock:
            if self._stopped:
                raise RuntimeError("async worker is stopped")
            if self._async_type is AsyncType.BLOCKING_BOUNDED:
                self._producer_ready.wait_for(
                    lambda: self._stopped
                    or self._producer.is_empty()
                    or self._producer.writable_size() >= size
                )
                if self._stopped:
                    raise RuntimeError("async worker is stopped")
            self._producer.push(data)
            self._consumer_ready.notify()

    def stop(self) -> None:
        """Process what is pending, then end the worker thread."""
        with self._lock:
            self._stopped = True
            self._consumer_ready.notify_all()
            self._producer_ready.notify_all()
        if self._thread is not threading.current_thread():
            self._thread.join()

    def _run(self) -> None:
        while True:
            with self._lock:
                self._consumer_ready.wait_for(
                    lambda: self._stopped or not self._producer.is_empty()
                )
                self._producer.swap(self._consumer)
                if self._async_type is AsyncType.BLOCKING_BOUNDED:
                    self._producer_ready.notify_all()
            try:
                self._callback(self._consumer)
            except Exception:
                traceback.print_exc()
            self._consumer.reset()
            with self._lock:
                if self._stopped and self._producer.is_empty():
                    return