"""A fixed-size pool of worker threads returning futures."""

from __future__ import annotations

import threading
from collections import deque
from concurrent.futures import Future
from typing import Any, Callable


class ThreadPool:
    """Runs submitted callables on a fixed number of threads."""

    def __init__(self, threads: int) -> None:
        if threads <= 0:
            raise ValueError("thread count must be greater than zero")
        self._tasks: deque[Callable[[], None]] = deque()
        self._condition = threading.Condition()
        self._stopped = False
        self._workers = [
            threading.Thread(target=self._run, daemon=True) for _ in range(threads)
        ]
        for worker in self._workers:
            worker.start()

    def _run(self) -> None:
        while True:
            with self._condition:
                self._condition.wait_for(lambda: self._stopped or self._tasks)
                if self._stopped and not self._tasks:
                    return
                task = self._tasks.popleft()
            task()

    def submit(self, task: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Queue ``task(*args, **kwargs)`` and return a future for its result."""
        future: Future = Future()

        def job() -> None:
            if not future.set_running_or_notify_cancel():
                return
            try:
                result = task(*args, **kwargs)
            except BaseException as exc:
                future.set_exception(exc)
            else:
                future.set_result(result)

        with self._condition:
            if self._stopped:
                raise RuntimeError("submit on stopped ThreadPool")
            self._tasks.append(job)
            self._condition.notify()
        return future

    def shutdown(self) -> None:
        """Stop accepting tasks, finish queued ones and join the workers."""
        with self._condition:
            self._stopped = True
            self._condition.notify_all()
        current = threading.current_thread()
        for worker in self._workers:
            if worker is not current:
                worker.join()

    def __enter__(self) -> "ThreadPool":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()