from __future__ import annotations
import queue
import threading
from typing import Callable, List, Optional

from .utils import debug, error

_STOP = object()


class WorkerPool:
    """Fixed number of threads pulling items from one bounded queue.

    Lifecycle is start -> submit* -> close -> join. `close` queues one
    sentinel per worker behind the real items, so everything submitted
    before it is processed before the workers exit.
    """

    def __init__(self, handler: Callable, workers: int = 10, queue_size: int = 10):
        if workers < 1:
            raise ValueError("worker pool needs at least one worker")
        if queue_size < 1:
            raise ValueError("queue size must be at least 1")
        self.handler = handler
        self.workers = workers
        self._queue: queue.Queue = queue.Queue(maxsize=queue_size)
        self._threads: List[threading.Thread] = []
        self._cancel = threading.Event()
        self._closed = False
        self._exc: Optional[BaseException] = None
        self._exc_lock = threading.Lock()

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def start(self):
        if self._threads:
            raise RuntimeError("pool already started")
        for i in range(self.workers):
            t = threading.Thread(target=self._work, name=f"sumtree-worker-{i}", daemon=True)
            t.start()
            self._threads.append(t)
        debug(f"started {self.workers} workers")
        return self

    def _work(self):
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self.handler(item)
            except Exception as e:
                error(f"worker failed on {item}: {e!r}")
                with self._exc_lock:
                    if self._exc is None:
                        self._exc = e
            finally:
                self._queue.task_done()

    def submit(self, item) -> bool:
        """Queue an item, blocking while the queue is full.

        Returns False, without queueing, once the pool is cancelled.
        """
        if self._closed:
            raise RuntimeError("submit on a closed pool")
        while not self._cancel.is_set():
            try:
                self._queue.put(item, timeout=0.1)
                return True
            except queue.Full:
                continue
        return False

    def close(self):
        if self._closed:
            return
        self._closed = True
        for _ in self._threads:
            self._queue.put(_STOP)

    def cancel(self):
        self._cancel.set()

    def join(self):
        for t in self._threads:
            t.join()
        debug("workers drained")
        if self._exc is not None:
            raise self._exc

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None:
            self.cancel()
        self.close()
        self.join()
        return False
