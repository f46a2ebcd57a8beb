"""In-process background job queue.

Request handlers call :meth:`Queue.add` and return immediately; a worker
thread started with the application drains the queue and owns retries.
"""

import logging
import queue as _queue
from threading import Event, Thread
from typing import Any, Protocol

from scheduling.core import config


logger = logging.getLogger(__name__)


class Job(Protocol):
    key: str

    def handle(self, data: dict[str, Any]) -> None:
        ...


class Queue:
    def __init__(self, max_attempts: int | None = None):
        self.max_attempts = max_attempts or config.QUEUE_MAX_ATTEMPTS
        self._jobs: dict[str, Job] = {}
        self._pending: _queue.Queue[tuple[str, dict[str, Any]]] = _queue.Queue()
        self._stopping = Event()
        self._worker: Thread | None = None

    def register(self, job: Job) -> None:
        self._jobs[job.key] = job

    def add(self, key: str, data: dict[str, Any]) -> None:
        if key not in self._jobs:
            raise KeyError(f'No job registered for key {key!r}')
        self._pending.put((key, data))
        logger.info('Job %s enqueued', key)

    def pending(self) -> int:
        return self._pending.qsize()

    def process_next(self, timeout: float | None = None) -> bool:
        try:
            key, data = self._pending.get(timeout=timeout) if timeout else self._pending.get_nowait()
        except _queue.Empty:
            return False

        job = self._jobs[key]
        try:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    job.handle(data)
                except Exception:
                    if attempt == self.max_attempts:
                        logger.exception('Job %s failed after %d attempts', key, attempt)
                    else:
                        logger.warning('Job %s failed on attempt %d, retrying', key, attempt)
                    continue
                logger.info('Job %s completed', key)
                break
        finally:
            self._pending.task_done()
        return True

    def start(self) -> None:
        if self._worker is not None and self._worker.is_alive():
            return
        self._stopping.clear()
        self._worker = Thread(target=self._run, name='job-queue-worker', daemon=True)
        self._worker.start()

    def stop(self, timeout: float = 5.0) -> None:
        self._stopping.set()
        if self._worker is not None:
            self._worker.join(timeout)
            self._worker = None

    def _run(self) -> None:
        while not self._stopping.is_set():
            self.process_next(timeout=0.5)
