"""A fixed-size pool of worker threads draining one shared job queue."""

from __future__ import annotations

import logging
import queue
import threading
import weakref
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

logger = logging.getLogger(__name__)

# Sent once per worker to make it exit after the queue drains.
_STOP = object()


class PoolClosedError(RuntimeError):
    """Raised when a job is submitted after shutdown."""


class _FailureCount:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def increment(self) -> None:
        with self._lock:
            self._value += 1

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


def _work(jobs: queue.Queue[object], failures: _FailureCount) -> None:
    # Holds no reference to the pool, so an abandoned pool can be collected.
    while True:
        job = jobs.get()
        if job is _STOP:
            return
        try:
            job()  # type: ignore[operator]
        except Exception:
            logger.debug("Search job failed", exc_info=True)
            failures.increment()
        finally:
            del job


def _stop_workers(jobs: queue.Queue[object], worker_count: int) -> None:
    for _ in range(worker_count):
        jobs.put(_STOP)


class WorkerPool:
    """Run submitted jobs on ``worker_count`` long-lived threads.

    Use as a context manager so that :meth:`shutdown_and_wait` runs on every
    exit path. A pool that is dropped without being shut down still stops
    its workers once it is garbage collected. A job that raises is logged
    and dropped; the worker that ran it keeps serving the queue.
    """

    def __init__(self, worker_count: int) -> None:
        if worker_count < 1:
            msg = f"worker_count must be positive, got {worker_count}"
            raise ValueError(msg)
        self._jobs: queue.Queue[object] = queue.Queue()
        self._closed = False
        self._close_lock = threading.Lock()
        self._failures = _FailureCount()
        self._workers = [
            threading.Thread(
                target=_work,
                args=(self._jobs, self._failures),
                name=f"grepdef-worker-{worker_id}",
                daemon=True,
            )
            for worker_id in range(worker_count)
        ]
        for worker in self._workers:
            worker.start()
        self._stop_workers = weakref.finalize(
            self, _stop_workers, self._jobs, worker_count
        )

    @property
    def failed_jobs(self) -> int:
        """Number of jobs that raised instead of completing."""
        return self._failures.value

    def submit(self, job: Callable[[], None]) -> None:
        """Queue one job for the next idle worker."""
        with self._close_lock:
            if self._closed:
                msg = "Cannot submit a job to a pool that has been shut down"
                raise PoolClosedError(msg)
            self._jobs.put(job)

    def shutdown_and_wait(self) -> None:
        """Stop accepting jobs, let queued jobs finish, then join the workers.

        Calling this more than once is harmless.
        """
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
            self._stop_workers()

        for worker in self._workers:
            worker.join()

    def __enter__(self) -> WorkerPool:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.shutdown_and_wait()


__all__ = ["PoolClosedError", "WorkerPool"]
