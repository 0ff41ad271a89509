from __future__ import annotations

import gc
import threading

import pytest

from contract.models import SearchResult
from search.collector import ResultCollector
from search.pool import PoolClosedError, WorkerPool


def _result(n: int) -> SearchResult:
    return SearchResult(file_path=f"file-{n}.js", line_number=n, text=f"line {n}")


def test_pool_runs_every_submitted_job() -> None:
    seen: list[int] = []
    lock = threading.Lock()

    def record(n: int) -> None:
        with lock:
            seen.append(n)

    with WorkerPool(4) as pool:
        for n in range(200):
            pool.submit(lambda n=n: record(n))

    assert sorted(seen) == list(range(200))


def test_pool_uses_multiple_workers() -> None:
    names: set[str] = set()
    barrier = threading.Barrier(3, timeout=5)

    def wait_together() -> None:
        names.add(threading.current_thread().name)
        barrier.wait()

    with WorkerPool(3) as pool:
        for _ in range(3):
            pool.submit(wait_together)

    assert len(names) == 3


def test_pool_survives_failing_jobs() -> None:
    collector = ResultCollector()

    def boom() -> None:
        msg = "job exploded"
        raise RuntimeError(msg)

    pool = WorkerPool(1)
    pool.submit(boom)
    pool.submit(lambda: collector.extend([_result(1)]))
    pool.submit(boom)
    pool.submit(lambda: collector.extend([_result(2)]))
    pool.shutdown_and_wait()

    assert collector.drain() == [_result(1), _result(2)]
    assert pool.failed_jobs == 2


def test_shutdown_and_wait_is_idempotent() -> None:
    pool = WorkerPool(2)
    pool.submit(lambda: None)

    pool.shutdown_and_wait()
    pool.shutdown_and_wait()


def test_submit_after_shutdown_raises() -> None:
    pool = WorkerPool(1)
    pool.shutdown_and_wait()

    with pytest.raises(PoolClosedError):
        pool.submit(lambda: None)


def test_context_exit_drains_queue_on_error() -> None:
    done = threading.Event()
    started = threading.Event()

    def slow() -> None:
        started.wait(timeout=5)
        done.set()

    with pytest.raises(KeyError), WorkerPool(1) as pool:
        pool.submit(slow)
        started.set()
        raise KeyError("caller failed")

    assert done.is_set()


def test_dropped_pool_stops_its_workers() -> None:
    pool = WorkerPool(4)
    pool.submit(lambda: None)
    workers = list(pool._workers)

    del pool
    gc.collect()

    for worker in workers:
        worker.join(timeout=5)
    assert not any(worker.is_alive() for worker in workers)


@pytest.mark.parametrize("count", [0, -1])
def test_pool_rejects_non_positive_worker_count(count: int) -> None:
    with pytest.raises(ValueError, match="worker_count must be positive"):
        WorkerPool(count)


def test_collector_drain_returns_insertion_order_and_resets() -> None:
    collector = ResultCollector()
    collector.extend([_result(1), _result(2)])
    collector.extend([])
    collector.extend([_result(3)])

    assert len(collector) == 3
    assert collector.drain() == [_result(1), _result(2), _result(3)]
    assert collector.drain() == []


def test_collector_concurrent_extend() -> None:
    collector = ResultCollector()

    with WorkerPool(8) as pool:
        for n in range(500):
            pool.submit(lambda n=n: collector.extend([_result(n), _result(n + 1000)]))

    results = collector.drain()
    assert len(results) == 1000
    assert set(results) == {_result(n) for n in range(500)} | {
        _result(n + 1000) for n in range(500)
    }
