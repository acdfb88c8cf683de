"""Unit tests for executor adapters."""

import threading

import pytest

from dailymirror.adapters.executor import SynchronousExecutor, ThreadPoolExecutorAdapter
from dailymirror.core.ports import ExecutorPort


@pytest.mark.core
@pytest.mark.tier(0)
class TestSynchronousExecutor:
    """Tests for inline execution."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(SynchronousExecutor(), ExecutorPort)

    def test_runs_in_calling_thread(self) -> None:
        with SynchronousExecutor() as executor:
            future = executor.submit(threading.current_thread)

        assert future.result() is threading.current_thread()

    def test_exception_is_captured_in_future(self) -> None:
        def boom() -> None:
            raise RuntimeError("boom")

        future = SynchronousExecutor().submit(boom)

        with pytest.raises(RuntimeError, match="boom"):
            future.result()


@pytest.mark.core
@pytest.mark.tier(1)
class TestThreadPoolExecutorAdapter:
    """Tests for the thread pool adapter."""

    def test_satisfies_protocol(self) -> None:
        with ThreadPoolExecutorAdapter(max_workers=2) as executor:
            assert isinstance(executor, ExecutorPort)

    def test_runs_on_named_worker_threads(self) -> None:
        with ThreadPoolExecutorAdapter(max_workers=2) as executor:
            future = executor.submit(lambda: threading.current_thread().name)

        assert future.result().startswith("dailymirror-download")

    def test_exit_waits_for_submitted_work(self) -> None:
        results: list[int] = []
        with ThreadPoolExecutorAdapter(max_workers=2) as executor:
            for i in range(5):
                executor.submit(results.append, i)

        assert sorted(results) == [0, 1, 2, 3, 4]

    def test_rejects_empty_pool(self) -> None:
        with pytest.raises(ValueError, match="at least 1"):
            ThreadPoolExecutorAdapter(max_workers=0)
