"""Executor adapters implementing ExecutorPort."""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Callable


class SynchronousExecutor:
    """Runs submitted tasks immediately in the calling thread.

    Useful with a concurrency ceiling of 1 and in tests that need a
    deterministic task order. Accepts (and ignores) a pool size so it can be
    used directly as an ExecutorFactory.
    """

    def __init__(self, max_workers: int = 1) -> None:
        self.max_workers = max_workers

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Run fn now and return an already completed future."""
        future: Future[object] = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)
        return future

    def __enter__(self) -> SynchronousExecutor:
        """Enter context manager."""
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Exit context manager (nothing is pending)."""
        return None


class ThreadPoolExecutorAdapter:
    """Fixed-size thread pool; its size is the download concurrency ceiling.

    Leaving the context waits for every submitted task, so all scheduled
    downloads run to completion even when some of them fail.
    """

    def __init__(self, max_workers: int) -> None:
        """Create the pool.

        Args:
            max_workers: Number of worker threads (simultaneous downloads).
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="dailymirror-download"
        )

    def submit(
        self,
        fn: Callable[..., object],
        *args: object,
        **kwargs: object,
    ) -> Future[object]:
        """Queue fn on the pool."""
        return self._executor.submit(fn, *args, **kwargs)

    def __enter__(self) -> ThreadPoolExecutorAdapter:
        """Enter context manager."""
        self._executor.__enter__()
        return self

    def __exit__(
        self, exc_type: object, exc_val: object, exc_tb: object
    ) -> object | None:
        """Shut the pool down, waiting for queued tasks."""
        return self._executor.__exit__(exc_type, exc_val, exc_tb)  # type: ignore[arg-type]
