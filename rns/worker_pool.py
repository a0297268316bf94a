"""A fixed-size pool of worker threads that run submitted jobs."""

from __future__ import annotations

import logging
import queue
import threading
from typing import Callable, Optional

log = logging.getLogger(__name__)

Job = Callable[[], object]

MIN_WORKERS = 1
MAX_WORKERS = 255


class _Worker:
    """Owns one thread that pulls jobs from the shared queue."""

    def __init__(self, worker_id: int, jobs: "queue.Queue[Optional[Job]]") -> None:
        self.id = worker_id
        self._jobs = jobs
        self.error: Optional[BaseException] = None
        self._thread = threading.Thread(target=self._run, name=str(self), daemon=True)
        self._thread.start()

    def __str__(self) -> str:
        return f"worker {self.id}"

    def _run(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                log.debug("%s received shutdown signal", self)
                return
            log.debug("%s received a job", self)
            try:
                job()
            except BaseException as exc:  # a failing job ends its worker
                log.exception("%s failed while running a job", self)
                self.error = exc
                return

    def join(self) -> None:
        self._thread.join()


class Pool:
    """Runs jobs concurrently on a fixed number of worker threads.

    Workers are started by the constructor and stopped by ``shutdown``,
    which waits for every job submitted before it to finish.
    """

    def __init__(self, n_workers: int) -> None:
        if not MIN_WORKERS <= n_workers <= MAX_WORKERS:
            raise ValueError(
                f"n_workers must be in range [{MIN_WORKERS}, {MAX_WORKERS + 1})"
            )
        self._jobs: "queue.Queue[Optional[Job]]" = queue.Queue()
        self._workers = [_Worker(i, self._jobs) for i in range(n_workers)]
        self._closed = False
        self._lock = threading.Lock()

    def execute(self, job: Job) -> None:
        """Queue a callable taking no arguments for execution by a worker."""
        with self._lock:
            if self._closed:
                raise RuntimeError("pool has been shut down")
            self._jobs.put(job)

    def shutdown(self) -> None:
        """Stop accepting jobs and wait for the workers to finish.

        Raises RuntimeError if any worker stopped because a job raised.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            for _ in self._workers:
                self._jobs.put(None)
        for worker in self._workers:
            worker.join()
        for worker in self._workers:
            if worker.error is not None:
                raise RuntimeError(f"{worker} failed") from worker.error

    def __enter__(self) -> Pool:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()