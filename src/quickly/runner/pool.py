"""Bounded thread pool that runs one task per directory."""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass, field
from typing import Mapping, Protocol, Sequence

from .errors import TaskError
from .executor import Task, TaskResult

logger = logging.getLogger(__name__)


class _StopSentinel:
    """Marks the end of a queue."""


_STOP = _StopSentinel()


class ExecutorProtocol(Protocol):
    """Executor API used by the pool."""

    def execute(self, task: Task) -> TaskResult:
        ...

    def report(self, result: TaskResult) -> None:
        ...


@dataclass(slots=True)
class RunReport:
    """Every result of a run, in completion order."""

    results: list[TaskResult] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return all(result.ok for result in self.results)

    @property
    def failures(self) -> list[TaskResult]:
        return [result for result in self.results if not result.ok]

    @property
    def skipped(self) -> list[TaskResult]:
        return [result for result in self.results if result.skipped]

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def build_tasks(
    directories: Sequence[str],
    command: str,
    colors: Mapping[str, str],
    branch_filter: str | None = None,
) -> list[Task]:
    """Create one task per directory, in directory order."""

    return [
        Task(
            directory=directory,
            command=command,
            color=colors.get(directory, ""),
            branch_filter=branch_filter,
        )
        for directory in directories
    ]


class WorkerPool:
    """Run tasks on a fixed number of worker threads."""

    def __init__(self, executor: ExecutorProtocol, concurrency: int | None = None) -> None:
        if concurrency is None:
            concurrency = os.cpu_count() or 1
        if concurrency < 1:
            raise ValueError("concurrency must be >= 1")
        self._executor = executor
        self._concurrency = concurrency

    @property
    def concurrency(self) -> int:
        return self._concurrency

    def run(self, tasks: Sequence[Task]) -> RunReport:
        """Execute ``tasks`` and collect exactly one result per task.

        Failed results are reported through the executor as they arrive.
        """

        report = RunReport()
        if not tasks:
            return report

        task_queue: queue.Queue[Task | _StopSentinel] = queue.Queue(maxsize=len(tasks))
        result_queue: queue.Queue[TaskResult | _StopSentinel] = queue.Queue(maxsize=len(tasks))

        workers = [
            threading.Thread(
                target=self._worker_loop,
                args=(task_queue, result_queue, worker_id),
                name=f"quickly-worker-{worker_id}",
                daemon=True,
            )
            for worker_id in range(self._concurrency)
        ]
        for worker in workers:
            worker.start()

        closer = threading.Thread(
            target=self._close_results,
            args=(workers, result_queue),
            name="quickly-closer",
            daemon=True,
        )
        closer.start()

        feeder = threading.Thread(
            target=self._feed,
            args=(tasks, task_queue),
            name="quickly-feeder",
            daemon=True,
        )
        feeder.start()

        while True:
            item = result_queue.get()
            if isinstance(item, _StopSentinel):
                break
            report.results.append(item)
            if not item.ok:
                self._executor.report(item)

        feeder.join()
        closer.join()
        logger.debug(
            "Run finished: %d results, %d failed, %d skipped",
            len(report.results),
            len(report.failures),
            len(report.skipped),
        )
        return report

    def _feed(
        self,
        tasks: Sequence[Task],
        task_queue: queue.Queue[Task | _StopSentinel],
    ) -> None:
        for task in tasks:
            logger.debug("Dispatching %s", task.directory)
            task_queue.put(task)
        for _ in range(self._concurrency):
            task_queue.put(_STOP)

    def _worker_loop(
        self,
        task_queue: queue.Queue[Task | _StopSentinel],
        result_queue: queue.Queue[TaskResult | _StopSentinel],
        worker_id: int,
    ) -> None:
        logger.debug("Worker %s started", worker_id)
        while True:
            item = task_queue.get()
            if isinstance(item, _StopSentinel):
                break
            try:
                result = self._executor.execute(item)
            except Exception as error:
                logger.exception("Worker %s failed on %s", worker_id, item.directory)
                result = TaskResult(
                    item.directory,
                    item.color,
                    error=TaskError(f"unexpected error: {error}"),
                )
            result_queue.put(result)
        logger.debug("Worker %s stopped", worker_id)

    @staticmethod
    def _close_results(
        workers: Sequence[threading.Thread],
        result_queue: queue.Queue[TaskResult | _StopSentinel],
    ) -> None:
        for worker in workers:
            worker.join()
        result_queue.put(_STOP)


__all__ = ["RunReport", "WorkerPool", "build_tasks"]
