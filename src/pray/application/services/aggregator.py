"""Concurrent aggregator: fan out one verification per declaration, fan in findings.

State machine: IDLE → RUNNING → DRAINING → DONE.

- RUNNING: every declaration is submitted to a thread pool as its own task.
- Each task puts its UsageResult on an unbounded queue (never blocks).
- A watcher thread waits for all tasks, then puts a drain sentinel.
- The aggregation loop reads the queue in arrival order, writes each
  finding to the sink at once, and stops at the sentinel.

Findings arrive in completion order: the set is deterministic, the order
is not. Nothing is retried or cancelled.
"""

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import ThreadPoolExecutor, wait
from enum import Enum, auto
from typing import TYPE_CHECKING

from pray.application.services.verifier import finding_for
from pray.domain.model.report import Report

if TYPE_CHECKING:
    from collections.abc import Sequence
    from concurrent.futures import Future

    from pray.application.services.verifier import UsageVerifier
    from pray.domain.model.declaration import DeclarationRecord
    from pray.domain.model.finding import Finding
    from pray.domain.model.usage_result import UsageResult
    from pray.domain.ports.reporter import FindingSinkProtocol

logger = logging.getLogger(__name__)

# Put on the result queue once every task has finished
_DRAINED = object()


class AggregatorState(Enum):
    """Lifecycle of one aggregation run."""

    IDLE = auto()
    RUNNING = auto()  # tasks in flight
    DRAINING = auto()  # all tasks done, queue being emptied
    DONE = auto()


class Aggregator:
    """Drives the verifier over a catalog and builds the Report.

    Single use: run() may be called once.
    """

    def __init__(self, verifier: UsageVerifier, *, max_workers: int | None = None) -> None:
        """Initialize aggregator.

        Args:
            verifier: Produces one UsageResult per declaration
            max_workers: Concurrency ceiling. None = one thread per declaration.

        Raises:
            TypeError: If verifier is None
            ValueError: If max_workers < 1
        """
        if verifier is None:
            raise TypeError("verifier must not be None")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")

        self._verifier = verifier
        self._max_workers = max_workers
        self._state = AggregatorState.IDLE

    @property
    def state(self) -> AggregatorState:
        """Current lifecycle state."""
        return self._state

    def run(self, records: Sequence[DeclarationRecord], sink: FindingSinkProtocol) -> Report:
        """Verify every record and report findings as they arrive.

        Args:
            records: Declaration catalog
            sink: Receives each finding as soon as it is known, then the report

        Returns:
            Report with all findings in arrival order

        Raises:
            RuntimeError: If run() was already called
            Exception: Any unexpected task error, re-raised after all
                tasks have finished
        """
        if self._state is not AggregatorState.IDLE:
            raise RuntimeError(f"aggregator already used (state {self._state.name})")

        if not records:
            self._state = AggregatorState.DONE
            report = Report.empty()
            sink.finish(report)
            return report

        workers = self._max_workers or len(records)
        logger.debug("verifying %d declaration(s) with %d worker(s)", len(records), workers)

        results: queue.SimpleQueue[UsageResult | object] = queue.SimpleQueue()
        findings: list[Finding] = []
        received = 0

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pray-verify") as pool:
            self._state = AggregatorState.RUNNING
            futures = [pool.submit(self._verify, record, results) for record in records]

            watcher = threading.Thread(
                target=_watch,
                args=(futures, results),
                name="pray-watcher",
                daemon=True,
            )
            watcher.start()

            while True:
                item = results.get()
                if item is _DRAINED:
                    self._state = AggregatorState.DRAINING
                    break

                received += 1
                finding = finding_for(item)  # type: ignore[arg-type]
                if finding is not None:
                    sink.emit(finding)
                    findings.append(finding)

            watcher.join()

        # Surface task errors other than query failures (already in results)
        for future in futures:
            future.result()

        self._state = AggregatorState.DONE
        report = Report(findings=tuple(findings), checked=received)
        logger.info(
            "%d declaration(s) checked, %d unused, %d error(s)",
            report.checked,
            report.unused_count,
            report.error_count,
        )
        sink.finish(report)
        return report

    def _verify(self, record: DeclarationRecord, results: queue.SimpleQueue[object]) -> None:
        """Task body: one query, one result."""
        results.put(self._verifier.verify(record))


def _watch(futures: list[Future[None]], results: queue.SimpleQueue[object]) -> None:
    """Wait for every task, then signal drain completion."""
    wait(futures)
    results.put(_DRAINED)
