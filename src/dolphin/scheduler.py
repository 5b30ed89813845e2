"""Batch planning and timed progression between batches."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from dolphin.models import BatchOutcome, PodBatch, PodRef, ProgressEvent, ProgressKind

logger = logging.getLogger(__name__)

BatchExecutor = Callable[[Sequence[PodRef]], BatchOutcome]


def plan_batches(snapshot: Sequence[PodRef], batch_size: int) -> list[PodBatch]:
    """Split ``snapshot`` into contiguous half-open ranges of ``batch_size``.

    The last batch may be shorter. A ``batch_size`` below one yields a single
    batch holding the whole snapshot.
    """

    total = len(snapshot)
    if total == 0:
        return []
    size = batch_size if batch_size >= 1 else total

    batches: list[PodBatch] = []
    for index, start in enumerate(range(0, total, size)):
        end = min(start + size, total)
        batches.append(PodBatch(index=index, start=start, end=end, pods=tuple(snapshot[start:end])))
    return batches


@dataclass(slots=True)
class ScheduleResult:
    batches_planned: int = 0
    batches_completed: int = 0
    sleeps: int = 0
    deleted: list[PodRef] = field(default_factory=list)
    failure: BatchOutcome | None = None
    cancelled: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None and not self.cancelled


class BatchScheduler:
    """Drive batches strictly in sequence with a fixed pause between them.

    An injected ``sleep`` always does the pausing. Without one the pause is
    ``cancel_event.wait(interval)`` when an event is given, so setting the event
    ends it early, and ``time.sleep`` otherwise. The event is also checked before
    every batch.
    """

    def __init__(
        self,
        *,
        sleep: Callable[[float], None] | None = None,
        cancel_event: threading.Event | None = None,
        on_progress: Callable[[ProgressEvent], None] | None = None,
    ) -> None:
        self._sleep = sleep
        self._cancel_event = cancel_event
        self._on_progress = on_progress

    def _cancelled(self) -> bool:
        return self._cancel_event is not None and self._cancel_event.is_set()

    def _pause(self, seconds: float) -> None:
        if self._sleep is not None:
            self._sleep(seconds)
        elif self._cancel_event is not None:
            self._cancel_event.wait(seconds)
        else:
            time.sleep(seconds)

    def _notify(self, event: ProgressEvent) -> None:
        if self._on_progress is not None:
            self._on_progress(event)

    def run(
        self,
        executor: BatchExecutor,
        snapshot: Sequence[PodRef],
        batch_size: int,
        interval: float,
        verbose: bool = False,
    ) -> ScheduleResult:
        batches = plan_batches(snapshot, batch_size)
        result = ScheduleResult(batches_planned=len(batches))
        interval = max(0.0, interval)

        for batch in batches:
            if self._cancelled():
                logger.warning("cancelled before batch %d/%d", batch.index + 1, len(batches))
                result.cancelled = True
                return result

            logger.info("batch %d/%d: pods [%d, %d)", batch.index + 1, len(batches), batch.start, batch.end)
            if verbose:
                self._notify(ProgressEvent(kind=ProgressKind.BATCH_STARTED, batch=batch))

            outcome = executor(batch.pods)
            result.deleted.extend(outcome.deleted)
            if not outcome.ok:
                result.failure = outcome
                return result
            result.batches_completed += 1

            if batch.index == len(batches) - 1:
                break
            if verbose:
                self._notify(ProgressEvent(kind=ProgressKind.WAITING, interval_seconds=interval))
            self._pause(interval)
            result.sleeps += 1

        return result
