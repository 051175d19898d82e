"""Delayed tasks and debouncing for shopping list refreshes."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class DelayedTask(Protocol):
    def cancel(self) -> None:
        """Stop the task from running. Safe to call after it has run."""
        ...


class TaskScheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> DelayedTask:
        """Run ``callback`` once after ``delay`` seconds."""
        ...


class _JobHandle:
    def __init__(self, job, lookup_error: type[Exception]) -> None:
        self._job = job
        self._lookup_error = lookup_error

    def cancel(self) -> None:
        try:
            self._job.remove()
        except self._lookup_error:
            # Already ran or already cancelled
            logger.debug("Job %s no longer scheduled", self._job.id)


class APSchedulerTaskScheduler:
    """:class:`TaskScheduler` backed by an APScheduler scheduler.

    Each delayed task is a one-shot job with a ``DateTrigger``. The
    default backend is a ``BackgroundScheduler``; pass an
    ``AsyncIOScheduler`` to run inside an event loop instead.
    """

    def __init__(self, scheduler=None) -> None:
        """Initialize with an optional APScheduler instance.

        Raises:
            ImportError: If apscheduler is not installed.
        """
        try:
            from apscheduler.jobstores.base import JobLookupError
            from apscheduler.schedulers.background import BackgroundScheduler
            from apscheduler.triggers.date import DateTrigger
        except ImportError:
            raise ImportError(
                "apscheduler is required: pip install apscheduler"
            )

        self._scheduler = scheduler if scheduler is not None else BackgroundScheduler()
        self._DateTrigger = DateTrigger
        self._JobLookupError = JobLookupError
        self._running = False

    def start(self) -> None:
        if not self._running:
            self._scheduler.start()
            self._running = True
            logger.info("Task scheduler started")

    def shutdown(self) -> None:
        if self._running:
            self._scheduler.shutdown(wait=False)
            self._running = False
            logger.info("Task scheduler stopped")

    @property
    def running(self) -> bool:
        return self._running

    def call_later(self, delay: float, callback: Callback) -> DelayedTask:
        run_date = datetime.now(timezone.utc) + timedelta(seconds=delay)
        job = self._scheduler.add_job(
            callback,
            trigger=self._DateTrigger(run_date=run_date),
            misfire_grace_time=None,
        )
        return _JobHandle(job, self._JobLookupError)


class Debouncer:
    """Run a callback once a quiet period follows the last trigger.

    Each :meth:`trigger` cancels the pending task, if any, and schedules
    a fresh one, so a burst of triggers closer together than ``delay``
    results in a single call.
    """

    def __init__(
        self, scheduler: TaskScheduler, delay: float, callback: Callback
    ) -> None:
        self._scheduler = scheduler
        self._delay = delay
        self._callback = callback
        self._pending: DelayedTask | None = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
            self._generation += 1
            generation = self._generation
            self._pending = self._scheduler.call_later(
                self._delay, lambda: self._fire(generation)
            )

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            self._generation += 1

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A task that lost the race with a newer trigger does nothing
            if generation != self._generation:
                return
            self._pending = None
        self._callback()
