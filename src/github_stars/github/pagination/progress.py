"""Progress-reporting futures for paginated downloads.

A ProgressFuture is an asyncio future with a second channel: before it
resolves, the producer can push any number of ProgressReports to the
registered handlers, and each handler answers whether the producer should
stop.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Generator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Generic, TypeVar

from github_stars.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class ProgressState(StrEnum):
    """State of a progress-reporting operation."""

    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProgressReport:
    """One page worth of progress.

    ``next_page`` and ``total_pages`` are None when GitHub did not announce
    them. For fanned-out pages ``next_page`` counts completed pages, and a
    cached collection is reported as page 0 of 0.
    """

    next_page: int | None
    total_pages: int | None
    per_page: int
    data: list[dict[str, Any]] = field(default_factory=list)


ProgressHandler = Callable[[ProgressReport], bool | None]
"""Receives a report; a truthy return value asks the producer to stop."""


class ProgressFuture(Generic[T]):
    """Awaitable result with intermediate, veto-able progress reports.

    Usage:
        handle = paginator.fetch_all("users/alice/starred")
        handle.on_progress(lambda report: print(len(report.data)))
        starred = await handle

    Guarantees:
    - Reports are delivered only while the future is pending.
    - Handlers registered after completion never fire (no replay).
    - Exactly one of resolve/fail takes effect; later calls are ignored.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[T] = asyncio.get_running_loop().create_future()
        self._future.add_done_callback(self._on_done)
        self._handlers: list[ProgressHandler] = []
        self._task: asyncio.Task[None] | None = None
        self._reports = 0

    @classmethod
    def run(
        cls,
        producer: Callable[[ProgressFuture[T]], Awaitable[T]],
    ) -> ProgressFuture[T]:
        """Create a handle and schedule ``producer`` to fill it.

        The producer starts on the next loop turn, so handlers attached
        right after this call see every report. Its return value resolves
        the handle; an exception fails it.
        """
        handle: ProgressFuture[T] = cls()
        handle._task = asyncio.create_task(handle._drive(producer))
        return handle

    async def _drive(self, producer: Callable[[ProgressFuture[T]], Awaitable[T]]) -> None:
        try:
            value = await producer(self)
        except asyncio.CancelledError:
            self._future.cancel()
            raise
        except Exception as e:
            self.fail(e)
        else:
            self.resolve(value)

    def _on_done(self, future: asyncio.Future[T]) -> None:
        self._handlers.clear()
        if future.cancelled() and self._task is not None and not self._task.done():
            self._task.cancel()

    # -------------------------------------------------------------------------
    # Consumer side
    # -------------------------------------------------------------------------
    def on_progress(self, handler: ProgressHandler) -> ProgressFuture[T]:
        """Register a progress handler (ignored once the future is done)."""
        if not self._future.done():
            self._handlers.append(handler)
        return self

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()

    def done(self) -> bool:
        return self._future.done()

    def result(self) -> T:
        return self._future.result()

    def exception(self) -> BaseException | None:
        return self._future.exception()

    def add_done_callback(self, callback: Callable[[asyncio.Future[T]], object]) -> None:
        self._future.add_done_callback(callback)

    def cancel(self) -> bool:
        """Cancel the operation, including its producing task."""
        return self._future.cancel()

    @property
    def state(self) -> ProgressState:
        if not self._future.done():
            return ProgressState.PENDING
        if self._future.cancelled():
            return ProgressState.CANCELLED
        if self._future.exception() is not None:
            return ProgressState.FAILED
        return ProgressState.COMPLETED

    @property
    def reports_delivered(self) -> int:
        """Number of reports delivered to handlers so far."""
        return self._reports

    # -------------------------------------------------------------------------
    # Producer side
    # -------------------------------------------------------------------------
    def report_progress(self, report: ProgressReport) -> bool:
        """Deliver a report to every handler.

        Returns:
            True if any handler asked to stop. Always False once the future
            is done, since nobody is listening anymore.
        """
        if self._future.done():
            return False

        stop = False
        for handler in list(self._handlers):
            try:
                if handler(report):
                    stop = True
            except Exception as e:
                logger.warning("Progress handler error: {}", e)
        self._reports += 1
        return stop

    def resolve(self, value: T) -> bool:
        """Complete successfully. Returns False if already done."""
        if self._future.done():
            return False
        self._future.set_result(value)
        return True

    def fail(self, error: BaseException) -> bool:
        """Complete with an error. Returns False if already done."""
        if self._future.done():
            return False
        self._future.set_exception(error)
        return True
