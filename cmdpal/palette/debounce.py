"""
Keystroke debouncing for palette queries.

Submitted text flows through a reactivex pipeline: ``debounce`` lets only the
last text of a burst through, and ``switch_map`` disposes the run for an older
text as soon as a newer one arrives, cancelling its asyncio task. Only the
latest run ever delivers a result (last write wins).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

import reactivex as rx
from reactivex import operators as ops
from reactivex.abc import DisposableBase
from reactivex.disposable import Disposable
from reactivex.scheduler.eventloop import AsyncIOScheduler
from reactivex.subject import Subject

from cmdpal.config.constants import DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)


def defer_task(coro_factory: Callable[[], Any], loop: asyncio.AbstractEventLoop | None = None) -> rx.Observable:
    """Wrap a coroutine as an observable whose disposal cancels the task.

    Emits the coroutine result once and completes, or errors if it raises.
    A cancelled task emits nothing.
    """

    def subscribe(observer, scheduler=None):
        _loop = loop or asyncio.get_running_loop()
        task = _loop.create_task(coro_factory())

        def on_done(t: asyncio.Task) -> None:
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                observer.on_error(exc)
            else:
                observer.on_next(t.result())
                observer.on_completed()

        task.add_done_callback(on_done)
        return Disposable(lambda: task.cancel() if not task.done() else None)

    return rx.create(subscribe)


class QueryDebouncer:
    """Coalesce rapid query submissions on the asyncio event loop.

    Args:
        callback: Called with the query text; may return a value or a coroutine
        on_result: Called with ``(text, result)`` for the newest run only
        delay: Debounce window in seconds
    """

    def __init__(
        self,
        callback: Callable[[str], Any],
        on_result: Callable[[str, Any], None] | None = None,
        delay: float = DEBOUNCE_SECONDS,
    ):
        self.callback = callback
        self.on_result = on_result
        self.delay = delay
        self._subject: Subject | None = None
        self._subscription: DisposableBase | None = None
        self._submitted = 0
        self._settled = 0

    @property
    def pending(self) -> bool:
        """True while a submission is waiting out the delay or still running."""
        return self._settled < self._submitted

    def submit(self, text: str) -> None:
        """Push ``text`` into the pipeline, superseding anything not yet delivered."""
        loop = asyncio.get_running_loop()
        if self._subject is None:
            self._start(loop)
        self._submitted += 1
        self._subject.on_next((self._submitted, text))

    def cancel(self) -> None:
        """Drop the waiting submission and cancel an in-flight run."""
        if self._subscription is not None:
            self._subscription.dispose()
        self._subscription = None
        self._subject = None
        self._settled = self._submitted

    def _start(self, loop: asyncio.AbstractEventLoop) -> None:
        scheduler = AsyncIOScheduler(loop)
        self._subject = Subject()
        self._subscription = self._subject.pipe(
            ops.debounce(self.delay, scheduler=scheduler),
            ops.switch_map(lambda item: self._run(*item)),
        ).subscribe(on_next=self._deliver, scheduler=scheduler)

    def _run(self, generation: int, text: str) -> rx.Observable:
        def factory(scheduler):
            result = self.callback(text)
            if asyncio.iscoroutine(result):
                return defer_task(lambda: result)
            return rx.of(result)

        return rx.defer(factory).pipe(
            ops.map(lambda result: (text, result)),
            ops.catch(lambda err, source: self._on_error(err, text)),
            ops.finally_action(lambda: self._settle(generation)),
        )

    def _on_error(self, err: Exception, text: str) -> rx.Observable:
        logger.error(f"Debounced query failed for {text!r}: {err}")
        return rx.empty()

    def _settle(self, generation: int) -> None:
        self._settled = max(self._settled, generation)

    def _deliver(self, item: tuple[str, Any]) -> None:
        text, result = item
        if self.on_result is not None:
            self.on_result(text, result)
