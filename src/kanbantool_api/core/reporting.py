"""Default error reporting for calls made without an error callback."""

from __future__ import annotations

import logging
from collections.abc import Callable

from .errors import ApiErrorRecord

logger = logging.getLogger(__name__)

ERROR_EVENT = "KanbanTool:Api:onError"

ErrorHook = Callable[[ApiErrorRecord], object]
ErrorSubscriber = Callable[[str, ApiErrorRecord], object]


class ErrorReporter:
    """Delivers unhandled API errors to an optional hook and to subscribers.

    The hook is a single catch-all handler, typically installed once by the
    application. Subscribers receive every reported error as a broadcast
    event, so several independent observers can react without each call site
    passing its own error callback.
    """

    def __init__(self, hook: ErrorHook | None = None):
        self.hook = hook
        self._subscribers: list[ErrorSubscriber] = []

    @property
    def subscribers(self) -> list[ErrorSubscriber]:
        return list(self._subscribers)

    def subscribe(self, subscriber: ErrorSubscriber) -> Callable[[], None]:
        """Register a subscriber for the error event.

        Args:
            subscriber: Called with ``(ERROR_EVENT, error)``.

        Returns:
            A callable that removes the subscriber again.
        """
        self._subscribers.append(subscriber)

        def unsubscribe() -> None:
            self.unsubscribe(subscriber)

        return unsubscribe

    def unsubscribe(self, subscriber: ErrorSubscriber) -> None:
        if subscriber in self._subscribers:
            self._subscribers.remove(subscriber)

    def report(self, error: ApiErrorRecord) -> None:
        """Deliver an error to the hook and broadcast it to all subscribers."""
        logger.warning(f"KanbanTool API error {error.code} on {error.method} {error.url}: {error.message}")

        if self.hook is not None:
            try:
                self.hook(error)
            except Exception:
                logger.exception("Error hook raised while handling an API error")

        for subscriber in list(self._subscribers):
            try:
                subscriber(ERROR_EVENT, error)
            except Exception:
                logger.exception(f"Subscriber {subscriber!r} raised while handling {ERROR_EVENT}")
