"""Pending call - Timeout race and exactly-once settlement of one API request.

Each request races a one-shot timer against the transport:

- If the timer fires first, the transport task is cancelled and the error
  callback receives a code 0 record.
- If the transport answers first, the timer is cancelled and the response is
  classified as either an application error or a success payload.
- A response arriving after the call has settled is dropped.

The timer handle doubles as the settlement guard: it is set to None exactly
once, by whichever outcome wins.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Generator
from typing import Any

from .envelope import Envelope
from .errors import ApiErrorRecord
from .transport import TransportError

logger = logging.getLogger(__name__)

SuccessCallback = Callable[[Any], object]
ErrorCallback = Callable[[ApiErrorRecord], object]


class PendingCall:
    """A single in-flight API call.

    Awaiting the call returns the (unwrapped) success payload or raises the
    error record as an ``ApiError``. Callbacks run before awaiters resume.
    """

    def __init__(
        self,
        method: str,
        url: str,
        data: dict[str, Any],
        on_error: ErrorCallback,
        on_success: SuccessCallback | None = None,
        envelope: Envelope | None = None,
        timeout: float = 10.0,
    ):
        """Create the call and arm its timer.

        Args:
            method: Logical HTTP verb.
            url: Relative resource path (used in error records).
            data: Caller parameters (used in error records).
            on_error: Receives the error record if the call fails.
            on_success: Receives the unwrapped payload if the call succeeds.
            envelope: Envelope applied to success payloads.
            timeout: Seconds before the call fails with a code 0 error.

        Raises:
            RuntimeError: If no event loop is running.
        """
        self.method = method
        self.url = url
        self.data = data
        self.envelope = envelope
        self.timeout = timeout
        self.payload: Any = None
        self.error: ApiErrorRecord | None = None

        self._on_success = on_success
        self._on_error = on_error
        self._loop = asyncio.get_running_loop()
        self._done = asyncio.Event()
        self._task: asyncio.Task | None = None
        self._timer: asyncio.TimerHandle | None = self._loop.call_later(timeout, self._on_timeout)

    def __repr__(self) -> str:
        state = "settled" if self.settled else "pending"
        return f"<PendingCall {self.method} {self.url} {state}>"

    @property
    def settled(self) -> bool:
        return self._timer is None

    @property
    def succeeded(self) -> bool:
        return self._done.is_set() and self.error is None

    def start(self, request: Awaitable[Any]) -> None:
        """Run the transport request as a task on the current loop."""
        self._task = asyncio.ensure_future(self._dispatch(request))

    async def _dispatch(self, request: Awaitable[Any]) -> None:
        try:
            response = await request
        except TransportError as e:
            logger.warning(f"{self.method} {self.url}: {e}")
            self._fail_without_response()
            return
        self.deliver(response)

    def deliver(self, response: Any) -> None:
        """Settle the call with a decoded response body.

        Does nothing if the call has already settled.
        """
        if not self._settle():
            logger.debug(f"Dropping late response for {self.method} {self.url}")
            return

        error = ApiErrorRecord.from_response(response, self.method, self.url, self.data)
        if error is not None:
            self._fail(error)
        else:
            self._succeed(response)

    def _on_timeout(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        logger.warning(f"{self.method} {self.url} timed out after {self.timeout}s")
        self._fail_without_response()

    def _fail_without_response(self) -> None:
        if self._settle():
            self._fail(ApiErrorRecord.transport_timeout(self.method, self.url, self.data))

    def _settle(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def _succeed(self, response: Any) -> None:
        self.payload = self.envelope.unwrap(response) if self.envelope else response
        if self._on_success is not None:
            self._loop.call_soon(self._on_success, self.payload)
        self._done.set()

    def _fail(self, error: ApiErrorRecord) -> None:
        self.error = error
        self._loop.call_soon(self._on_error, error)
        self._done.set()

    async def wait(self) -> Any:
        """Wait for the call to settle.

        Returns:
            The success payload.

        Raises:
            ApiError: If the call settled with an error.
        """
        await self._done.wait()
        if self.error is not None:
            raise self.error.to_exception()
        return self.payload

    def __await__(self) -> Generator[Any, None, Any]:
        return self.wait().__await__()
