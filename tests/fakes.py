"""Test doubles for the transport and callbacks."""

from __future__ import annotations

import asyncio
from typing import Any


class FakeTransport:
    """In-memory transport recording requests.

    Responses are served in order from ``responses``. A response that is an
    ``asyncio.Event`` is awaited until set, simulating a request that has not
    answered yet. An exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses)
        self.requests: list[tuple[str, dict[str, Any]]] = []
        self.closed = False

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    @property
    def last_url(self) -> str:
        return self.requests[-1][0]

    @property
    def last_data(self) -> dict[str, Any]:
        return self.requests[-1][1]

    async def send(self, url: str, data: dict[str, Any]) -> Any:
        self.requests.append((url, data))
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, asyncio.Event):
            await response.wait()
            return {}
        if isinstance(response, BaseException):
            raise response
        return response

    async def aclose(self) -> None:
        self.closed = True


class Recorder:
    """Callback that records every invocation."""

    def __init__(self) -> None:
        self.calls: list[Any] = []

    def __call__(self, value: Any) -> None:
        self.calls.append(value)

    @property
    def count(self) -> int:
        return len(self.calls)


