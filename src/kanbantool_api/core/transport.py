"""Transport - Delivers requests to the KanbanTool API.

The API is designed for JSONP-style access: every request is sent the same
physical way (a GET with query parameters) and the logical HTTP verb travels
in the ``_m`` parameter. A transport therefore only needs a single operation,
``send(url, data)``, which returns the decoded JSON body.

HTTP status codes are not interpreted here. Application errors are reported
by the service inside the JSON body and are detected by the call lifecycle.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any, Protocol

import httpx

from .. import __version__

DEFAULT_USER_AGENT = f"kanbantool-api/{__version__}"


class TransportError(Exception):
    """Raised when a request produced no usable JSON response."""

    def __init__(self, url: str, original_error: Exception):
        self.url = url
        self.original_error = original_error
        super().__init__(f"Request to {url} failed: {original_error}")


class Transport(Protocol):
    """Anything that can deliver a request and return the decoded JSON body."""

    async def send(self, url: str, data: dict[str, Any]) -> Any: ...

    async def aclose(self) -> None: ...


def _encode_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def encode_params(data: dict[str, Any]) -> list[tuple[str, str]]:
    """Encode request data as query parameters.

    None becomes an empty value, booleans become ``true``/``false`` and
    dates are sent in ISO 8601. Lists and tuples repeat the key.
    """
    params: list[tuple[str, str]] = []
    for key, value in data.items():
        if isinstance(value, (list, tuple)):
            params.extend((key, _encode_value(item)) for item in value)
        else:
            params.append((key, _encode_value(value)))
    return params


class HttpxTransport:
    """Transport backed by ``httpx.AsyncClient``."""

    def __init__(
        self,
        timeout: float = 10.0,
        user_agent: str = DEFAULT_USER_AGENT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize the transport.

        Args:
            timeout: Network timeout in seconds.
            user_agent: User-Agent header sent with every request.
            client: Pre-configured client (e.g. with a mock transport). The
                transport does not close clients it did not create.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            headers={"User-Agent": user_agent, "Accept": "application/json"},
        )

    async def send(self, url: str, data: dict[str, Any]) -> Any:
        try:
            response = await self._client.get(url, params=encode_params(data))
        except httpx.HTTPError as e:
            raise TransportError(url, e) from e

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TransportError(url, e) from e

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
