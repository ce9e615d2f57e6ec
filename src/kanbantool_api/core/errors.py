"""Errors - Error records and exceptions for the KanbanTool API client.

Two kinds of API errors exist:

- Transport timeouts (code 0): no usable response arrived within the
  configured window. This covers real timeouts as well as responses that
  could not be parsed as JSON; the two are indistinguishable to callers.
- Application errors: the remote service answered with a JSON object carrying
  an integer ``code`` other than 200 and a ``message``.

Both are described by an ``ApiErrorRecord`` which is handed to error
callbacks. Code awaiting a ``PendingCall`` receives the same record wrapped in
an ``ApiError`` exception.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

TIMEOUT_MESSAGE = "unknown request error, server response not in JSON format or request timeout"


class ErrorKind(Enum):
    """Kind of API error."""

    TRANSPORT_TIMEOUT = "transport_timeout"
    APPLICATION = "application"


# =============================================================================
# Error Record
# =============================================================================


class ApiErrorRecord(BaseModel):
    """Error delivered to error callbacks and reporters."""

    code: int
    message: str
    method: str
    url: str  # relative resource path, e.g. "boards/5/tasks"
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def kind(self) -> ErrorKind:
        if self.code == 0:
            return ErrorKind.TRANSPORT_TIMEOUT
        return ErrorKind.APPLICATION

    @classmethod
    def transport_timeout(cls, method: str, url: str, data: dict[str, Any]) -> ApiErrorRecord:
        """Build the synthetic code 0 record used when no response arrived."""
        return cls(code=0, message=TIMEOUT_MESSAGE, method=method, url=url, data=data)

    @classmethod
    def from_response(
        cls, response: Any, method: str, url: str, data: dict[str, Any]
    ) -> ApiErrorRecord | None:
        """Detect an application error in a decoded response body.

        Args:
            response: Decoded JSON body.
            method: Logical HTTP verb of the request.
            url: Relative resource path of the request.
            data: Caller parameters of the request.

        Returns:
            An error record if the body carries a non-zero integral ``code``
            different from 200 together with a non-empty ``message``,
            otherwise None.
        """
        if not isinstance(response, dict):
            return None

        code = response.get("code")
        message = response.get("message")

        if isinstance(code, float) and code.is_integer():
            code = int(code)
        # bool is an int subclass; True must not pass as code 1
        if isinstance(code, bool) or not isinstance(code, int) or not code:
            return None
        if not message or code == 200:
            return None

        return cls(code=code, message=str(message), method=method, url=url, data=data)

    def to_exception(self) -> ApiError:
        if self.kind is ErrorKind.TRANSPORT_TIMEOUT:
            return TransportTimeoutError(self)
        return ApplicationError(self)


# =============================================================================
# Exceptions
# =============================================================================


class KanbanToolError(Exception):
    """Base exception for all kanbantool-api errors."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.details:
            return f"{self.message}\n  Details: {self.details}"
        return self.message


class ApiError(KanbanToolError):
    """Raised to code awaiting a call that settled with an error record."""

    def __init__(self, record: ApiErrorRecord):
        self.record = record
        super().__init__(
            f"{record.method} {record.url} failed with code {record.code}: {record.message}"
        )

    @property
    def code(self) -> int:
        return self.record.code


class TransportTimeoutError(ApiError):
    """No usable response arrived before the call timed out."""


class ApplicationError(ApiError):
    """The remote service answered with an error code and message."""


class ConfigError(KanbanToolError):
    """Raised when the configuration file or environment is invalid."""


class MissingAccountError(ConfigError):
    """Raised when a client is requested without a subdomain or API token."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            f"Missing account settings: {', '.join(missing)}",
            "Set them in .kanbantool/config.json or via "
            "KANBANTOOL_SUBDOMAIN / KANBANTOOL_API_TOKEN.",
        )
