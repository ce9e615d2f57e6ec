"""kanbantool-api - Asynchronous Python binding for the KanbanTool API."""

__version__ = "0.5.0"

from kanbantool_api.client import KanbanToolClient, MoveDirection  # noqa: E402
from kanbantool_api.core.call import PendingCall  # noqa: E402
from kanbantool_api.core.envelope import Envelope, Shape, unwrap_envelope  # noqa: E402
from kanbantool_api.core.errors import (  # noqa: E402
    ApiError,
    ApiErrorRecord,
    ApplicationError,
    KanbanToolError,
    TransportTimeoutError,
)
from kanbantool_api.core.reporting import ERROR_EVENT, ErrorReporter  # noqa: E402

__all__ = [
    "__version__",
    "KanbanToolClient",
    "MoveDirection",
    "PendingCall",
    "Envelope",
    "Shape",
    "unwrap_envelope",
    "ApiError",
    "ApiErrorRecord",
    "ApplicationError",
    "KanbanToolError",
    "TransportTimeoutError",
    "ERROR_EVENT",
    "ErrorReporter",
]
