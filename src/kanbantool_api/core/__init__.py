"""Core module - exports key classes and exceptions."""

from kanbantool_api.core.errors import (
    KanbanToolError,
    ApiError,
    TransportTimeoutError,
    ApplicationError,
    ConfigError,
    MissingAccountError,
    ApiErrorRecord,
    ErrorKind,
    TIMEOUT_MESSAGE,
)

from kanbantool_api.core.envelope import (
    Envelope,
    Shape,
    unwrap_envelope,
)

from kanbantool_api.core.reporting import (
    ERROR_EVENT,
    ErrorReporter,
)

from kanbantool_api.core.transport import (
    TransportError,
    Transport,
    HttpxTransport,
)

from kanbantool_api.core.call import PendingCall

from kanbantool_api.core.config import (
    AccountConfig,
    APIConfig,
    KanbanToolConfig,
    load_config,
    save_config,
)

__all__ = [
    # Exceptions
    "KanbanToolError",
    "ApiError",
    "TransportTimeoutError",
    "ApplicationError",
    "ConfigError",
    "MissingAccountError",
    "TransportError",
    # Error records
    "ApiErrorRecord",
    "ErrorKind",
    "TIMEOUT_MESSAGE",
    # Envelopes
    "Envelope",
    "Shape",
    "unwrap_envelope",
    # Reporting
    "ERROR_EVENT",
    "ErrorReporter",
    # Transport and calls
    "Transport",
    "HttpxTransport",
    "PendingCall",
    # Configuration
    "AccountConfig",
    "APIConfig",
    "KanbanToolConfig",
    "load_config",
    "save_config",
]
