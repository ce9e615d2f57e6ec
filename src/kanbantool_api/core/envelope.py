"""Envelope unwrapping for KanbanTool responses.

The API wraps resources in single-key objects, e.g. ``{"task": {...}}`` or
``[{"board": {...}}, {"board": {...}}]``. Unwrapping strips that key so
callers always see the bare resource; elements without the key pass through
unchanged.

Whether a response is a single resource or a collection is decided by the
operation (``Shape``), not by inspecting the payload.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class Shape(Enum):
    """Shape of an API response."""

    SINGLE = "single"
    COLLECTION = "collection"


def _unwrap_one(item: Any, key: str) -> Any:
    if isinstance(item, dict) and key in item:
        return item[key]
    return item


def unwrap_envelope(payload: Any, key: str, shape: Shape | None = None) -> Any:
    """Strip the envelope key from a response payload.

    Args:
        payload: Decoded JSON response.
        key: Envelope key, e.g. "task".
        shape: Expected shape. If None, lists are treated as collections and
            everything else as a single resource.

    Returns:
        The unwrapped resource or list of resources.
    """
    if shape is None:
        shape = Shape.COLLECTION if isinstance(payload, list) else Shape.SINGLE

    if shape is Shape.SINGLE:
        return _unwrap_one(payload, key)

    if not isinstance(payload, list):
        logger.warning(f"Expected a list of '{key}' objects, got {type(payload).__name__}")
        return payload
    return [_unwrap_one(item, key) for item in payload]


@dataclass(frozen=True)
class Envelope:
    """Envelope key and response shape of an API operation."""

    key: str
    shape: Shape = Shape.SINGLE

    @classmethod
    def single(cls, key: str) -> Envelope:
        return cls(key, Shape.SINGLE)

    @classmethod
    def collection(cls, key: str) -> Envelope:
        return cls(key, Shape.COLLECTION)

    def unwrap(self, payload: Any) -> Any:
        return unwrap_envelope(payload, self.key, self.shape)

    def wrap(self, callback: Callable[[Any], Any]) -> Callable[[Any], Any]:
        """Return a callback that unwraps its payload before forwarding it."""

        def unwrapping_callback(payload: Any) -> Any:
            return callback(self.unwrap(payload))

        return unwrapping_callback
