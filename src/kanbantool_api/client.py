"""KanbanTool API client.

Exposes boards, tasks, comments and subtasks of a KanbanTool account. Every
operation returns a ``PendingCall`` which can be awaited for the result, or
driven with ``on_success`` / ``on_error`` callbacks. Exactly one of the two
callbacks fires for every call.

Usage:
    async with KanbanToolClient("acme", "API_TOKEN") as api:
        boards = await api.get_boards()
        task = await api.create_task(
            boards[0]["id"], {"task[name]": "Created", "task[description]": "Lorem ipsum"}
        )
        await api.create_task_comment(
            boards[0]["id"], task["id"], {"comment[content]": "A comment"}
        )

Calls made without ``on_error`` report failures to the client's
``ErrorReporter``; install a catch-all handler with ``set_error_hook`` or
subscribe observers with ``error_reporter.subscribe``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from enum import Enum
from typing import Any

from .core.call import ErrorCallback, PendingCall, SuccessCallback
from .core.config import KanbanToolConfig
from .core.envelope import Envelope
from .core.errors import ApiErrorRecord
from .core.reporting import ErrorHook, ErrorReporter
from .core.transport import DEFAULT_USER_AGENT, HttpxTransport, Transport

logger = logging.getLogger(__name__)

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "DELETE"})

DEFAULT_HOST = "kanbantool.com"
DEFAULT_API_VERSION = "v1"
DEFAULT_TIMEOUT = 10.0  # seconds


class MoveDirection(str, Enum):
    """Directions accepted by ``move_task``."""

    UP = "up"
    DOWN = "down"
    PREV_STAGE = "prev_stage"
    NEXT_STAGE = "next_stage"
    PREV_SWIMLANE = "prev_swimlane"
    NEXT_SWIMLANE = "next_swimlane"


class KanbanToolClient:
    """Asynchronous binding for the KanbanTool API."""

    def __init__(
        self,
        subdomain: str,
        api_token: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        host: str = DEFAULT_HOST,
        api_version: str = DEFAULT_API_VERSION,
        transport: Transport | None = None,
        error_reporter: ErrorReporter | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """Initialize the client. No network activity happens here.

        Args:
            subdomain: Account subdomain, e.g. "acme".
            api_token: API token of the account user.
            timeout: Seconds before a call fails with a code 0 error.
            host: Service host.
            api_version: API version path segment.
            transport: Request transport. Defaults to an ``HttpxTransport``.
            error_reporter: Receives errors of calls made without ``on_error``.
            user_agent: User-Agent for the default transport.
        """
        self._subdomain = subdomain
        self._api_token = api_token
        self._timeout = timeout
        self._host = host
        self._api_version = api_version
        self.transport: Transport = transport or HttpxTransport(timeout=timeout, user_agent=user_agent)
        self.error_reporter = error_reporter or ErrorReporter()

    @classmethod
    def from_config(
        cls,
        config: KanbanToolConfig,
        *,
        transport: Transport | None = None,
        error_reporter: ErrorReporter | None = None,
    ) -> KanbanToolClient:
        """Build a client from configuration.

        Raises:
            MissingAccountError: If the subdomain or token is not configured.
        """
        subdomain, api_token = config.require_account()
        return cls(
            subdomain,
            api_token,
            timeout=config.api.timeout_seconds,
            host=config.api.host,
            api_version=config.api.api_version,
            transport=transport,
            error_reporter=error_reporter,
            user_agent=config.api.user_agent,
        )

    def __repr__(self) -> str:
        return f"KanbanToolClient(subdomain={self._subdomain!r}, host={self._host!r})"

    async def __aenter__(self) -> KanbanToolClient:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    @property
    def subdomain(self) -> str:
        return self._subdomain

    @property
    def api_token(self) -> str:
        return self._api_token

    @property
    def timeout(self) -> float:
        return self._timeout

    # =========================================================================
    # Request lifecycle
    # =========================================================================

    def endpoint(self, path: str) -> str:
        """Return the absolute endpoint URL for a relative resource path."""
        return f"https://{self._subdomain}.{self._host}/api/{self._api_version}/{path}.json"

    def set_error_hook(self, hook: ErrorHook | None) -> None:
        """Install (or remove, with None) the catch-all error handler."""
        self.error_reporter.hook = hook

    def default_error_handler(self, error: ApiErrorRecord) -> None:
        self.error_reporter.report(error)

    def call(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        envelope: Envelope | None = None,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Issue one authenticated API request.

        The token and logical verb are added to the request data as
        ``api_token`` and ``_m``; the caller's dict is left untouched.

        Args:
            method: One of GET, POST, PUT, DELETE.
            path: Relative resource path, e.g. "boards/5/tasks".
            params: Request parameters.
            envelope: Envelope stripped from success payloads.
            on_success: Receives the unwrapped payload.
            on_error: Receives the error record. Defaults to the error reporter.

        Returns:
            The pending call.

        Raises:
            ValueError: If the method is not supported.
            RuntimeError: If called without a running event loop.
        """
        method = method.upper()
        if method not in HTTP_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")

        params = dict(params or {})
        data = {**params, "api_token": self._api_token, "_m": method}

        pending = PendingCall(
            method,
            path,
            params,
            on_error=on_error or self.default_error_handler,
            on_success=on_success,
            envelope=envelope,
            timeout=self._timeout,
        )
        logger.debug(f"{method} {path}")
        pending.start(self.transport.send(self.endpoint(path), data))
        return pending

    # =========================================================================
    # Boards
    # =========================================================================

    def get_boards(
        self,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """List boards visible to the API user.

        This is the entry point for most applications, since board
        identifiers can only be obtained through this call.
        """
        return self.call(
            "GET", "boards", envelope=Envelope.collection("board"), on_success=on_success, on_error=on_error
        )

    def get_board_settings(
        self,
        board_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Board details including users, permissions, stages and swimlanes."""
        return self.call(
            "GET",
            f"boards/{board_id}",
            envelope=Envelope.single("board"),
            on_success=on_success,
            on_error=on_error,
        )

    def get_tasks(
        self,
        board_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "GET",
            f"boards/{board_id}/tasks",
            envelope=Envelope.collection("task"),
            on_success=on_success,
            on_error=on_error,
        )

    def get_changelog(
        self,
        board_id: int | str,
        from_date: date | str | None = None,
        to_date: date | str | None = None,
        limit: int | None = None,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Board changelog, at most 1000 entries.

        The filters are sent as given; the service interprets dates and limit.
        """
        return self.call(
            "GET",
            f"boards/{board_id}/changelog",
            {"from": from_date, "to": to_date, "limit": limit},
            envelope=Envelope.collection("task"),
            on_success=on_success,
            on_error=on_error,
        )

    # =========================================================================
    # Tasks
    # =========================================================================

    def create_task(
        self,
        board_id: int | str,
        params: dict[str, Any],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Create a task, e.g. ``create_task(1234, {"task[name]": "created"})``."""
        return self.call(
            "POST",
            f"boards/{board_id}/tasks",
            params,
            envelope=Envelope.single("task"),
            on_success=on_success,
            on_error=on_error,
        )

    def update_task(
        self,
        board_id: int | str,
        task_id: int | str,
        params: dict[str, Any],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "PUT", f"boards/{board_id}/tasks/{task_id}", params, on_success=on_success, on_error=on_error
        )

    def move_task(
        self,
        board_id: int | str,
        task_id: int | str,
        direction: MoveDirection | str,
        wip_override: str | None = None,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Move a task one step in the given direction.

        Args:
            board_id: Board identifier.
            task_id: Task identifier.
            direction: One of up, down, prev_stage, next_stage, prev_swimlane,
                next_swimlane.
            wip_override: If set, overrides any WIP limit with this comment.
        """
        if isinstance(direction, MoveDirection):
            direction = direction.value
        return self.call(
            "PUT",
            f"boards/{board_id}/tasks/{task_id}/move",
            {"direction": direction, "override": wip_override},
            on_success=on_success,
            on_error=on_error,
        )

    def move_task_to(
        self,
        board_id: int | str,
        task_id: int | str,
        workflow_stage_id: int | str,
        swimlane_id: int | str,
        position: int | None = None,
        wip_override: str | None = None,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Move a task to a workflow stage and swimlane on the same board.

        ``position`` and ``wip_override`` are only sent when given.
        """
        params: dict[str, Any] = {"workflow_id": workflow_stage_id, "swimlane_id": swimlane_id}
        if position is not None:
            params["position"] = position
        if wip_override is not None:
            params["override"] = wip_override
        return self.call(
            "PUT",
            f"boards/{board_id}/tasks/{task_id}/move",
            params,
            on_success=on_success,
            on_error=on_error,
        )

    def delete_task(
        self,
        board_id: int | str,
        task_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Permanently delete a task. Deleted tasks cannot be archived."""
        return self.call(
            "DELETE", f"boards/{board_id}/tasks/{task_id}", on_success=on_success, on_error=on_error
        )

    def archive_task(
        self,
        board_id: int | str,
        task_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Archive a task.

        The task must not be archived yet and must be in a workflow stage that
        has an archive, usually the last one.
        """
        return self.call(
            "PUT", f"boards/{board_id}/tasks/{task_id}/archive", on_success=on_success, on_error=on_error
        )

    def unarchive_task(
        self,
        board_id: int | str,
        task_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "PUT", f"boards/{board_id}/tasks/{task_id}/unarchive", on_success=on_success, on_error=on_error
        )

    # =========================================================================
    # Comments
    # =========================================================================

    def get_task_comments(
        self,
        board_id: int | str,
        task_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "GET", f"boards/{board_id}/tasks/{task_id}/comments", on_success=on_success, on_error=on_error
        )

    def get_task_comment(
        self,
        board_id: int | str,
        task_id: int | str,
        comment_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "GET",
            f"boards/{board_id}/tasks/{task_id}/comments/{comment_id}",
            envelope=Envelope.single("comment"),
            on_success=on_success,
            on_error=on_error,
        )

    def create_task_comment(
        self,
        board_id: int | str,
        task_id: int | str,
        params: dict[str, Any],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Add a comment, e.g. ``{"comment[content]": "A new comment"}``."""
        return self.call(
            "POST",
            f"boards/{board_id}/tasks/{task_id}/comments",
            params,
            envelope=Envelope.single("comment"),
            on_success=on_success,
            on_error=on_error,
        )

    def delete_task_comment(
        self,
        board_id: int | str,
        task_id: int | str,
        comment_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Delete a comment and return it.

        Only recent comments made by the same user can be deleted.
        """
        return self.call(
            "DELETE",
            f"boards/{board_id}/tasks/{task_id}/comments/{comment_id}",
            envelope=Envelope.single("comment"),
            on_success=on_success,
            on_error=on_error,
        )

    # =========================================================================
    # Subtasks
    # =========================================================================

    def get_task_subtasks(
        self,
        board_id: int | str,
        task_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "GET", f"boards/{board_id}/tasks/{task_id}/subtasks", on_success=on_success, on_error=on_error
        )

    def get_task_subtask(
        self,
        board_id: int | str,
        task_id: int | str,
        subtask_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "GET",
            f"boards/{board_id}/tasks/{task_id}/subtasks/{subtask_id}",
            envelope=Envelope.single("subtask"),
            on_success=on_success,
            on_error=on_error,
        )

    def create_task_subtask(
        self,
        board_id: int | str,
        task_id: int | str,
        params: dict[str, Any],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Add a subtask at the bottom of the task's subtask list."""
        return self.call(
            "POST",
            f"boards/{board_id}/tasks/{task_id}/subtasks",
            params,
            envelope=Envelope.single("subtask"),
            on_success=on_success,
            on_error=on_error,
        )

    def delete_task_subtask(
        self,
        board_id: int | str,
        task_id: int | str,
        subtask_id: int | str,
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        return self.call(
            "DELETE",
            f"boards/{board_id}/tasks/{task_id}/subtasks/{subtask_id}",
            envelope=Envelope.single("subtask"),
            on_success=on_success,
            on_error=on_error,
        )

    def reorder_task_subtasks(
        self,
        board_id: int | str,
        task_id: int | str,
        new_order: Iterable[int | str],
        *,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> PendingCall:
        """Reorder subtasks.

        Args:
            board_id: Board identifier.
            task_id: Task identifier.
            new_order: Subtask IDs in the new order. Must list every subtask
                of the task.
        """
        return self.call(
            "PUT",
            f"boards/{board_id}/tasks/{task_id}/subtasks",
            {"order": ",".join(str(subtask_id) for subtask_id in new_order)},
            on_success=on_success,
            on_error=on_error,
        )
