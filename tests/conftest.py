"""Shared fixtures for kanbantool-api tests."""

from __future__ import annotations

import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from kanbantool_api.client import KanbanToolClient
from kanbantool_api.core.reporting import ErrorReporter
from tests.fakes import FakeTransport, Recorder


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def reporter() -> ErrorReporter:
    return ErrorReporter()


@pytest.fixture
def client(transport: FakeTransport, reporter: ErrorReporter) -> KanbanToolClient:
    return KanbanToolClient("acme", "secret-token", transport=transport, error_reporter=reporter)


@pytest.fixture
def fast_client(transport: FakeTransport, reporter: ErrorReporter) -> KanbanToolClient:
    """Client with a short timeout for timeout tests."""
    return KanbanToolClient(
        "acme", "secret-token", timeout=0.05, transport=transport, error_reporter=reporter
    )


@pytest.fixture
def on_success() -> Recorder:
    return Recorder()


@pytest.fixture
def on_error() -> Recorder:
    return Recorder()


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()
