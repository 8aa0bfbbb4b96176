"""Pytest configuration and fixtures."""

import logging
import tempfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from clickup_tasks.clickup import ClickUpClient
from clickup_tasks.config import Config
from clickup_tasks.utils import StorageManager
from fakes import FakeClickUpApiClient

API_TOKEN = "pk_test_token"


@pytest.fixture
def temp_config_dir() -> Path:
    """Create a temporary configuration directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def storage_manager(temp_config_dir: Path) -> StorageManager:
    """Create a storage manager with temporary directory."""
    return StorageManager(temp_config_dir)


@pytest.fixture
def config(temp_config_dir: Path) -> Config:
    """Create a config instance with temporary directory."""
    return Config(temp_config_dir)


@pytest.fixture
def task_payload() -> dict[str, Any]:
    """Task as returned by GET /task/{id}."""
    return {
        "id": "86abc123",
        "custom_id": "DEV-42",
        "custom_item_id": 1001,
        "name": "Fix login redirect",
        "description": "Users land on a blank page after login.",
        "status": {
            "id": "sc901_abc",
            "status": "in progress",
            "color": "#4194f6",
            "type": "custom",
            "orderindex": 1,
        },
        "date_created": "1700000000000",
        "date_updated": "1700003600000",
        "date_closed": None,
        "url": "https://app.clickup.com/t/86abc123",
        "space": {"id": "901"},
    }


@pytest.fixture
def space_payload() -> dict[str, Any]:
    """Space as returned by GET /space/{id}."""
    return {
        "id": "901",
        "name": "Engineering",
        "private": False,
        "statuses": [
            {"id": "s1", "status": "to do", "type": "open", "orderindex": 0},
            {"id": "s2", "status": "in progress", "type": "custom", "orderindex": 1},
            {"id": "s3", "status": "complete", "type": "closed", "orderindex": 2},
        ],
    }


@pytest.fixture
def workspaces_payload() -> dict[str, Any]:
    """Body of GET /team."""
    return {
        "teams": [
            {
                "id": "9001",
                "name": "Acme",
                "color": "#536cfe",
                "members": [
                    {"user": {"id": 183, "username": "John Doe", "email": "john@example.com"}},
                    {"user": {"id": 184, "username": "Jane Roe", "email": "jane@example.com"}},
                ],
            }
        ]
    }


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Requests seen by the mock transport."""
    return []


@pytest.fixture
def make_client(sent_requests: list[httpx.Request]) -> Callable[..., ClickUpClient]:
    """Build a ClickUpClient whose requests are answered by a handler.

    The handler receives each request and returns an httpx.Response. Every
    request is also appended to the ``sent_requests`` fixture.
    """
    clients: list[ClickUpClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> ClickUpClient:
        def recording_handler(request: httpx.Request) -> httpx.Response:
            sent_requests.append(request)
            return handler(request)

        client = ClickUpClient(api_token=API_TOKEN, transport=httpx.MockTransport(recording_handler))
        clients.append(client)
        return client

    yield factory

    for client in clients:
        client.close()


@pytest.fixture
def fake_api() -> FakeClickUpApiClient:
    """In-memory API client with no data."""
    return FakeClickUpApiClient()


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo the handlers installed by setup_logging."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers:
            root_logger.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root_logger.handlers:
            root_logger.addHandler(handler)
    root_logger.setLevel(level)
