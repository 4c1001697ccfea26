"""Shared pytest fixtures and configuration."""

import pytest
from loguru import logger
from starlette.testclient import TestClient

from hostbridge.config import BridgeConfig
from hostbridge.diff import DiffSessionManager
from hostbridge.dispatcher import MockDispatcher
from hostbridge.server import create_app


@pytest.fixture
def workspace(tmp_path):
    """An empty workspace directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def config(workspace):
    return BridgeConfig(address="127.0.0.1:0", workspace_dir=str(workspace))


@pytest.fixture
def manager(workspace):
    return DiffSessionManager(workspace_root=workspace)


@pytest.fixture
def dispatcher(config, manager):
    return MockDispatcher(config, manager)


@pytest.fixture
def client(config):
    """Create test client against a fresh app."""
    return TestClient(create_app(config))


@pytest.fixture
def log_messages():
    """Collect loguru messages emitted during a test."""
    messages: list[str] = []
    handler_id = logger.add(
        lambda m: messages.append(m.record["message"]), level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
