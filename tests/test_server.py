"""
Tests for server bootstrap: app wiring and bind failure handling.
"""

import socket

import pytest

from hostbridge.config import BridgeConfig
from hostbridge.diff import DiffSessionManager
from hostbridge.dispatcher import MockDispatcher
from hostbridge.errors import BindError
from hostbridge.server import bind_socket, create_app, serve


@pytest.fixture
def occupied_port():
    """A port with a listening socket on it."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    sock.listen(1)
    yield sock.getsockname()[1]
    sock.close()


def test_create_app_wires_state(config):
    app = create_app(config)

    assert app.state.config is config
    assert isinstance(app.state.sessions, DiffSessionManager)
    assert isinstance(app.state.dispatcher, MockDispatcher)
    assert app.state.dispatcher.sessions is app.state.sessions
    assert app.state.sessions.edit_policy == config.edit_policy


def test_apps_do_not_share_sessions(config):
    first = create_app(config)
    second = create_app(config)

    first.state.sessions.open("a.txt")
    assert len(second.state.sessions) == 0


def test_bind_socket_free_port():
    sock = bind_socket(BridgeConfig(address="127.0.0.1:0"))
    try:
        assert sock.getsockname()[1] > 0
    finally:
        sock.close()


def test_bind_socket_in_use(occupied_port):
    address = f"127.0.0.1:{occupied_port}"

    with pytest.raises(BindError) as exc_info:
        bind_socket(BridgeConfig(address=address))

    assert exc_info.value.address == address
    assert "Failed to bind test host bridge server" in exc_info.value.message


def test_serve_exits_nonzero_on_bind_failure(occupied_port, log_messages):
    config = BridgeConfig(address=f"127.0.0.1:{occupied_port}")

    with pytest.raises(SystemExit) as exc_info:
        serve(config)

    assert exc_info.value.code == 1
    assert any("Failed to bind" in m for m in log_messages)
