"""
Starlette-based mock host bridge server.

This server stands in for an editor host and answers the host services:
- POST /{service}/{method}: any host method (e.g. /host.DiffService/openDiff)
- GET /services: service catalog
- GET /health: liveness

Usage:
    python -m hostbridge.server
    hostbridge serve --address 127.0.0.1:26041 --workspace /tmp/ws
"""

import socket
import sys

import uvicorn
from starlette.applications import Starlette
from starlette.routing import Route

from hostbridge.config import BridgeConfig, load_config
from hostbridge.diff import DiffSessionManager
from hostbridge.dispatcher import MockDispatcher
from hostbridge.errors import BindError, ConfigurationError
from hostbridge.logger import get_logger, setup_logging
from hostbridge.routes.health_routes import health_check
from hostbridge.routes.rpc_routes import call_method, list_services

logger = get_logger(__name__)


def create_app(config: BridgeConfig | None = None) -> Starlette:
    """Build the application with a fresh session table and dispatcher."""
    config = config or load_config()

    sessions = DiffSessionManager(
        workspace_root=config.workspace_dir,
        edit_policy=config.edit_policy,
    )
    dispatcher = MockDispatcher(config, sessions)

    app = Starlette(
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route("/services", list_services, methods=["GET"]),
            Route("/{service}/{method}", call_method, methods=["POST"]),
        ],
    )
    app.state.config = config
    app.state.sessions = sessions
    app.state.dispatcher = dispatcher
    return app


def bind_socket(config: BridgeConfig) -> socket.socket:
    """
    Bind the configured address.

    Raises:
        BindError: If the address is unavailable.
    """
    family = socket.AF_INET6 if ":" in config.host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((config.host, config.port))
    except OSError as e:
        sock.close()
        raise BindError(config.address, e) from e
    sock.set_inheritable(True)
    return sock


def serve(config: BridgeConfig) -> None:
    """Bind and serve until the process is terminated. Exits 1 on bind failure."""
    try:
        sock = bind_socket(config)
    except BindError as e:
        logger.error(e.message)
        sys.exit(1)

    app = create_app(config)
    server = uvicorn.Server(
        uvicorn.Config(app, log_level=config.log_level.lower())
    )

    logger.info(f"Test HostBridge server listening on {config.address}")
    server.run(sockets=[sock])


def main() -> None:
    try:
        config = load_config()
    except ConfigurationError as e:
        setup_logging()
        logger.error(e.message)
        sys.exit(1)
    setup_logging(level=config.log_level, log_file=config.log_file)
    serve(config)


if __name__ == "__main__":
    main()
