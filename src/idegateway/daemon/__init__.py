"""ide-gateway daemon - the background control server and its lifecycle."""

from idegateway.daemon.app import create_app
from idegateway.daemon.lifecycle import (
    ServerLifecycleManager,
    ServerState,
    ServerStatus,
    get_server_manager,
)
from idegateway.daemon.server import ControlServer
from idegateway.daemon.startup import on_app_ready

__all__ = [
    "ControlServer",
    "ServerLifecycleManager",
    "ServerState",
    "ServerStatus",
    "create_app",
    "get_server_manager",
    "on_app_ready",
]
