"""Host lifecycle hook that brings the control server up."""

from __future__ import annotations

from concurrent.futures import Future

import structlog

from idegateway.core.log_buffer import SERVER_COMPONENT
from idegateway.daemon.lifecycle import ServerLifecycleManager, get_server_manager

logger = structlog.get_logger(component=SERVER_COMPONENT)


def on_app_ready(manager: ServerLifecycleManager | None = None) -> Future[None] | None:
    """Handle the host's "application ready" event.

    Safe to call repeatedly; the manager ignores starts while one is
    pending or the server is already up. Returns immediately.
    """
    logger.info("app_ready", action="start_control_server")
    return (manager or get_server_manager()).start_server()
