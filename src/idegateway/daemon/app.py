"""Starlette application factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.applications import Starlette

from idegateway.daemon.middleware import RequestIdMiddleware
from idegateway.daemon.routes import create_routes

if TYPE_CHECKING:
    from idegateway.daemon.lifecycle import ServerLifecycleManager


def create_app(manager: ServerLifecycleManager) -> Starlette:
    """Create the control server application."""
    app = Starlette(routes=create_routes(manager))
    app.add_middleware(RequestIdMiddleware)
    return app
