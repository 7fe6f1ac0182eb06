"""Control server endpoints.

``/health`` answers liveness probes, ``/status`` reports the lifecycle
manager's view, and ``/logs`` returns the tail of the server log buffer.
The tooling protocol itself is mounted separately by the host.
"""

from __future__ import annotations

import os
import platform
import time
from importlib.metadata import PackageNotFoundError, version
from typing import TYPE_CHECKING, Any

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from idegateway.core.log_buffer import get_log_buffer

if TYPE_CHECKING:
    from idegateway.daemon.lifecycle import ServerLifecycleManager

DEFAULT_LOG_LIMIT = 200


def _package_version() -> str:
    try:
        return version("ide-gateway")
    except PackageNotFoundError:
        return "dev"


def _process_info() -> dict[str, Any]:
    return {"python_version": platform.python_version(), "pid": os.getpid()}


def create_routes(manager: ServerLifecycleManager) -> list[Route]:
    """Build the endpoint list for one manager."""
    started_at = time.monotonic()
    pkg_version = _package_version()

    def uptime() -> float:
        return round(time.monotonic() - started_at, 1)

    async def health(_request: Request) -> JSONResponse:
        return JSONResponse(
            {"status": "healthy", "version": pkg_version, "uptime_seconds": uptime()}
        )

    async def status(_request: Request) -> JSONResponse:
        snapshot = manager.status()
        return JSONResponse(
            {
                "state": snapshot.state.value,
                "host": snapshot.host,
                "port": snapshot.port,
                "last_error": snapshot.last_error,
                "error": snapshot.error.to_dict() if snapshot.error else None,
                "version": pkg_version,
                "uptime_seconds": uptime(),
                "runtime": _process_info(),
            }
        )

    async def logs(request: Request) -> JSONResponse:
        """Newest ``limit`` buffered lines, oldest first."""
        raw = request.query_params.get("limit")
        limit = DEFAULT_LOG_LIMIT
        if raw is not None:
            try:
                limit = int(raw)
            except ValueError:
                return JSONResponse(
                    {"error": f"'limit' must be an integer, got '{raw}'."},
                    status_code=400,
                )
        lines = [entry.format() for entry in get_log_buffer().entries(limit=max(limit, 0))]
        return JSONResponse({"entries": lines})

    return [
        Route("/health", health, methods=["GET"]),
        Route("/status", status, methods=["GET"]),
        Route("/logs", logs, methods=["GET"]),
    ]
