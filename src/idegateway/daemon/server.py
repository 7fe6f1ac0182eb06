"""Control server: a uvicorn listener on a pre-bound socket."""

from __future__ import annotations

import contextlib
import socket
import threading
import time

import structlog
import uvicorn
from starlette.types import ASGIApp

from idegateway.core.errors import ServerError
from idegateway.core.log_buffer import SERVER_COMPONENT

logger = structlog.get_logger(component=SERVER_COMPONENT)

_STARTUP_POLL_SEC = 0.01


class ControlServer:
    """Binds a local port and serves the control app until stopped.

    ``start`` binds synchronously so bind errors reach the caller, then runs
    uvicorn on a daemon thread. ``stop`` asks uvicorn to exit and releases
    the socket.
    """

    def __init__(
        self,
        host: str,
        port: int,
        app: ASGIApp,
        *,
        stop_timeout_sec: float = 5.0,
    ) -> None:
        self.host = host
        self.port = port
        self.app = app
        self.stop_timeout_sec = stop_timeout_sec
        self._socket: socket.socket | None = None
        self._server: uvicorn.Server | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_serving(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Bind and begin serving. Blocks until uvicorn reports started.

        Raises:
            ServerError: If the port cannot be bound or serving dies on startup.
        """
        self._socket = self._bind()

        config = uvicorn.Config(
            self.app,
            log_level="warning",  # Use structlog instead
            log_config=None,
            ws="none",
            lifespan="off",
        )
        self._server = uvicorn.Server(config)
        self._thread = threading.Thread(
            target=self._serve,
            name="idegateway-control-server",
            daemon=True,
        )
        self._thread.start()

        while not self._server.started:
            if not self._thread.is_alive():
                self._close_socket()
                raise ServerError.start_failed("serving thread exited during startup")
            time.sleep(_STARTUP_POLL_SEC)

        logger.info("control_server_listening", host=self.host, port=self.port)

    def stop(self) -> None:
        """Stop serving and release the listening socket."""
        if self._server is not None:
            self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(self.stop_timeout_sec)
            if self._thread.is_alive() and self._server is not None:
                logger.warning(
                    "control_server_stop_timeout",
                    message=f"Shutdown timed out after {self.stop_timeout_sec}s",
                )
                self._server.force_exit = True
                self._thread.join(self.stop_timeout_sec)
        self._close_socket()
        self._thread = None
        self._server = None
        logger.info("control_server_closed", port=self.port)

    def _bind(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((self.host, self.port))
            sock.listen()
        except OSError as e:
            sock.close()
            raise ServerError.bind_failed(self.host, self.port, str(e)) from e
        # Port 0 asks the OS for a free port
        self.port = sock.getsockname()[1]
        return sock

    def _serve(self) -> None:
        assert self._server is not None
        assert self._socket is not None
        self._server.run(sockets=[self._socket])

    def _close_socket(self) -> None:
        if self._socket is not None:
            with contextlib.suppress(OSError):
                self._socket.close()
            self._socket = None
